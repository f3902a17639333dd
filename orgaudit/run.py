"""Command-line entry point: analyze an employee roster CSV."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from orgaudit import roster
from orgaudit.config import load_config
from orgaudit.roster.models import RosterValidationError
from orgaudit.roster.org_structure import StructuralError
from orgaudit.roster.report import build_report
from orgaudit.utils.io import write_output
from orgaudit.utils.types import OutputFormat

logger = logging.getLogger("orgaudit")

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgaudit",
        description="Check manager salaries and reporting-line depth in an employee roster",
    )
    parser.add_argument("csv_path", help="Roster CSV (Id,firstName,lastName,salary,managerId)")
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TABLE.value,
        help="Report output format",
    )
    parser.add_argument("--config", help="YAML file overriding the analysis thresholds")
    parser.add_argument("--export", help="Write the flattened hierarchy to this path")
    parser.add_argument(
        "--export-format",
        choices=["csv", "json", "parquet"],
        default="csv",
        help="Format for --export",
    )
    parser.add_argument("--validate", action="store_true", help="Only validate the roster, don't analyze")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _print_validation(path: str) -> int:
    table = Table(title="Roster Validation")
    table.add_column("File")
    table.add_column("Valid")
    table.add_column("Details")

    match roster.validate(path):
        case {"status": "ok", "rows_available": rows}:
            table.add_row(escape(Path(path).name), "[green]✓[/green]", f"{rows} employees")
            exit_code = 0
        case {"status": "error", "message": msg}:
            table.add_row(escape(Path(path).name), "[red]✗[/red]", escape(msg))
            exit_code = 1
        case _:
            table.add_row(escape(Path(path).name), "[red]✗[/red]", "Unknown validation result")
            exit_code = 1

    console.print(table)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.validate:
        return _print_validation(args.csv_path)

    try:
        policy = load_config(args.config)
        structure, result = roster.run(args.csv_path, policy)
        if args.export:
            write_output(structure.hierarchy_frame(), args.export, args.export_format)
    except (RosterValidationError, StructuralError, OSError, ValueError) as exc:
        logger.debug("Analysis aborted", exc_info=True)
        err_console.print(
            f"[red]Error during analysis:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True
        )
        return 1

    print(build_report(result, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())

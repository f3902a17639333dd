"""Render organizational analysis results as tables, plain text or JSON.

The analyzer returns issue records at full precision; this module is the only
place amounts are rounded to cents.
"""

import json
from dataclasses import dataclass
from datetime import datetime

from rich.console import Console
from rich.table import Table

from orgaudit.roster.models import ManagerSalaryIssue, ReportingLineIssue
from orgaudit.roster.org_structure import OrgStructure
from orgaudit.utils.types import OutputFormat

type ReportFormat = str  # "table" | "summary" | "json"


@dataclass(frozen=True)
class AnalysisResult:
    employee_count: int
    max_reporting_depth: int
    underpaid: list[ManagerSalaryIssue]
    overpaid: list[ManagerSalaryIssue]
    long_lines: list[ReportingLineIssue]
    source: str | None = None


def analyze(structure: OrgStructure, source: str | None = None) -> AnalysisResult:
    """Run all three checks against an org structure."""
    return AnalysisResult(
        source=source,
        employee_count=len(structure.employees),
        max_reporting_depth=structure.policy.max_reporting_depth,
        underpaid=structure.managers_earning_too_little(),
        overpaid=structure.managers_earning_too_much(),
        long_lines=structure.long_reporting_lines(),
    )


def _money(amount: float) -> str:
    return f"${amount:.2f}"


def _salary_issue_dict(issue: ManagerSalaryIssue) -> dict:
    return {
        "id": issue.manager.id,
        "name": issue.manager.full_name,
        "kind": str(issue.kind),
        "salary": round(issue.manager.salary, 2),
        "amount": round(issue.amount, 2),
        "average_report_salary": round(issue.average_report_salary, 2),
        "report_count": issue.report_count,
    }


def _to_json(result: AnalysisResult) -> str:
    report = {
        "timestamp": datetime.now().isoformat(),
        "employee_count": result.employee_count,
        "underpaid_managers": [_salary_issue_dict(i) for i in result.underpaid],
        "overpaid_managers": [_salary_issue_dict(i) for i in result.overpaid],
        "long_reporting_lines": [
            {
                "id": i.employee.id,
                "name": i.employee.full_name,
                "manager_count": i.manager_count,
                "excess": i.excess,
            }
            for i in result.long_lines
        ],
    }
    return json.dumps(report, indent=2)


def _salary_section(issues: list[ManagerSalaryIssue], underpaid: bool) -> list[str]:
    if underpaid:
        lines = ["=== MANAGERS EARNING LESS THAN THEY SHOULD ==="]
        empty, direction, bound = "No underpaid managers found.", "less", "at least"
    else:
        lines = ["=== MANAGERS EARNING MORE THAN THEY SHOULD ==="]
        empty, direction, bound = "No overpaid managers found.", "more", "at most"

    if not issues:
        lines.append(empty)
    for issue in issues:
        m = issue.manager
        target = m.salary + issue.amount if underpaid else m.salary - issue.amount
        lines.append(
            f"{m.full_name} (ID: {m.id}) earns {_money(issue.amount)} {direction} than they should"
        )
        lines.append(f"  Current salary: {_money(m.salary)}, Should earn {bound}: {_money(target)}")
        lines.append(
            f"  Based on {issue.report_count} direct subordinates with average salary: "
            f"{_money(issue.average_report_salary)}"
        )
        lines.append("")
    lines.append("")
    return lines


def _to_summary(result: AnalysisResult) -> str:
    lines = ["=== BIG COMPANY Organizational Analysis ==="]
    if result.source:
        lines.append(f"Analyzing file: {result.source}")
    lines += ["", f"Total employees found: {result.employee_count}", ""]
    lines += _salary_section(result.underpaid, underpaid=True)
    lines += _salary_section(result.overpaid, underpaid=False)

    lines.append("=== EMPLOYEES WITH TOO LONG REPORTING LINES ===")
    if not result.long_lines:
        lines.append("No employees with excessively long reporting lines found.")
    for issue in result.long_lines:
        e = issue.employee
        lines.append(f"{e.full_name} (ID: {e.id}) has reporting line that is too long")
        lines.append(
            f"  Current managers above them: {issue.manager_count}, Excess: {issue.excess} "
            f"(maximum allowed: {result.max_reporting_depth})"
        )
        lines.append("")
    lines += ["", "=== ANALYSIS COMPLETE ==="]
    return "\n".join(lines)


def _salary_table(title: str, issues: list[ManagerSalaryIssue], amount_label: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Manager", style="cyan")
    table.add_column("Salary", justify="right")
    table.add_column(amount_label, justify="right", style="bold")
    table.add_column("Reports", justify="right")
    table.add_column("Avg report salary", justify="right")

    for issue in issues:
        table.add_row(
            str(issue.manager.id),
            issue.manager.full_name,
            _money(issue.manager.salary),
            _money(issue.amount),
            str(issue.report_count),
            _money(issue.average_report_salary),
        )
    return table


def _to_table(result: AnalysisResult) -> str:
    underpaid = _salary_table("Managers earning less than they should", result.underpaid, "Shortfall")
    overpaid = _salary_table("Managers earning more than they should", result.overpaid, "Excess")

    long_lines = Table(title="Employees with too long reporting lines")
    long_lines.add_column("ID", justify="right")
    long_lines.add_column("Employee", style="cyan")
    long_lines.add_column("Managers above", justify="right")
    long_lines.add_column(f"Excess (max {result.max_reporting_depth})", justify="right", style="bold")
    for issue in result.long_lines:
        long_lines.add_row(
            str(issue.employee.id),
            issue.employee.full_name,
            str(issue.manager_count),
            str(issue.excess),
        )

    buf = Console(file=None, force_terminal=False, width=120)
    with buf.capture() as capture:
        buf.print(f"Total employees found: {result.employee_count}")
        for table in (underpaid, overpaid, long_lines):
            buf.print(table)
    return capture.get()


def build_report(result: AnalysisResult, output_format: ReportFormat = "table") -> str:
    """Format an analysis result in the requested output format."""
    match OutputFormat(output_format):
        case OutputFormat.JSON:
            return _to_json(result)
        case OutputFormat.SUMMARY:
            return _to_summary(result)
        case OutputFormat.TABLE:
            return _to_table(result)

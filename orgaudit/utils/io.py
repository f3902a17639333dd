"""File I/O utilities for reading rosters and writing analysis output."""

import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console(stderr=True)

ENCODINGS = ("utf-8", "latin-1", "cp1252")


def read_text_csv(path: FilePath) -> pd.DataFrame:
    """Read a CSV as raw string cells, header row included, handling encoding quirks.

    The header is returned as the first row so that rows with surplus fields
    raise a ParserError instead of being taken as an implicit index.
    """
    path = Path(path)
    for encoding in ENCODINGS:
        try:
            return pd.read_csv(
                path,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                skipinitialspace=True,
                encoding=encoding,
            )
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode {path}")


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> None:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "parquet":
            df.to_parquet(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file using the stdlib parser."""
    with open(path, "rb") as f:
        return tomllib.load(f)

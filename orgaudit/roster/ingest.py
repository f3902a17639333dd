"""Ingest employee rosters exported as CSV.

Expected layout::

    Id,firstName,lastName,salary,managerId
    123,Joe,Doe,60000,
    124,Martin,Chekov,45000,123

The CEO is the single row with an empty ``managerId``.
"""

import logging
from pathlib import Path

import pandas as pd

from orgaudit.roster.models import Employee, RosterValidationError
from orgaudit.roster.transform import COLUMN_MAPPING, normalize_roster, to_employees
from orgaudit.utils.io import FilePath, read_text_csv
from orgaudit.utils.validators import validate_no_self_reference, validate_referential_integrity

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = list(COLUMN_MAPPING)


def read_roster_file(path: FilePath) -> pd.DataFrame:
    """Read a roster CSV as raw strings after checking the header."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Roster file does not exist: {path}")
    if not path.is_file():
        raise RosterValidationError(f"Roster path is not a file: {path}")

    try:
        df = read_text_csv(path)
    except pd.errors.EmptyDataError as exc:
        raise RosterValidationError(f"No employee data found in {path}") from exc
    except pd.errors.ParserError as exc:
        raise RosterValidationError(f"Malformed roster file {path}", [str(exc).strip()]) from exc

    header = [str(col).strip() for col in df.iloc[0]]
    if header != EXPECTED_COLUMNS:
        raise RosterValidationError(
            f"Invalid CSV header. Expected: '{','.join(EXPECTED_COLUMNS)}', "
            f"Found: '{','.join(header)}'"
        )
    df = df.iloc[1:].reset_index(drop=True)
    df.columns = header

    if df.empty:
        raise RosterValidationError(f"No employee data found in {path}")

    logger.info("Read %d roster rows from %s", len(df), path.name)
    return df


def validate_roster(df: pd.DataFrame) -> None:
    """Check the relational invariants of a normalized roster.

    Exactly one CEO, every manager reference resolvable, and nobody managing
    themselves. All failures are collected into a single error.
    """
    errors = []

    ceo_count = int(df["manager_id"].isna().sum())
    match ceo_count:
        case 0:
            errors.append("No CEO found (employee with no manager)")
        case 1:
            pass
        case n:
            ceo_ids = [int(i) for i in df.loc[df["manager_id"].isna(), "employee_id"]]
            errors.append(f"Multiple CEOs found (employees with no manager): {n} ({ceo_ids})")

    for outcome in (
        validate_referential_integrity(df, df, "manager_id", "employee_id"),
        validate_no_self_reference(df, "employee_id", "manager_id"),
    ):
        errors.extend(outcome["errors"])

    if errors:
        raise RosterValidationError("Roster failed structural validation", errors)


def load_employees(path: FilePath) -> list[Employee]:
    """Read, normalize and validate a roster file into Employee records."""
    raw = read_roster_file(path)
    df = normalize_roster(raw)
    validate_roster(df)
    employees = to_employees(df)
    logger.info("Ingested %d employee records", len(employees))
    return employees

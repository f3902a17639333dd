"""Normalize raw roster rows into typed, validated employee records."""

import logging
import re

import numpy as np
import pandas as pd

from orgaudit.roster.models import Employee, RosterValidationError, roster_schema
from orgaudit.utils.validators import validate_dataframe

logger = logging.getLogger(__name__)

COLUMN_MAPPING = {
    "Id": "employee_id",
    "firstName": "first_name",
    "lastName": "last_name",
    "salary": "salary",
    "managerId": "manager_id",
}

INTEGER_PATTERN = re.compile(r"[+-]?\d+")
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def _to_int(value: str) -> int | None:
    """Parse an integer string exactly, without a float round-trip."""
    if not INTEGER_PATTERN.fullmatch(value):
        return None
    number = int(value)
    return number if INT64_MIN <= number <= INT64_MAX else None


def _parse_numeric(
    df: pd.DataFrame,
    column: str,
    kind: str,
    required: bool = True,
) -> tuple[pd.Series, list[str]]:
    """Parse a string column, reporting every cell that is not a finite number."""
    raw = df[column]
    match kind:
        case "integer":
            values = [_to_int(v) for v in raw]
            parsed = pd.Series(pd.array(values, dtype="Int64"), index=raw.index)
        case _:
            parsed = pd.to_numeric(raw.where(raw != ""), errors="coerce")
            parsed = parsed.where(np.isfinite(parsed))
    bad = parsed.isna() if required else parsed.isna() & (raw != "")
    errors = [
        f"Row {idx + 1}: invalid {kind} for {column}: {raw[idx]!r}"
        for idx in raw[bad].index
    ]
    return parsed, errors


def normalize_roster(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Rename, clean and type-check a raw roster frame.

    Every problem found is collected before raising, so a single run reports
    all bad lines rather than only the first.
    """
    df = raw_df.rename(columns=COLUMN_MAPPING).reset_index(drop=True)

    for col in df.columns:
        df[col] = df[col].fillna("").astype(str).str.strip()

    errors = []
    for col, kind, required in (
        ("employee_id", "integer", True),
        ("salary", "number", True),
        ("manager_id", "integer", False),
    ):
        df[col], col_errors = _parse_numeric(df, col, kind, required)
        errors.extend(col_errors)

    if errors:
        raise RosterValidationError("Roster contains unparseable values", errors)

    outcome = validate_dataframe(df, roster_schema)
    if not outcome["valid"]:
        raise RosterValidationError("Roster failed schema validation", outcome["errors"])

    df = roster_schema.validate(df)
    logger.info("Normalized %d roster rows", len(df))
    return df


def to_employees(df: pd.DataFrame) -> list[Employee]:
    """Convert normalized roster rows into Employee records, preserving order."""
    return [
        Employee(
            id=int(row.employee_id),
            first_name=row.first_name,
            last_name=row.last_name,
            salary=float(row.salary),
            manager_id=None if pd.isna(row.manager_id) else int(row.manager_id),
        )
        for row in df.itertuples(index=False)
    ]

"""Data validation utilities using pandera."""

import pandera as pa
import pandas as pd
from pandera import DataFrameSchema

from orgaudit.utils.types import ValidationOutcome


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Validate a DataFrame against a pandera schema, collecting every failure."""
    try:
        schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val} if col is not None:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case {"check": check, "failure_case": val}:
                    errors.append(f"Schema check '{check}' failed: {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationOutcome:
    """Validate that all non-null child keys exist in parent."""
    orphans = set(child[child_key].dropna().unique()) - set(parent[parent_key].unique())

    match len(orphans):
        case 0:
            return {"valid": True, "status": "ok", "errors": []}
        case n:
            sample = sorted(int(k) for k in orphans)[:5]
            return {
                "valid": False,
                "status": "error",
                "errors": [f"Found {n} orphan keys in '{child_key}'. Sample: {sample}"],
            }


def validate_no_self_reference(df: pd.DataFrame, key: str, ref_key: str) -> ValidationOutcome:
    """Check that no row references itself through ``ref_key``."""
    self_refs = df[(df[ref_key] == df[key]).fillna(False).astype(bool)]

    match len(self_refs):
        case 0:
            return {"valid": True, "status": "ok", "errors": []}
        case _:
            return {
                "valid": False,
                "status": "error",
                "errors": [
                    f"Row with {key}={int(k)} references itself in '{ref_key}'"
                    for k in self_refs[key]
                ],
            }

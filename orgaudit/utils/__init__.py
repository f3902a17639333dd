"""Shared utilities for the analysis pipeline."""

from orgaudit.utils.io import read_text_csv, write_output, load_toml_config
from orgaudit.utils.validators import (
    validate_dataframe,
    validate_no_self_reference,
    validate_referential_integrity,
)
from orgaudit.utils.types import IssueKind, OutputFormat, RunStatus, ValidationOutcome

"""Shared type definitions for the analysis pipeline."""

from enum import StrEnum

type ValidationOutcome = dict[str, bool | str | list[str]]


class IssueKind(StrEnum):
    UNDERPAID = "UNDERPAID"
    OVERPAID = "OVERPAID"


class RunStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class OutputFormat(StrEnum):
    TABLE = "table"
    SUMMARY = "summary"
    JSON = "json"

"""Pandera schema and record types for employee rosters."""

from dataclasses import dataclass

import numpy as np
import pandera as pa
from pandera import Column, Check

from orgaudit.utils.types import IssueKind

type EmployeeID = int
type SalaryAmount = float


roster_schema = pa.DataFrameSchema(
    {
        "employee_id": Column("int64", unique=True, nullable=False),
        "first_name": Column(str, Check.str_length(min_value=1), nullable=False),
        "last_name": Column(str, Check.str_length(min_value=1), nullable=False),
        "salary": Column(
            float,
            [Check.greater_than_or_equal_to(0), Check(np.isfinite, error="finite")],
            nullable=False,
        ),
        "manager_id": Column("Int64", nullable=True),
    },
    strict=True,
    coerce=True,
)


@dataclass(frozen=True)
class Employee:
    id: EmployeeID
    first_name: str
    last_name: str
    salary: SalaryAmount
    manager_id: EmployeeID | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_ceo(self) -> bool:
        return self.manager_id is None


@dataclass(frozen=True)
class ManagerSalaryIssue:
    """A manager whose salary falls outside the band set by their direct reports.

    ``amount`` is the shortfall (UNDERPAID) or overpay (OVERPAID), always
    positive and kept at full precision.
    """

    manager: Employee
    amount: float
    kind: IssueKind
    average_report_salary: float
    report_count: int


@dataclass(frozen=True)
class ReportingLineIssue:
    employee: Employee
    manager_count: int
    excess: int


@dataclass(frozen=True)
class ManagerStats:
    manager: Employee
    report_count: int
    average_report_salary: float
    min_expected_salary: float
    max_expected_salary: float


class RosterValidationError(ValueError):
    """A roster file failed one or more ingestion checks."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        detail = "".join(f"\n  - {e}" for e in self.errors)
        super().__init__(f"{message}{detail}")

"""Org hierarchy model: reporting indices, salary bands and reporting-line depth."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from types import MappingProxyType

import numpy as np
import pandas as pd

from orgaudit.config import AnalysisPolicy
from orgaudit.roster.models import (
    Employee,
    EmployeeID,
    ManagerSalaryIssue,
    ManagerStats,
    ReportingLineIssue,
)
from orgaudit.utils.types import IssueKind

logger = logging.getLogger(__name__)

type DirectReports = Mapping[EmployeeID, tuple[Employee, ...]]


class StructuralError(Exception):
    """The reporting graph violates a required invariant."""


class NoRootError(StructuralError):
    def __init__(self) -> None:
        super().__init__("No CEO found (employee with no manager)")


class MultipleRootsError(StructuralError):
    def __init__(self, roots: list[Employee]) -> None:
        self.roots = roots
        ids = ", ".join(str(e.id) for e in roots)
        super().__init__(f"Multiple CEOs found (employees with no manager): {ids}")


class CycleError(StructuralError):
    def __init__(self, employee: Employee) -> None:
        self.employee = employee
        super().__init__(
            f"Circular reporting structure detected for employee: "
            f"{employee.full_name} (ID: {employee.id})"
        )


def _classify_org_level(depth: int) -> str:
    """Classify the organizational level based on depth from CEO."""
    match depth:
        case 0:
            return "CEO"
        case 1:
            return "C-Suite"
        case 2:
            return "VP"
        case 3:
            return "Director"
        case 4:
            return "Manager"
        case 5:
            return "Lead"
        case d if d <= 8:
            return "IC"
        case _:
            return "Deep IC"


def _build_indices(
    employees: tuple[Employee, ...],
) -> tuple[Mapping[EmployeeID, Employee], DirectReports]:
    """Build id -> employee and manager_id -> direct reports maps in one pass."""
    by_id: dict[EmployeeID, Employee] = {}
    tree: dict[EmployeeID, list[Employee]] = defaultdict(list)
    for employee in employees:
        if employee.id in by_id:
            raise StructuralError(f"Duplicate employee ID: {employee.id}")
        by_id[employee.id] = employee
        if employee.manager_id is not None:
            tree[employee.manager_id].append(employee)
    reports = {mgr: tuple(subs) for mgr, subs in tree.items()}
    return MappingProxyType(by_id), MappingProxyType(reports)


class OrgStructure:
    """Read-only view of a roster as a reporting hierarchy.

    Indices are built once at construction and never mutated, so every query
    is a pure function of the roster and the policy it was built with.
    """

    def __init__(self, employees: Iterable[Employee], policy: AnalysisPolicy | None = None):
        self.employees = tuple(employees)
        if not self.employees:
            raise StructuralError("Cannot analyze an empty roster")
        self.policy = policy or AnalysisPolicy()
        self.by_id, self.direct_reports = _build_indices(self.employees)
        logger.debug(
            "Indexed %d employees, %d managers",
            len(self.by_id),
            len(self.direct_reports),
        )

    @property
    def root(self) -> Employee | None:
        return next((e for e in self.employees if e.is_ceo), None)

    def _require_single_root(self) -> Employee:
        roots = [e for e in self.employees if e.is_ceo]
        match roots:
            case []:
                raise NoRootError()
            case [root]:
                return root
            case _:
                raise MultipleRootsError(roots)

    def reports_of(self, employee_id: EmployeeID) -> tuple[Employee, ...]:
        return self.direct_reports.get(employee_id, ())

    def salary_stats(self) -> list[ManagerStats]:
        """Per-manager direct-report averages and the expected salary band."""
        stats = []
        for manager in self.employees:
            reports = self.reports_of(manager.id)
            if not reports:
                continue
            average = float(np.mean([r.salary for r in reports]))
            stats.append(ManagerStats(
                manager=manager,
                report_count=len(reports),
                average_report_salary=average,
                min_expected_salary=average * self.policy.min_manager_ratio,
                max_expected_salary=average * self.policy.max_manager_ratio,
            ))
        return stats

    def managers_earning_too_little(self) -> list[ManagerSalaryIssue]:
        issues = []
        for s in self.salary_stats():
            if s.manager.salary < s.min_expected_salary:
                issues.append(ManagerSalaryIssue(
                    manager=s.manager,
                    amount=s.min_expected_salary - s.manager.salary,
                    kind=IssueKind.UNDERPAID,
                    average_report_salary=s.average_report_salary,
                    report_count=s.report_count,
                ))
        logger.info("Found %d underpaid manager(s)", len(issues))
        return issues

    def managers_earning_too_much(self) -> list[ManagerSalaryIssue]:
        issues = []
        for s in self.salary_stats():
            if s.manager.salary > s.max_expected_salary:
                issues.append(ManagerSalaryIssue(
                    manager=s.manager,
                    amount=s.manager.salary - s.max_expected_salary,
                    kind=IssueKind.OVERPAID,
                    average_report_salary=s.average_report_salary,
                    report_count=s.report_count,
                ))
        logger.info("Found %d overpaid manager(s)", len(issues))
        return issues

    def manager_count(self, employee_id: EmployeeID) -> int:
        """Count the managers between an employee and the CEO.

        Every hop counts, from the immediate manager up to and including the
        CEO, so a direct report of the CEO has a count of 1 and the CEO 0.
        Walks upward iteratively, raising CycleError if a node repeats
        before the CEO is reached.
        """
        current = self.by_id[employee_id]
        if current.is_ceo:
            return 0

        visited: set[EmployeeID] = set()
        hops = 0
        while not current.is_ceo:
            if current.id in visited:
                raise CycleError(self.by_id[employee_id])
            visited.add(current.id)
            manager = self.by_id.get(current.manager_id)
            if manager is None:
                raise StructuralError(
                    f"Employee {current.full_name} (ID: {current.id}) references "
                    f"non-existent manager ID: {current.manager_id}"
                )
            current = manager
            hops += 1
        return hops

    def long_reporting_lines(self) -> list[ReportingLineIssue]:
        """Employees with more managers above them than the policy allows."""
        self._require_single_root()

        limit = self.policy.max_reporting_depth
        issues = []
        for employee in self.employees:
            if employee.is_ceo:
                continue
            count = self.manager_count(employee.id)
            if count > limit:
                issues.append(ReportingLineIssue(employee, count, count - limit))
        logger.info("Found %d employee(s) with too long reporting lines", len(issues))
        return issues

    def hierarchy_frame(self) -> pd.DataFrame:
        """Flatten the hierarchy into a DataFrame with depth and span-of-control metrics."""
        self._require_single_root()

        rows = []
        for employee in self.employees:
            depth = self.manager_count(employee.id)
            rows.append({
                "employee_id": employee.id,
                "full_name": employee.full_name,
                "salary": employee.salary,
                "manager_id": employee.manager_id,
                "depth": depth,
                "org_level": _classify_org_level(depth),
                "direct_reports": len(self.reports_of(employee.id)),
            })

        result = pd.DataFrame(rows)
        result["manager_id"] = pd.array([e.manager_id for e in self.employees], dtype="Int64")
        logger.info("Resolved org hierarchy: %d nodes", len(result))
        return result

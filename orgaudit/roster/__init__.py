"""Roster analysis domain.

Ingests employee roster CSVs, builds the reporting hierarchy and checks
manager pay bands and reporting-line depth.
"""

from orgaudit.config import AnalysisPolicy
from orgaudit.roster.ingest import load_employees
from orgaudit.roster.models import Employee, RosterValidationError
from orgaudit.roster.org_structure import (
    CycleError,
    MultipleRootsError,
    NoRootError,
    OrgStructure,
    StructuralError,
)
from orgaudit.roster.report import AnalysisResult, analyze
from orgaudit.utils.io import FilePath
from orgaudit.utils.types import RunStatus


def validate(path: FilePath) -> dict[str, str | int]:
    """Validate that a roster file can be ingested."""
    try:
        employees = load_employees(path)
        return {"status": RunStatus.OK, "rows_available": len(employees)}
    except (OSError, RosterValidationError) as exc:
        return {"status": RunStatus.ERROR, "message": str(exc)}


def run(path: FilePath, policy: AnalysisPolicy | None = None) -> tuple[OrgStructure, AnalysisResult]:
    """Execute the full roster analysis for one file."""
    employees = load_employees(path)
    structure = OrgStructure(employees, policy)
    return structure, analyze(structure, source=str(path))

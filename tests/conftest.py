"""Shared fixtures for roster analysis tests."""

from pathlib import Path

import pytest

from orgaudit.roster.models import Employee

HEADER = "Id,firstName,lastName,salary,managerId"


def emp(id, salary, manager_id=None, first="First", last=None):
    return Employee(id, first, last or f"Emp{id}", float(salary), manager_id)


@pytest.fixture
def sample_roster():
    """Five-person roster where only Martin falls outside their pay band."""
    return [
        Employee(123, "Joe", "Doe", 60000.0, None),
        Employee(124, "Martin", "Chekov", 45000.0, 123),
        Employee(125, "Bob", "Ronstad", 47000.0, 123),
        Employee(300, "Alice", "Hasacat", 50000.0, 124),
        Employee(305, "Brett", "Hardleaf", 34000.0, 300),
    ]


@pytest.fixture
def deep_chain():
    """CEO -> 2 -> 3 -> 4 -> 5 -> 6: employee 6 is five hops from the CEO."""
    return [emp(1, 100000)] + [emp(i, 100000, i - 1) for i in range(2, 7)]


@pytest.fixture
def write_roster(tmp_path):
    """Factory writing CSV text to a temporary roster file."""

    def _write(body: str, name: str = "employees.csv", header: str | None = HEADER) -> Path:
        path = tmp_path / name
        content = body if header is None else f"{header}\n{body}"
        path.write_text(content)
        return path

    return _write

"""
Tests for report rendering
"""

import json

import pytest

from orgaudit.roster.org_structure import OrgStructure
from orgaudit.roster.report import analyze, build_report
from tests.conftest import emp


@pytest.fixture
def result(sample_roster):
    return analyze(OrgStructure(sample_roster))


def test_summary_matches_console_wording(result):
    text = build_report(result, "summary")

    assert "Total employees found: 5" in text
    assert "Martin Chekov (ID: 124) earns $15000.00 less than they should" in text
    assert "  Current salary: $45000.00, Should earn at least: $60000.00" in text
    assert "  Based on 1 direct subordinates with average salary: $50000.00" in text
    assert "No overpaid managers found." in text
    assert "No employees with excessively long reporting lines found." in text


def test_summary_is_framed_with_banner_and_footer(sample_roster):
    text = build_report(analyze(OrgStructure(sample_roster), source="employees.csv"), "summary")
    lines = text.splitlines()

    assert lines[:4] == [
        "=== BIG COMPANY Organizational Analysis ===",
        "Analyzing file: employees.csv",
        "",
        "Total employees found: 5",
    ]
    assert lines[-1] == "=== ANALYSIS COMPLETE ==="


def test_summary_separates_issues_with_blank_lines(deep_chain):
    """Each issue block is followed by an empty line"""
    text = build_report(analyze(OrgStructure(deep_chain)), "summary")
    lines = text.splitlines()

    detail = lines.index("  Current managers above them: 5, Excess: 1 (maximum allowed: 4)")
    assert lines[detail + 1] == ""
    assert "Analyzing file:" not in text


def test_summary_lists_long_reporting_lines(deep_chain):
    text = build_report(analyze(OrgStructure(deep_chain)), "summary")

    assert "First Emp6 (ID: 6) has reporting line that is too long" in text
    assert "  Current managers above them: 5, Excess: 1 (maximum allowed: 4)" in text


def test_summary_overpaid_wording():
    text = build_report(analyze(OrgStructure([emp(1, 90000), emp(2, 50000, 1)])), "summary")

    assert "First Emp1 (ID: 1) earns $15000.00 more than they should" in text
    assert "Should earn at most: $75000.00" in text
    assert "No underpaid managers found." in text


def test_json_report(result):
    report = json.loads(build_report(result, "json"))

    assert report["employee_count"] == 5
    assert report["underpaid_managers"] == [
        {
            "id": 124,
            "name": "Martin Chekov",
            "kind": "UNDERPAID",
            "salary": 45000.0,
            "amount": 15000.0,
            "average_report_salary": 50000.0,
            "report_count": 1,
        }
    ]
    assert report["overpaid_managers"] == []
    assert report["long_reporting_lines"] == []


def test_table_report(result):
    text = build_report(result, "table")

    assert "Managers earning less than they should" in text
    assert "Martin Chekov" in text
    assert "$15000.00" in text
    assert "Employees with too long reporting lines" in text


def test_unknown_format(result):
    with pytest.raises(ValueError):
        build_report(result, "xml")

"""
End-to-end tests for the command-line entry point
"""

import json

import pandas as pd

from orgaudit.run import main

ROSTER = """Id,firstName,lastName,salary,managerId
123,Joe,Doe,60000,
124,Martin,Chekov,45000,123
125,Bob,Ronstad,47000,123
300,Alice,Hasacat,50000,124
305,Brett,Hardleaf,34000,300
"""


def test_summary_run(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)

    assert main([str(path), "--format", "summary"]) == 0

    out = capsys.readouterr().out
    assert "Martin Chekov (ID: 124) earns $15000.00 less than they should" in out


def test_json_run(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)

    assert main([str(path), "--format", "json"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert [m["id"] for m in report["underpaid_managers"]] == [124]


def test_export_hierarchy(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)
    export = tmp_path / "out" / "hierarchy.csv"

    assert main([str(path), "--format", "summary", "--export", str(export)]) == 0

    frame = pd.read_csv(export)
    assert frame["employee_id"].tolist() == [123, 124, 125, 300, 305]
    assert frame["depth"].tolist() == [0, 1, 1, 2, 3]


def test_custom_config(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)
    cfg = tmp_path / "strict.yaml"
    cfg.write_text("analysis:\n  max_reporting_depth: 2\n")

    assert main([str(path), "--format", "json", "--config", str(cfg)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["long_reporting_lines"] == [
        {"id": 305, "name": "Brett Hardleaf", "manager_count": 3, "excess": 1}
    ]


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1

    assert "does not exist" in capsys.readouterr().err


def test_invalid_roster_exits_with_error(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text("Id,firstName,lastName,salary,managerId\n1,Ann,Lee,100,\n2,Bob,Ray,50,\n")

    assert main([str(path)]) == 1

    assert "Multiple CEOs" in capsys.readouterr().err


def test_validate_only(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)

    assert main([str(path), "--validate"]) == 0
    assert "5 employees" in capsys.readouterr().out


def test_validate_only_failure(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text("Id,name\n1,Ann\n")

    assert main([str(path), "--validate"]) == 1
    assert "Invalid CSV header" in capsys.readouterr().out


def test_validate_only_unreadable_file(tmp_path, capsys, monkeypatch):
    """OS errors while reading become a failed validation row, not a traceback"""
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)

    def _deny(_path):
        raise PermissionError("Permission denied")

    monkeypatch.setattr("orgaudit.roster.load_employees", _deny)

    assert main([str(path), "--validate"]) == 1
    assert "Permission denied" in capsys.readouterr().out


def test_summary_run_names_the_file(tmp_path, capsys):
    path = tmp_path / "employees.csv"
    path.write_text(ROSTER)

    assert main([str(path), "--format", "summary"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("=== BIG COMPANY Organizational Analysis ===\n")
    assert f"Analyzing file: {path}" in out
    assert out.rstrip().endswith("=== ANALYSIS COMPLETE ===")

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from placementengine.cli import app

POLICIES_YAML = """\
dreamCompanyPolicy:
  enabled: true
maxCompaniesPolicy:
  enabled: true
  maxApplications: 3
cgpaThresholdPolicy:
  enabled: true
  minCgpa: 7.0
  highSalaryThreshold: 500000
placementPercentagePolicy:
  enabled: true
  targetPercentage: 50
offerCategoryPolicy:
  enabled: true
  l1Threshold: 1000000
  l2Threshold: 600000
  l3Threshold: 0
  requiredHikePercentageL2: 20
dreamOfferPolicy:
  enabled: true
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def write_inputs(tmp_path: Path) -> tuple[Path, Path, Path]:
    students_path = tmp_path / "students.json"
    company_path = tmp_path / "companies.json"
    policies_path = tmp_path / "policies.yaml"

    write_json(
        students_path,
        [
            {
                "id": 1,
                "name": "Asha",
                "cgpa": 8.2,
                "isPlaced": False,
                "currentSalary": 0,
                "companiesApplied": 0,
                "dreamOfferAmount": 900_000,
                "dreamCompanyName": "Initech",
            },
            {
                "id": 2,
                "name": "Ravi",
                "cgpa": 6.1,
                "isPlaced": False,
                "currentSalary": 0,
                "companiesApplied": 0,
                "dreamOfferAmount": 700_000,
                "dreamCompanyName": "Initech",
            },
            {
                "id": 3,
                "name": "Meera",
                "cgpa": 7.5,
                "isPlaced": False,
                "currentSalary": 0,
                "companiesApplied": 0,
                "dreamOfferAmount": 1_000_000,
                "dreamCompanyName": "acme",
            },
        ],
    )
    write_json(
        company_path,
        [
            {"name": "Globex", "offeredSalary": 450_000, "category": "core"},
            {"name": "Acme", "offeredSalary": 800_000, "category": "dream"},
        ],
    )
    policies_path.write_text(POLICIES_YAML, encoding="utf-8")
    return students_path, company_path, policies_path


def test_cli_runs_pipeline_and_writes_report(tmp_path: Path, runner: CliRunner) -> None:
    students_path, company_path, policies_path = write_inputs(tmp_path)
    output_path = tmp_path / "out" / "report.json"

    result = runner.invoke(
        app,
        [
            "--students",
            str(students_path),
            "--company",
            str(company_path),
            "--company-index",
            "1",
            "--policies",
            str(policies_path),
            "--output",
            str(output_path),
            "--accept",
            "1",
            "--accept",
            "2",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Evaluated 3 students: 1 eligible, 2 ineligible." in result.output
    assert output_path.exists()

    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    metadata = rendered["metadata"]
    report = rendered["report"]

    assert metadata["company"] == "Acme"
    assert metadata["applied"] == [1]
    assert len(metadata["errors"]) == 1
    assert "Student 2 is not eligible for Acme" in metadata["errors"][0]
    assert metadata["policy_source"] == "inline"

    assert report["counts"]["placed_students"] == 1
    assert report["percentages"]["placed_students"] == 33.33
    assert report["company"]["offered_salary"] == 800_000

    placed = report["all_students"][0]
    assert placed["student"]["is_placed"] is True
    assert placed["student"]["current_salary"] == 800_000
    assert "isPlaced" not in placed["student"]
    assert "offeredSalary" not in report["company"]
    assert placed["eligible"] is False
    assert "33.33%" in placed["reasons"][-1]

    assert [item["policy_key"] for item in report["policy_statistics"]][0] == "dream_company_policy"


def test_cli_uses_policies_from_config(tmp_path: Path, runner: CliRunner) -> None:
    students_path, company_path, policies_path = write_inputs(tmp_path)
    output_path = tmp_path / "report.json"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"policies: {policies_path}\nreport:\n  company_index: 1\n  indent: 0\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "--students",
            str(students_path),
            "--company",
            str(company_path),
            "--output",
            str(output_path),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.output
    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["metadata"]["company"] == "Acme"
    assert rendered["report"]["counts"]["eligible_students"] == 2


def test_cli_requires_a_policy_source(tmp_path: Path, runner: CliRunner) -> None:
    students_path, company_path, _ = write_inputs(tmp_path)

    result = runner.invoke(
        app,
        [
            "--students",
            str(students_path),
            "--company",
            str(company_path),
            "--output",
            str(tmp_path / "report.json"),
        ],
    )

    assert result.exit_code == 2
    assert not (tmp_path / "report.json").exists()


def test_cli_reports_construction_errors(tmp_path: Path, runner: CliRunner) -> None:
    students_path, company_path, _ = write_inputs(tmp_path)
    partial = tmp_path / "partial.yaml"
    partial.write_text("dreamCompanyPolicy:\n  enabled: true\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "--students",
            str(students_path),
            "--company",
            str(company_path),
            "--policies",
            str(partial),
            "--output",
            str(tmp_path / "report.json"),
        ],
    )

    assert result.exit_code == 1
    assert not (tmp_path / "report.json").exists()


@pytest.mark.parametrize(
    "config_text",
    ["policies: [unclosed\n", "report:\n  indent: wide\n"],
)
def test_cli_rejects_invalid_config(tmp_path: Path, runner: CliRunner, config_text: str) -> None:
    students_path, company_path, policies_path = write_inputs(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_text, encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "--students",
            str(students_path),
            "--company",
            str(company_path),
            "--policies",
            str(policies_path),
            "--config",
            str(config_path),
            "--output",
            str(tmp_path / "report.json"),
        ],
    )

    assert result.exit_code == 2
    assert "Invalid config file" in result.output
    assert not (tmp_path / "report.json").exists()


def test_cli_reports_missing_policy_document(tmp_path: Path, runner: CliRunner) -> None:
    students_path, company_path, _ = write_inputs(tmp_path)

    result = runner.invoke(
        app,
        [
            "--students",
            str(students_path),
            "--company",
            str(company_path),
            "--policies",
            str(tmp_path / "missing.yaml"),
            "--output",
            str(tmp_path / "report.json"),
        ],
    )

    assert result.exit_code == 1
    assert "Cannot read policy document" in result.output
    assert not (tmp_path / "report.json").exists()

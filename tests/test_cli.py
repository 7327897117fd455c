"""Tests for the command-line interface."""

import json

import pytest

from compliance_calendar import cli
from compliance_calendar.config import settings

SERVICE_FLAGS = [
    "--type", "Service",
    "--state", "Maharashtra",
    "--turnover", "40L-1Cr",
    "--employees", "20-49",
    "--msme",
]


def test_parser_builds_profile_arguments():
    args = cli.build_parser().parse_args(["match", *SERVICE_FLAGS])
    assert args.command == "match"
    assert args.type == "Service"
    assert args.msme is True
    assert args.owes_msme is False


def test_parser_rejects_unknown_bracket():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["match", "--turnover", "2Cr"])


def test_no_command_prints_help():
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 0


def test_match_requires_profile():
    with pytest.raises(SystemExit) as exc:
        cli.main(["match", "--state", "Goa"])
    assert exc.value.code == 1


def test_calendar_export(tmp_path):
    cli.main(
        [
            "calendar",
            *SERVICE_FLAGS,
            "--start", "2026-10-19",
            "--export-json", "calendar.json",
            "--output-dir", str(tmp_path),
        ]
    )
    data = json.loads((tmp_path / "calendar.json").read_text(encoding="utf-8"))
    assert "gst" in data["applicable_compliances"]
    assert "tax-audit" not in data["applicable_compliances"]
    assert data["calendar"][0]["due_date"] >= "2026-10-19"


def test_report_from_profile_file(tmp_path):
    profile = tmp_path / "profile.json"
    profile.write_text(
        json.dumps(
            {
                "businessType": "Manufacturing",
                "state": "Delhi",
                "industry": "Textiles",
                "turnover": "<20L",
                "employees": "<10",
                "msmeRegistered": False,
                "owesPaymentToMSME": False,
            }
        ),
        encoding="utf-8",
    )
    cli.main(
        [
            "report",
            "--profile", str(profile),
            "--export-json", "report.json",
            "--output-dir", str(tmp_path),
        ]
    )
    data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert set(data["applicable_compliances"]) == {
        "tds",
        "income-tax",
        "shops-establishments",
    }


def test_unavailable_catalog_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "catalog_path", str(tmp_path / "missing.json"))
    with pytest.raises(SystemExit) as exc:
        cli.main(["obligations"])
    assert exc.value.code == 1


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '"Service"'])
def test_malformed_profile_file_exits(tmp_path, content):
    profile = tmp_path / "profile.json"
    profile.write_text(content, encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main(["match", "--profile", str(profile)])
    assert exc.value.code == 1


def test_calendar_summary_labels_priority_count(capsys):
    cli.main(["calendar", *SERVICE_FLAGS, "--start", "2026-10-19"])
    out = capsys.readouterr().out
    assert "High/Medium Priority:" in out
    assert "Due Within 30 Days" not in out

"""Tests for finding_review/cli.py"""

import json
import textwrap

import pytest
from click.testing import CliRunner

from finding_review.cli import cli

REPORT = "\n".join([
    "Page,Code,Severity,Message,BBox",
    '1,MARGIN,error,"Margin too small, 2 cm","[100,200,300,400]"',
    '1,FONT,warning,"Font not embedded",""',
    '3,CAPTION,warning,"Missing caption","[0,0,60,80]"',
])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def report_path(tmp_path) -> str:
    p = tmp_path / "report.csv"
    p.write_text(REPORT, encoding="utf-8")
    return str(p)


def _invoke(runner, tmp_path, *args):
    config = str(tmp_path / "missing-config.yaml")
    return runner.invoke(cli, ["--config", config, *args])


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

def test_init_writes_template(runner, tmp_path):
    out = tmp_path / "review-config.yaml"
    result = runner.invoke(cli, ["init", "--output", str(out)])
    assert result.exit_code == 0
    assert out.exists()


def test_init_refuses_to_overwrite(runner, tmp_path):
    out = tmp_path / "review-config.yaml"
    out.write_text("existing")
    result = runner.invoke(cli, ["init", "--output", str(out)])
    assert result.exit_code == 1


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

def test_missing_config_without_report_exits(runner, tmp_path):
    result = _invoke(runner, tmp_path, "status")
    assert result.exit_code == 1


def test_config_file_supplies_source(runner, tmp_path, report_path):
    config = tmp_path / "review-config.yaml"
    config.write_text(textwrap.dedent(f"""\
        report:
          source: "{report_path}"
        document:
          pages: 5
        """), encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(config), "status"])
    assert result.exit_code == 0
    assert json.loads(result.output)["page_count"] == 5


def test_report_option_supplies_source_missing_from_config(runner, tmp_path, report_path):
    config = tmp_path / "review-config.yaml"
    config.write_text("document:\n  pages: 2\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(config), "--report", report_path, "status"])
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["report_source"] == report_path
    assert data["pages"] == {"1": "error", "2": "clean"}


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------

def test_status_reports_pages_and_summary(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "status")
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["page_count"] == 3
    assert data["pages"] == {"1": "error", "3": "warning"}
    assert data["summary"]["total"] == 3


def test_status_with_known_page_count_lists_every_page(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "--pages", "4", "status")
    data = json.loads(result.output)
    assert data["pages"] == {"1": "error", "2": "clean", "3": "warning", "4": "clean"}


def test_status_with_far_page_number_lists_reported_pages_only(runner, tmp_path):
    p = tmp_path / "far.csv"
    p.write_text('Page,Code,Severity,Message,BBox\n1000000000,A,error,"m",""\n',
                 encoding="utf-8")
    result = _invoke(runner, tmp_path, "--report", str(p), "status")
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["page_count"] == 1000000000
    assert data["pages"] == {"1000000000": "error"}


def test_status_with_unreachable_report_is_all_clean(runner, tmp_path):
    missing = str(tmp_path / "nope.csv")
    result = _invoke(runner, tmp_path, "--report", missing, "--pages", "2", "status")
    assert result.exit_code == 0
    assert json.loads(result.output)["pages"] == {"1": "clean", "2": "clean"}


# ---------------------------------------------------------------------------
# page
# ---------------------------------------------------------------------------

def test_page_with_dimensions_lists_overlays(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path,
                     "page", "1", "--width", "600", "--height", "800")
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["status"] == "error"
    assert [i["code"] for i in data["issues"]] == ["MARGIN", "FONT"]
    assert [o["issue_id"] for o in data["overlays"]] == [1]
    assert data["overlays"][0]["left"] == pytest.approx(16.6667, abs=1e-3)


def test_page_without_dimensions_has_no_overlays(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "page", "3")
    assert json.loads(result.output)["overlays"] == []


def test_page_past_last_page_is_rejected(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "page", "9")
    assert result.exit_code == 2
    assert "past the last page" in result.output


def test_page_within_known_page_count(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "--pages", "9", "page", "9")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["page"] == 9
    assert data["status"] == "clean"


# ---------------------------------------------------------------------------
# next-problem
# ---------------------------------------------------------------------------

def test_next_problem(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "next-problem", "--after", "1")
    assert result.exit_code == 0
    assert result.output.strip() == "3"


def test_next_problem_all_clear(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path, "next-problem", "--after", "3")
    assert result.exit_code == 0
    assert "All clear" in result.output


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

def test_export_to_stdout_drops_resolved(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path,
                     "export", "--resolve", "2", "--approve-page", "3", "--stdout")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Page,Code,Severity,Message,BBox",
        '1,MARGIN,error,"Margin too small, 2 cm","[100,200,300,400]"',
    ]


def test_export_writes_output_file(runner, tmp_path, report_path):
    out = tmp_path / "clean.csv"
    result = _invoke(runner, tmp_path, "--report", report_path, "--output", str(out),
                     "export", "--approve-page", "1")
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").splitlines()[1].startswith("3,CAPTION")


def test_export_unknown_id_warns(runner, tmp_path, report_path):
    result = _invoke(runner, tmp_path, "--report", report_path,
                     "export", "--resolve", "42", "--stdout")
    assert result.exit_code == 0
    assert "no finding with id 42" in result.output

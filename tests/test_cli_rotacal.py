from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
from typer.testing import CliRunner

from rotacal.cli.main import app
from tests.cli import cli_text

runner = CliRunner()
SCHEDULE = ["--start", "2024-01-01", "--pattern", "3/2"]


def test_status_reports_transit_day():
    result = runner.invoke(app, ["status", "2024-01-04", *SCHEDULE])
    assert result.exit_code == 0, cli_text(result)
    assert "2024-01-04: transit" in cli_text(result)
    assert "Next hitch starts: 2024-01-06" in cli_text(result)


def test_status_on_first_day_points_to_following_hitch():
    result = runner.invoke(app, ["status", "2024-01-01", *SCHEDULE])
    assert result.exit_code == 0, cli_text(result)
    assert "on-duty" in cli_text(result)
    assert "first day of block" in cli_text(result)
    assert "Next hitch starts: 2024-01-06" in cli_text(result)


def test_status_before_anchor():
    result = runner.invoke(app, ["status", "2023-12-25", *SCHEDULE])
    assert result.exit_code == 0, cli_text(result)
    assert "undefined" in cli_text(result)
    assert "Before the rotation start" in cli_text(result)


def test_invalid_pattern_is_a_usage_error():
    result = runner.invoke(app, ["status", "2024-01-04", "--start", "2024-01-01", "--pattern", "5/0"])
    assert result.exit_code != 0


def test_schedule_source_is_required():
    result = runner.invoke(app, ["status", "2024-01-04"])
    assert result.exit_code != 0


def test_schedule_sources_are_exclusive(tmp_path: Path):
    config = tmp_path / "crew.yaml"
    config.write_text("start_date: 2024-01-01\npattern: 3/2\n", encoding="utf-8")
    result = runner.invoke(app, ["status", "2024-01-04", "--config", str(config), *SCHEDULE])
    assert result.exit_code != 0


def test_status_from_yaml_config(tmp_path: Path):
    config = tmp_path / "crew.yaml"
    config.write_text("start_date: 2024-01-01\npattern: 3/1\n", encoding="utf-8")
    result = runner.invoke(app, ["status", "2024-01-04", "--config", str(config)])
    assert result.exit_code == 0, cli_text(result)
    assert "transit" in cli_text(result)


def test_month_view_prints_counts():
    result = runner.invoke(app, ["month", "2024", "1", "--start", "2024-01-01", "--pattern", "14/14"])
    assert result.exit_code == 0, cli_text(result)
    assert "January 2024" in cli_text(result)
    assert "Work days: 17" in cli_text(result)
    assert "Off days: 12" in cli_text(result)
    assert "Travel days: 2" in cli_text(result)


def test_year_view_writes_csv(tmp_path: Path):
    out_csv = tmp_path / "year.csv"
    result = runner.invoke(
        app,
        ["year", "2024", "--start", "2024-01-01", "--pattern", "14/14", "--out-csv", str(out_csv)],
    )
    assert result.exit_code == 0, cli_text(result)
    df = pd.read_csv(out_csv)
    assert df["days"].sum() == 366
    assert len(df) == 12


def test_stats_default_window():
    result = runner.invoke(app, ["stats", "--start", "2024-01-01", "--pattern", "14/14"])
    assert result.exit_code == 0, cli_text(result)
    assert "183 work days in 365 days" in cli_text(result)


def test_stats_full_cycle_window():
    result = runner.invoke(
        app, ["stats", "--start", "2024-01-01", "--pattern", "14/14", "--window-days", "364"]
    )
    assert result.exit_code == 0, cli_text(result)
    assert "182 work days" in cli_text(result)


def test_export_ics_with_telemetry(tmp_path: Path):
    out = tmp_path / "rotation.ics"
    log = tmp_path / "telemetry" / "runs.jsonl"
    result = runner.invoke(
        app,
        ["export-ics", str(out), *SCHEDULE, "--cycles", "4", "--telemetry-log", str(log)],
    )
    assert result.exit_code == 0, cli_text(result)
    assert out.read_text(encoding="utf-8").count("BEGIN:VEVENT") == 4

    record = json.loads(log.read_text(encoding="utf-8").splitlines()[-1])
    assert record["command"] == "export-ics"
    assert record["status"] == "ok"
    assert record["metrics"] == {"events": 4}
    assert record["artifacts"] == [str(out)]


def test_export_days_csv(tmp_path: Path):
    out = tmp_path / "days.csv"
    log = tmp_path / "runs.jsonl"
    result = runner.invoke(
        app,
        [
            "export-days",
            str(out),
            *SCHEDULE,
            "--from",
            "2023-12-31",
            "--to",
            "2024-01-10",
            "--telemetry-log",
            str(log),
        ],
    )
    assert result.exit_code == 0, cli_text(result)
    df = pd.read_csv(out)
    assert len(df) == 11
    assert df["status"].iloc[0] == "undefined"
    assert (df["status"] == "on-duty").sum() == 6

    record = json.loads(log.read_text(encoding="utf-8").splitlines()[-1])
    assert record["metrics"]["transit"] == 4


def test_export_days_rejects_inverted_range(tmp_path: Path):
    result = runner.invoke(
        app,
        ["export-days", str(tmp_path / "days.csv"), *SCHEDULE, "--from", "2024-02-01", "--to", "2024-01-01"],
    )
    assert result.exit_code != 0
    assert not (tmp_path / "days.csv").exists()


def test_briefing_shows_request():
    result = runner.invoke(app, ["briefing", "2024-01-05", *SCHEDULE])
    assert result.exit_code == 0, cli_text(result)
    assert "Travel Day Checklist" in cli_text(result)


def test_briefing_before_anchor_fails():
    result = runner.invoke(app, ["briefing", "2023-12-01", *SCHEDULE])
    assert result.exit_code != 0


def test_presets_lists_patterns():
    result = runner.invoke(app, ["presets"])
    assert result.exit_code == 0, cli_text(result)
    for name in ("14/14", "14/21", "28/28"):
        assert name in cli_text(result)


def test_malformed_yaml_config_is_a_usage_error(tmp_path: Path):
    config = tmp_path / "crew.yaml"
    config.write_text("start_date: [2024-01-01\npattern: 3/2\n", encoding="utf-8")
    result = runner.invoke(app, ["status", "2024-01-04", "--config", str(config)])
    assert result.exit_code == 2


def test_share_prints_query_and_link():
    result = runner.invoke(app, ["share", "--start", "2024-01-01", "--pattern", "14/21"])
    assert result.exit_code == 0, cli_text(result)
    assert result.output.strip() == "start=2024-01-01&pattern=14%2F21"

    linked = runner.invoke(app, ["share", *SCHEDULE, "--base-url", "https://example.org/rota"])
    assert linked.exit_code == 0, cli_text(linked)
    assert linked.output.strip() == "https://example.org/rota?start=2024-01-01&pattern=3%2F2"


def test_status_from_shared_link():
    link = "https://example.org/rota?start=2024-01-01&pattern=3%2F2"
    result = runner.invoke(app, ["status", "2024-01-04", "--link", link])
    assert result.exit_code == 0, cli_text(result)
    assert "2024-01-04: transit" in cli_text(result)


def test_incomplete_shared_link_is_a_usage_error():
    result = runner.invoke(app, ["status", "2024-01-04", "--link", "start=2024-01-01"])
    assert result.exit_code == 2
    assert "pattern" in cli_text(result)

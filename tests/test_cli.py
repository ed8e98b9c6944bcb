"""Tests for the command-line interface."""

import json

import pytest

from ride_analytics import cli
from ride_analytics.analysis.trends import RampClassification


@pytest.fixture
def sessions_file(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text(
        json.dumps(
            [
                {"id": "a", "start_time": "2025-03-01T08:00:00Z", "duration_secs": 3600,
                 "tss": 70, "ftp": 240, "avg_power": 190, "avg_hr": 145},
                {"id": "b", "start_time": "2025-03-05T08:00:00Z", "duration_secs": 5400,
                 "tss": 110, "ftp": 250, "avg_power": 205},
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestCli:
    """Tests for the CLI entry point."""

    @pytest.mark.parametrize("command", ["pmc", "weekly", "ftp", "ramp"])
    def test_history_commands(self, command, sessions_file, capsys):
        assert cli.main([command, str(sessions_file), "--today", "2025-03-10"]) == 0

    def test_pmc_output(self, sessions_file, capsys):
        cli.main(["pmc", str(sessions_file), "--today", "2025-03-10", "--days", "3"])
        out = capsys.readouterr().out
        assert "2025-03-10" in out
        assert "2025-03-01" not in out

    def test_zones(self, capsys):
        assert cli.main(["zones", "--ftp", "200"]) == 0
        out = capsys.readouterr().out
        assert "180-210" in out

    def test_missing_file(self, tmp_path):
        assert cli.main(["pmc", str(tmp_path / "missing.json")]) == 1

    def test_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[{", encoding="utf-8")
        assert cli.main(["ftp", str(bad)]) == 1

    def test_no_command(self):
        assert cli.main([]) == 1


class TestFormatting:
    def test_tsb_label(self):
        text = cli.format_tsb_rich(-25.0)
        assert "very fatigued" in text.plain
        assert text.style == "red"

    def test_ramp_colors(self):
        assert cli.get_ramp_color(RampClassification.EXCESSIVE) == "red"
        assert cli.get_ramp_color(RampClassification.RECOVERY) == "blue"

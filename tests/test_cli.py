"""Tests for the command line interface."""

import json
import logging
import math
import sys

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from webinsight import cli as cli_module
from webinsight.cli import cli, main, setup_logging


@pytest.fixture
def runner():
    return CliRunner()


class TestScanCommand:

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["scan", "example.com", "--json", "--seed", "3", "--delay", "0"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["url"] == "https://example.com"
        assert data["scores"]["overall"] == math.floor(
            0.25 * sum(data["scores"][k] for k in ("security", "seo", "performance", "accessibility")) + 0.5
        )

    def test_seed_is_reproducible(self, runner):
        args = ["scan", "example.com", "--json", "--seed", "8", "--delay", "0"]
        first = json.loads(runner.invoke(cli, args).stdout)
        second = json.loads(runner.invoke(cli, args).stdout)
        first.pop("scanDate")
        second.pop("scanDate")
        for data in (first, second):
            ssl = data["security"]["ssl"]
            ssl.pop("validFrom")
            ssl.pop("validUntil")
        assert first == second

    def test_no_competitors(self, runner):
        result = runner.invoke(
            cli, ["scan", "example.com", "--json", "--no-competitors", "--seed", "1", "--delay", "0"]
        )
        assert json.loads(result.stdout)["seo"]["competitorAnalysis"] is None

    def test_console_output(self, runner):
        result = runner.invoke(cli, ["scan", "example.com", "--seed", "1", "--delay", "0"])
        assert result.exit_code == 0, result.output
        assert "Overall Score" in result.output
        assert "Security" in result.output
        assert "Accessibility" in result.output

    def test_verbose_output(self, runner):
        result = runner.invoke(cli, ["scan", "example.com", "-v", "--seed", "1", "--delay", "0"])
        assert result.exit_code == 0, result.output
        assert "All Findings" in result.output

    def test_invalid_url(self, runner):
        result = runner.invoke(cli, ["scan", "not a url", "--delay", "0"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_writes_report(self, runner, tmp_path):
        path = tmp_path / "scan.html"
        result = runner.invoke(
            cli, ["scan", "example.com", "--json", "--seed", "1", "--delay", "0", "--report", str(path)]
        )
        assert result.exit_code == 0, result.output
        assert "WebInsight Scanner" in path.read_text(encoding="utf-8")


class TestReportCommand:

    def test_into_directory(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["report", "example.com", "-o", str(tmp_path), "--seed", "1", "--delay", "0"]
        )
        assert result.exit_code == 0, result.output

        files = list(tmp_path.glob("WebInsight-Scan-example.com-*.html"))
        assert len(files) == 1
        assert "Website Analysis Report" in files[0].read_text(encoding="utf-8")

    def test_to_file(self, runner, tmp_path):
        path = tmp_path / "reports" / "example.html"
        result = runner.invoke(
            cli, ["report", "example.com", "-o", str(path), "--seed", "1", "--delay", "0"]
        )
        assert result.exit_code == 0, result.output
        assert path.exists()


class TestSerpCommand:

    def test_requires_credentials(self, runner, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("SEARCH_ENGINE_ID", raising=False)

        result = runner.invoke(cli, ["serp", "website scanner"])
        assert result.exit_code == 1
        assert "not configured" in result.output


class TestMain:

    def test_bare_url_runs_scan(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["webinsight", "example.com", "--json", "--seed", "2", "--delay", "0"])

        with pytest.raises(SystemExit) as exc:
            main()

        assert exc.value.code == 0
        assert json.loads(capsys.readouterr().out)["url"] == "https://example.com"

    def test_help_without_command(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "scan" in result.output


class TestLogging:

    def test_log_level_option(self, runner, monkeypatch):
        levels = []
        monkeypatch.setattr(cli_module, "setup_logging", levels.append)

        result = runner.invoke(
            cli, ["--log-level", "DEBUG", "scan", "example.com", "--json", "--seed", "1", "--delay", "0"]
        )
        assert result.exit_code == 0, result.output
        assert levels == ["DEBUG"]

    def test_invalid_log_level(self, runner):
        result = runner.invoke(cli, ["--log-level", "LOUD", "scan", "example.com"])
        assert result.exit_code == 2

    def test_setup_logging_installs_rich_handler(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging("debug")

        assert calls[0]["level"] == "DEBUG"
        [handler] = calls[0]["handlers"]
        assert isinstance(handler, RichHandler)

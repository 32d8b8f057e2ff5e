"""Tests for the command-line interface."""

import argparse
import io
import json
from unittest.mock import patch

import pytest

from simcrawl import cli
from simcrawl.errors import FailureReason
from simcrawl.models import CrawlOutcome, MatchRecord, UNKNOWN_PERCENT


def make_args(**overrides) -> argparse.Namespace:
    args = {
        "text": None,
        "file": None,
        "target": None,
        "deadline": None,
        "config": None,
        "headed": False,
        "output": "text",
        "output_file": None,
    }
    args.update(overrides)
    return argparse.Namespace(**args)


MATCHES = CrawlOutcome.matches([
    MatchRecord("Copied Article", "https://a.example/1", "excerpt", 87.0, 12),
    MatchRecord("Other", "https://a.example/2", "", UNKNOWN_PERCENT, None),
])


class TestHelpers:
    """Test cases for output helpers."""

    def test_format_percent(self):
        assert cli.format_percent(87.0) == "87%"
        assert cli.format_percent(42.5) == "42.5%"
        assert cli.format_percent(UNKNOWN_PERCENT) == "unknown"

    def test_exit_codes(self):
        assert cli.exit_code_for(MATCHES) == cli.EXIT_MATCHES
        assert cli.exit_code_for(CrawlOutcome.no_match()) == cli.EXIT_NO_MATCH
        assert cli.exit_code_for(CrawlOutcome.timed_out()) == cli.EXIT_FAILED
        assert cli.exit_code_for(
            CrawlOutcome.failed(FailureReason.NAVIGATION_ERROR, "x")
        ) == cli.EXIT_FAILED

    def test_print_matches(self, capsys):
        cli.print_outcome(MATCHES)
        out = capsys.readouterr().out

        assert "Found 2 matching documents" in out
        assert "1. Copied Article" in out
        assert "Similarity: 87%, found: 12" in out
        assert "Similarity: unknown, found: unknown" in out

    def test_print_failure(self, capsys):
        cli.print_outcome(CrawlOutcome.failed(FailureReason.INTERACTION_ERROR, "Text input not found"))
        out = capsys.readouterr().out

        assert "interaction_error" in out
        assert "Text input not found" in out


class TestCheckCommand:
    """Test cases for the check subcommand."""

    def test_unknown_target(self, capsys):
        code = cli.check_command(make_args(text="x" * 60, target="nowhere"))

        assert code == cli.EXIT_FAILED
        assert "Unknown crawl target" in capsys.readouterr().out

    def test_missing_text(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))

        code = cli.check_command(make_args())

        assert code == cli.EXIT_FAILED
        assert "no text given" in capsys.readouterr().out

    def test_text_output(self, capsys):
        with patch.object(cli, "crawl_sync", return_value=MATCHES) as check:
            code = cli.check_command(make_args(text="x" * 60, deadline=30.0))

        assert code == cli.EXIT_MATCHES
        assert check.call_args.kwargs["deadline"] == 30.0
        assert check.call_args.kwargs["target"] == "plagium"
        assert "Copied Article" in capsys.readouterr().out

    def test_headed_flag(self):
        with patch.object(cli, "crawl_sync", return_value=MATCHES) as check:
            cli.check_command(make_args(text="x" * 60, headed=True))

        assert check.call_args.kwargs["browser_config"].headless is False

    def test_json_output(self, capsys):
        with patch.object(cli, "crawl_sync", return_value=CrawlOutcome.no_match()):
            code = cli.check_command(make_args(text="x" * 60, output="json"))

        body = json.loads(capsys.readouterr().out)
        assert code == cli.EXIT_NO_MATCH
        assert body["status"] == 404
        assert body["data"] is None

    def test_json_output_file(self, tmp_path):
        output_file = tmp_path / "out.json"

        with patch.object(cli, "crawl_sync", return_value=MATCHES):
            cli.check_command(make_args(text="x" * 60, output="json", output_file=str(output_file)))

        body = json.loads(output_file.read_text(encoding="utf-8"))
        assert body["status"] == 200
        assert body["length"] == 2

    def test_text_from_file(self, tmp_path):
        text_file = tmp_path / "input.txt"
        text_file.write_text("y" * 80, encoding="utf-8")

        with patch.object(cli, "crawl_sync", return_value=MATCHES) as check:
            cli.check_command(make_args(file=str(text_file)))

        assert check.call_args.args[0] == "y" * 80


class TestMain:
    """Test cases for the entry point."""

    def test_targets_subcommand(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.argv", ["simcrawl", "targets"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 0
        assert "plagium" in capsys.readouterr().out

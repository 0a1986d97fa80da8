"""Tests for the list, show, and status commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ttrack.commands.report import EXIT_INACTIVE
from ttrack.services.report import REMAINING_UNSUPPORTED
from tests.commands._helpers import invoke


@pytest.fixture
def worked(cli_runner: CliRunner, data_file: Path) -> Path:
    """Today's log: ``meeting`` 09:00-09:30, then untitled work until 10:30."""
    for args in (
        ("start", "meeting", "--at", "09:00"),
        ("stop", "meeting", "--at", "09:30"),
        ("start", "--at", "09:30"),
        ("stop", "--at", "10:30"),
    ):
        assert invoke(cli_runner, data_file, *args).exit_code == 0
    return data_file


class TestList:
    def test_lists_today(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "list")
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert len(lines) == 4
        assert lines[0].startswith('Start "meeting" at ')
        assert lines[3].startswith("Stop at ")

    def test_text_filter(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "list", "meeting")
        assert len(result.stdout.splitlines()) == 2

    def test_other_day_is_empty(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "list", "--from", "2000-01-01")
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_invalid_from(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "list", "--from", "yesterday")
        assert result.exit_code == 1
        assert "ERROR  list" in result.stderr

    def test_json(self, cli_runner: CliRunner, worked: Path) -> None:
        data = json.loads(invoke(cli_runner, worked, "--json", "list", "all").stdout)
        assert data["data"]["count"] == 4
        assert data["data"]["filter"]["filter"] == "all"


class TestShow:
    def test_work_time(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "show")
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "Work Time: 01:30:00"

    def test_filter(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "show", "meeting")
        assert result.stdout.strip() == "Work Time: 00:30:00"

    def test_plain_and_format(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "show", "-p", "--format", "{h}h{mm}m")
        assert result.stdout.strip() == "1h30m"

    def test_quiet(self, cli_runner: CliRunner, worked: Path) -> None:
        assert invoke(cli_runner, worked, "-q", "show").stdout.strip() == "01:30:00"

    def test_remaining(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "show", "--remaining")
        assert result.exit_code == 0
        # The weekly remainder can only be smaller than 38h30m.
        assert result.stdout.startswith("Remaining Work Time: 06:30:00")

    def test_remaining_with_range_is_refused(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "show", "-r", "--from", "08:00")
        assert result.exit_code == 0
        assert result.stdout == ""
        assert REMAINING_UNSUPPORTED in result.stderr

    def test_default_command_is_show(self, cli_runner: CliRunner, data_file: Path) -> None:
        result = invoke(cli_runner, data_file)
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "Work Time: 00:00:00"


class TestStatus:
    def test_no_events(self, cli_runner: CliRunner, data_file: Path) -> None:
        result = invoke(cli_runner, data_file, "status")
        assert result.exit_code == EXIT_INACTIVE
        assert result.stdout.strip() == "No Events found!"

    def test_active(self, cli_runner: CliRunner, data_file: Path) -> None:
        invoke(cli_runner, data_file, "start", "work", "--at", "09:00")
        result = invoke(cli_runner, data_file, "status")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "Active: true",
            "Description: work",
            "Start Time: 09:00:00",
        ]

    def test_inactive(self, cli_runner: CliRunner, worked: Path) -> None:
        result = invoke(cli_runner, worked, "status")
        assert result.exit_code == EXIT_INACTIVE
        assert result.stdout.splitlines() == ["Active: false", "End Time: 10:30:00"]

    def test_quiet(self, cli_runner: CliRunner, worked: Path) -> None:
        assert invoke(cli_runner, worked, "-q", "status").stdout.strip() == "inactive"

"""Tests for the path, export, and import commands."""

import json
from pathlib import Path

from click.testing import CliRunner

from ttrack.infrastructure.store import EventStore
from tests.commands._helpers import invoke
from tests.conftest import seed, start_at, stop_at


class TestPath:
    def test_prints_path(self, cli_runner: CliRunner, data_file: Path) -> None:
        result = invoke(cli_runner, data_file, "path")
        assert result.exit_code == 0
        assert result.stdout.strip() == str(data_file)

    def test_default_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        from ttrack.cli import cli

        result = cli_runner.invoke(cli, ["path"])
        assert result.stdout.strip() == str(tmp_path / "timetracking.json")

    def test_env_var(self, cli_runner: CliRunner, tmp_path: Path, monkeypatch) -> None:
        from ttrack.cli import cli

        monkeypatch.setenv("TT_DATA_FILE", "$HOME/elsewhere.json")
        result = cli_runner.invoke(cli, ["-q", "path"])
        assert result.stdout.strip() == str(tmp_path / "elsewhere.json")


class TestExport:
    def test_json(
        self, cli_runner: CliRunner, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(9, desc="a"), stop_at(10))
        target = tmp_path / "backup.json"
        result = invoke(cli_runner, data_file, "export", str(target))
        assert result.exit_code == 0, result.output
        assert "count: 2" in result.stdout
        assert target.read_text(encoding="utf-8") == data_file.read_text(encoding="utf-8")

    def test_pretty(
        self, cli_runner: CliRunner, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(9))
        target = tmp_path / "backup.json"
        invoke(cli_runner, data_file, "export", "--pretty", str(target))
        text = target.read_text(encoding="utf-8")
        assert text.count("\n") > 1
        assert json.loads(text)[0]["Start"]["description"] is None

    def test_readable_home_relative(
        self, cli_runner: CliRunner, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(9, desc="a"), stop_at(10))
        result = invoke(cli_runner, data_file, "export", "-r", "~/sheet.txt")
        assert result.exit_code == 0, result.output
        lines = (tmp_path / "sheet.txt").read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith('Start "a" at ')


class TestImport:
    def test_round_trip_through_export(
        self, cli_runner: CliRunner, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(9, desc="a"), stop_at(10))
        backup = tmp_path / "backup.json"
        invoke(cli_runner, data_file, "export", str(backup))
        other = tmp_path / "other.json"
        result = invoke(cli_runner, other, "import", str(backup))
        assert result.exit_code == 0, result.output
        assert EventStore(other).events == [start_at(9, desc="a"), stop_at(10)]

    def test_invalid_file(self, cli_runner: CliRunner, data_file: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("nope", encoding="utf-8")
        result = invoke(cli_runner, data_file, "import", str(bad))
        assert result.exit_code == 1
        assert "ERROR  import" in result.stderr
        assert not data_file.exists()

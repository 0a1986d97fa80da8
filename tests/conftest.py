"""Shared pytest fixtures and test helpers for tt tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from datetime import UTC, date, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from ttrack.config.settings import TtSettings
from ttrack.domain.events import Event
from ttrack.infrastructure.store import EventStore
from ttrack.services.telemetry import disable_telemetry

# A Wednesday; its week runs Monday 2024-03-11 .. Sunday 2024-03-17.
TODAY = date(2024, 3, 13)


def local(
    hour: int,
    minute: int = 0,
    second: int = 0,
    *,
    day: date = TODAY,
) -> datetime:
    """UTC instant for a local wall-clock time on *day*."""
    return datetime(day.year, day.month, day.day, hour, minute, second).astimezone(UTC)


def start_at(
    hour: int, minute: int = 0, second: int = 0, desc: str | None = None, *, day: date = TODAY
) -> Event:
    return Event.start(local(hour, minute, second, day=day), desc)


def stop_at(
    hour: int, minute: int = 0, second: int = 0, desc: str | None = None, *, day: date = TODAY
) -> Event:
    return Event.stop(local(hour, minute, second, day=day), desc)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point HOME and the config home at a temp dir and clear ``TT_*`` vars.

    The default data file (``~/timetracking.json``) then lives in *tmp_path*.
    """
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for name in [n for n in os.environ if n.startswith("TT_")]:
        monkeypatch.delenv(name)


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "timetracking.json"


@pytest.fixture
def settings(data_file: Path) -> TtSettings:
    return TtSettings.from_cli(data_file=str(data_file))


@pytest.fixture
def auto_settings(data_file: Path) -> TtSettings:
    """Settings with ``auto_insert_stop`` enabled."""
    return TtSettings(data_file=str(data_file), auto_insert_stop=True)


@pytest.fixture
def store(settings: TtSettings) -> Iterator[EventStore]:
    yield EventStore.from_settings(settings)


def seed(store: EventStore, *events: Event) -> None:
    """Write *events* as the store's data file."""
    store.save(list(events))


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    """Undo the logging and telemetry setup a ``-v`` CLI run leaves behind."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    tt_level = logging.getLogger("ttrack").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("ttrack").setLevel(tt_level)

"""EventStore: the data file and the in-memory event log.

The store is the single dependency injected into every service. It owns the
data file path, the on-disk encoding, and the loaded log. Mutations happen
inside :meth:`EventStore.transaction`, which saves once on success and
restores the in-memory log on failure so no partial mutation is persisted.

A missing or undecodable data file is treated as an empty log. Write
failures propagate.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ttrack.config.models import StorageFormat
from ttrack.infrastructure.codecs import (
    CodecError,
    decode_binary,
    decode_json,
    encode_binary,
    encode_human_readable,
    encode_json,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ttrack.config.settings import TtSettings
    from ttrack.domain.events import Event

logger = logging.getLogger(__name__)


def read_events(path: Path, storage_format: StorageFormat) -> list[Event]:
    """Decode the file at *path*.

    Raises:
        OSError: If the file cannot be read.
        CodecError: If its content is not a valid encoding.
    """
    if storage_format is StorageFormat.BINARY:
        return decode_binary(path.read_bytes())
    return decode_json(path.read_bytes())


def write_events(path: Path, events: list[Event], storage_format: StorageFormat) -> None:
    """Encode *events* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if storage_format is StorageFormat.BINARY:
        path.write_bytes(encode_binary(events))
    else:
        path.write_text(encode_json(events), encoding="utf-8")


def write_json_export(path: Path, events: list[Event], *, pretty: bool = False) -> None:
    """Write *events* as JSON regardless of the data file's encoding."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode_json(events, pretty=pretty), encoding="utf-8")


def write_human_readable(path: Path, events: list[Event]) -> None:
    """Write the one-line-per-event export. It cannot be imported back."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode_human_readable(events), encoding="utf-8")


class EventStore:
    """Lazily loaded event log bound to one data file."""

    def __init__(self, path: Path, storage_format: StorageFormat = StorageFormat.JSON) -> None:
        self.path = path
        self.storage_format = storage_format
        self._events: list[Event] | None = None

    @classmethod
    def from_settings(cls, settings: TtSettings) -> EventStore:
        return cls(settings.data_path, settings.storage_format)

    @property
    def events(self) -> list[Event]:
        """The event log (loaded on first access)."""
        if self._events is None:
            self._events = self.load()
        return self._events

    def load(self) -> list[Event]:
        """Read the data file; missing or corrupt files yield an empty log."""
        if not self.path.exists():
            logger.debug("No data file at %s, starting with an empty log", self.path)
            return []
        try:
            events = read_events(self.path, self.storage_format)
        except (OSError, CodecError) as exc:
            logger.warning("Could not read data file %s: %s", self.path, exc)
            return []
        logger.debug("Loaded %d events from %s", len(events), self.path)
        return events

    def save(self, events: list[Event] | None = None) -> None:
        """Write *events* (default: the loaded log) to the data file."""
        if events is not None:
            self._events = events
        write_events(self.path, self.events, self.storage_format)
        logger.debug("Saved %d events to %s", len(self.events), self.path)

    @contextmanager
    def transaction(self) -> Iterator[list[Event]]:
        """Yield the mutable log; persist it on success if it changed.

        On an exception the log is restored to its previous content and
        nothing is written.
        """
        events = self.events
        snapshot = list(events)
        try:
            yield events
        except BaseException:
            events[:] = snapshot
            raise
        if events != snapshot:
            self.save()

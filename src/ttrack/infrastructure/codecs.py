"""Encodings of the event log.

- JSON: a list of externally tagged events,
  ``{"Start": {"description": "x", "time": 1700000000}}`` with ``time`` in
  Unix seconds. Compact by default, optionally pretty-printed.
- Binary: little-endian fixed-width layout. ``u64`` event count, then per
  event a ``u32`` variant (0 Start, 1 Stop), a ``u8`` option tag for the
  description (followed by ``u64`` length + UTF-8 bytes when present) and an
  ``i64`` Unix timestamp.
- Human-readable: one line per event, write-only.
"""

from __future__ import annotations

import json
import math
import struct
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from ttrack.domain.events import Event, EventKind

_VARIANTS: tuple[EventKind, ...] = (EventKind.START, EventKind.STOP)

_U8 = struct.Struct("<B")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")


class CodecError(ValueError):
    """Raised when persisted data cannot be decoded."""


class _Payload(BaseModel):
    """The shared record inside each tagged JSON event."""

    model_config = {"frozen": True, "extra": "forbid"}

    description: str | None = None
    time: int


def _timestamp(instant: datetime) -> int:
    return math.floor(instant.timestamp())


def _from_timestamp(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, UTC)
    except (ValueError, OverflowError, OSError) as exc:
        msg = f"Timestamp out of range: {seconds}"
        raise CodecError(msg) from exc


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def event_to_json(event: Event) -> dict[str, Any]:
    """Return the tagged JSON-ready dict for *event*."""
    return {
        str(event.kind): {
            "description": event.description,
            "time": _timestamp(event.instant),
        }
    }


def event_from_json(item: Any) -> Event:
    """Decode a single tagged JSON event."""
    if not isinstance(item, dict) or len(item) != 1:
        msg = f"Expected an object with a single Start/Stop key, got {item!r}"
        raise CodecError(msg)
    ((tag, body),) = item.items()
    try:
        kind = EventKind(tag)
    except ValueError as exc:
        msg = f"Unknown event variant: {tag!r}"
        raise CodecError(msg) from exc
    try:
        payload = _Payload.model_validate(body)
    except ValidationError as exc:
        msg = f"Invalid {tag} event: {exc}"
        raise CodecError(msg) from exc
    return Event(kind, _from_timestamp(payload.time), payload.description)


def encode_json(events: list[Event], *, pretty: bool = False) -> str:
    """Serialize *events* as JSON text."""
    data = [event_to_json(event) for event in events]
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def decode_json(text: str | bytes) -> list[Event]:
    """Parse JSON text, or UTF-8 encoded JSON bytes, into events.

    Raises:
        CodecError: If the input is not a JSON list of tagged events.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Invalid JSON: {exc}"
        raise CodecError(msg) from exc
    if not isinstance(data, list):
        msg = f"Expected a JSON list of events, got {type(data).__name__}"
        raise CodecError(msg)
    return [event_from_json(item) for item in data]


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------


def encode_binary(events: list[Event]) -> bytes:
    """Serialize *events* into the fixed-width binary layout."""
    parts: list[bytes] = [_U64.pack(len(events))]
    for event in events:
        parts.append(_U32.pack(_VARIANTS.index(event.kind)))
        if event.description is None:
            parts.append(_U8.pack(0))
        else:
            raw = event.description.encode("utf-8")
            parts.append(_U8.pack(1))
            parts.append(_U64.pack(len(raw)))
            parts.append(raw)
        parts.append(_I64.pack(_timestamp(event.instant)))
    return b"".join(parts)


class _Reader:
    """Cursor over a binary buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def unpack(self, layout: struct.Struct) -> int:
        try:
            (value,) = layout.unpack_from(self._data, self._offset)
        except struct.error as exc:
            msg = f"Truncated data at byte {self._offset}"
            raise CodecError(msg) from exc
        self._offset += layout.size
        return value

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            msg = f"Truncated data at byte {self._offset}"
            raise CodecError(msg)
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    @property
    def exhausted(self) -> bool:
        return self._offset == len(self._data)


def decode_binary(data: bytes) -> list[Event]:
    """Parse the binary layout into events.

    Raises:
        CodecError: On truncated, trailing or malformed data.
    """
    reader = _Reader(data)
    count = reader.unpack(_U64)
    events: list[Event] = []
    for _ in range(count):
        variant = reader.unpack(_U32)
        if variant >= len(_VARIANTS):
            msg = f"Unknown event variant: {variant}"
            raise CodecError(msg)
        tag = reader.unpack(_U8)
        description: str | None
        if tag == 0:
            description = None
        elif tag == 1:
            raw = reader.take(reader.unpack(_U64))
            try:
                description = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CodecError(str(exc)) from exc
        else:
            msg = f"Invalid option tag: {tag}"
            raise CodecError(msg)
        seconds = reader.unpack(_I64)
        events.append(Event(_VARIANTS[variant], _from_timestamp(seconds), description))
    if not reader.exhausted:
        msg = "Trailing bytes after the last event"
        raise CodecError(msg)
    return events


# ---------------------------------------------------------------------------
# Human-readable
# ---------------------------------------------------------------------------


def to_human_readable(event: Event) -> str:
    """``Start "desc" at 2024.01.31-09:00:00`` (UTC fields)."""
    description = f' "{event.description}"' if event.description is not None else ""
    return f"{event.kind}{description} at {event.instant.astimezone(UTC):%Y.%m.%d-%H:%M:%S}"


def encode_human_readable(events: list[Event]) -> str:
    """Join :func:`to_human_readable` lines with newlines."""
    return "\n".join(to_human_readable(event) for event in events)

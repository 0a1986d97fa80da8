"""Tracking events and filter boundaries.

An event log is a plain ``list[Event]`` in creation order. Events are
immutable; the log only grows and is never reordered, only filtered into
read-only views.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum


class EventKind(StrEnum):
    """The two event variants. Values double as the persisted tag names."""

    START = "Start"
    STOP = "Stop"


@dataclass(frozen=True)
class Event:
    """A single Start or Stop occurrence.

    Attributes:
        kind: Start or Stop.
        instant: Absolute, timezone-aware UTC time of the event.
        description: Optional free text.
    """

    kind: EventKind
    instant: datetime
    description: str | None = None

    @classmethod
    def start(cls, instant: datetime, description: str | None = None) -> Event:
        return cls(EventKind.START, instant.astimezone(UTC), description)

    @classmethod
    def stop(cls, instant: datetime, description: str | None = None) -> Event:
        return cls(EventKind.STOP, instant.astimezone(UTC), description)

    @property
    def is_start(self) -> bool:
        return self.kind is EventKind.START

    @property
    def is_stop(self) -> bool:
        return self.kind is EventKind.STOP

    def time(self, include_seconds: bool = True) -> datetime:
        """The event instant, with seconds truncated away unless *include_seconds*."""
        if include_seconds:
            return self.instant
        return self.instant.replace(second=0, microsecond=0)


@dataclass(frozen=True)
class DateOrInstant:
    """A parsed filter boundary.

    Exactly one of *day* or *moment* is set. A *day* keeps midnight-to-midnight
    semantics; a *moment* is a local wall-clock time compared as an exact point.
    """

    day: date | None = None
    moment: datetime | None = None

    def __post_init__(self) -> None:
        if (self.day is None) == (self.moment is None):
            msg = "DateOrInstant needs exactly one of day or moment"
            raise ValueError(msg)

    @classmethod
    def of_date(cls, day: date) -> DateOrInstant:
        return cls(day=day)

    @classmethod
    def of_instant(cls, moment: datetime) -> DateOrInstant:
        return cls(moment=moment)

    @property
    def is_date(self) -> bool:
        return self.day is not None

    @property
    def calendar_date(self) -> date:
        """The calendar date of this boundary (the date part for instants)."""
        if self.day is not None:
            return self.day
        assert self.moment is not None
        return self.moment.date()


def last_event(log: list[Event]) -> Event | None:
    """The most recently appended event, or None for an empty log."""
    return log[-1] if log else None


def is_tracking(log: list[Event]) -> bool:
    """True when the log ends in an open Start."""
    last = last_event(log)
    return last is not None and last.is_start

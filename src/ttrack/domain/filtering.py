"""Range and text filtering of the event log.

Resolution order:

1. ``"week"`` replaces any from/to with the current Monday..Sunday and
   disables text matching.
2. Otherwise *from* defaults to today and *to* defaults to the calendar date
   of *from*.

``"all"`` bypasses the range test. Range boundaries always compare with full
seconds. The filtered view never starts with a Stop.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from itertools import dropwhile

from ttrack.domain.events import DateOrInstant, Event
from ttrack.domain.timeparse import local_to_utc, local_today, parse_date_or_instant

ALL = "all"
WEEK = "week"

_DAY_START = time(0, 0, 0)
_DAY_END = time(23, 59, 59)


@dataclass(frozen=True)
class FilterSpec:
    """A query over the log as given on the command line."""

    from_: str | None = None
    to: str | None = None
    filter: str | None = None

    @property
    def has_range(self) -> bool:
        return self.from_ is not None or self.to is not None


@dataclass(frozen=True)
class ResolvedRange:
    """Boundaries and text token after defaults and ``"week"`` are applied."""

    start: DateOrInstant
    end: DateOrInstant
    token: str | None


def week_bounds(today: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing *today*."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def resolve_range(
    from_: str | None = None,
    to: str | None = None,
    token: str | None = None,
    *,
    today: date | None = None,
) -> ResolvedRange:
    """Apply the ``"week"`` shortcut and from/to defaults."""
    today = today or local_today()
    if token == WEEK:
        monday, sunday = week_bounds(today)
        return ResolvedRange(DateOrInstant.of_date(monday), DateOrInstant.of_date(sunday), None)

    start = (
        parse_date_or_instant(from_, today=today)
        if from_ is not None
        else DateOrInstant.of_date(today)
    )
    if to is not None:
        end = parse_date_or_instant(to, today=today)
    else:
        end = DateOrInstant.of_date(start.calendar_date)
    return ResolvedRange(start, end, token)


def lower_bound(boundary: DateOrInstant) -> datetime:
    """The earliest UTC instant that passes *boundary* as a ``from``."""
    if boundary.day is not None:
        return local_to_utc(datetime.combine(boundary.day, _DAY_START))
    assert boundary.moment is not None
    return local_to_utc(boundary.moment)


def upper_bound(boundary: DateOrInstant) -> datetime:
    """The latest UTC instant that passes *boundary* as a ``to``."""
    if boundary.day is not None:
        return local_to_utc(datetime.combine(boundary.day, _DAY_END))
    assert boundary.moment is not None
    return local_to_utc(boundary.moment)


def matches_text(event: Event, token: str | None) -> bool:
    """Text test: no token or ``"all"`` passes, otherwise a substring match."""
    if token is None or token == ALL:
        return True
    return event.description is not None and token in event.description


def apply_range(events: list[Event], resolved: ResolvedRange) -> list[Event]:
    """Select events by range and text, then trim leading Stops."""
    token = resolved.token
    if token == ALL:
        in_range = list(events)
    else:
        lower = lower_bound(resolved.start)
        upper = upper_bound(resolved.end)
        in_range = [e for e in events if lower <= e.time(include_seconds=True) <= upper]

    matched = [e for e in in_range if matches_text(e, token)]
    return list(dropwhile(lambda e: e.is_stop, matched))


def filter_events(
    log: list[Event],
    from_: str | None = None,
    to: str | None = None,
    token: str | None = None,
    *,
    today: date | None = None,
) -> list[Event]:
    """Return the read-only view of *log* selected by from/to and *token*.

    Raises:
        TimeParseError: If *from_* or *to* cannot be parsed.
    """
    return apply_range(log, resolve_range(from_, to, token, today=today))


def filter_spec(log: list[Event], spec: FilterSpec, *, today: date | None = None) -> list[Event]:
    """:func:`filter_events` driven by a :class:`FilterSpec`."""
    return filter_events(log, spec.from_, spec.to, spec.filter, today=today)

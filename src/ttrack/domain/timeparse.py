"""Loose date/time parsing for ``--at``, ``--from`` and ``--to``.

Each parser walks an ordered tuple of layouts and returns the first one that
matches. Time-only input is placed on the current local date; local wall-clock
times are converted to UTC with the local offset in effect at that instant.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from ttrack.domain.events import DateOrInstant

TIME_LAYOUTS: tuple[str, ...] = ("%H:%M:%S", "%H:%M", "%H")
DATE_TIME_LAYOUTS: tuple[str, ...] = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d %H")
DATE_LAYOUT = "%Y-%m-%d"


class TimeParseError(ValueError):
    """Raised when a string matches none of the supported layouts."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            f"Could not parse {text!r}; expected HH[:MM[:SS]] or YYYY-MM-DD [HH[:MM[:SS]]]"
        )


def local_today() -> date:
    """Today's date in the local timezone."""
    return datetime.now().date()


def local_to_utc(moment: datetime) -> datetime:
    """Interpret a naive wall-clock *moment* as local time and convert to UTC."""
    return moment.astimezone(UTC)


def _try(text: str, layout: str) -> datetime | None:
    try:
        return datetime.strptime(text, layout)
    except ValueError:
        return None


def _time_on(text: str, day: date) -> datetime | None:
    """Parse a time-only layout and place it on *day* (naive, local)."""
    for layout in TIME_LAYOUTS:
        parsed = _try(text, layout)
        if parsed is not None:
            return datetime.combine(day, parsed.time())
    return None


def _date_time(text: str, layouts: tuple[str, ...] = DATE_TIME_LAYOUTS) -> datetime | None:
    for layout in layouts:
        parsed = _try(text, layout)
        if parsed is not None:
            return parsed
    return None


def parse_local(text: str, *, today: date | None = None) -> datetime:
    """Parse *text* into a naive local date-time.

    Order: ``HH:MM:SS``, ``HH:MM``, ``HH``, then ``YYYY-MM-DD HH:MM:SS`` and
    its truncated variants. Missing trailing fields are zero.
    """
    text = text.strip()
    moment = _time_on(text, today or local_today())
    if moment is None:
        moment = _date_time(text)
    if moment is None:
        raise TimeParseError(text)
    return moment


def parse_instant(text: str, *, today: date | None = None) -> datetime:
    """Parse *text* into an absolute UTC instant."""
    return local_to_utc(parse_local(text, today=today))


def parse_date_or_instant(text: str, *, today: date | None = None) -> DateOrInstant:
    """Parse a range boundary, keeping a bare date as a Date.

    Order: ``YYYY-MM-DD``, ``YYYY-MM-DD HH:MM:SS``, the time-only layouts
    (placed on today), then ``YYYY-MM-DD HH:MM`` and ``YYYY-MM-DD HH``.
    """
    text = text.strip()
    day = _try(text, DATE_LAYOUT)
    if day is not None:
        return DateOrInstant.of_date(day.date())

    moment = _date_time(text, DATE_TIME_LAYOUTS[:1])
    if moment is None:
        moment = _time_on(text, today or local_today())
    if moment is None:
        moment = _date_time(text, DATE_TIME_LAYOUTS[1:])
    if moment is None:
        raise TimeParseError(text)
    return DateOrInstant.of_instant(moment)

"""Work-time aggregation and time goals.

Events are consumed two at a time as (Start, Stop) pairs. A trailing Start
is still running and is measured up to *now*. Input is assumed to be a
well-formed, filtered view; Stop-before-Start pairs are not guarded.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from ttrack.domain.events import Event

DEFAULT_FORMAT = "{hh}:{mm}:{ss}"


class Goal(Protocol):
    hours: int
    minutes: int


class Goals(Protocol):
    @property
    def daily(self) -> Goal: ...

    @property
    def weekly(self) -> Goal: ...


@dataclass(frozen=True)
class Hms:
    """A duration split into signed hours, minutes and seconds."""

    hours: int
    minutes: int
    seconds: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


def _truncate(moment: datetime, include_seconds: bool) -> datetime:
    if include_seconds:
        return moment
    return moment.replace(second=0, microsecond=0)


def total_duration(
    events: Sequence[Event],
    include_seconds: bool = False,
    *,
    now: datetime | None = None,
) -> timedelta:
    """Sum ``stop - start`` over consecutive pairs of *events*.

    Without *include_seconds* every instant, *now* included, has its seconds
    zeroed before subtraction.
    """
    total = timedelta()
    for index in range(0, len(events), 2):
        start = events[index].time(include_seconds)
        if index + 1 < len(events):
            total += events[index + 1].time(include_seconds) - start
        else:
            current = _truncate(now if now is not None else datetime.now(UTC), include_seconds)
            total += current - start
    return total


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def split_duration(duration: timedelta) -> Hms:
    """Split *duration* into whole hours, minutes and seconds (toward zero)."""
    total_seconds = int(duration.total_seconds())
    hours = _trunc_div(total_seconds, 3600)
    minutes = _trunc_div(total_seconds, 60) - hours * 60
    seconds = total_seconds - hours * 3600 - minutes * 60
    return Hms(hours, minutes, seconds)


def split_minutes(total_minutes: int) -> Hms:
    """Split a signed minute count into hours and minutes."""
    hours = _trunc_div(total_minutes, 60)
    return Hms(hours, total_minutes - hours * 60, 0)


def remaining_minutes(goals: Goals, scope: str, hours: int, minutes: int) -> int:
    """Minutes left until the goal for *scope* is met; negative once exceeded.

    ``"week"`` uses the weekly goal, anything else the daily one.
    """
    goal = goals.weekly if scope == "week" else goals.daily
    return (goal.hours * 60 + goal.minutes) - (hours * 60 + minutes)


def format_duration(hms: Hms, template: str | None = None) -> str:
    """Render *hms* through a template with ``{hh}``/``{h}``-style placeholders."""
    text = template if template is not None else DEFAULT_FORMAT
    return (
        text.replace("{hh}", f"{hms.hours:02}")
        .replace("{mm}", f"{hms.minutes:02}")
        .replace("{ss}", f"{hms.seconds:02}")
        .replace("{h}", str(hms.hours))
        .replace("{m}", str(hms.minutes))
        .replace("{s}", str(hms.seconds))
    )

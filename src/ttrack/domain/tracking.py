"""Start/Stop state machine over the event log.

The log alternates Start, Stop, Start, ... Each operation inspects the last
event, appends to the log in place when the transition is valid, and returns
a :class:`TrackingOutcome`. Refused transitions leave the log untouched and
carry a user-facing message instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ttrack.domain.events import Event, last_event

ALREADY_RUNNING = "Time tracking is already running!"
ALREADY_STOPPED = "Time tracking is already stopped!"
AT_WITH_AUTO_INSERT = "Auto insert for stop events currently not supported with --at"
NOTHING_TO_CONTINUE = (
    "Time tracking couldn't be continued, because there are no entries. "
    "Use the start command instead!"
)


def already_running_with(description: str) -> str:
    return f'Time tracking with the description "{description}" is already running!'


@dataclass(frozen=True)
class TrackingOutcome:
    """Result of a state machine step.

    Attributes:
        appended: Events appended to the log, in order (empty when refused).
        message: Why the step was refused, or None on success.
    """

    appended: list[Event] = field(default_factory=list)
    message: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.appended)


def _refuse(message: str) -> TrackingOutcome:
    return TrackingOutcome(message=message)


def _append(log: list[Event], *events: Event) -> TrackingOutcome:
    log.extend(events)
    return TrackingOutcome(appended=list(events))


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(UTC)


def start(
    log: list[Event],
    description: str | None = None,
    at: datetime | None = None,
    *,
    auto_insert_stop: bool = False,
    now: datetime | None = None,
) -> TrackingOutcome:
    """Append a Start event.

    When tracking is already active and *auto_insert_stop* is set, the running
    entry is closed with a description-less Stop and a new Start is appended,
    unless the description is unchanged. ``at`` cannot be combined with the
    auto-inserted Stop.
    """
    last = last_event(log)
    if last is None or last.is_stop:
        return _append(log, Event.start(at or _now(now), description))

    if not auto_insert_stop:
        return _refuse(ALREADY_RUNNING)
    if at is not None:
        return _refuse(AT_WITH_AUTO_INSERT)
    if description is not None and description == last.description:
        return _refuse(already_running_with(description))

    moment = _now(now)
    return _append(log, Event.stop(moment), Event.start(moment, description))


def stop(
    log: list[Event],
    description: str | None = None,
    at: datetime | None = None,
    *,
    now: datetime | None = None,
) -> TrackingOutcome:
    """Append a Stop event unless tracking is already stopped."""
    last = last_event(log)
    if last is not None and last.is_stop:
        return _refuse(ALREADY_STOPPED)
    return _append(log, Event.stop(at or _now(now), description))


def continue_(log: list[Event], *, now: datetime | None = None) -> TrackingOutcome:
    """Restart tracking with the description of the most recent Start."""
    last = last_event(log)
    if last is None or not last.is_stop:
        return _refuse(NOTHING_TO_CONTINUE)

    previous = next((event for event in reversed(log) if event.is_start), None)
    if previous is None:
        # A log of nothing but Stops has no description to reuse.
        return _refuse(NOTHING_TO_CONTINUE)
    return _append(log, Event.start(_now(now), previous.description))

"""ReportService: read-only queries over the event log.

Three surfaces:
- list_events: the filtered view as human-readable lines
- show: aggregated work time, or time remaining until the goals are met
- status: whether tracking is active, from the last event
"""

from __future__ import annotations

from datetime import date, datetime

from ttrack.domain.durations import (
    format_duration,
    remaining_minutes,
    split_duration,
    split_minutes,
    total_duration,
)
from ttrack.domain.events import last_event
from ttrack.domain.filtering import WEEK, FilterSpec, filter_events, filter_spec
from ttrack.domain.timeparse import TimeParseError
from ttrack.services._helpers import event_payload
from ttrack.services.base import BaseService
from ttrack.services.result import ServiceResult
from ttrack.services.telemetry import traced

REMAINING_UNSUPPORTED = (
    'Remaining only works when "from" and "to" are not set '
    'and with no filter or filter "week"'
)


def _filter_data(spec: FilterSpec) -> dict[str, str | None]:
    return {"from": spec.from_, "to": spec.to, "filter": spec.filter}


class ReportService(BaseService):
    """Answers list/show/status queries without touching the data file."""

    @traced
    def list_events(self, spec: FilterSpec, *, today: date | None = None) -> ServiceResult:
        """Return the events selected by *spec*."""
        try:
            view = filter_spec(self._store.events, spec, today=today)
        except TimeParseError as exc:
            return ServiceResult.failure("list", "INVALID_TIME", str(exc), value=exc.text)
        return ServiceResult(
            ok=True,
            op="list",
            data={
                "filter": _filter_data(spec),
                "count": len(view),
                "items": [event_payload(event) for event in view],
            },
        )

    @traced
    def show(
        self,
        spec: FilterSpec,
        *,
        include_seconds: bool = False,
        remaining: bool = False,
        plain: bool = False,
        template: str | None = None,
        now: datetime | None = None,
        today: date | None = None,
    ) -> ServiceResult:
        """Total work time for *spec*, or the remaining time against the goals.

        The remaining time is the smaller of the daily and weekly remainders
        unless the query is already week-scoped.
        """
        token = spec.filter or ""
        if remaining and (spec.has_range or token not in ("", WEEK)):
            return ServiceResult(
                ok=True,
                op="show",
                data={"remaining": True, "rejected": True, "filter": _filter_data(spec)},
                warnings=[REMAINING_UNSUPPORTED],
            )

        log = self._store.events
        try:
            view = filter_spec(log, spec, today=today)
        except TimeParseError as exc:
            return ServiceResult.failure("show", "INVALID_TIME", str(exc), value=exc.text)
        hms = split_duration(total_duration(view, include_seconds, now=now))

        if remaining:
            goals = self._settings.time_goal
            left = remaining_minutes(goals, token, hms.hours, hms.minutes)
            if token != WEEK:
                week_view = filter_events(log, token=WEEK, today=today)
                week = split_duration(total_duration(week_view, include_seconds, now=now))
                left = min(left, remaining_minutes(goals, WEEK, week.hours, week.minutes))
            hms = split_minutes(left)

        return ServiceResult(
            ok=True,
            op="show",
            data={
                "filter": _filter_data(spec),
                "remaining": remaining,
                "plain": plain,
                "hours": hms.hours,
                "minutes": hms.minutes,
                "seconds": hms.seconds,
                "text": format_duration(hms, template),
                "events": len(view),
            },
        )

    @traced
    def status(self) -> ServiceResult:
        """Report the last event; ``active`` is True while a Start is open."""
        event = last_event(self._store.events)
        if event is None:
            return ServiceResult(ok=True, op="status", data={"active": False, "event": None})
        return ServiceResult(
            ok=True,
            op="status",
            data={"active": event.is_start, "event": event_payload(event)},
        )

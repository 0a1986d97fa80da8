"""TrackingService: start, stop, and continue time tracking.

Wraps the state machine in :mod:`ttrack.domain.tracking` with ``--at``
parsing and persistence. Refused transitions are ``ok`` results with
``changed: false`` and the reason in ``warnings``.
"""

from __future__ import annotations

from datetime import datetime

from ttrack.domain import tracking
from ttrack.domain.events import is_tracking
from ttrack.domain.timeparse import TimeParseError, parse_instant
from ttrack.domain.tracking import TrackingOutcome
from ttrack.services._helpers import event_payload
from ttrack.services.base import BaseService
from ttrack.services.result import ServiceResult
from ttrack.services.telemetry import traced


class TrackingService(BaseService):
    """Mutates the event log through the Start/Stop state machine."""

    def _result(self, op: str, outcome: TrackingOutcome) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "changed": outcome.changed,
                "events": [event_payload(event) for event in outcome.appended],
                "tracking": is_tracking(self._store.events),
            },
            warnings=[outcome.message] if outcome.message else [],
        )

    @staticmethod
    def _invalid_time(op: str, exc: TimeParseError) -> ServiceResult:
        return ServiceResult.failure(op, "INVALID_TIME", str(exc), value=exc.text)

    @traced
    def start(
        self,
        description: str | None = None,
        *,
        at: str | None = None,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Start tracking, optionally backdated with *at*."""
        try:
            at_instant = parse_instant(at) if at is not None else None
        except TimeParseError as exc:
            return self._invalid_time("start", exc)

        with self._store.transaction() as log:
            outcome = tracking.start(
                log,
                description,
                at_instant,
                auto_insert_stop=self._settings.auto_insert_stop,
                now=now,
            )
        return self._result("start", outcome)

    @traced
    def stop(
        self,
        description: str | None = None,
        *,
        at: str | None = None,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Stop tracking, optionally backdated with *at*."""
        try:
            at_instant = parse_instant(at) if at is not None else None
        except TimeParseError as exc:
            return self._invalid_time("stop", exc)

        with self._store.transaction() as log:
            outcome = tracking.stop(log, description, at_instant, now=now)
        return self._result("stop", outcome)

    @traced
    def continue_(self, *, now: datetime | None = None) -> ServiceResult:
        """Restart tracking with the last used description."""
        with self._store.transaction() as log:
            outcome = tracking.continue_(log, now=now)
        return self._result("continue", outcome)

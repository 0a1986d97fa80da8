"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ttrack.infrastructure.codecs import to_human_readable

if TYPE_CHECKING:
    from ttrack.domain.events import Event


def event_payload(event: Event) -> dict[str, Any]:
    """JSON-ready view of an event for ServiceResult.data.

    ``time`` is ISO 8601 in UTC; ``local_time`` is the wall-clock HH:MM:SS.
    """
    return {
        "kind": str(event.kind),
        "description": event.description,
        "time": event.instant.isoformat(),
        "local_time": event.instant.astimezone().strftime("%H:%M:%S"),
        "line": to_human_readable(event),
    }

"""DataService: data file location, export, and import."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ttrack.infrastructure.codecs import CodecError, decode_json
from ttrack.infrastructure.store import write_human_readable, write_json_export
from ttrack.services.base import BaseService
from ttrack.services.result import ServiceResult
from ttrack.services.telemetry import traced

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class DataService(BaseService):
    """Moves the event log in and out of the data file."""

    def path(self) -> ServiceResult:
        """Report the expanded data file path."""
        return ServiceResult(
            ok=True,
            op="path",
            data={
                "path": str(self._store.path),
                "format": str(self._store.storage_format),
                "exists": self._store.path.exists(),
            },
        )

    @traced
    def export(self, target: Path, *, readable: bool = False, pretty: bool = False) -> ServiceResult:
        """Write the whole log to *target* as JSON or human-readable lines."""
        events = self._store.events
        try:
            if readable:
                write_human_readable(target, events)
            else:
                write_json_export(target, events, pretty=pretty)
        except OSError as exc:
            return ServiceResult.failure("export", "EXPORT_FAILED", str(exc), path=str(target))
        return ServiceResult(
            ok=True,
            op="export",
            data={
                "path": str(target),
                "format": "readable" if readable else "json",
                "count": len(events),
            },
        )

    @traced
    def import_(self, source: Path) -> ServiceResult:
        """Replace the log with the events of a JSON export."""
        try:
            imported = decode_json(source.read_bytes())
        except (OSError, CodecError) as exc:
            return ServiceResult.failure("import", "IMPORT_FAILED", str(exc), path=str(source))

        with self._store.transaction() as log:
            replaced = len(log)
            log[:] = imported
        logger.debug("Imported %d events from %s", len(imported), source)
        return ServiceResult(
            ok=True,
            op="import",
            data={"path": str(source), "count": len(imported), "replaced": replaced},
        )

"""BaseService: foundation for all tt services.

Every service receives the :class:`EventStore` and the frozen settings at
construction time. Services own their persistence boundaries via
``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ttrack.config.settings import TtSettings
    from ttrack.infrastructure.store import EventStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        class TrackingService(BaseService):
            def start(self, description: str | None) -> ServiceResult:
                with self._store.transaction() as log:
                    ...
    """

    def __init__(self, store: EventStore, settings: TtSettings) -> None:
        self._store = store
        self._settings = settings

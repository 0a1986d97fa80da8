"""Tests for BaseService and service inheritance."""

import pytest

from ttrack.config.settings import TtSettings
from ttrack.infrastructure.store import EventStore
from ttrack.services.base import BaseService
from ttrack.services.data import DataService
from ttrack.services.report import ReportService
from ttrack.services.tracking import TrackingService


class TestBaseService:
    def test_dependencies_stored(self, store: EventStore, settings: TtSettings) -> None:
        service = BaseService(store, settings)
        assert service._store is store
        assert service._settings is settings

    def test_subclass_pattern(self, store: EventStore, settings: TtSettings) -> None:
        class CountService(BaseService):
            def count(self) -> int:
                return len(self._store.events)

        assert CountService(store, settings).count() == 0


@pytest.mark.parametrize("cls", [TrackingService, ReportService, DataService])
def test_services_extend_base(cls: type) -> None:
    assert issubclass(cls, BaseService)

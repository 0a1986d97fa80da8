"""Tests for DataService — path, export, import."""

import json
from pathlib import Path

import pytest

from ttrack.config.models import StorageFormat
from ttrack.config.settings import TtSettings
from ttrack.infrastructure.codecs import decode_binary, encode_json
from ttrack.infrastructure.store import EventStore
from ttrack.services.data import DataService
from tests.conftest import seed, start_at, stop_at


@pytest.fixture
def service(store: EventStore, settings: TtSettings) -> DataService:
    return DataService(store, settings)


class TestPath:
    def test_reports_path(self, service: DataService, data_file: Path) -> None:
        result = service.path()
        assert result.ok
        assert result.data == {"path": str(data_file), "format": "json", "exists": False}

    def test_exists_after_write(
        self, service: DataService, store: EventStore, data_file: Path
    ) -> None:
        seed(store, start_at(9))
        assert service.path().data["exists"] is True


class TestExport:
    def test_json_export(self, service: DataService, store: EventStore, tmp_path: Path) -> None:
        seed(store, start_at(9, desc="a"), stop_at(10))
        target = tmp_path / "out.json"
        result = service.export(target)
        assert result.ok
        assert result.data == {"path": str(target), "format": "json", "count": 2}
        assert target.read_text(encoding="utf-8") == encode_json(store.events)

    def test_pretty_export(self, service: DataService, store: EventStore, tmp_path: Path) -> None:
        seed(store, start_at(9))
        target = tmp_path / "out.json"
        service.export(target, pretty=True)
        assert len(target.read_text(encoding="utf-8").splitlines()) > 1
        assert len(json.loads(target.read_text(encoding="utf-8"))) == 1

    def test_readable_export(self, service: DataService, store: EventStore, tmp_path: Path) -> None:
        seed(store, start_at(9, desc="a"), stop_at(10))
        target = tmp_path / "out.txt"
        result = service.export(target, readable=True)
        assert result.data["format"] == "readable"
        lines = target.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith('Start "a" at ')
        assert lines[1].startswith("Stop at ")

    def test_export_failure(self, service: DataService, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        result = service.export(blocker / "out.json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "EXPORT_FAILED"


class TestImport:
    def test_replaces_log(
        self, service: DataService, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(7))
        source = tmp_path / "backup.json"
        source.write_text(encode_json([start_at(9, desc="a"), stop_at(10)]), encoding="utf-8")
        result = service.import_(source)
        assert result.ok
        assert result.data == {"path": str(source), "count": 2, "replaced": 1}
        assert EventStore(data_file).events == [start_at(9, desc="a"), stop_at(10)]

    def test_import_into_binary_store(self, tmp_path: Path) -> None:
        path = tmp_path / "log.bin"
        settings = TtSettings(data_file=str(path), storage_format=StorageFormat.BINARY)
        service = DataService(EventStore.from_settings(settings), settings)
        source = tmp_path / "backup.json"
        source.write_text(encode_json([start_at(9)]), encoding="utf-8")
        assert service.import_(source).ok
        assert decode_binary(path.read_bytes()) == [start_at(9)]

    def test_missing_source(self, service: DataService, tmp_path: Path) -> None:
        result = service.import_(tmp_path / "nope.json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IMPORT_FAILED"

    def test_invalid_source_leaves_log(
        self, service: DataService, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(7))
        source = tmp_path / "bad.json"
        source.write_text('[{"Pause": {"time": 1}}]', encoding="utf-8")
        result = service.import_(source)
        assert not result.ok
        assert EventStore(data_file).events == [start_at(7)]

    def test_not_utf8_source(
        self, service: DataService, store: EventStore, data_file: Path, tmp_path: Path
    ) -> None:
        seed(store, start_at(7))
        source = tmp_path / "binary.json"
        source.write_bytes(b"\xff\xfe\x00garbage")
        result = service.import_(source)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IMPORT_FAILED"
        assert EventStore(data_file).events == [start_at(7)]

    def test_time_out_of_range(self, service: DataService, tmp_path: Path) -> None:
        source = tmp_path / "future.json"
        source.write_text('[{"Start":{"description":null,"time":99999999999999}}]')
        result = service.import_(source)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IMPORT_FAILED"

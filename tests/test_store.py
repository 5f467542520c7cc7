"""
Tests for the incident store.
"""

import json
from datetime import datetime, timezone

import pytest

from statushook.models import TrackedIncident
from statushook.store import IncidentStore, StoreError

T0 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


class TestIncidentStore:
    @pytest.fixture
    def store(self, tmp_path):
        return IncidentStore(tmp_path / "db" / "incidents.json")

    def test_load_missing_file(self, store):
        assert store.load() == []

    def test_ensure_copies_template(self, store):
        assert store.ensure() is True
        assert json.loads(store.path.read_text()) == []
        assert store.ensure() is False

    def test_ensure_keeps_existing_file(self, store):
        store.save([TrackedIncident("X", T0, "M1")])
        store.ensure()
        assert len(store.load()) == 1

    def test_save_and_load(self, store):
        tracked = [
            TrackedIncident("X", T0, "M1", resolved=True),
            TrackedIncident("Y", T0, "M2"),
        ]
        store.save(tracked)
        assert store.load() == tracked

    def test_file_format(self, store):
        store.save([TrackedIncident("X", T0, "M1", resolved=True)])
        assert json.loads(store.path.read_text()) == [
            {
                "incidentId": "X",
                "lastUpdate": "2024-05-01T10:00:00.000Z",
                "messageId": "M1",
                "resolved": True,
            }
        ]

    def test_reads_offset_timestamps(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps([
            {"incidentId": "X", "lastUpdate": "2024-05-01T03:00:00-07:00", "messageId": "M1"},
        ]))
        loaded = store.load()
        assert loaded[0].last_update == T0
        assert loaded[0].resolved is False

    def test_duplicate_ids_collapse(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps([
            {"incidentId": "X", "lastUpdate": "2024-05-01T10:00:00Z", "messageId": "old"},
            {"incidentId": "Y", "lastUpdate": "2024-05-01T10:00:00Z", "messageId": "other"},
            {"incidentId": "X", "lastUpdate": "2024-05-01T11:00:00Z", "messageId": "new"},
        ]))
        loaded = store.load()
        assert [t.incident_id for t in loaded] == ["Y", "X"]
        assert loaded[1].message_id == "new"

    def test_malformed_json(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")
        with pytest.raises(StoreError):
            store.load()

    def test_not_a_list(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text('{"incidentId": "X"}')
        with pytest.raises(StoreError):
            store.load()

    def test_invalid_entry(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text('[{"incidentId": "X", "lastUpdate": "never", "messageId": "M"}]')
        with pytest.raises(StoreError):
            store.load()

    def test_write_failure_raises(self, tmp_path):
        target = tmp_path / "incidents.json"
        target.mkdir()
        store = IncidentStore(target)
        with pytest.raises(StoreError):
            store.save([TrackedIncident("X", T0, "M1")])
        assert list(tmp_path.iterdir()) == [target]

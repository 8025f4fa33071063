"""
Tests for durable appointment persistence.
"""

from __future__ import annotations

import json
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tutorbook.application.exceptions import StoreIOError
from tutorbook.domain.entities.appointment import AppointmentStatus
from tutorbook.infrastructure.store.json_store import JsonAppointmentStore

from helpers import NOW, make_appointment


def test_json_store_round_trip():
    """Saving then loading yields identical records field for field, in order."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonAppointmentStore(file_path=f"{tmpdir}/appointments.json")
        appointments = [
            make_appointment("b", NOW + timedelta(days=3), AppointmentStatus.approved, reminder_sent=True),
            make_appointment("a", NOW + timedelta(days=2, milliseconds=250)),
            make_appointment("c", NOW + timedelta(days=4), AppointmentStatus.cancelled),
        ]

        store.save(appointments)
        loaded = store.load()

        assert loaded == appointments
        assert [a.id for a in loaded] == ["b", "a", "c"]
        assert loaded[0].reminder_sent is True
        assert loaded[1].reminder_sent is False


def test_json_store_missing_file_is_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonAppointmentStore(file_path=f"{tmpdir}/nested/appointments.json")
        assert store.load() == []


def test_json_store_uses_legacy_keys():
    """The file layout keeps the keys existing appointments.json files use."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "appointments.json"
        store = JsonAppointmentStore(file_path=str(path))
        store.save([make_appointment("x1", datetime(2025, 3, 10, 10, 0, tzinfo=timezone.utc))])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["startUtc"] == "2025-03-10T10:00:00.000Z"
        assert data[0]["reminderSent"] is False
        assert set(data[0]) == {
            "id", "name", "email", "subject", "timezone", "startUtc", "status", "created", "reminderSent",
        }
        assert not (Path(tmpdir) / "appointments.json.tmp").exists()


def test_json_store_reads_legacy_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "appointments.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "k3j9x0ab",
                        "name": "Sam",
                        "email": "sam@example.com",
                        "subject": "Math",
                        "timezone": "Asia/Kolkata",
                        "startUtc": "2025-03-10T04:30:00.000Z",
                        "status": "approved",
                        "created": "2025-03-01T08:15:42.123Z",
                        "reminderSent": False,
                    }
                ]
            ),
            encoding="utf-8",
        )

        (appointment,) = JsonAppointmentStore(file_path=str(path)).load()
        assert appointment.status == AppointmentStatus.approved
        assert appointment.start_at == datetime(2025, 3, 10, 4, 30, tzinfo=timezone.utc)
        assert appointment.created_at.microsecond == 123000


def test_json_store_corrupt_file_raises():
    """A broken file is an IO failure, never a silent empty collection."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "appointments.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(StoreIOError):
            JsonAppointmentStore(file_path=str(path)).load()


_GOOD_RECORD = {
    "id": "1",
    "name": "Sam",
    "email": "sam@example.com",
    "startUtc": "2025-03-10T10:00:00.000Z",
    "status": "pending",
    "created": "2025-03-01T08:00:00.000Z",
}


@pytest.mark.parametrize(
    "record",
    [
        {"id": "1", "name": "x"},
        {**_GOOD_RECORD, "startUtc": 5},
        {**_GOOD_RECORD, "created": None},
        {**_GOOD_RECORD, "startUtc": "soon"},
        {**_GOOD_RECORD, "status": "done"},
        "not a record",
    ],
)
def test_json_store_bad_record_raises(record):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "appointments.json"
        path.write_text(json.dumps([record]), encoding="utf-8")

        with pytest.raises(StoreIOError):
            JsonAppointmentStore(file_path=str(path)).load()


def test_repository_discards_batch_on_error(store, repository):
    store.save([make_appointment("a", NOW + timedelta(days=2))])
    saves_before = store.save_count

    with pytest.raises(RuntimeError):
        with repository.mutate() as batch:
            batch.add(make_appointment("b", NOW + timedelta(days=3)))
            raise RuntimeError("boom")

    assert [a.id for a in store.load()] == ["a"]
    assert store.save_count == saves_before


def test_repository_skips_save_when_unchanged(store, repository):
    with repository.mutate() as batch:
        assert len(batch) == 0

    assert store.save_count == 0

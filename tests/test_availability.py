from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from tutorbook.application.exceptions import InvalidDateError
from tutorbook.application.use_cases.availability import AvailabilityUseCase
from tutorbook.application.utils.date_parser import safe_timezone
from tutorbook.domain.entities.appointment import AppointmentStatus

from helpers import make_appointment


def at(hour: int) -> datetime:
    return datetime(2025, 3, 10, hour, 0, tzinfo=timezone.utc)


def test_empty_day_lists_every_slot(availability):
    assert availability.free_slots("2025-03-10") == [at(h) for h in range(10, 17)]


def test_active_appointments_take_their_slot(availability, store):
    store.save(
        [
            make_appointment("p", at(10), AppointmentStatus.pending),
            make_appointment("a", at(12), AppointmentStatus.approved),
            make_appointment("r", at(13), AppointmentStatus.rejected),
            make_appointment("c", at(14), AppointmentStatus.cancelled),
        ]
    )

    assert availability.free_slots("2025-03-10") == [at(11), at(13), at(14), at(15), at(16)]


def test_only_exact_instants_collide(availability, store):
    """An appointment at 10:30 does not block the 10:00 or 11:00 slots."""
    store.save([make_appointment("x", datetime(2025, 3, 10, 10, 30, tzinfo=timezone.utc))])

    assert availability.free_slots("2025-03-10") == [at(h) for h in range(10, 17)]


def test_other_days_do_not_interfere(availability, store):
    store.save([make_appointment("x", datetime(2025, 3, 11, 10, 0, tzinfo=timezone.utc))])

    assert at(10) in availability.free_slots("2025-03-10")


def test_slot_template_and_timezone_are_configurable(repository):
    use_case = AvailabilityUseCase(
        repository=repository,
        slot_hours=[16, 9],
        slot_timezone=ZoneInfo("Europe/Berlin"),
    )

    assert use_case.free_slots("2025-03-10") == [at(8), at(15)]


@pytest.mark.parametrize("day", ["", None, "2025-13-01", "tomorrow", "10/03/2025"])
def test_invalid_day(availability, day):
    with pytest.raises(InvalidDateError):
        availability.free_slots(day)


def test_unknown_slot_timezone_falls_back_to_utc(caplog):
    with caplog.at_level("WARNING"):
        assert safe_timezone("Mars/Olympus_Mons") == ZoneInfo("UTC")

    assert "falling back to UTC" in caplog.text
    assert safe_timezone("Europe/Berlin") == ZoneInfo("Europe/Berlin")

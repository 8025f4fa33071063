from __future__ import annotations

from datetime import date, datetime
from typing import Iterable
from zoneinfo import ZoneInfo

from tutorbook.application.utils.date_parser import slot_instant
from tutorbook.domain.entities.appointment import Appointment


def occupied_instants(appointments: Iterable[Appointment]) -> set[datetime]:
    return {a.start_at for a in appointments if a.is_active}


def find_conflict(
    appointments: Iterable[Appointment],
    start_at: datetime,
    exclude_id: str | None = None,
) -> Appointment | None:
    """Active appointment other than exclude_id holding exactly start_at, if any."""
    for appointment in appointments:
        if appointment.id == exclude_id:
            continue
        if appointment.is_active and appointment.start_at == start_at:
            return appointment
    return None


def day_slots(day: date, hours: Iterable[int], local_tz: ZoneInfo) -> list[datetime]:
    # Slots are one hour long, so back-to-back hours never overlap.
    return [slot_instant(day, hour, local_tz) for hour in hours]

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from tutorbook.application.repository import AppointmentRepository
from tutorbook.application.utils.date_parser import parse_day
from tutorbook.application.utils.slots import day_slots, occupied_instants


class AvailabilityUseCase:
    def __init__(
        self,
        repository: AppointmentRepository,
        slot_hours: list[int],
        slot_timezone: ZoneInfo,
    ) -> None:
        self._repository = repository
        self._slot_hours = sorted(slot_hours)
        self._slot_timezone = slot_timezone

    def free_slots(self, day: str | None) -> list[datetime]:
        """Slot instants on day that no pending or approved appointment holds."""
        parsed_day = parse_day(day)
        taken = occupied_instants(self._repository.snapshot())
        return [slot for slot in day_slots(parsed_day, self._slot_hours, self._slot_timezone) if slot not in taken]

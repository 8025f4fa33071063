from __future__ import annotations

from tutorbook.application.exceptions import InvalidStatusError
from tutorbook.application.repository import AppointmentRepository
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus


class ListAppointmentsUseCase:
    def __init__(self, repository: AppointmentRepository) -> None:
        self._repository = repository

    def execute(self, status: str | None = None) -> list[Appointment]:
        appointments = self._repository.snapshot()
        if not status:
            return appointments
        try:
            wanted = AppointmentStatus(status)
        except ValueError as e:
            raise InvalidStatusError(f"Unknown status: {status}") from e
        return [a for a in appointments if a.status == wanted]

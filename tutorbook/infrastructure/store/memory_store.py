from __future__ import annotations

from tutorbook.application.ports.appointment_store import AppointmentStorePort
from tutorbook.domain.entities.appointment import Appointment


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self, appointments: list[Appointment] | None = None) -> None:
        self._appointments: list[Appointment] = list(appointments or [])
        self.save_count = 0

    def load(self) -> list[Appointment]:
        return list(self._appointments)

    def save(self, appointments: list[Appointment]) -> None:
        self._appointments = list(appointments)
        self.save_count += 1

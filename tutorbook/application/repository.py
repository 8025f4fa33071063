from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from tutorbook.application.exceptions import NotFoundError
from tutorbook.application.ports.appointment_store import AppointmentStorePort
from tutorbook.domain.entities.appointment import Appointment


class AppointmentBatch:
    """Working copy of the collection inside one serialized read/modify/write."""

    def __init__(self, appointments: list[Appointment]) -> None:
        self._appointments = list(appointments)
        self.dirty = False

    def __iter__(self) -> Iterator[Appointment]:
        return iter(list(self._appointments))

    def __len__(self) -> int:
        return len(self._appointments)

    def find(self, appointment_id: str) -> Appointment | None:
        for appointment in self._appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    def get(self, appointment_id: str) -> Appointment:
        appointment = self.find(appointment_id)
        if appointment is None:
            raise NotFoundError(f"Appointment {appointment_id} not found")
        return appointment

    def add(self, appointment: Appointment) -> None:
        self._appointments.append(appointment)
        self.dirty = True

    def replace(self, appointment: Appointment) -> None:
        for index, existing in enumerate(self._appointments):
            if existing.id == appointment.id:
                self._appointments[index] = appointment
                self.dirty = True
                return
        raise NotFoundError(f"Appointment {appointment.id} not found")

    def to_list(self) -> list[Appointment]:
        return list(self._appointments)


class AppointmentRepository:
    """
    Single owner of the appointment store.

    Every mutation runs load -> modify -> save while holding one lock, so two
    requests can never both observe a slot as free and both commit it.
    """

    def __init__(self, store: AppointmentStorePort) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def snapshot(self) -> list[Appointment]:
        with self._lock:
            return self._store.load()

    @contextmanager
    def mutate(self) -> Iterator[AppointmentBatch]:
        """
        Yield a batch of the current collection; it is saved only if the block
        exits normally and something changed. An exception discards the batch.
        """
        with self._lock:
            batch = AppointmentBatch(self._store.load())
            yield batch
            if batch.dirty:
                self._store.save(batch.to_list())
                self._logger.debug("Appointment store saved", extra={"count": len(batch)})

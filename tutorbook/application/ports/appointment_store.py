from abc import ABC, abstractmethod

from tutorbook.domain.entities.appointment import Appointment


class AppointmentStorePort(ABC):
    @abstractmethod
    def load(self) -> list[Appointment]:
        """Load the whole collection in stored order. Raises StoreIOError."""
        raise NotImplementedError

    @abstractmethod
    def save(self, appointments: list[Appointment]) -> None:
        """Replace the whole collection. Raises StoreIOError."""
        raise NotImplementedError

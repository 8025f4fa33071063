from abc import ABC, abstractmethod
from enum import Enum

from tutorbook.domain.entities.appointment import Appointment


class NotificationKind(str, Enum):
    booking_received = "booking_received"  # to the requester
    booking_request = "booking_request"  # to the approver
    decision_approved = "decision_approved"
    decision_rejected = "decision_rejected"
    reminder_due = "reminder_due"


class NotifierPort(ABC):
    @abstractmethod
    def notify(self, recipient: str, kind: NotificationKind, appointment: Appointment) -> None:
        """Deliver one message. Raises NotificationFailureError when it cannot."""
        raise NotImplementedError

    @abstractmethod
    def send_test(self, recipient: str) -> None:
        """Send a plain connectivity check message."""
        raise NotImplementedError

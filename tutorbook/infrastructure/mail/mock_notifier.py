from __future__ import annotations

import logging
from dataclasses import dataclass

from tutorbook.application.exceptions import NotificationFailureError
from tutorbook.application.ports.notifier import NotificationKind, NotifierPort
from tutorbook.domain.entities.appointment import Appointment


@dataclass(frozen=True)
class SentNotification:
    recipient: str
    kind: str
    appointment_id: str | None


class MockNotifier(NotifierPort):
    """Logs instead of mailing. Recipients in failing_recipients always fail."""

    def __init__(self, failing_recipients: set[str] | None = None) -> None:
        self.sent: list[SentNotification] = []
        self.failing_recipients: set[str] = set(failing_recipients or set())
        self._logger = logging.getLogger(__name__)

    def notify(self, recipient: str, kind: NotificationKind, appointment: Appointment) -> None:
        self._deliver(recipient, kind.value, appointment.id)

    def send_test(self, recipient: str) -> None:
        self._deliver(recipient, "test", None)

    def _deliver(self, recipient: str, kind: str, appointment_id: str | None) -> None:
        if recipient in self.failing_recipients:
            raise NotificationFailureError(recipient=recipient, kind=kind, reason="mock delivery failure")
        self.sent.append(SentNotification(recipient=recipient, kind=kind, appointment_id=appointment_id))
        self._logger.info(
            "Mock notification",
            extra={"recipient": recipient, "kind": kind, "appointment_id": appointment_id},
        )

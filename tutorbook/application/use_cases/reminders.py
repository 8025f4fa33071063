from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from tutorbook.application.exceptions import NotificationFailureError
from tutorbook.application.ports.clock import ClockPort
from tutorbook.application.ports.notifier import NotificationKind, NotifierPort
from tutorbook.application.repository import AppointmentRepository
from tutorbook.application.utils.notify import dispatch
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus


@dataclass(frozen=True)
class ReminderOutcome:
    count: int
    notification_failures: list[NotificationFailureError] = field(default_factory=list)


def is_reminder_due(appointment: Appointment, now: datetime, window: timedelta) -> bool:
    if appointment.status != AppointmentStatus.approved or appointment.reminder_sent:
        return False
    return now < appointment.start_at <= now + window


class ReminderUseCase:
    def __init__(
        self,
        repository: AppointmentRepository,
        notifier: NotifierPort,
        clock: ClockPort,
        window: timedelta,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._clock = clock
        self._window = window
        self._logger = logging.getLogger(__name__)

    def send_due(self) -> ReminderOutcome:
        """
        Remind every approved, not yet reminded appointment starting inside
        the window, and mark only the ones whose notification went out.
        """
        now = self._clock.now()
        due = [a for a in self._repository.snapshot() if is_reminder_due(a, now, self._window)]
        if not due:
            return ReminderOutcome(count=0)

        reminded: set[str] = set()
        failures: list[NotificationFailureError] = []
        for appointment in due:
            failure = dispatch(self._notifier, appointment.requester_contact, NotificationKind.reminder_due, appointment)
            if failure is None:
                reminded.add(appointment.id)
            else:
                failures.append(failure)

        marked = 0
        with self._repository.mutate() as batch:
            for appointment_id in reminded:
                current = batch.find(appointment_id)
                # Skip records changed while notifications were in flight.
                if current is None or current.status != AppointmentStatus.approved or current.reminder_sent:
                    continue
                batch.replace(replace(current, reminder_sent=True))
                marked += 1

        self._logger.info("Reminder scan finished", extra={"count": marked, "due": len(due)})
        return ReminderOutcome(count=marked, notification_failures=failures)

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable
from zoneinfo import ZoneInfo

from tutorbook.application.exceptions import MissingFieldError, NotificationFailureError, SlotConflictError
from tutorbook.application.ports.clock import ClockPort
from tutorbook.application.ports.notifier import NotificationKind, NotifierPort
from tutorbook.application.repository import AppointmentRepository
from tutorbook.application.utils.date_parser import format_instant, parse_instant
from tutorbook.application.utils.notify import dispatch
from tutorbook.application.utils.slots import find_conflict
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus

DEFAULT_SUBJECT = "Math"


def new_appointment_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class BookingOutcome:
    appointment: Appointment
    notification_failures: list[NotificationFailureError] = field(default_factory=list)


class BookingUseCase:
    def __init__(
        self,
        repository: AppointmentRepository,
        notifier: NotifierPort,
        clock: ClockPort,
        approver_contact: str,
        slot_timezone: ZoneInfo,
        id_factory: Callable[[], str] = new_appointment_id,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._clock = clock
        self._approver_contact = approver_contact
        self._slot_timezone = slot_timezone
        self._id_factory = id_factory
        self._logger = logging.getLogger(__name__)

    def book(
        self,
        name: str | None,
        email: str | None,
        datetime_text: str | None,
        timezone: str | None = None,
        subject: str | None = None,
    ) -> BookingOutcome:
        missing = [
            label
            for label, value in (("name", name), ("email", email), ("datetimeLocalISO", datetime_text))
            if not value or not value.strip()
        ]
        if missing:
            raise MissingFieldError(missing)

        start_at = parse_instant(datetime_text, self._slot_timezone)

        with self._repository.mutate() as batch:
            if find_conflict(batch, start_at) is not None:
                self._logger.info("Slot conflict on booking", extra={"start": format_instant(start_at)})
                raise SlotConflictError("This slot is no longer available.")

            appointment = Appointment(
                id=self._id_factory(),
                requester_name=name.strip(),
                requester_contact=email.strip(),
                subject=(subject or "").strip() or DEFAULT_SUBJECT,
                timezone=timezone or "",
                start_at=start_at,
                status=AppointmentStatus.pending,
                created_at=self._clock.now(),
                reminder_sent=False,
            )
            batch.add(appointment)

        self._logger.info(
            "Appointment requested",
            extra={"appointment_id": appointment.id, "start": format_instant(start_at)},
        )

        failures = [
            failure
            for failure in (
                dispatch(self._notifier, appointment.requester_contact, NotificationKind.booking_received, appointment),
                dispatch(self._notifier, self._approver_contact, NotificationKind.booking_request, appointment),
            )
            if failure is not None
        ]
        return BookingOutcome(appointment=appointment, notification_failures=failures)

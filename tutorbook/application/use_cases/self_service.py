from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import timedelta
from zoneinfo import ZoneInfo

from tutorbook.application.exceptions import (
    InvalidTransitionError,
    LeadTimeViolationError,
    MissingFieldError,
    SlotConflictError,
)
from tutorbook.application.ports.clock import ClockPort
from tutorbook.application.repository import AppointmentBatch, AppointmentRepository
from tutorbook.application.utils.date_parser import format_instant, parse_instant
from tutorbook.application.utils.slots import find_conflict
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus


@dataclass(frozen=True)
class CancelOutcome:
    appointment: Appointment
    already_cancelled: bool


class SelfServiceUseCase:
    """Requester-side view, cancel and reschedule, gated by the lead-time policy."""

    def __init__(
        self,
        repository: AppointmentRepository,
        clock: ClockPort,
        lead_time: timedelta,
        slot_timezone: ZoneInfo,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._lead_time = lead_time
        self._slot_timezone = slot_timezone
        self._logger = logging.getLogger(__name__)

    def get(self, appointment_id: str) -> Appointment:
        return AppointmentBatch(self._repository.snapshot()).get(appointment_id)

    def cancel(self, appointment_id: str) -> CancelOutcome:
        with self._repository.mutate() as batch:
            current = batch.get(appointment_id)
            self._ensure_lead_time(current, "Cancellations")

            if current.status == AppointmentStatus.cancelled:
                return CancelOutcome(appointment=current, already_cancelled=True)

            updated = replace(current, status=AppointmentStatus.cancelled)
            batch.replace(updated)

        self._logger.info("Appointment cancelled", extra={"appointment_id": appointment_id})
        return CancelOutcome(appointment=updated, already_cancelled=False)

    def reschedule(self, appointment_id: str, new_datetime: str | None) -> Appointment:
        if not new_datetime or not new_datetime.strip():
            raise MissingFieldError(["newDateTime"])

        with self._repository.mutate() as batch:
            current = batch.get(appointment_id)
            if not current.is_active:
                raise InvalidTransitionError(
                    f"A {current.status.value} appointment cannot be rescheduled. Please book a new time."
                )
            self._ensure_lead_time(current, "Reschedules")

            new_start = parse_instant(new_datetime, self._slot_timezone)
            if find_conflict(batch, new_start, exclude_id=current.id) is not None:
                raise SlotConflictError("That new time is already taken.")

            # A moved appointment always needs approving again.
            updated = replace(current, start_at=new_start, status=AppointmentStatus.pending)
            batch.replace(updated)

        self._logger.info(
            "Appointment rescheduled",
            extra={
                "appointment_id": appointment_id,
                "start": format_instant(new_start),
                "previous_start": format_instant(current.start_at),
            },
        )
        return updated

    def _ensure_lead_time(self, appointment: Appointment, action: str) -> None:
        if appointment.start_at - self._clock.now() < self._lead_time:
            hours = int(self._lead_time.total_seconds() // 3600)
            raise LeadTimeViolationError(f"{action} must be ≥ {hours} hours in advance.")

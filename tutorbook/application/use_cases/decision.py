from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from tutorbook.application.exceptions import InvalidDecisionError, NotificationFailureError
from tutorbook.application.ports.notifier import NotificationKind, NotifierPort
from tutorbook.application.repository import AppointmentRepository
from tutorbook.application.utils.notify import dispatch
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus, Decision

_OUTCOMES = {
    Decision.approve: (AppointmentStatus.approved, NotificationKind.decision_approved),
    Decision.reject: (AppointmentStatus.rejected, NotificationKind.decision_rejected),
}


@dataclass(frozen=True)
class DecisionOutcome:
    appointment: Appointment
    previous_status: AppointmentStatus
    notification_failures: list[NotificationFailureError] = field(default_factory=list)


class DecisionUseCase:
    def __init__(self, repository: AppointmentRepository, notifier: NotifierPort) -> None:
        self._repository = repository
        self._notifier = notifier
        self._logger = logging.getLogger(__name__)

    def decide(self, appointment_id: str, action: str | Decision | None) -> DecisionOutcome:
        """
        Approve or reject an appointment.

        The decision is applied whatever the current status is, and no slot
        conflict re-check runs here; the conflict check happened at booking.
        """
        try:
            decision = Decision(action)
        except ValueError as e:
            raise InvalidDecisionError("Bad action") from e

        new_status, kind = _OUTCOMES[decision]

        with self._repository.mutate() as batch:
            current = batch.get(appointment_id)
            updated = replace(current, status=new_status)
            batch.replace(updated)

        self._logger.info(
            "Appointment decided",
            extra={
                "appointment_id": appointment_id,
                "status": new_status.value,
                "previous_status": current.status.value,
            },
        )

        failure = dispatch(self._notifier, updated.requester_contact, kind, updated)
        return DecisionOutcome(
            appointment=updated,
            previous_status=current.status,
            notification_failures=[failure] if failure else [],
        )

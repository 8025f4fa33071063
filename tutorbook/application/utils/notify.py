from __future__ import annotations

import logging

from tutorbook.application.exceptions import NotificationFailureError
from tutorbook.application.ports.notifier import NotificationKind, NotifierPort
from tutorbook.domain.entities.appointment import Appointment

logger = logging.getLogger(__name__)


def dispatch(
    notifier: NotifierPort,
    recipient: str,
    kind: NotificationKind,
    appointment: Appointment,
) -> NotificationFailureError | None:
    """
    Send one notification for an already committed transition.
    Failures are returned, not raised: the transition stands either way.
    """
    try:
        notifier.notify(recipient, kind, appointment)
    except NotificationFailureError as e:
        logger.error(
            "Notification failed",
            extra={
                "appointment_id": appointment.id,
                "kind": kind.value,
                "recipient": recipient,
                "reason": e.reason,
            },
        )
        return e
    return None

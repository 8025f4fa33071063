from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus

UTC = timezone.utc
NOW = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)
TEACHER = "teacher@example.com"


def make_appointment(
    appointment_id: str,
    start_at: datetime,
    status: AppointmentStatus = AppointmentStatus.pending,
    reminder_sent: bool = False,
    email: str = "student@example.com",
) -> Appointment:
    return Appointment(
        id=appointment_id,
        requester_name="Ada",
        requester_contact=email,
        subject="Math",
        timezone="Europe/Berlin",
        start_at=start_at,
        status=status,
        created_at=NOW - timedelta(days=1),
        reminder_sent=reminder_sent,
    )

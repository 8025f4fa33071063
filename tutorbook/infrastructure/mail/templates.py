from __future__ import annotations

from dataclasses import dataclass

from tutorbook.application.ports.notifier import NotificationKind
from tutorbook.domain.entities.appointment import Appointment

SIGNATURE = "– Your Math Tutor"


@dataclass(frozen=True)
class MailContent:
    subject: str
    text: str


def manage_url(base_url: str, appointment_id: str) -> str:
    return f"{base_url.rstrip('/')}/manage.html?id={appointment_id}"


def describe_when(appointment: Appointment) -> str:
    when = appointment.start_at.strftime("%A, %B %d, %Y at %H:%M UTC")
    if appointment.timezone:
        return f"{when} ({appointment.timezone})"
    return when


def render(kind: NotificationKind, appointment: Appointment, base_url: str) -> MailContent:
    when = describe_when(appointment)
    link = manage_url(base_url, appointment.id)
    name = appointment.requester_name

    if kind == NotificationKind.booking_received:
        return MailContent(
            subject="Your math session booking request has been received",
            text=(
                f"Hi {name},\n\n"
                f"Your request to book a 1-hour {appointment.subject} session on {when} has been received.\n\n"
                "This is a request only – your tutor still needs to approve this time.\n"
                "You will receive another email once your tutor has ACCEPTED or REJECTED this time slot.\n\n"
                "You can cancel or reschedule (at least 24 hours before the session) using this link:\n"
                f"{link}\n\n"
                f"{SIGNATURE}"
            ),
        )

    if kind == NotificationKind.booking_request:
        return MailContent(
            subject="New math session booking request",
            text=(
                "You have a new booking request.\n\n"
                f"Student: {name}\n"
                f"Email: {appointment.requester_contact}\n"
                f"Requested time: {when}\n"
                f"Subject: {appointment.subject}\n\n"
                "Please open the Teacher Admin Panel to APPROVE or REJECT this request."
            ),
        )

    if kind == NotificationKind.decision_approved:
        return MailContent(
            subject="Your math session has been ACCEPTED",
            text=(
                f"Hi {name},\n\n"
                "Good news! Your math session request has been ACCEPTED.\n\n"
                f"Date & time: {when}\n\n"
                "If you need to cancel or reschedule (at least 24 hours before the session), use this link:\n"
                f"{link}\n\n"
                f"{SIGNATURE}"
            ),
        )

    if kind == NotificationKind.decision_rejected:
        return MailContent(
            subject="Your math session request was REJECTED",
            text=(
                f"Hi {name},\n\n"
                f"Your math session request for {when} has been REJECTED.\n\n"
                "Please visit the booking page and choose another date and time that works for you:\n"
                f"{base_url.rstrip('/')}/\n\n"
                "If you already have a manage link, you can also use it:\n"
                f"{link}\n\n"
                f"{SIGNATURE}"
            ),
        )

    if kind == NotificationKind.reminder_due:
        return MailContent(
            subject="Reminder: Math Session in 2 Days",
            text=(
                f"Hi {name},\n\n"
                f"This is a reminder for your math session on {when}.\n\n"
                "– Your Tutor"
            ),
        )

    raise ValueError(f"No template for notification kind {kind}")

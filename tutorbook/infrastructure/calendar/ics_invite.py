from __future__ import annotations

from datetime import timedelta

from icalendar import Calendar, Event

from tutorbook.domain.entities.appointment import Appointment

SESSION_LENGTH = timedelta(hours=1)


def build_session_invite(
    appointment: Appointment,
    title: str = "Math Tutoring Session",
    description: str = "1-hour math tutoring session",
) -> bytes:
    """Return an iCalendar file for a one-hour session starting at the appointment instant."""
    cal = Calendar()
    cal.add("prodid", "-//tutorbook//session invite//EN")
    cal.add("version", "2.0")
    cal.add("method", "PUBLISH")

    event = Event()
    event.add("uid", f"{appointment.id}@tutorbook")
    event.add("summary", title)
    event.add("description", description)
    event.add("dtstart", appointment.start_at)
    event.add("dtend", appointment.start_at + SESSION_LENGTH)
    event.add("dtstamp", appointment.created_at)
    event.add("status", "CONFIRMED")
    cal.add_component(event)

    return cal.to_ical()

from __future__ import annotations

import logging
import smtplib
import ssl
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from tutorbook.application.exceptions import NotificationFailureError
from tutorbook.application.ports.notifier import NotificationKind, NotifierPort
from tutorbook.domain.entities.appointment import Appointment
from tutorbook.infrastructure.calendar.ics_invite import build_session_invite
from tutorbook.infrastructure.mail.templates import MailContent, render

INVITE_KINDS = frozenset(
    {
        NotificationKind.booking_received,
        NotificationKind.booking_request,
        NotificationKind.decision_approved,
    }
)
INVITE_FILENAME = "session.ics"


class SmtpNotifier(NotifierPort):
    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: str,
        base_url: str,
        session_title: str = "Math Tutoring Session",
        session_description: str = "1-hour math tutoring session",
        timeout: float = 30.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_address = from_address
        self._base_url = base_url
        self._session_title = session_title
        self._session_description = session_description
        self._timeout = timeout
        self._logger = logging.getLogger(__name__)

    def notify(self, recipient: str, kind: NotificationKind, appointment: Appointment) -> None:
        content = render(kind, appointment, self._base_url)
        invite = self._build_invite(appointment) if kind in INVITE_KINDS else None
        self._send(recipient, content, invite, kind.value)

    def send_test(self, recipient: str) -> None:
        content = MailContent(
            subject="Test – Math Booking",
            text="If you can read this, SMTP is working.",
        )
        self._send(recipient, content, None, "test")

    def _build_invite(self, appointment: Appointment) -> bytes | None:
        # A broken invite must not hold back the mail itself.
        try:
            return build_session_invite(appointment, self._session_title, self._session_description)
        except Exception as e:
            self._logger.warning(
                "Calendar invite creation failed",
                extra={"appointment_id": appointment.id, "reason": str(e)},
            )
            return None

    def _send(self, recipient: str, content: MailContent, invite: bytes | None, kind: str) -> None:
        msg = MIMEMultipart("mixed")
        msg["Subject"] = content.subject
        msg["From"] = self._from_address
        msg["To"] = recipient
        msg.attach(MIMEText(content.text, "plain", "utf-8"))

        if invite:
            part = MIMEBase("text", "calendar", method="PUBLISH")
            part.set_payload(invite)
            encoders.encode_base64(part)
            part.add_header("Content-Disposition", f'attachment; filename="{INVITE_FILENAME}"')
            msg.attach(part)

        try:
            if self._port == 465:
                context = ssl.create_default_context()
                server = smtplib.SMTP_SSL(self._host, self._port, context=context, timeout=self._timeout)
            else:
                server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
                server.starttls(context=ssl.create_default_context())
            with server:
                server.login(self._username, self._password)
                server.sendmail(self._envelope_sender(), [recipient], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationFailureError(recipient=recipient, kind=kind, reason=str(e)) from e

        self._logger.info("Mail sent", extra={"recipient": recipient, "kind": kind})

    def _envelope_sender(self) -> str:
        return self._from_address.split("<")[-1].rstrip(">")

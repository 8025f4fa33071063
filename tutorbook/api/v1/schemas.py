from pydantic import BaseModel, ConfigDict, Field

from tutorbook.application.exceptions import NotificationFailureError
from tutorbook.application.utils.date_parser import format_instant
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus


class AppointmentSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    subject: str
    timezone: str
    start_utc: str = Field(alias="startUtc")
    status: AppointmentStatus
    created: str
    reminder_sent: bool = Field(alias="reminderSent")

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentSchema":
        return cls(
            id=appointment.id,
            name=appointment.requester_name,
            email=appointment.requester_contact,
            subject=appointment.subject,
            timezone=appointment.timezone,
            start_utc=format_instant(appointment.start_at),
            status=appointment.status,
            created=format_instant(appointment.created_at),
            reminder_sent=appointment.reminder_sent,
        )


class NotificationErrorSchema(BaseModel):
    recipient: str
    kind: str
    reason: str

    @classmethod
    def from_failure(cls, failure: NotificationFailureError) -> "NotificationErrorSchema":
        return cls(recipient=failure.recipient, kind=failure.kind, reason=failure.reason)


class AvailabilityResponseSchema(BaseModel):
    day: str
    available: list[str]


# Required fields are optional here so that missing ones surface as a
# MissingFieldError listing them, not as a generic validation error.
class BookRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    datetime_local_iso: str | None = Field(default=None, alias="datetimeLocalISO")
    timezone: str | None = None
    subject: str | None = None


class BookResponseSchema(BaseModel):
    ok: bool = True
    id: str
    appointment: AppointmentSchema
    notification_errors: list[NotificationErrorSchema] = Field(default_factory=list)


class ManageResponseSchema(BaseModel):
    ok: bool = True
    appointment: AppointmentSchema


class CancelResponseSchema(BaseModel):
    ok: bool = True
    message: str | None = None


class RescheduleRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_date_time: str | None = Field(default=None, alias="newDateTime")


class LoginRequestSchema(BaseModel):
    password: str | None = None


class LoginResponseSchema(BaseModel):
    ok: bool
    error: str | None = None


class AppointmentListSchema(BaseModel):
    appointments: list[AppointmentSchema]


class DecisionRequestSchema(BaseModel):
    action: str | None = None


class DecisionResponseSchema(BaseModel):
    ok: bool = True
    appointment: AppointmentSchema
    notification_errors: list[NotificationErrorSchema] = Field(default_factory=list)


class ReminderResponseSchema(BaseModel):
    ok: bool = True
    count: int
    notification_errors: list[NotificationErrorSchema] = Field(default_factory=list)


class OkResponseSchema(BaseModel):
    ok: bool = True

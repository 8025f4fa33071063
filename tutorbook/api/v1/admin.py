import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from tutorbook.api.errors import to_http_exception
from tutorbook.api.v1.schemas import (
    AppointmentListSchema,
    AppointmentSchema,
    DecisionRequestSchema,
    DecisionResponseSchema,
    LoginRequestSchema,
    LoginResponseSchema,
    NotificationErrorSchema,
    OkResponseSchema,
    ReminderResponseSchema,
)
from tutorbook.application.exceptions import BookingError, NotificationFailureError
from tutorbook.application.ports.notifier import NotifierPort
from tutorbook.application.use_cases.decision import DecisionUseCase
from tutorbook.application.use_cases.listing import ListAppointmentsUseCase
from tutorbook.application.use_cases.reminders import ReminderUseCase
from tutorbook.core.config import settings
from tutorbook.infrastructure.auth.admin_password import verify_admin_password
from tutorbook.wiring.dependencies import (
    get_decision_use_case,
    get_list_appointments_use_case,
    get_notifier,
    get_reminder_use_case,
)

logger = logging.getLogger(__name__)


def require_admin(x_admin_password: str | None = Header(None)) -> None:
    if not verify_admin_password(x_admin_password, settings.ADMIN_PASSWORD, settings.ENV):
        raise HTTPException(status_code=401, detail="Invalid admin password")


public_router = APIRouter()
router = APIRouter(dependencies=[Depends(require_admin)])


@public_router.post("/admin/login", response_model=LoginResponseSchema)
def login(req: LoginRequestSchema):
    if not verify_admin_password(req.password, settings.ADMIN_PASSWORD, settings.ENV):
        return LoginResponseSchema(ok=False, error="Invalid password")
    return LoginResponseSchema(ok=True)


@router.get("/admin/appointments", response_model=AppointmentListSchema)
def list_appointments(
    status: str | None = Query(None),
    uc: ListAppointmentsUseCase = Depends(get_list_appointments_use_case),
):
    try:
        appointments = uc.execute(status)
    except BookingError as e:
        raise to_http_exception(e) from e
    return AppointmentListSchema(appointments=[AppointmentSchema.from_entity(a) for a in appointments])


@router.post("/admin/appointments/{appointment_id}/status", response_model=DecisionResponseSchema)
def decide(
    appointment_id: str,
    req: DecisionRequestSchema,
    uc: DecisionUseCase = Depends(get_decision_use_case),
):
    try:
        outcome = uc.decide(appointment_id, req.action)
    except BookingError as e:
        raise to_http_exception(e) from e

    return DecisionResponseSchema(
        appointment=AppointmentSchema.from_entity(outcome.appointment),
        notification_errors=[NotificationErrorSchema.from_failure(f) for f in outcome.notification_failures],
    )


# GET stays available for cron-style callers.
@router.api_route("/admin/send-reminders", methods=["GET", "POST"], response_model=ReminderResponseSchema)
def send_reminders(uc: ReminderUseCase = Depends(get_reminder_use_case)):
    try:
        outcome = uc.send_due()
    except BookingError as e:
        raise to_http_exception(e) from e

    return ReminderResponseSchema(
        count=outcome.count,
        notification_errors=[NotificationErrorSchema.from_failure(f) for f in outcome.notification_failures],
    )


@router.post("/admin/test-email", response_model=OkResponseSchema)
def test_email(
    to: str | None = Query(None),
    notifier: NotifierPort = Depends(get_notifier),
):
    recipient = to or settings.EMAIL_USER
    if not recipient:
        raise HTTPException(status_code=400, detail="No recipient")
    try:
        notifier.send_test(recipient)
    except NotificationFailureError as e:
        logger.error("Test email failed", extra={"recipient": recipient, "reason": e.reason})
        raise HTTPException(status_code=502, detail=str(e)) from e
    return OkResponseSchema()

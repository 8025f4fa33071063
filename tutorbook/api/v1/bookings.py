import logging

from fastapi import APIRouter, Depends, Query

from tutorbook.api.errors import to_http_exception
from tutorbook.api.v1.schemas import (
    AppointmentSchema,
    AvailabilityResponseSchema,
    BookRequestSchema,
    BookResponseSchema,
    NotificationErrorSchema,
)
from tutorbook.application.exceptions import BookingError
from tutorbook.application.use_cases.availability import AvailabilityUseCase
from tutorbook.application.use_cases.booking import BookingUseCase
from tutorbook.application.utils.date_parser import format_instant
from tutorbook.wiring.dependencies import get_availability_use_case, get_booking_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/availability", response_model=AvailabilityResponseSchema)
def availability(
    day: str | None = Query(None),
    uc: AvailabilityUseCase = Depends(get_availability_use_case),
):
    try:
        slots = uc.free_slots(day)
    except BookingError as e:
        raise to_http_exception(e) from e
    return AvailabilityResponseSchema(day=day, available=[format_instant(slot) for slot in slots])


@router.post("/book", response_model=BookResponseSchema)
def book(
    req: BookRequestSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    logger.info("Booking requested", extra={"recipient": req.email})
    try:
        outcome = uc.book(
            name=req.name,
            email=req.email,
            datetime_text=req.datetime_local_iso,
            timezone=req.timezone,
            subject=req.subject,
        )
    except BookingError as e:
        raise to_http_exception(e) from e

    return BookResponseSchema(
        id=outcome.appointment.id,
        appointment=AppointmentSchema.from_entity(outcome.appointment),
        notification_errors=[NotificationErrorSchema.from_failure(f) for f in outcome.notification_failures],
    )

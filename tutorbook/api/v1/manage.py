from fastapi import APIRouter, Depends

from tutorbook.api.errors import to_http_exception
from tutorbook.api.v1.schemas import (
    AppointmentSchema,
    CancelResponseSchema,
    ManageResponseSchema,
    RescheduleRequestSchema,
)
from tutorbook.application.exceptions import BookingError
from tutorbook.application.use_cases.self_service import SelfServiceUseCase
from tutorbook.wiring.dependencies import get_self_service_use_case

router = APIRouter()


@router.get("/manage/{appointment_id}", response_model=ManageResponseSchema)
def view_appointment(
    appointment_id: str,
    uc: SelfServiceUseCase = Depends(get_self_service_use_case),
):
    try:
        appointment = uc.get(appointment_id)
    except BookingError as e:
        raise to_http_exception(e) from e
    return ManageResponseSchema(appointment=AppointmentSchema.from_entity(appointment))


@router.post("/manage/{appointment_id}/cancel", response_model=CancelResponseSchema)
def cancel_appointment(
    appointment_id: str,
    uc: SelfServiceUseCase = Depends(get_self_service_use_case),
):
    try:
        outcome = uc.cancel(appointment_id)
    except BookingError as e:
        raise to_http_exception(e) from e

    if outcome.already_cancelled:
        return CancelResponseSchema(message="Already cancelled")
    return CancelResponseSchema()


@router.post("/manage/{appointment_id}/reschedule", response_model=ManageResponseSchema)
def reschedule_appointment(
    appointment_id: str,
    req: RescheduleRequestSchema,
    uc: SelfServiceUseCase = Depends(get_self_service_use_case),
):
    try:
        appointment = uc.reschedule(appointment_id, req.new_date_time)
    except BookingError as e:
        raise to_http_exception(e) from e
    return ManageResponseSchema(appointment=AppointmentSchema.from_entity(appointment))

import logging

from fastapi import HTTPException, status

from tutorbook.application.exceptions import (
    BookingError,
    InvalidDateError,
    InvalidDecisionError,
    InvalidStatusError,
    LeadTimeViolationError,
    MissingFieldError,
    NotFoundError,
    SlotConflictError,
    StoreIOError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES: list[tuple[type[BookingError], int]] = [
    (InvalidDateError, status.HTTP_400_BAD_REQUEST),
    (MissingFieldError, status.HTTP_400_BAD_REQUEST),
    (InvalidDecisionError, status.HTTP_400_BAD_REQUEST),
    (InvalidStatusError, status.HTTP_400_BAD_REQUEST),
    (LeadTimeViolationError, status.HTTP_400_BAD_REQUEST),
    (SlotConflictError, status.HTTP_409_CONFLICT),
]


def to_http_exception(exc: BookingError) -> HTTPException:
    if isinstance(exc, StoreIOError):
        logger.error("Appointment store failure", extra={"reason": str(exc)})
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Appointment store unavailable.",
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))

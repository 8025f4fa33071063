class BookingError(Exception):
    """Base class for failures surfaced to API callers."""
    pass


class InvalidDateError(BookingError):
    """Raised when a day or date-time input cannot be parsed."""
    pass


class MissingFieldError(BookingError):
    """Raised when a required booking field is absent."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")


class SlotConflictError(BookingError):
    """Raised when an active appointment already holds the requested instant."""
    pass


class NotFoundError(BookingError):
    """Raised when an appointment id does not resolve."""
    pass


class LeadTimeViolationError(BookingError):
    """Raised when a self-service change is attempted inside the protection window."""
    pass


class InvalidDecisionError(BookingError):
    """Raised when an approver action is neither approve nor reject."""
    pass


class InvalidStatusError(BookingError):
    """Raised when a status filter names no known status."""
    pass


class InvalidTransitionError(InvalidStatusError):
    """Raised when an appointment's current status does not allow the requested change."""
    pass


class StoreIOError(BookingError):
    """Raised when the appointment store cannot be loaded or saved."""
    pass


class NotificationFailureError(BookingError):
    """Raised by notifier adapters when a message could not be delivered."""

    def __init__(self, recipient: str, kind: str, reason: str) -> None:
        self.recipient = recipient
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind} notification to {recipient} failed: {reason}")

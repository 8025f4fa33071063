from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AppointmentStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


class Decision(str, Enum):
    approve = "approve"
    reject = "reject"


ACTIVE_STATUSES = frozenset({AppointmentStatus.pending, AppointmentStatus.approved})


@dataclass(frozen=True)
class Appointment:
    id: str
    requester_name: str
    requester_contact: str
    subject: str
    timezone: str  # display label only, never used for instant arithmetic
    start_at: datetime  # aware, UTC
    status: AppointmentStatus
    created_at: datetime
    reminder_sent: bool = False

    @property
    def is_active(self) -> bool:
        """Active appointments hold their slot."""
        return self.status in ACTIVE_STATUSES

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from tutorbook.application.exceptions import InvalidDateError, StoreIOError
from tutorbook.application.ports.appointment_store import AppointmentStorePort
from tutorbook.application.utils.date_parser import format_instant, parse_instant, safe_timezone
from tutorbook.domain.entities.appointment import Appointment, AppointmentStatus

_UTC = safe_timezone("UTC")


class JsonAppointmentStore(AppointmentStorePort):
    """
    Whole collection kept in one JSON array file.

    The keys match the appointments.json layout of the earlier Node service,
    so an existing data file loads unchanged.
    """

    def __init__(self, file_path: str = "./data/appointments.json") -> None:
        self._file_path = Path(file_path)

    def load(self) -> list[Appointment]:
        if not self._file_path.exists():
            return []

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StoreIOError(f"Could not read {self._file_path}: {e}") from e

        if not isinstance(data, list):
            raise StoreIOError(f"{self._file_path} does not hold a JSON array")

        try:
            return [self._deserialize(item) for item in data]
        except (KeyError, TypeError, ValueError, InvalidDateError) as e:
            raise StoreIOError(f"Malformed appointment record in {self._file_path}: {e}") from e

    def save(self, appointments: list[Appointment]) -> None:
        """Save the collection atomically via a temp file and rename."""
        temp_path = self._file_path.with_suffix(".json.tmp")
        data = [self._serialize(a) for a in appointments]

        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise StoreIOError(f"Could not write {self._file_path}: {e}") from e

    def _serialize(self, appointment: Appointment) -> dict[str, Any]:
        return {
            "id": appointment.id,
            "name": appointment.requester_name,
            "email": appointment.requester_contact,
            "subject": appointment.subject,
            "timezone": appointment.timezone,
            "startUtc": format_instant(appointment.start_at),
            "status": appointment.status.value,
            "created": format_instant(appointment.created_at),
            "reminderSent": appointment.reminder_sent,
        }

    def _deserialize(self, data: dict[str, Any]) -> Appointment:
        return Appointment(
            id=str(data["id"]),
            requester_name=data["name"],
            requester_contact=data["email"],
            subject=data.get("subject", ""),
            timezone=data.get("timezone", ""),
            start_at=self._parse_instant(data["startUtc"]),
            status=AppointmentStatus(data["status"]),
            created_at=self._parse_instant(data["created"]),
            reminder_sent=data.get("reminderSent") is True,
        )

    def _parse_instant(self, value: Any) -> datetime:
        if not isinstance(value, str):
            raise TypeError(f"expected an ISO-8601 string, got {type(value).__name__}")
        return parse_instant(value, _UTC)

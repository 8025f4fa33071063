from __future__ import annotations

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from tutorbook.application.repository import AppointmentRepository
from tutorbook.application.use_cases.availability import AvailabilityUseCase
from tutorbook.application.use_cases.booking import BookingUseCase
from tutorbook.application.use_cases.decision import DecisionUseCase
from tutorbook.application.use_cases.reminders import ReminderUseCase
from tutorbook.application.use_cases.self_service import SelfServiceUseCase
from tutorbook.infrastructure.clock.system_clock import FixedClock
from tutorbook.infrastructure.mail.mock_notifier import MockNotifier
from tutorbook.infrastructure.store.memory_store import MemoryAppointmentStore

from helpers import NOW, TEACHER


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def store() -> MemoryAppointmentStore:
    return MemoryAppointmentStore()


@pytest.fixture
def repository(store: MemoryAppointmentStore) -> AppointmentRepository:
    return AppointmentRepository(store=store)


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def booking(repository, notifier, clock) -> BookingUseCase:
    counter = iter(range(1, 10_000))
    return BookingUseCase(
        repository=repository,
        notifier=notifier,
        clock=clock,
        approver_contact=TEACHER,
        slot_timezone=ZoneInfo("UTC"),
        id_factory=lambda: f"appt-{next(counter)}",
    )


@pytest.fixture
def decision(repository, notifier) -> DecisionUseCase:
    return DecisionUseCase(repository=repository, notifier=notifier)


@pytest.fixture
def self_service(repository, clock) -> SelfServiceUseCase:
    return SelfServiceUseCase(
        repository=repository,
        clock=clock,
        lead_time=timedelta(hours=24),
        slot_timezone=ZoneInfo("UTC"),
    )


@pytest.fixture
def reminders(repository, notifier, clock) -> ReminderUseCase:
    return ReminderUseCase(repository=repository, notifier=notifier, clock=clock, window=timedelta(hours=48))


@pytest.fixture
def availability(repository) -> AvailabilityUseCase:
    return AvailabilityUseCase(
        repository=repository,
        slot_hours=[10, 11, 12, 13, 14, 15, 16],
        slot_timezone=ZoneInfo("UTC"),
    )

from datetime import timedelta
from functools import lru_cache
import logging

from fastapi import Depends

from tutorbook.core.config import settings
from tutorbook.application.ports.appointment_store import AppointmentStorePort
from tutorbook.application.ports.clock import ClockPort
from tutorbook.application.ports.notifier import NotifierPort
from tutorbook.application.repository import AppointmentRepository
from tutorbook.application.use_cases.availability import AvailabilityUseCase
from tutorbook.application.use_cases.booking import BookingUseCase
from tutorbook.application.use_cases.decision import DecisionUseCase
from tutorbook.application.use_cases.listing import ListAppointmentsUseCase
from tutorbook.application.use_cases.reminders import ReminderUseCase
from tutorbook.application.use_cases.self_service import SelfServiceUseCase
from tutorbook.application.utils.date_parser import safe_timezone
from tutorbook.infrastructure.clock.system_clock import SystemClock
from tutorbook.infrastructure.mail.mock_notifier import MockNotifier
from tutorbook.infrastructure.mail.smtp_notifier import SmtpNotifier
from tutorbook.infrastructure.store.json_store import JsonAppointmentStore
from tutorbook.infrastructure.store.memory_store import MemoryAppointmentStore


logger = logging.getLogger(__name__)


@lru_cache
def get_store() -> AppointmentStorePort:
    if settings.STORE_PROVIDER.lower() == "memory":
        logger.info("Using MemoryAppointmentStore")
        return MemoryAppointmentStore()
    logger.info("Using JsonAppointmentStore file=%s", settings.DATA_FILE)
    return JsonAppointmentStore(file_path=settings.DATA_FILE)


@lru_cache
def get_repository() -> AppointmentRepository:
    # One repository per process: its lock is what serializes writers.
    return AppointmentRepository(store=get_store())


@lru_cache
def get_clock() -> ClockPort:
    return SystemClock()


@lru_cache
def get_notifier() -> NotifierPort:
    logger.info(
        "EMAIL_USER present=%s EMAIL_PASS len=%s SMTP_PROVIDER=%s",
        bool(settings.EMAIL_USER),
        len(settings.EMAIL_PASS or ""),
        settings.SMTP_PROVIDER,
    )

    if not settings.EMAIL_USER or not settings.EMAIL_PASS:
        if settings.is_dev:
            logger.info("Using MockNotifier (SMTP credentials missing, ENV=dev/local)")
            return MockNotifier()
        raise ValueError("EMAIL_USER and EMAIL_PASS are required to send notifications.")

    if settings.SMTP_PROVIDER.lower() == "mailtrap":
        host, port = settings.MAILTRAP_HOST, settings.MAILTRAP_PORT
    else:
        host, port = settings.SMTP_HOST, settings.SMTP_PORT

    logger.info("Using SmtpNotifier host=%s port=%s", host, port)
    return SmtpNotifier(
        host=host,
        port=port,
        username=settings.EMAIL_USER,
        password=settings.EMAIL_PASS,
        from_address=settings.EMAIL_FROM or settings.EMAIL_USER,
        base_url=settings.PUBLIC_BASE_URL,
        session_title=settings.SESSION_TITLE,
        session_description=settings.SESSION_DESCRIPTION,
    )


def get_availability_use_case(
    repository: AppointmentRepository = Depends(get_repository),
) -> AvailabilityUseCase:
    return AvailabilityUseCase(
        repository=repository,
        slot_hours=settings.SLOT_HOURS,
        slot_timezone=safe_timezone(settings.SLOT_TIMEZONE),
    )


def get_booking_use_case(
    repository: AppointmentRepository = Depends(get_repository),
    notifier: NotifierPort = Depends(get_notifier),
    clock: ClockPort = Depends(get_clock),
) -> BookingUseCase:
    return BookingUseCase(
        repository=repository,
        notifier=notifier,
        clock=clock,
        approver_contact=settings.approver_email,
        slot_timezone=safe_timezone(settings.SLOT_TIMEZONE),
    )


def get_decision_use_case(
    repository: AppointmentRepository = Depends(get_repository),
    notifier: NotifierPort = Depends(get_notifier),
) -> DecisionUseCase:
    return DecisionUseCase(repository=repository, notifier=notifier)


def get_self_service_use_case(
    repository: AppointmentRepository = Depends(get_repository),
    clock: ClockPort = Depends(get_clock),
) -> SelfServiceUseCase:
    return SelfServiceUseCase(
        repository=repository,
        clock=clock,
        lead_time=timedelta(hours=settings.LEAD_TIME_HOURS),
        slot_timezone=safe_timezone(settings.SLOT_TIMEZONE),
    )


def get_reminder_use_case(
    repository: AppointmentRepository = Depends(get_repository),
    notifier: NotifierPort = Depends(get_notifier),
    clock: ClockPort = Depends(get_clock),
) -> ReminderUseCase:
    return ReminderUseCase(
        repository=repository,
        notifier=notifier,
        clock=clock,
        window=timedelta(hours=settings.REMINDER_WINDOW_HOURS),
    )


def get_list_appointments_use_case(
    repository: AppointmentRepository = Depends(get_repository),
) -> ListAppointmentsUseCase:
    return ListAppointmentsUseCase(repository=repository)

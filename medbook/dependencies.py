# medbook/dependencies.py
from fastapi import Depends
from sqlmodel import Session

from .config import settings
from .database import get_session
from .application.services.appointments_service import AppointmentsService
from .application.services.availability_service import AvailabilityService
from .application.services.conflict_detector import ConflictDetector
from .application.services.directory_service import DirectoryService
from .application.services.notifications_service import NotificationsService
from .application.services.schedule_service import ScheduleService
from .infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from .infrastructure.persistence.sqlalchemy.repositories.directory_repository_sql import SqlDirectoryRepository
from .infrastructure.persistence.sqlalchemy.repositories.notifications_repository_sql import SqlNotificationsRepository
from .infrastructure.persistence.sqlalchemy.repositories.schedule_repository_sql import SqlScheduleRepository


def get_availability_service(session: Session = Depends(get_session)) -> AvailabilityService:
    return AvailabilityService(
        schedule_repo=SqlScheduleRepository(session),
        appointments_repo=SqlAppointmentsRepository(session),
        slot_interval_minutes=settings.SLOT_INTERVAL_MINUTES,
        max_range_days=settings.MAX_SLOT_RANGE_DAYS,
    )


def get_appointments_service(
    session: Session = Depends(get_session),
    availability: AvailabilityService = Depends(get_availability_service),
) -> AppointmentsService:
    repo = SqlAppointmentsRepository(session)
    return AppointmentsService(
        repo=repo,
        directory=SqlDirectoryRepository(session),
        availability=availability,
        conflicts=ConflictDetector(repo),
        default_service_name=settings.DEFAULT_SERVICE_NAME,
        default_duration=settings.DEFAULT_APPOINTMENT_DURATION,
        default_date_order=settings.DEFAULT_DATE_ORDER or None,
        enforce_availability_on_booking=settings.ENFORCE_AVAILABILITY_ON_BOOKING,
    )


def get_directory_service(session: Session = Depends(get_session)) -> DirectoryService:
    return DirectoryService(SqlDirectoryRepository(session))


def get_schedule_service(session: Session = Depends(get_session)) -> ScheduleService:
    return ScheduleService(repo=SqlScheduleRepository(session), directory=SqlDirectoryRepository(session))


def get_notifications_service(session: Session = Depends(get_session)) -> NotificationsService:
    return NotificationsService(
        repo=SqlNotificationsRepository(session),
        directory=SqlDirectoryRepository(session),
        page_size=settings.NOTIFICATIONS_PAGE_SIZE,
    )

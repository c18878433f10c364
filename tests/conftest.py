import os

# Must be set before medbook.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"
os.environ.pop("REDIS_URL", None)

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional
import uuid

import pytest

from medbook.application.ports.appointments_repo import (
    AppointmentDto,
    AppointmentChanges,
    NewAppointment,
    NotificationDraft,
    SlotTakenError,
)
from medbook.application.ports.directory_repo import DoctorDto, PatientDto, ServiceDto
from medbook.application.ports.schedule_repo import DuplicateScheduleError, ScheduleDto
from medbook.application.services.appointments_service import AppointmentsService
from medbook.application.services.availability_service import AvailabilityService
from medbook.application.services.conflict_detector import ConflictDetector
from medbook.enums import LIVE_STATUSES


def next_weekday(weekday: int, weeks_ahead: int = 1) -> date:
    """A future date falling on ``weekday`` (Python numbering, Monday=0)."""
    today = date.today()
    return today + timedelta(days=(weekday - today.weekday()) % 7 + 7 * weeks_ahead)


class FakeScheduleRepo:
    def __init__(self):
        self.entries: Dict[str, ScheduleDto] = {}

    def add(self, doctor_id: str, day_of_week: int, start_time: str, end_time: str, is_active: bool = True) -> ScheduleDto:
        entry = ScheduleDto(str(uuid.uuid4()), doctor_id, day_of_week, start_time, end_time, is_active)
        self.entries[entry.id] = entry
        return entry

    def find_schedule_for(self, doctor_id: str, day_of_week: int) -> Optional[ScheduleDto]:
        return next(
            (e for e in self.entries.values() if e.doctor_id == doctor_id and e.day_of_week == day_of_week and e.is_active),
            None,
        )

    def list_for_doctor(self, doctor_id: str, active_only: bool = False) -> List[ScheduleDto]:
        rows = [e for e in self.entries.values() if e.doctor_id == doctor_id and (e.is_active or not active_only)]
        return sorted(rows, key=lambda e: e.day_of_week)

    def get_by_id(self, schedule_id: str) -> Optional[ScheduleDto]:
        return self.entries.get(schedule_id)

    def create(self, doctor_id: str, day_of_week: int, start_time: str, end_time: str) -> ScheduleDto:
        if any(e.doctor_id == doctor_id and e.day_of_week == day_of_week for e in self.entries.values()):
            raise DuplicateScheduleError()
        return self.add(doctor_id, day_of_week, start_time, end_time)

    def update_times(self, schedule_id: str, start_time: str, end_time: str) -> ScheduleDto:
        self.entries[schedule_id] = replace(self.entries[schedule_id], start_time=start_time, end_time=end_time)
        return self.entries[schedule_id]

    def set_active(self, schedule_id: str, is_active: bool) -> ScheduleDto:
        self.entries[schedule_id] = replace(self.entries[schedule_id], is_active=is_active)
        return self.entries[schedule_id]

    def delete(self, schedule_id: str) -> None:
        del self.entries[schedule_id]


class FakeAppointmentsRepo:
    """Enforces the live-slot rule the way the database index does."""

    def __init__(self, directory=None):
        self.directory = directory
        self.appts: Dict[str, AppointmentDto] = {}
        self.notifications: List[NotificationDraft] = []
        self.conflict_checks = 0

    def _slot_taken(self, doctor_id: str, d: date, t: str, exclude: Optional[str] = None) -> bool:
        return any(
            a.doctor_id == doctor_id and a.date == d and a.time == t and a.status in LIVE_STATUSES and a.id != exclude
            for a in self.appts.values()
        )

    def find_conflicting(self, doctor_id: str, appointment_date: date, appointment_time: str) -> List[AppointmentDto]:
        self.conflict_checks += 1
        return [
            a for a in self.appts.values()
            if a.doctor_id == doctor_id and a.date == appointment_date and a.time == appointment_time and a.status in LIVE_STATUSES
        ]

    def create(self, data: NewAppointment, notification: NotificationDraft) -> AppointmentDto:
        if self._slot_taken(data.doctor_id, data.date, data.time):
            raise SlotTakenError("live slot")
        now = datetime.now(timezone.utc)
        service_id = data.service_id
        if data.new_service is not None:
            service = self.directory.add_service(data.doctor_id, data.new_service.name, data.new_service.duration)
            service.description = data.new_service.description
            service_id = service.id
        appt = AppointmentDto(
            id=str(uuid.uuid4()),
            doctor_id=data.doctor_id,
            patient_id=data.patient_id,
            service_id=service_id,
            date=data.date,
            time=data.time,
            duration=data.duration,
            status=data.status,
            reason=data.reason,
            notes=data.notes,
            severity=data.severity,
            created_at=now,
            updated_at=now,
        )
        self.appts[appt.id] = appt
        self.notifications.append(replace(notification, appointment_id=notification.appointment_id or appt.id))
        return appt

    def transition(self, appointment_id: str, changes: AppointmentChanges, notification: Optional[NotificationDraft] = None) -> AppointmentDto:
        current = self.appts[appointment_id]
        updated = replace(
            current,
            status=changes.status,
            date=changes.date if changes.date is not None else current.date,
            time=changes.time if changes.time is not None else current.time,
            reason=changes.reason if changes.reason is not None else current.reason,
            notes=changes.notes if changes.notes is not None else current.notes,
            updated_at=datetime.now(timezone.utc),
        )
        if updated.status in LIVE_STATUSES and self._slot_taken(updated.doctor_id, updated.date, updated.time, exclude=updated.id):
            raise SlotTakenError("live slot")
        self.appts[appointment_id] = updated
        if notification is not None:
            self.notifications.append(notification)
        return updated

    def get_by_id(self, appointment_id: str) -> Optional[AppointmentDto]:
        return self.appts.get(appointment_id)

    def list_live_for_day(self, doctor_id: str, appointment_date: date) -> List[AppointmentDto]:
        return self.list_live_in_range(doctor_id, appointment_date, appointment_date)

    def list_live_in_range(self, doctor_id: str, start: date, end: date) -> List[AppointmentDto]:
        return [
            a for a in self.appts.values()
            if a.doctor_id == doctor_id and start <= a.date <= end and a.status in LIVE_STATUSES
        ]

    def list_for_doctor(self, doctor_id, status=None, start=None, end=None) -> List[AppointmentDto]:
        rows = [a for a in self.appts.values() if a.doctor_id == doctor_id]
        if status is not None:
            rows = [a for a in rows if a.status == status]
        if start is not None:
            rows = [a for a in rows if a.date >= start]
        if end is not None:
            rows = [a for a in rows if a.date <= end]
        return sorted(rows, key=lambda a: (a.date, a.time))


class FakeDirectory:
    def __init__(self):
        self.doctors: Dict[str, DoctorDto] = {}
        self.patients: Dict[str, PatientDto] = {}
        self.services: Dict[str, ServiceDto] = {}

    def add_doctor(self, name: str = "Dr. Rao", phone: str = "+15550001") -> DoctorDto:
        d = DoctorDto(str(uuid.uuid4()), name, phone, "Dentistry")
        self.doctors[d.id] = d
        return d

    def add_patient(self, name: str = "Asha", user_id: Optional[str] = None) -> PatientDto:
        p = PatientDto(str(uuid.uuid4()), user_id, name)
        self.patients[p.id] = p
        return p

    def add_service(self, doctor_id: str, name: str, duration: int = 30, is_active: bool = True) -> ServiceDto:
        s = ServiceDto(str(uuid.uuid4()), doctor_id, name, "", 0.0, duration, is_active)
        self.services[s.id] = s
        return s

    def get_doctor(self, doctor_id: str) -> Optional[DoctorDto]:
        return self.doctors.get(doctor_id)

    def get_doctor_by_phone(self, phone: str) -> Optional[DoctorDto]:
        return next((d for d in self.doctors.values() if d.phone == phone), None)

    def get_patient(self, patient_ref: str) -> Optional[PatientDto]:
        p = self.patients.get(patient_ref)
        if p:
            return p
        return next((p for p in self.patients.values() if p.user_id == patient_ref), None)

    def get_service(self, service_id: str) -> Optional[ServiceDto]:
        return self.services.get(service_id)

    def find_service_by_name(self, doctor_id: str, name: str) -> Optional[ServiceDto]:
        return next(
            (s for s in self.services.values() if s.doctor_id == doctor_id and s.name.lower() == name.lower()),
            None,
        )

    def list_active_services(self, doctor_id: str) -> List[ServiceDto]:
        return [s for s in self.services.values() if s.doctor_id == doctor_id and s.is_active]


@pytest.fixture
def schedules():
    return FakeScheduleRepo()


@pytest.fixture
def appts(directory):
    return FakeAppointmentsRepo(directory)


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def doctor(directory):
    return directory.add_doctor()


@pytest.fixture
def patient(directory):
    return directory.add_patient(user_id="user-1")


@pytest.fixture
def monday(doctor, schedules):
    """A future Monday with 09:00-12:00 hours for ``doctor``."""
    schedules.add(doctor.id, 1, "09:00", "12:00")
    return next_weekday(0)


@pytest.fixture
def availability(schedules, appts):
    return AvailabilityService(schedule_repo=schedules, appointments_repo=appts)


@pytest.fixture
def svc(appts, directory, availability):
    return AppointmentsService(
        repo=appts,
        directory=directory,
        availability=availability,
        conflicts=ConflictDetector(appts),
    )

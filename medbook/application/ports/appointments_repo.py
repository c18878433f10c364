from dataclasses import dataclass
from typing import List, Optional, Protocol
from datetime import datetime, date

from .directory_repo import NewService
from ...enums import AppointmentStatus, NotificationType


class SlotTakenError(Exception):
    """The store rejected a write because the slot already holds a live appointment."""


@dataclass
class AppointmentDto:
    id: str
    doctor_id: str
    patient_id: str
    service_id: str
    date: date
    time: str
    duration: int
    status: AppointmentStatus
    reason: str
    notes: str
    severity: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass
class NewAppointment:
    doctor_id: str
    patient_id: str
    service_id: Optional[str]
    date: date
    time: str
    duration: int
    status: AppointmentStatus = AppointmentStatus.PENDING
    reason: str = ""
    notes: str = ""
    severity: Optional[str] = None
    # Set when the service does not exist yet; created in the same transaction
    new_service: Optional[NewService] = None


@dataclass
class AppointmentChanges:
    status: AppointmentStatus
    date: Optional[date] = None
    time: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class NotificationDraft:
    type: NotificationType
    title: str
    message: str
    doctor_id: str
    patient_id: Optional[str]
    appointment_id: Optional[str] = None


class AppointmentsRepository(Protocol):
    def find_conflicting(self, doctor_id: str, appointment_date: date, appointment_time: str) -> List[AppointmentDto]:
        """Live appointments occupying exactly this slot."""
        ...

    def create(self, data: NewAppointment, notification: NotificationDraft) -> AppointmentDto:
        """Insert the appointment, its notification and any new service in one transaction.

        Raises SlotTakenError when the live-slot constraint rejects the row.
        """
        ...

    def transition(self, appointment_id: str, changes: AppointmentChanges, notification: Optional[NotificationDraft] = None) -> AppointmentDto:
        """Apply a status change (and optional new slot) with its notification atomically.

        Raises SlotTakenError when the new slot is already live.
        """
        ...

    def get_by_id(self, appointment_id: str) -> Optional[AppointmentDto]:
        ...

    def list_live_for_day(self, doctor_id: str, appointment_date: date) -> List[AppointmentDto]:
        ...

    def list_live_in_range(self, doctor_id: str, start: date, end: date) -> List[AppointmentDto]:
        ...

    def list_for_doctor(self, doctor_id: str, status: Optional[AppointmentStatus] = None, start: Optional[date] = None, end: Optional[date] = None) -> List[AppointmentDto]:
        ...

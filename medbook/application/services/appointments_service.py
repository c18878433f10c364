from dataclasses import dataclass
from datetime import date
from typing import List, Optional
import logging

from ..ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
    AppointmentChanges,
    NewAppointment,
    SlotTakenError,
)
from ..ports.directory_repo import DirectoryRepository, DoctorDto, NewService, PatientDto, ServiceDto
from . import notification_composer
from .availability_service import AvailabilityService
from .conflict_detector import ConflictDetector
from ...enums import AppointmentStatus, Severity, TERMINAL_STATUSES, can_transition
from ...exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ...temporal_utils import (
    TemporalInputError,
    is_valid_future_date,
    normalize_date_and_time,
)

logger = logging.getLogger(__name__)


@dataclass
class Booking:
    appointment: AppointmentDto
    service: ServiceDto


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    directory: DirectoryRepository
    availability: AvailabilityService
    conflicts: ConflictDetector
    default_service_name: str = "General Consultation"
    default_duration: int = 30
    default_date_order: Optional[str] = None
    enforce_availability_on_booking: bool = True

    # ------------------------------------------------------------------
    # Input checks shared by booking and rescheduling
    # ------------------------------------------------------------------
    def _normalize_slot(self, date_value, time_value, date_order: Optional[str]):
        try:
            appointment_date, appointment_time = normalize_date_and_time(
                date_value, time_value, date_order or self.default_date_order
            )
        except TemporalInputError as exc:
            raise ValidationError(f"Invalid date or time format: {exc}")
        if not is_valid_future_date(appointment_date):
            raise ValidationError("Cannot book appointments in the past")
        return appointment_date, appointment_time

    def _get_owned(self, doctor: DoctorDto, appointment_id: str) -> AppointmentDto:
        appt = self.repo.get_by_id(appointment_id)
        if not appt:
            raise NotFoundError("Appointment not found")
        if appt.doctor_id != doctor.id:
            raise ForbiddenError("Appointment does not belong to this doctor")
        return appt

    def _patient_name(self, patient_id: str) -> str:
        patient = self.directory.get_patient(patient_id)
        return patient.name if patient else "Patient"

    # ------------------------------------------------------------------
    # Service resolution
    # ------------------------------------------------------------------
    def _find_service(self, doctor: DoctorDto, service_id: Optional[str], service_name: Optional[str]):
        """Return (existing service or None, name to create under)."""
        if service_id:
            service = self.directory.get_service(service_id)
            if not service or service.doctor_id != doctor.id:
                raise NotFoundError("Service not found")
            return service, service.name
        name = (service_name or "").strip() or self.default_service_name
        return self.directory.find_service_by_name(doctor.id, name), name

    def _new_service(self, doctor: DoctorDto, name: str, duration: int) -> NewService:
        description = "Auto-created on booking" if name == self.default_service_name else ""
        return NewService(doctor_id=doctor.id, name=name, duration=duration, description=description)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def book(
        self,
        doctor: DoctorDto,
        patient_ref: str,
        date_value,
        time_value,
        service_id: Optional[str] = None,
        service_name: Optional[str] = None,
        duration: Optional[int] = None,
        reason: str = "",
        notes: str = "",
        severity: Optional[str] = None,
        date_order: Optional[str] = None,
    ) -> Booking:
        appointment_date, appointment_time = self._normalize_slot(date_value, time_value, date_order)

        if duration is not None and duration <= 0:
            raise ValidationError("Duration must be a positive number of minutes")
        if severity is not None:
            try:
                severity = Severity(str(severity).upper()).value
            except ValueError:
                raise ValidationError(f"Invalid severity. Must be one of: {[s.value for s in Severity]}")

        patient: Optional[PatientDto] = self.directory.get_patient(patient_ref)
        if not patient:
            raise NotFoundError("Patient not found")

        service, service_label = self._find_service(doctor, service_id, service_name)

        if self.enforce_availability_on_booking:
            self.availability.ensure_slot_bookable(doctor.id, appointment_date, appointment_time)
        self.conflicts.ensure_slot_free(doctor.id, appointment_date, appointment_time)

        new_service = None
        if not service:
            new_service = self._new_service(doctor, service_label, duration or self.default_duration)

        data = NewAppointment(
            doctor_id=doctor.id,
            patient_id=patient.id,
            service_id=service.id if service else None,
            date=appointment_date,
            time=appointment_time,
            duration=duration or (service.duration if service else new_service.duration),
            status=AppointmentStatus.PENDING,
            reason=reason or "",
            notes=notes or "",
            severity=severity,
            new_service=new_service,
        )
        notification = notification_composer.appointment_booked(
            doctor.id, patient.id, patient.name, service.name if service else service_label, appointment_date, appointment_time
        )
        try:
            appt = self.repo.create(data, notification)
        except SlotTakenError:
            logger.info(f"Slot {appointment_date} {appointment_time} for doctor {doctor.id} taken by a concurrent booking")
            raise ConflictError("Time slot not available")

        if new_service is not None:
            service = self.directory.get_service(appt.service_id)
            logger.info(f"Created service '{service.name}' for doctor {doctor.id}")

        logger.info(f"Booked appointment {appt.id} for doctor {doctor.id} on {appointment_date} at {appointment_time}")
        return Booking(appointment=appt, service=service)

    def reschedule(self, doctor: DoctorDto, appointment_id: str, new_date_value, new_time_value, date_order: Optional[str] = None) -> AppointmentDto:
        new_date, new_time = self._normalize_slot(new_date_value, new_time_value, date_order)

        appt = self._get_owned(doctor, appointment_id)

        self.availability.ensure_slot_bookable(doctor.id, new_date, new_time)
        self.conflicts.ensure_slot_free(doctor.id, new_date, new_time, exclude_appointment_id=appt.id)

        notification = notification_composer.appointment_rescheduled(
            doctor.id, appt.patient_id, appt.id, self._patient_name(appt.patient_id),
            appt.date, appt.time, new_date, new_time,
        )
        changes = AppointmentChanges(status=AppointmentStatus.CONFIRMED, date=new_date, time=new_time)
        try:
            updated = self.repo.transition(appt.id, changes, notification)
        except SlotTakenError:
            raise ConflictError("Time slot not available")

        logger.info(f"Rescheduled appointment {appt.id} to {new_date} {new_time}")
        return updated

    def cancel(self, doctor: DoctorDto, appointment_id: str, reason: Optional[str] = None) -> AppointmentDto:
        appt = self._get_owned(doctor, appointment_id)
        if appt.status in TERMINAL_STATUSES:
            if appt.status == AppointmentStatus.CANCELLED:
                raise ValidationError("Appointment is already cancelled")
            raise ValidationError(f"Cannot cancel {appt.status.value.lower()} appointment")

        notification = notification_composer.appointment_cancelled(
            doctor.id, appt.patient_id, appt.id, self._patient_name(appt.patient_id),
            appt.date, appt.time, reason,
        )
        changes = AppointmentChanges(status=AppointmentStatus.CANCELLED, reason=reason, notes=reason)
        updated = self.repo.transition(appt.id, changes, notification)

        logger.info(f"Cancelled appointment {appt.id}")
        return updated

    def update_status(self, appointment_id: str, status: str) -> AppointmentDto:
        try:
            target = AppointmentStatus(str(status).upper())
        except ValueError:
            raise ValidationError(f"Invalid status. Must be one of: {[s.value for s in AppointmentStatus]}")

        appt = self.repo.get_by_id(appointment_id)
        if not appt:
            raise NotFoundError("Appointment not found")
        if appt.status == target:
            return appt
        if not can_transition(appt.status, target):
            raise ValidationError(f"Cannot change status from {appt.status.value} to {target.value}")

        updated = self.repo.transition(appt.id, AppointmentChanges(status=target))
        logger.info(f"Appointment {appt.id} status {appt.status.value} -> {target.value}")
        return updated

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, appointment_id: str) -> AppointmentDto:
        appt = self.repo.get_by_id(appointment_id)
        if not appt:
            raise NotFoundError("Appointment not found")
        return appt

    def list_for_doctor(self, doctor_id: str, status: Optional[str] = None, start: Optional[date] = None, end: Optional[date] = None) -> List[AppointmentDto]:
        if not self.directory.get_doctor(doctor_id):
            raise NotFoundError("Doctor not found")
        target = None
        if status:
            try:
                target = AppointmentStatus(status.upper())
            except ValueError:
                raise ValidationError(f"Invalid status. Must be one of: {[s.value for s in AppointmentStatus]}")
        return self.repo.list_for_doctor(doctor_id, status=target, start=start, end=end)

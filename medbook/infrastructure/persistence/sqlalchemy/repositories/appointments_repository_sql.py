from datetime import date, datetime, timezone
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .....db.models import Appointment, Notification, Service
from .....enums import AppointmentStatus, LIVE_STATUSES
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
    AppointmentChanges,
    NewAppointment,
    NotificationDraft,
    SlotTakenError,
)

logger = logging.getLogger(__name__)

_LIVE_VALUES = [s.value for s in LIVE_STATUSES]


def _is_live_slot_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "uq_appointments_live_slot" in message or "appointments.doctor_id, appointments.date, appointments.time" in message


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _appt_to_dto(self, a: Appointment) -> AppointmentDto:
        return AppointmentDto(
            id=a.id,
            doctor_id=a.doctor_id,
            patient_id=a.patient_id,
            service_id=a.service_id,
            date=a.date,
            time=a.time,
            duration=a.duration,
            status=AppointmentStatus(a.status),
            reason=a.reason,
            notes=a.notes,
            severity=a.severity,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )

    def _stage_notification(self, draft: NotificationDraft, appointment_id: str) -> None:
        self.session.add(Notification(
            type=draft.type.value,
            title=draft.title,
            message=draft.message,
            doctor_id=draft.doctor_id,
            patient_id=draft.patient_id,
            appointment_id=draft.appointment_id or appointment_id,
        ))

    def _write(self, row: Appointment, notification: Optional[NotificationDraft]) -> None:
        # Appointment row, any staged service and the notification commit together or not at all
        slot = f"{row.doctor_id} {row.date} {row.time}"
        try:
            self.session.add(row)
            self.session.flush()
            if notification is not None:
                self._stage_notification(notification, row.id)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if _is_live_slot_violation(e):
                logger.warning(f"Live slot constraint rejected write for slot {slot}")
                raise SlotTakenError(str(e.orig)) from e
            raise

    def find_conflicting(self, doctor_id: str, appointment_date: date, appointment_time: str) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.date == appointment_date)
            .where(Appointment.time == appointment_time)
            .where(Appointment.status.in_(_LIVE_VALUES))
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def create(self, data: NewAppointment, notification: NotificationDraft) -> AppointmentDto:
        appt = Appointment(
            doctor_id=data.doctor_id,
            patient_id=data.patient_id,
            service_id=data.service_id,
            date=data.date,
            time=data.time,
            duration=data.duration,
            status=data.status.value,
            reason=data.reason,
            notes=data.notes,
            severity=data.severity,
        )
        if data.new_service is not None:
            service = Service(
                doctor_id=data.new_service.doctor_id,
                name=data.new_service.name,
                description=data.new_service.description,
                duration=data.new_service.duration,
            )
            self.session.add(service)
            appt.service_id = service.id
        self._write(appt, notification)
        self.session.refresh(appt)
        return self._appt_to_dto(appt)

    def transition(self, appointment_id: str, changes: AppointmentChanges, notification: Optional[NotificationDraft] = None) -> AppointmentDto:
        a = self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).one()
        a.status = changes.status.value
        if changes.date is not None:
            a.date = changes.date
        if changes.time is not None:
            a.time = changes.time
        if changes.reason is not None:
            a.reason = changes.reason
        if changes.notes is not None:
            a.notes = changes.notes
        a.updated_at = datetime.now(timezone.utc)
        self._write(a, notification)
        self.session.refresh(a)
        return self._appt_to_dto(a)

    def get_by_id(self, appointment_id: str) -> Optional[AppointmentDto]:
        a = self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()
        return self._appt_to_dto(a) if a else None

    def list_live_for_day(self, doctor_id: str, appointment_date: date) -> List[AppointmentDto]:
        return self.list_live_in_range(doctor_id, appointment_date, appointment_date)

    def list_live_in_range(self, doctor_id: str, start: date, end: date) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.date >= start)
            .where(Appointment.date <= end)
            .where(Appointment.status.in_(_LIVE_VALUES))
            .order_by(Appointment.date, Appointment.time)
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def list_for_doctor(self, doctor_id: str, status: Optional[AppointmentStatus] = None, start: Optional[date] = None, end: Optional[date] = None) -> List[AppointmentDto]:
        query = select(Appointment).where(Appointment.doctor_id == doctor_id)
        if status is not None:
            query = query.where(Appointment.status == status.value)
        if start is not None:
            query = query.where(Appointment.date >= start)
        if end is not None:
            query = query.where(Appointment.date <= end)
        rows = self.session.exec(query.order_by(Appointment.date, Appointment.time)).all()
        return [self._appt_to_dto(r) for r in rows]

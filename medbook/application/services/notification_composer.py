"""Builds the notification record each booking transition emits."""
from datetime import date
from typing import Optional

from ..ports.appointments_repo import NotificationDraft
from ...enums import NotificationType
from ...temporal_utils import format_for_response


def appointment_booked(doctor_id: str, patient_id: str, patient_name: str, service_name: str, appointment_date: date, appointment_time: str) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.APPOINTMENT_BOOKED,
        title="New appointment booked",
        message=f"{patient_name} booked {service_name} on {format_for_response(appointment_date)} at {appointment_time}",
        doctor_id=doctor_id,
        patient_id=patient_id,
    )


def appointment_rescheduled(doctor_id: str, patient_id: str, appointment_id: str, patient_name: str, old_date: date, old_time: str, new_date: date, new_time: str) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.APPOINTMENT_RESCHEDULED,
        title="Appointment rescheduled",
        message=(
            f"Appointment with {patient_name} moved from {format_for_response(old_date)} {old_time} "
            f"to {format_for_response(new_date)} {new_time}"
        ),
        doctor_id=doctor_id,
        patient_id=patient_id,
        appointment_id=appointment_id,
    )


def appointment_cancelled(doctor_id: str, patient_id: str, appointment_id: str, patient_name: str, appointment_date: date, appointment_time: str, reason: Optional[str] = None) -> NotificationDraft:
    message = f"Appointment with {patient_name} on {format_for_response(appointment_date)} at {appointment_time} was cancelled"
    if reason:
        message = f"{message}: {reason}"
    return NotificationDraft(
        type=NotificationType.APPOINTMENT_CANCELLED,
        title="Appointment cancelled",
        message=message,
        doctor_id=doctor_id,
        patient_id=patient_id,
        appointment_id=appointment_id,
    )

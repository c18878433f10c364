from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.ports.appointments_repo import AppointmentDto
from ..application.services.appointments_service import AppointmentsService
from ..application.services.directory_service import DirectoryService
from ..dependencies import get_appointments_service, get_directory_service
from ..exceptions import InternalError
from ..schemas.appointments.appointment import (
    AppointmentResponse,
    AppointmentStatusResponse,
    BookAppointmentRequest,
    BookAppointmentResponse,
    CancelAppointmentRequest,
    RescheduleAppointmentRequest,
    RescheduleAppointmentResponse,
    ServiceSummary,
    UpdateStatusRequest,
)
from ..temporal_utils import format_for_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointment", tags=["Appointments"])


def appointment_to_response(a: AppointmentDto) -> AppointmentResponse:
    return AppointmentResponse(
        appointmentId=a.id,
        doctorId=a.doctor_id,
        patientId=a.patient_id,
        serviceId=a.service_id,
        date=format_for_response(a.date),
        time=a.time,
        duration=a.duration,
        status=a.status.value,
        reason=a.reason,
        notes=a.notes,
        severity=a.severity,
        createdAt=a.created_at,
        updatedAt=a.updated_at,
    )


@router.post("/book", response_model=BookAppointmentResponse)
def book_appointment(
    body: BookAppointmentRequest,
    directory: DirectoryService = Depends(get_directory_service),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        doctor = directory.doctor_by_phone(body.doctorPhone)
        booking = appt_service.book(
            doctor,
            body.patientId,
            body.date,
            body.time,
            service_id=body.serviceId,
            service_name=body.serviceName,
            duration=body.duration,
            reason=body.reason or "",
            notes=body.notes or "",
            severity=body.severity,
            date_order=body.dateFormat.value if body.dateFormat else None,
        )
        appt = booking.appointment
        return BookAppointmentResponse(
            appointmentId=appt.id,
            status=appt.status.value,
            date=format_for_response(appt.date),
            time=appt.time,
            service=ServiceSummary(id=booking.service.id, name=booking.service.name, duration=booking.service.duration),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error booking appointment: {str(e)}", exc_info=True)
        raise InternalError("Failed to book appointment")


@router.post("/cancel", response_model=AppointmentStatusResponse)
def cancel_appointment(
    body: CancelAppointmentRequest,
    directory: DirectoryService = Depends(get_directory_service),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        doctor = directory.doctor_by_phone(body.doctorPhone)
        appt = appt_service.cancel(doctor, body.appointmentId, reason=body.reason)
        return AppointmentStatusResponse(appointmentId=appt.id, status=appt.status.value)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error cancelling appointment {body.appointmentId}: {str(e)}", exc_info=True)
        raise InternalError("Failed to cancel appointment")


@router.post("/reschedule", response_model=RescheduleAppointmentResponse)
def reschedule_appointment(
    body: RescheduleAppointmentRequest,
    directory: DirectoryService = Depends(get_directory_service),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        doctor = directory.doctor_by_phone(body.doctorPhone)
        appt = appt_service.reschedule(
            doctor,
            body.appointmentId,
            body.newDate,
            body.newTime,
            date_order=body.dateFormat.value if body.dateFormat else None,
        )
        return RescheduleAppointmentResponse(
            appointmentId=appt.id,
            status=appt.status.value,
            date=format_for_response(appt.date),
            time=appt.time,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error rescheduling appointment {body.appointmentId}: {str(e)}", exc_info=True)
        raise InternalError("Failed to reschedule appointment")


@router.put("/{appointment_id}/status", response_model=AppointmentStatusResponse)
def update_appointment_status(
    appointment_id: str,
    body: UpdateStatusRequest,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt = appt_service.update_status(appointment_id, body.status)
        return AppointmentStatusResponse(appointmentId=appt.id, status=appt.status.value)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating appointment {appointment_id} status: {str(e)}", exc_info=True)
        raise InternalError("Failed to update appointment status")


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: str,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return appointment_to_response(appt_service.get(appointment_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointment {appointment_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve appointment")

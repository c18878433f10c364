from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from ..application.services.appointments_service import AppointmentsService
from ..application.services.availability_service import AvailabilityService
from ..application.services.directory_service import DirectoryService
from ..dependencies import get_appointments_service, get_availability_service, get_directory_service
from ..exceptions import InternalError, ValidationError
from ..schemas.appointments.appointment import AppointmentResponse
from ..schemas.doctors.doctor import (
    AvailabilityRequest,
    AvailabilityResponse,
    DatedSlotResponse,
    DoctorLookupResponse,
    DoctorResponse,
    DoctorServicesResponse,
    PhoneRequest,
    ServiceResponse,
    SlotRangeRequest,
    SlotRangeResponse,
    SlotResponse,
)
from ..temporal_utils import InvalidDateError, format_for_response, normalize_date
from .appointments_router import appointment_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctor", tags=["Doctors"])


def _parse_date(value, date_order=None):
    try:
        return normalize_date(value, date_order.value if date_order else None)
    except InvalidDateError as exc:
        raise ValidationError(str(exc))


@router.post("/availability", response_model=AvailabilityResponse)
def doctor_availability(
    body: AvailabilityRequest,
    directory: DirectoryService = Depends(get_directory_service),
    availability: AvailabilityService = Depends(get_availability_service),
):
    try:
        day = _parse_date(body.date, body.dateFormat)
        doctor = directory.doctor_by_phone(body.phone)
        slots = availability.available_slots(doctor.id, day)
        return AvailabilityResponse(
            doctorId=doctor.id,
            date=format_for_response(day),
            availableSlots=[SlotResponse(**s) for s in slots],
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing availability: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve availability")


@router.post("/available-slots", response_model=SlotRangeResponse)
def doctor_available_slots(
    body: SlotRangeRequest,
    directory: DirectoryService = Depends(get_directory_service),
    availability: AvailabilityService = Depends(get_availability_service),
):
    try:
        start = _parse_date(body.startDate, body.dateFormat)
        end = _parse_date(body.endDate, body.dateFormat)
        doctor = directory.doctor_by_id(body.doctorId)
        slots = availability.available_slots_in_range(doctor.id, start, end)
        return SlotRangeResponse(doctorId=doctor.id, availableSlots=[DatedSlotResponse(**s) for s in slots])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing available slots: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve available slots")


@router.post("/by-phone", response_model=DoctorLookupResponse)
def doctor_by_phone(
    body: PhoneRequest,
    directory: DirectoryService = Depends(get_directory_service),
):
    try:
        doctor = directory.doctor_by_phone(body.phone)
        return DoctorLookupResponse(
            doctorId=doctor.id,
            doctor=DoctorResponse(id=doctor.id, name=doctor.name, phone=doctor.phone, specialty=doctor.specialty),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error looking up doctor: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve doctor")


@router.post("/services", response_model=DoctorServicesResponse)
def doctor_services(
    body: PhoneRequest,
    directory: DirectoryService = Depends(get_directory_service),
):
    try:
        doctor = directory.doctor_by_phone(body.phone)
        services = directory.active_services(doctor)
        return DoctorServicesResponse(
            doctorId=doctor.id,
            services=[
                ServiceResponse(id=s.id, name=s.name, description=s.description, price=s.price, duration=s.duration)
                for s in services
            ],
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving services: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve services")


@router.get("/{doctor_id}/appointments", response_model=List[AppointmentResponse])
def doctor_appointments(
    doctor_id: str,
    status: Optional[str] = Query(None),
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        start = _parse_date(startDate) if startDate else None
        end = _parse_date(endDate) if endDate else None
        return [appointment_to_response(a) for a in appt_service.list_for_doctor(doctor_id, status=status, start=start, end=end)]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointments for doctor {doctor_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve appointments")

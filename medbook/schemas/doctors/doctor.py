# medbook/schemas/doctors/doctor.py
from pydantic import BaseModel, Field
from typing import List, Optional

from ..appointments.appointment import DateValue
from ...enums import DateOrder


class PhoneRequest(BaseModel):
    phone: str = Field(min_length=1)


class AvailabilityRequest(PhoneRequest):
    date: DateValue
    dateFormat: Optional[DateOrder] = None


class SlotRangeRequest(BaseModel):
    doctorId: str = Field(min_length=1)
    startDate: DateValue
    endDate: DateValue
    dateFormat: Optional[DateOrder] = None


class SlotResponse(BaseModel):
    time: str
    duration: int


class DatedSlotResponse(BaseModel):
    date: str
    time: str


class AvailabilityResponse(BaseModel):
    doctorId: str
    date: str
    availableSlots: List[SlotResponse]


class SlotRangeResponse(BaseModel):
    doctorId: str
    availableSlots: List[DatedSlotResponse]


class DoctorResponse(BaseModel):
    id: str
    name: str
    phone: str
    specialty: Optional[str] = None


class DoctorLookupResponse(BaseModel):
    doctorId: str
    doctor: DoctorResponse


class ServiceResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    duration: int


class DoctorServicesResponse(BaseModel):
    doctorId: str
    services: List[ServiceResponse]

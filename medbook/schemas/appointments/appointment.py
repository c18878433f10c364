# medbook/schemas/appointments/appointment.py
from pydantic import BaseModel, Field
from typing import Optional, Union
from datetime import datetime

from ...enums import DateOrder

# Dates arrive as ISO strings, D/M/YYYY strings or epoch milliseconds;
# times as "HH:MM" or 3-4 digit numerals
DateValue = Union[int, float, str]
TimeValue = Union[int, str]


class BookAppointmentRequest(BaseModel):
    doctorPhone: str = Field(min_length=1)
    patientId: str = Field(min_length=1)
    date: DateValue
    time: TimeValue
    serviceId: Optional[str] = None
    serviceName: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    reason: Optional[str] = ""
    notes: Optional[str] = ""
    severity: Optional[str] = None
    dateFormat: Optional[DateOrder] = None


class CancelAppointmentRequest(BaseModel):
    doctorPhone: str = Field(min_length=1)
    appointmentId: str = Field(min_length=1)
    reason: Optional[str] = None


class RescheduleAppointmentRequest(BaseModel):
    doctorPhone: str = Field(min_length=1)
    appointmentId: str = Field(min_length=1)
    newDate: DateValue
    newTime: TimeValue
    dateFormat: Optional[DateOrder] = None


class UpdateStatusRequest(BaseModel):
    status: str = Field(min_length=1)


class ServiceSummary(BaseModel):
    id: str
    name: str
    duration: int


class BookAppointmentResponse(BaseModel):
    appointmentId: str
    status: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    service: ServiceSummary


class AppointmentStatusResponse(BaseModel):
    appointmentId: str
    status: str


class RescheduleAppointmentResponse(AppointmentStatusResponse):
    date: str
    time: str


class AppointmentResponse(BaseModel):
    appointmentId: str
    doctorId: str
    patientId: str
    serviceId: str
    date: str
    time: str
    duration: int
    status: str
    reason: str
    notes: str
    severity: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime

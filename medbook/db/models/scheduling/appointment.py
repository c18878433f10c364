# medbook/db/models/scheduling/appointment.py
import datetime as dt
from typing import Optional
from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field
import uuid

from ....enums import AppointmentStatus, LIVE_STATUSES

_LIVE_SQL = "status IN ({})".format(", ".join(f"'{s.value}'" for s in sorted(LIVE_STATUSES)))


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (
        # One live appointment per slot; CANCELLED/COMPLETED/NO_SHOW rows may repeat
        Index(
            "uq_appointments_live_slot",
            "doctor_id",
            "date",
            "time",
            unique=True,
            sqlite_where=text(_LIVE_SQL),
            postgresql_where=text(_LIVE_SQL),
        ),
    )
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    doctor_id: str = Field(foreign_key="doctors.id", index=True)
    patient_id: str = Field(foreign_key="patients.id", index=True)
    service_id: str = Field(foreign_key="services.id")
    date: dt.date
    time: str = Field(max_length=5)  # HH:MM
    duration: int = Field(gt=0)
    status: str = Field(default=AppointmentStatus.PENDING.value, max_length=16, index=True)
    reason: str = Field(default="")
    notes: str = Field(default="")
    severity: Optional[str] = Field(default=None, max_length=16)
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))
    updated_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

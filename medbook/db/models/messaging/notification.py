# medbook/db/models/messaging/notification.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
import uuid

class Notification(SQLModel, table=True):
    __tablename__ = "notifications"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    type: str = Field(max_length=40)
    title: str
    message: str
    doctor_id: str = Field(foreign_key="doctors.id", index=True)
    patient_id: Optional[str] = Field(default=None, foreign_key="patients.id")
    appointment_id: Optional[str] = Field(default=None, foreign_key="appointments.id")
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

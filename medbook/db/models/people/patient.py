# medbook/db/models/people/patient.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
import uuid

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    # Owning account; booking accepts either this or the patient id
    user_id: Optional[str] = Field(default=None, unique=True, index=True)
    name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

# medbook/db/models/catalog/service.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
import uuid

class Service(SQLModel, table=True):
    __tablename__ = "services"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    doctor_id: str = Field(foreign_key="doctors.id", index=True)
    name: str = Field(max_length=120)
    description: str = Field(default="")
    price: float = Field(default=0.0)
    duration: int = Field(gt=0)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

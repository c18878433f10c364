# medbook/db/models/scheduling/schedule.py
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
import uuid

class Schedule(SQLModel, table=True):
    __tablename__ = "schedules"
    __table_args__ = (
        UniqueConstraint("doctor_id", "day_of_week", name="uq_schedules_doctor_day"),
    )
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    doctor_id: str = Field(foreign_key="doctors.id", index=True)
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday, 6=Saturday
    start_time: str = Field(max_length=5)  # HH:MM
    end_time: str = Field(max_length=5)  # HH:MM
    is_active: bool = Field(default=True)

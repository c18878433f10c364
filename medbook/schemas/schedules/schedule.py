# medbook/schemas/schedules/schedule.py
from pydantic import BaseModel, Field
from typing import Union

TimeValue = Union[int, str]


class ScheduleCreate(BaseModel):
    doctorId: str = Field(min_length=1)
    dayOfWeek: int = Field(ge=0, le=6)  # 0=Sunday, 6=Saturday
    startTime: TimeValue
    endTime: TimeValue


class ScheduleUpdate(BaseModel):
    startTime: TimeValue
    endTime: TimeValue


class ScheduleActiveUpdate(BaseModel):
    isActive: bool


class ScheduleResponse(BaseModel):
    id: str
    doctorId: str
    dayOfWeek: int
    startTime: str
    endTime: str
    isActive: bool

# medbook/schemas/notifications/notification.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: str
    type: str
    title: str
    message: str
    doctorId: str
    patientId: Optional[str] = None
    appointmentId: Optional[str] = None
    isRead: bool
    createdAt: datetime


class UnreadCountResponse(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int

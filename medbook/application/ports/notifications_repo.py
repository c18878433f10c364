from dataclasses import dataclass
from typing import List, Optional, Protocol
from datetime import datetime

from ...enums import NotificationType


@dataclass
class NotificationDto:
    id: str
    type: NotificationType
    title: str
    message: str
    doctor_id: str
    patient_id: Optional[str]
    appointment_id: Optional[str]
    is_read: bool
    created_at: datetime


class NotificationsRepository(Protocol):
    def list_for_doctor(self, doctor_id: str, unread_only: bool = False, limit: int = 100) -> List[NotificationDto]:
        ...

    def unread_count(self, doctor_id: str) -> int:
        ...

    def mark_read(self, notification_id: str) -> bool:
        ...

    def mark_all_read(self, doctor_id: str) -> int:
        ...

    def delete(self, notification_id: str) -> bool:
        ...

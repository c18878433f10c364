from dataclasses import dataclass
from typing import List

from ..ports.notifications_repo import NotificationsRepository, NotificationDto
from ..ports.directory_repo import DirectoryRepository
from ...exceptions import NotFoundError


@dataclass
class NotificationsService:
    repo: NotificationsRepository
    directory: DirectoryRepository
    page_size: int = 100

    def _ensure_doctor(self, doctor_id: str) -> None:
        if not self.directory.get_doctor(doctor_id):
            raise NotFoundError("Doctor not found")

    def list_for_doctor(self, doctor_id: str, unread_only: bool = False) -> List[NotificationDto]:
        self._ensure_doctor(doctor_id)
        return self.repo.list_for_doctor(doctor_id, unread_only=unread_only, limit=self.page_size)

    def unread_count(self, doctor_id: str) -> int:
        self._ensure_doctor(doctor_id)
        return self.repo.unread_count(doctor_id)

    def mark_read(self, notification_id: str) -> None:
        if not self.repo.mark_read(notification_id):
            raise NotFoundError("Notification not found")

    def mark_all_read(self, doctor_id: str) -> int:
        self._ensure_doctor(doctor_id)
        return self.repo.mark_all_read(doctor_id)

    def delete(self, notification_id: str) -> None:
        if not self.repo.delete(notification_id):
            raise NotFoundError("Notification not found")

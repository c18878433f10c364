from typing import List

from sqlalchemy import func
from sqlmodel import Session, select

from .....db.models import Notification
from .....enums import NotificationType
from .....application.ports.notifications_repo import NotificationsRepository, NotificationDto


class SqlNotificationsRepository(NotificationsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, n: Notification) -> NotificationDto:
        return NotificationDto(
            id=n.id,
            type=NotificationType(n.type),
            title=n.title,
            message=n.message,
            doctor_id=n.doctor_id,
            patient_id=n.patient_id,
            appointment_id=n.appointment_id,
            is_read=bool(n.is_read),
            created_at=n.created_at,
        )

    def list_for_doctor(self, doctor_id: str, unread_only: bool = False, limit: int = 100) -> List[NotificationDto]:
        query = select(Notification).where(Notification.doctor_id == doctor_id)
        if unread_only:
            query = query.where(Notification.is_read == False)  # noqa: E712
        rows = self.session.exec(query.order_by(Notification.created_at.desc()).limit(limit)).all()
        return [self._to_dto(r) for r in rows]

    def unread_count(self, doctor_id: str) -> int:
        return self.session.exec(
            select(func.count())
            .select_from(Notification)
            .where(Notification.doctor_id == doctor_id)
            .where(Notification.is_read == False)  # noqa: E712
        ).one()

    def mark_read(self, notification_id: str) -> bool:
        n = self.session.exec(select(Notification).where(Notification.id == notification_id)).first()
        if not n:
            return False
        n.is_read = True
        self.session.add(n)
        self.session.commit()
        return True

    def mark_all_read(self, doctor_id: str) -> int:
        rows = self.session.exec(
            select(Notification)
            .where(Notification.doctor_id == doctor_id)
            .where(Notification.is_read == False)  # noqa: E712
        ).all()
        for n in rows:
            n.is_read = True
            self.session.add(n)
        self.session.commit()
        return len(rows)

    def delete(self, notification_id: str) -> bool:
        n = self.session.exec(select(Notification).where(Notification.id == notification_id)).first()
        if not n:
            return False
        self.session.delete(n)
        self.session.commit()
        return True

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .....db.models import Schedule
from .....application.ports.schedule_repo import ScheduleRepository, ScheduleDto, DuplicateScheduleError


class SqlScheduleRepository(ScheduleRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, s: Schedule) -> ScheduleDto:
        return ScheduleDto(
            id=s.id,
            doctor_id=s.doctor_id,
            day_of_week=s.day_of_week,
            start_time=s.start_time,
            end_time=s.end_time,
            is_active=bool(s.is_active),
        )

    def _require(self, schedule_id: str) -> Schedule:
        return self.session.exec(select(Schedule).where(Schedule.id == schedule_id)).one()

    def _save(self, s: Schedule) -> ScheduleDto:
        self.session.add(s)
        self.session.commit()
        self.session.refresh(s)
        return self._to_dto(s)

    def find_schedule_for(self, doctor_id: str, day_of_week: int) -> Optional[ScheduleDto]:
        s = self.session.exec(
            select(Schedule)
            .where(Schedule.doctor_id == doctor_id)
            .where(Schedule.day_of_week == day_of_week)
            .where(Schedule.is_active == True)  # noqa: E712
        ).first()
        return self._to_dto(s) if s else None

    def list_for_doctor(self, doctor_id: str, active_only: bool = False) -> List[ScheduleDto]:
        query = select(Schedule).where(Schedule.doctor_id == doctor_id)
        if active_only:
            query = query.where(Schedule.is_active == True)  # noqa: E712
        rows = self.session.exec(query.order_by(Schedule.day_of_week)).all()
        return [self._to_dto(r) for r in rows]

    def get_by_id(self, schedule_id: str) -> Optional[ScheduleDto]:
        s = self.session.exec(select(Schedule).where(Schedule.id == schedule_id)).first()
        return self._to_dto(s) if s else None

    def create(self, doctor_id: str, day_of_week: int, start_time: str, end_time: str) -> ScheduleDto:
        s = Schedule(doctor_id=doctor_id, day_of_week=day_of_week, start_time=start_time, end_time=end_time)
        try:
            return self._save(s)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateScheduleError(str(e.orig)) from e

    def update_times(self, schedule_id: str, start_time: str, end_time: str) -> ScheduleDto:
        s = self._require(schedule_id)
        s.start_time = start_time
        s.end_time = end_time
        return self._save(s)

    def set_active(self, schedule_id: str, is_active: bool) -> ScheduleDto:
        s = self._require(schedule_id)
        s.is_active = is_active
        return self._save(s)

    def delete(self, schedule_id: str) -> None:
        s = self.session.exec(select(Schedule).where(Schedule.id == schedule_id)).first()
        if not s:
            return
        self.session.delete(s)
        self.session.commit()

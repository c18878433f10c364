from dataclasses import dataclass
from typing import List

from ..ports.schedule_repo import ScheduleRepository, ScheduleDto, DuplicateScheduleError
from ..ports.directory_repo import DirectoryRepository
from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...temporal_utils import InvalidTimeError, normalize_time


@dataclass
class ScheduleService:
    repo: ScheduleRepository
    directory: DirectoryRepository

    def _window(self, start_time, end_time):
        try:
            start, end = normalize_time(start_time), normalize_time(end_time)
        except InvalidTimeError as exc:
            raise ValidationError(str(exc))
        if start >= end:
            raise ValidationError("startTime must be earlier than endTime")
        return start, end

    def _get(self, schedule_id: str) -> ScheduleDto:
        entry = self.repo.get_by_id(schedule_id)
        if not entry:
            raise NotFoundError("Schedule not found")
        return entry

    def list_for_doctor(self, doctor_id: str) -> List[ScheduleDto]:
        if not self.directory.get_doctor(doctor_id):
            raise NotFoundError("Doctor not found")
        return self.repo.list_for_doctor(doctor_id)

    def create(self, doctor_id: str, day_of_week: int, start_time, end_time) -> ScheduleDto:
        if not 0 <= day_of_week <= 6:
            raise ValidationError("dayOfWeek must be between 0 (Sunday) and 6 (Saturday)")
        start, end = self._window(start_time, end_time)
        if not self.directory.get_doctor(doctor_id):
            raise NotFoundError("Doctor not found")
        try:
            return self.repo.create(doctor_id, day_of_week, start, end)
        except DuplicateScheduleError:
            raise ConflictError("A schedule already exists for this day")

    def update_times(self, schedule_id: str, start_time, end_time) -> ScheduleDto:
        start, end = self._window(start_time, end_time)
        self._get(schedule_id)
        return self.repo.update_times(schedule_id, start, end)

    def set_active(self, schedule_id: str, is_active: bool) -> ScheduleDto:
        self._get(schedule_id)
        return self.repo.set_active(schedule_id, is_active)

    def delete(self, schedule_id: str) -> None:
        self._get(schedule_id)
        self.repo.delete(schedule_id)

from dataclasses import dataclass
from typing import List, Optional, Protocol


class DuplicateScheduleError(Exception):
    """A schedule entry already exists for this doctor and weekday."""


@dataclass
class ScheduleDto:
    id: str
    doctor_id: str
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool


class ScheduleRepository(Protocol):
    def find_schedule_for(self, doctor_id: str, day_of_week: int) -> Optional[ScheduleDto]:
        """Active entry for the weekday, if any."""
        ...

    def list_for_doctor(self, doctor_id: str, active_only: bool = False) -> List[ScheduleDto]:
        ...

    def get_by_id(self, schedule_id: str) -> Optional[ScheduleDto]:
        ...

    def create(self, doctor_id: str, day_of_week: int, start_time: str, end_time: str) -> ScheduleDto:
        ...

    def update_times(self, schedule_id: str, start_time: str, end_time: str) -> ScheduleDto:
        ...

    def set_active(self, schedule_id: str, is_active: bool) -> ScheduleDto:
        ...

    def delete(self, schedule_id: str) -> None:
        ...

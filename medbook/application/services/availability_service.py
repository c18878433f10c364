from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from ..ports.schedule_repo import ScheduleRepository, ScheduleDto
from ..ports.appointments_repo import AppointmentsRepository
from ...exceptions import ValidationError
from ...temporal_utils import (
    combine_date_and_time,
    format_for_response,
    minutes_to_time,
    time_to_minutes,
    weekday_index,
)


@dataclass
class AvailabilityService:
    schedule_repo: ScheduleRepository
    appointments_repo: AppointmentsRepository
    slot_interval_minutes: int = 30
    max_range_days: int = 31

    def is_within_availability(self, doctor_id: str, appointment_date: date, appointment_time: str) -> bool:
        entry = self.schedule_repo.find_schedule_for(doctor_id, weekday_index(appointment_date))
        if not entry or not entry.is_active:
            return False
        # Canonical zero-padded HH:MM strings sort chronologically within a day
        return entry.start_time <= appointment_time <= entry.end_time

    def ensure_slot_bookable(self, doctor_id: str, appointment_date: date, appointment_time: str) -> None:
        if not self.is_within_availability(doctor_id, appointment_date, appointment_time):
            raise ValidationError(
                f"Doctor is not available on {format_for_response(appointment_date)} at {appointment_time}"
            )

    def _slot_times(self, entry: ScheduleDto) -> List[str]:
        start = time_to_minutes(entry.start_time)
        end = time_to_minutes(entry.end_time)
        return [minutes_to_time(m) for m in range(start, end, self.slot_interval_minutes)]

    def _open_slots(self, entry: ScheduleDto, day: date, taken: set, now: datetime) -> List[str]:
        return [
            t for t in self._slot_times(entry)
            if (day, t) not in taken and combine_date_and_time(day, t) > now
        ]

    def available_slots(self, doctor_id: str, day: date, now: Optional[datetime] = None) -> List[Dict]:
        """Free slots for one day, each ``{"time", "duration"}``."""
        now = now or datetime.now()
        entry = self.schedule_repo.find_schedule_for(doctor_id, weekday_index(day))
        if not entry or not entry.is_active:
            return []
        taken = {(a.date, a.time) for a in self.appointments_repo.list_live_for_day(doctor_id, day)}
        return [
            {"time": t, "duration": self.slot_interval_minutes}
            for t in self._open_slots(entry, day, taken, now)
        ]

    def available_slots_in_range(self, doctor_id: str, start: date, end: date, now: Optional[datetime] = None) -> List[Dict]:
        """Free slots across an inclusive date range, each ``{"date", "time"}``."""
        if end < start:
            raise ValidationError("endDate must not be before startDate")
        if (end - start).days + 1 > self.max_range_days:
            raise ValidationError(f"Date range cannot exceed {self.max_range_days} days")

        now = now or datetime.now()
        entries = {e.day_of_week: e for e in self.schedule_repo.list_for_doctor(doctor_id, active_only=True)}
        taken = {(a.date, a.time) for a in self.appointments_repo.list_live_in_range(doctor_id, start, end)}

        slots: List[Dict] = []
        day = start
        while day <= end:
            entry = entries.get(weekday_index(day))
            if entry:
                slots.extend(
                    {"date": format_for_response(day), "time": t}
                    for t in self._open_slots(entry, day, taken, now)
                )
            day += timedelta(days=1)
        return slots

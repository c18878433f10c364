from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..ports.appointments_repo import AppointmentsRepository
from ...exceptions import ConflictError


@dataclass
class ConflictDetector:
    """Advisory slot check; the store's live-slot index has the final word."""

    repo: AppointmentsRepository

    def has_conflict(self, doctor_id: str, appointment_date: date, appointment_time: str, exclude_appointment_id: Optional[str] = None) -> bool:
        existing = self.repo.find_conflicting(doctor_id, appointment_date, appointment_time)
        if exclude_appointment_id:
            existing = [a for a in existing if a.id != exclude_appointment_id]
        return len(existing) > 0

    def ensure_slot_free(self, doctor_id: str, appointment_date: date, appointment_time: str, exclude_appointment_id: Optional[str] = None) -> None:
        if self.has_conflict(doctor_id, appointment_date, appointment_time, exclude_appointment_id):
            raise ConflictError("Time slot not available")

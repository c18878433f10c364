from dataclasses import dataclass
from typing import List

from ..ports.directory_repo import DirectoryRepository, DoctorDto, ServiceDto
from ...exceptions import NotFoundError


@dataclass
class DirectoryService:
    repo: DirectoryRepository

    def doctor_by_phone(self, phone: str) -> DoctorDto:
        doctor = self.repo.get_doctor_by_phone(phone.strip())
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    def doctor_by_id(self, doctor_id: str) -> DoctorDto:
        doctor = self.repo.get_doctor(doctor_id)
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    def active_services(self, doctor: DoctorDto) -> List[ServiceDto]:
        return sorted(self.repo.list_active_services(doctor.id), key=lambda s: s.name.lower())

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass
class DoctorDto:
    id: str
    name: str
    phone: str
    specialty: Optional[str]


@dataclass
class PatientDto:
    id: str
    user_id: Optional[str]
    name: str


@dataclass
class ServiceDto:
    id: str
    doctor_id: str
    name: str
    description: str
    price: float
    duration: int
    is_active: bool


@dataclass
class NewService:
    """A service to create together with the appointment that first uses it."""
    doctor_id: str
    name: str
    duration: int
    description: str = ""


class DirectoryRepository(Protocol):
    """Read access to doctor, patient and service profiles owned by other parts of the platform."""

    def get_doctor(self, doctor_id: str) -> Optional[DoctorDto]:
        ...

    def get_doctor_by_phone(self, phone: str) -> Optional[DoctorDto]:
        ...

    def get_patient(self, patient_ref: str) -> Optional[PatientDto]:
        """Resolve by patient id first, then by owning account id."""
        ...

    def get_service(self, service_id: str) -> Optional[ServiceDto]:
        ...

    def find_service_by_name(self, doctor_id: str, name: str) -> Optional[ServiceDto]:
        ...

    def list_active_services(self, doctor_id: str) -> List[ServiceDto]:
        ...

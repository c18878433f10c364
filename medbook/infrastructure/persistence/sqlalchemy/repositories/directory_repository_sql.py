from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from .....db.models import Doctor, Patient, Service
from .....application.ports.directory_repo import DirectoryRepository, DoctorDto, PatientDto, ServiceDto


class SqlDirectoryRepository(DirectoryRepository):
    def __init__(self, session: Session):
        self.session = session

    def _doctor_to_dto(self, d: Doctor) -> DoctorDto:
        return DoctorDto(id=d.id, name=d.name, phone=d.phone, specialty=d.specialty)

    def _service_to_dto(self, s: Service) -> ServiceDto:
        return ServiceDto(
            id=s.id,
            doctor_id=s.doctor_id,
            name=s.name,
            description=s.description,
            price=s.price,
            duration=s.duration,
            is_active=bool(s.is_active),
        )

    def get_doctor(self, doctor_id: str) -> Optional[DoctorDto]:
        d = self.session.exec(select(Doctor).where(Doctor.id == doctor_id)).first()
        return self._doctor_to_dto(d) if d else None

    def get_doctor_by_phone(self, phone: str) -> Optional[DoctorDto]:
        d = self.session.exec(select(Doctor).where(Doctor.phone == phone)).first()
        return self._doctor_to_dto(d) if d else None

    def get_patient(self, patient_ref: str) -> Optional[PatientDto]:
        p = self.session.exec(select(Patient).where(Patient.id == patient_ref)).first()
        if not p:
            p = self.session.exec(select(Patient).where(Patient.user_id == patient_ref)).first()
        return PatientDto(id=p.id, user_id=p.user_id, name=p.name) if p else None

    def get_service(self, service_id: str) -> Optional[ServiceDto]:
        s = self.session.exec(select(Service).where(Service.id == service_id)).first()
        return self._service_to_dto(s) if s else None

    def find_service_by_name(self, doctor_id: str, name: str) -> Optional[ServiceDto]:
        s = self.session.exec(
            select(Service)
            .where(Service.doctor_id == doctor_id)
            .where(func.lower(Service.name) == name.lower())
        ).first()
        return self._service_to_dto(s) if s else None

    def list_active_services(self, doctor_id: str) -> List[ServiceDto]:
        rows = self.session.exec(
            select(Service)
            .where(Service.doctor_id == doctor_id)
            .where(Service.is_active == True)  # noqa: E712
            .order_by(Service.name)
        ).all()
        return [self._service_to_dto(r) for r in rows]

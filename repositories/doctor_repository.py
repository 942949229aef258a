"""
Doctor Repository - Data access layer for doctors and their images
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Doctor, DoctorImage, DoctorMedicalSpecialty, Hospital
from domain.enums import ApprovalStatus, DoctorImageType, Gender


class DoctorRepository(BaseRepository[Doctor]):
    """Repository for doctor data access"""

    def __init__(self, db: Session):
        super().__init__(db, Doctor)

    def search(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        hospital_id: Optional[UUID] = None,
        gender: Optional[Gender] = None,
        approval_status: Optional[ApprovalStatus] = None,
        stop: Optional[bool] = None,
    ) -> Tuple[List[Doctor], int]:
        query = self.db.query(Doctor).join(Hospital, Doctor.hospital_id == Hospital.id)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Doctor.name["ko_KR"].as_string().ilike(pattern),
                    Doctor.license_number.ilike(pattern),
                    Doctor.description.ilike(pattern),
                    Hospital.name["ko_KR"].as_string().ilike(pattern),
                )
            )
        if hospital_id is not None:
            query = query.filter(Doctor.hospital_id == hospital_id)
        if gender is not None:
            query = query.filter(Doctor.gender == gender)
        if approval_status is not None:
            query = query.filter(Doctor.approval_status == approval_status)
        if stop is not None:
            query = query.filter(Doctor.stop == stop)
        query = query.order_by(
            Doctor.order.asc().nulls_last(), Doctor.created_at.desc(), Doctor.id.desc()
        )
        return self.paginate(query, page, page_size)

    def get_by_hospital_id(self, hospital_id: UUID) -> List[Doctor]:
        return self.db.query(Doctor).filter(Doctor.hospital_id == hospital_id).all()

    def replace_specialties(self, doctor: Doctor, specialty_ids: List[UUID]) -> None:
        doctor.specialty_links = [
            DoctorMedicalSpecialty(medical_specialty_id=sid)
            for sid in dict.fromkeys(specialty_ids)
        ]
        self.db.flush()

    def get_image(self, image_id: UUID) -> Optional[DoctorImage]:
        return self.db.get(DoctorImage, image_id)

    def get_images_by_type(
        self, doctor_id: UUID, image_type: DoctorImageType
    ) -> List[DoctorImage]:
        return (
            self.db.query(DoctorImage)
            .filter(DoctorImage.doctor_id == doctor_id, DoctorImage.image_type == image_type)
            .order_by(DoctorImage.order)
            .all()
        )

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Doctor, DoctorImage
from domain.schemas.doctor_schemas import DoctorCreate, DoctorUpdate
from domain.enums import ApprovalStatus, DoctorImageType, Gender
from repositories import DoctorRepository, HospitalRepository
from services.hospital_service import HospitalService
from adapters import storage_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from app.helpers import has_any_localized_text

logger = logging.getLogger("kdoc_admin.doctors")


class DoctorService:
    @staticmethod
    def list_doctors(
        db: Session,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        hospital_id: Optional[uuid.UUID] = None,
        gender: Optional[Gender] = None,
        approval_status: Optional[ApprovalStatus] = None,
        stop: Optional[bool] = None,
    ) -> Tuple[List[Doctor], int]:
        return DoctorRepository(db).search(
            page,
            page_size,
            search=search,
            hospital_id=hospital_id,
            gender=gender,
            approval_status=approval_status,
            stop=stop,
        )

    @staticmethod
    def get_doctor(db: Session, doctor_id: uuid.UUID) -> Doctor:
        doctor = DoctorRepository(db).get_by_id(doctor_id)
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    @staticmethod
    def _check_hospital(db: Session, hospital_id: uuid.UUID) -> None:
        if not HospitalRepository(db).exists(hospital_id):
            raise ServiceValidationError("Hospital not found")

    @staticmethod
    def create_doctor(db: Session, payload: DoctorCreate) -> Doctor:
        """
        Create a doctor and its specialty links in one transaction.

        The hospital must exist and every specialty must exist and be active.
        New doctors are PENDING and not stopped.
        """
        if not has_any_localized_text(payload.name):
            raise ServiceValidationError("Doctor name is required")
        DoctorService._check_hospital(db, payload.hospital_id)
        HospitalService.validate_specialties(db, payload.medical_specialty_ids)

        repo = DoctorRepository(db)
        try:
            doctor = Doctor(
                **payload.model_dump(exclude={"medical_specialty_ids"}),
                stop=False,
                approval_status=ApprovalStatus.PENDING,
                view_count=0,
                bookmark_count=0,
            )
            repo.create(doctor, commit=False)
            repo.replace_specialties(doctor, payload.medical_specialty_ids)
            db.commit()
            db.refresh(doctor)
        except Exception:
            db.rollback()
            logger.exception("Error creating doctor")
            raise
        logger.info("Created doctor %s for hospital %s", doctor.id, doctor.hospital_id)
        return doctor

    @staticmethod
    def update_doctor(db: Session, doctor_id: uuid.UUID, payload: DoctorUpdate) -> Doctor:
        doctor = DoctorService.get_doctor(db, doctor_id)
        data = payload.model_dump(exclude_unset=True)
        specialty_ids = data.pop("medical_specialty_ids", None)

        if "name" in data and not has_any_localized_text(data["name"]):
            raise ServiceValidationError("Doctor name is required")
        for key in ("stop", "approval_status"):
            if key in data and data[key] is None:
                data.pop(key)
        if data.get("hospital_id") is not None and data["hospital_id"] != doctor.hospital_id:
            DoctorService._check_hospital(db, data["hospital_id"])
        elif "hospital_id" in data and data["hospital_id"] is None:
            data.pop("hospital_id")
        if specialty_ids is not None:
            HospitalService.validate_specialties(db, specialty_ids)

        repo = DoctorRepository(db)
        try:
            for field, value in data.items():
                setattr(doctor, field, value)
            if specialty_ids is not None:
                repo.replace_specialties(doctor, specialty_ids)
            db.commit()
            db.refresh(doctor)
        except Exception:
            db.rollback()
            logger.exception("Error updating doctor %s", doctor_id)
            raise
        return doctor

    @staticmethod
    def delete_doctor(db: Session, doctor_id: uuid.UUID) -> None:
        doctor = DoctorService.get_doctor(db, doctor_id)
        stored_paths = [img.path for img in doctor.images]
        try:
            # images and specialty links are removed by the cascade
            db.delete(doctor)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting doctor %s", doctor_id)
            raise
        for path in stored_paths:
            storage_adapter.delete_file(path)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    @staticmethod
    def add_image(
        db: Session,
        doctor_id: uuid.UUID,
        image_type: DoctorImageType,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
        alt: Optional[str] = None,
        order: int = 0,
    ) -> DoctorImage:
        """Store a doctor image; a new PROFILE image replaces the previous one."""
        repo = DoctorRepository(db)
        DoctorService.get_doctor(db, doctor_id)
        stored = storage_adapter.upload_image(
            f"doctors/{doctor_id}/{image_type.value.lower()}",
            filename,
            content,
            content_type,
        )

        replaced: List[str] = []
        try:
            if image_type == DoctorImageType.PROFILE:
                for old in repo.get_images_by_type(doctor_id, DoctorImageType.PROFILE):
                    replaced.append(old.path)
                    db.delete(old)
            image = DoctorImage(
                doctor_id=doctor_id,
                image_type=image_type,
                image_url=stored.url,
                path=stored.path,
                alt=alt or filename,
                order=order,
                is_active=True,
            )
            db.add(image)
            db.commit()
            db.refresh(image)
        except Exception:
            db.rollback()
            storage_adapter.delete_file(stored.path)
            logger.exception("Error saving image for doctor %s", doctor_id)
            raise

        for path in replaced:
            storage_adapter.delete_file(path)
        return image

    @staticmethod
    def delete_image(db: Session, image_id: uuid.UUID) -> None:
        repo = DoctorRepository(db)
        image = repo.get_image(image_id)
        if not image:
            raise NotFoundError("Doctor image not found")
        path = image.path
        repo.delete(image)
        storage_adapter.delete_file(path)

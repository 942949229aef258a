from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Hospital, HospitalCategory, HospitalImage, MedicalSpecialty
from domain.schemas.hospital_schemas import (
    HospitalCategoryCreate,
    HospitalCategoryUpdate,
    HospitalCreate,
    HospitalUpdate,
    MedicalSpecialtyCreate,
    MedicalSpecialtyUpdate,
)
from domain.enums import ApprovalStatus, HospitalImageType
from repositories import (
    HospitalCategoryRepository,
    HospitalRepository,
    MedicalSpecialtyRepository,
)
from adapters import storage_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from app.helpers import has_any_localized_text

logger = logging.getLogger("kdoc_admin.hospitals")


class HospitalService:
    @staticmethod
    def list_hospitals(
        db: Session,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        approval_status: Optional[ApprovalStatus] = None,
        enable_jp: Optional[bool] = None,
        has_clone: Optional[bool] = None,
    ) -> Tuple[List[Hospital], int]:
        return HospitalRepository(db).search(
            page,
            page_size,
            search=search,
            approval_status=approval_status,
            enable_jp=enable_jp,
            has_clone=has_clone,
        )

    @staticmethod
    def get_hospital(db: Session, hospital_id: uuid.UUID) -> Hospital:
        hospital = HospitalRepository(db).get_by_id(hospital_id)
        if not hospital:
            raise NotFoundError("Hospital not found")
        return hospital

    @staticmethod
    def validate_specialties(db: Session, specialty_ids: List[uuid.UUID]) -> None:
        """All ids must refer to existing, active specialties."""
        if not specialty_ids:
            return
        found = {
            s.id: s for s in MedicalSpecialtyRepository(db).get_many(specialty_ids)
        }
        missing = [str(sid) for sid in specialty_ids if sid not in found]
        if missing:
            raise ServiceValidationError(
                "Medical specialty not found", details={"missing": missing}
            )
        inactive = [str(sid) for sid, s in found.items() if not s.is_active]
        if inactive:
            raise ServiceValidationError(
                "Medical specialty is not active", details={"inactive": inactive}
            )

    @staticmethod
    def validate_categories(db: Session, category_ids: List[uuid.UUID]) -> None:
        """All ids must refer to existing, active hospital categories."""
        if not category_ids:
            return
        found = {c.id: c for c in HospitalCategoryRepository(db).get_many(category_ids)}
        missing = [str(cid) for cid in category_ids if cid not in found]
        if missing:
            raise ServiceValidationError(
                "Hospital category not found", details={"missing": missing}
            )
        inactive = [str(cid) for cid, c in found.items() if not c.is_active]
        if inactive:
            raise ServiceValidationError(
                "Hospital category is not active", details={"inactive": inactive}
            )

    @staticmethod
    def create_hospital(db: Session, payload: HospitalCreate) -> Hospital:
        """
        Register a hospital with its specialty and category links in one transaction.

        Counters start at zero and the approval status at PENDING.

        Raises:
            ServiceValidationError: empty name, unknown specialty or category
        """
        if not has_any_localized_text(payload.name):
            raise ServiceValidationError("Hospital name is required")
        HospitalService.validate_specialties(db, payload.medical_specialty_ids)
        HospitalService.validate_categories(db, payload.hospital_category_ids)

        repo = HospitalRepository(db)
        try:
            hospital = Hospital(
                **payload.model_dump(
                    exclude={"medical_specialty_ids", "hospital_category_ids"}
                ),
                approval_status=ApprovalStatus.PENDING,
                review_count=0,
                view_count=0,
                bookmark_count=0,
            )
            repo.create(hospital, commit=False)
            repo.replace_specialties(hospital, payload.medical_specialty_ids)
            repo.replace_categories(hospital, payload.hospital_category_ids)
            db.commit()
            db.refresh(hospital)
        except Exception:
            db.rollback()
            logger.exception("Error creating hospital")
            raise
        logger.info("Created hospital %s", hospital.id)
        return hospital

    @staticmethod
    def update_hospital(
        db: Session, hospital_id: uuid.UUID, payload: HospitalUpdate
    ) -> Hospital:
        hospital = HospitalService.get_hospital(db, hospital_id)
        data = payload.model_dump(exclude_unset=True)
        specialty_ids = data.pop("medical_specialty_ids", None)
        category_ids = data.pop("hospital_category_ids", None)

        if "name" in data and not has_any_localized_text(data["name"]):
            raise ServiceValidationError("Hospital name is required")
        for key in ("rating", "approval_status", "enable_jp", "has_clone"):
            if key in data and data[key] is None:
                data.pop(key)
        if specialty_ids is not None:
            HospitalService.validate_specialties(db, specialty_ids)
        if category_ids is not None:
            HospitalService.validate_categories(db, category_ids)

        repo = HospitalRepository(db)
        try:
            for field, value in data.items():
                setattr(hospital, field, value)
            if specialty_ids is not None:
                repo.replace_specialties(hospital, specialty_ids)
            if category_ids is not None:
                repo.replace_categories(hospital, category_ids)
            db.commit()
            db.refresh(hospital)
        except Exception:
            db.rollback()
            logger.exception("Error updating hospital %s", hospital_id)
            raise
        return hospital

    @staticmethod
    def delete_hospital(db: Session, hospital_id: uuid.UUID) -> None:
        """
        Delete a hospital together with everything that hangs off it.

        One transaction removes consultation messages and memos of its rooms,
        its images, specialty and category links, its doctors (with their images and
        links) and its reviews (with their images), then the hospital row.
        Stored image objects are removed after the commit.
        """
        repo = HospitalRepository(db)
        hospital = HospitalService.get_hospital(db, hospital_id)

        stored_paths = [img.path for img in hospital.images]
        for doctor in hospital.doctors:
            stored_paths.extend(img.path for img in doctor.images)
        for review in hospital.reviews:
            stored_paths.extend(img.path for img in review.images)

        try:
            repo.delete_room_data(hospital_id)
            # images, links, doctors and reviews go through the cascade
            db.delete(hospital)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting hospital %s", hospital_id)
            raise

        for path in stored_paths:
            storage_adapter.delete_file(path)
        logger.info("Deleted hospital %s", hospital_id)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    @staticmethod
    def get_images(db: Session, hospital_id: uuid.UUID) -> List[HospitalImage]:
        HospitalService.get_hospital(db, hospital_id)
        return HospitalRepository(db).get_images(hospital_id)

    @staticmethod
    def add_image(
        db: Session,
        hospital_id: uuid.UUID,
        image_type: HospitalImageType,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
        alt: Optional[str] = None,
        order: int = 0,
    ) -> HospitalImage:
        HospitalService.get_hospital(db, hospital_id)
        stored = storage_adapter.upload_image(
            f"hospitals/{hospital_id}/{image_type.value.lower()}",
            filename,
            content,
            content_type,
        )
        image = HospitalImage(
            hospital_id=hospital_id,
            image_type=image_type,
            image_url=stored.url,
            path=stored.path,
            alt=alt or filename,
            order=order,
            is_active=True,
        )
        try:
            return HospitalRepository(db).create(image)
        except Exception:
            db.rollback()
            storage_adapter.delete_file(stored.path)
            raise

    @staticmethod
    def delete_image(db: Session, hospital_id: uuid.UUID, image_id: uuid.UUID) -> None:
        repo = HospitalRepository(db)
        image = repo.get_image(hospital_id, image_id)
        if not image:
            raise NotFoundError("Hospital image not found")
        path = image.path
        repo.delete(image)
        storage_adapter.delete_file(path)


class MedicalSpecialtyService:
    @staticmethod
    def list_specialties(
        db: Session, is_active: Optional[bool] = None
    ) -> List[MedicalSpecialty]:
        return MedicalSpecialtyRepository(db).list_all(is_active)

    @staticmethod
    def get_specialty(db: Session, specialty_id: uuid.UUID) -> MedicalSpecialty:
        specialty = MedicalSpecialtyRepository(db).get_by_id(specialty_id)
        if not specialty:
            raise NotFoundError("Medical specialty not found")
        return specialty

    @staticmethod
    def _check_parent(db: Session, parent_id: Optional[uuid.UUID]) -> None:
        if parent_id is not None and not MedicalSpecialtyRepository(db).exists(parent_id):
            raise ServiceValidationError("Parent medical specialty not found")

    @staticmethod
    def create_specialty(db: Session, payload: MedicalSpecialtyCreate) -> MedicalSpecialty:
        if not has_any_localized_text(payload.name):
            raise ServiceValidationError("Medical specialty name is required")
        MedicalSpecialtyService._check_parent(db, payload.parent_id)
        specialty = MedicalSpecialty(**payload.model_dump())
        return MedicalSpecialtyRepository(db).create(specialty)

    @staticmethod
    def update_specialty(
        db: Session, specialty_id: uuid.UUID, payload: MedicalSpecialtyUpdate
    ) -> MedicalSpecialty:
        specialty = MedicalSpecialtyService.get_specialty(db, specialty_id)
        data = payload.model_dump(exclude_unset=True)
        if "name" in data and not has_any_localized_text(data["name"]):
            raise ServiceValidationError("Medical specialty name is required")
        for key in ("specialty_type", "order", "is_active"):
            if key in data and data[key] is None:
                data.pop(key)
        if data.get("parent_id") is not None:
            if data["parent_id"] == specialty_id:
                raise ServiceValidationError("A specialty cannot be its own parent")
            MedicalSpecialtyService._check_parent(db, data["parent_id"])
        for field, value in data.items():
            setattr(specialty, field, value)
        return MedicalSpecialtyRepository(db).update(specialty)

    @staticmethod
    def delete_specialty(db: Session, specialty_id: uuid.UUID) -> None:
        repo = MedicalSpecialtyRepository(db)
        specialty = MedicalSpecialtyService.get_specialty(db, specialty_id)
        if repo.is_in_use(specialty_id):
            raise ServiceValidationError(
                "Medical specialty is still used by hospitals, doctors, reviews "
                "or child specialties"
            )
        repo.delete(specialty)


class HospitalCategoryService:
    @staticmethod
    def list_categories(
        db: Session, is_active: Optional[bool] = None
    ) -> List[Tuple[HospitalCategory, int]]:
        """Categories with their hospital counts, unordered ones last."""
        return HospitalCategoryRepository(db).list_with_counts(is_active)

    @staticmethod
    def get_category(db: Session, category_id: uuid.UUID) -> HospitalCategory:
        category = HospitalCategoryRepository(db).get_by_id(category_id)
        if not category:
            raise NotFoundError("Hospital category not found")
        return category

    @staticmethod
    def count_hospitals(db: Session, category_id: uuid.UUID) -> int:
        return HospitalCategoryRepository(db).count_hospitals(category_id)

    @staticmethod
    def create_category(db: Session, payload: HospitalCategoryCreate) -> HospitalCategory:
        if not has_any_localized_text(payload.name):
            raise ServiceValidationError("Hospital category name is required")
        category = HospitalCategoryRepository(db).create(
            HospitalCategory(**payload.model_dump())
        )
        logger.info("Created hospital category %s", category.id)
        return category

    @staticmethod
    def update_category(
        db: Session, category_id: uuid.UUID, payload: HospitalCategoryUpdate
    ) -> HospitalCategory:
        category = HospitalCategoryService.get_category(db, category_id)
        data = payload.model_dump(exclude_unset=True)
        if "name" in data and not has_any_localized_text(data["name"]):
            raise ServiceValidationError("Hospital category name is required")
        if "is_active" in data and data["is_active"] is None:
            data.pop("is_active")
        for field, value in data.items():
            setattr(category, field, value)
        return HospitalCategoryRepository(db).update(category)

    @staticmethod
    def delete_category(db: Session, category_id: uuid.UUID) -> bool:
        """
        Remove a category, or deactivate it while hospitals still use it.

        Returns:
            True when the row was deleted, False when it was only deactivated
        """
        repo = HospitalCategoryRepository(db)
        category = HospitalCategoryService.get_category(db, category_id)
        if repo.count_hospitals(category_id):
            category.is_active = False
            repo.update(category)
            logger.info("Deactivated hospital category %s in use by hospitals", category_id)
            return False
        repo.delete(category)
        logger.info("Deleted hospital category %s", category_id)
        return True

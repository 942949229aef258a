"""
Hospital Repository - Data access layer for hospitals, their images, specialties and categories
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import (
    Hospital,
    HospitalCategory,
    HospitalCategoryLink,
    HospitalImage,
    HospitalMedicalSpecialty,
    MedicalSpecialty,
    ConsultationMessage,
    ConsultationMemo,
    DoctorMedicalSpecialty,
    Review,
)
from domain.enums import ApprovalStatus, HospitalImageType


class HospitalRepository(BaseRepository[Hospital]):
    """Repository for hospital data access"""

    def __init__(self, db: Session):
        super().__init__(db, Hospital)

    def search(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        approval_status: Optional[ApprovalStatus] = None,
        enable_jp: Optional[bool] = None,
        has_clone: Optional[bool] = None,
    ) -> Tuple[List[Hospital], int]:
        query = self.db.query(Hospital)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Hospital.name["ko_KR"].as_string().ilike(pattern),
                    Hospital.name["en_US"].as_string().ilike(pattern),
                )
            )
        if approval_status is not None:
            query = query.filter(Hospital.approval_status == approval_status)
        if enable_jp is not None:
            query = query.filter(Hospital.enable_jp == enable_jp)
        if has_clone is not None:
            query = query.filter(Hospital.has_clone == has_clone)
        query = query.order_by(Hospital.created_at.desc(), Hospital.id.desc())
        return self.paginate(query, page, page_size)

    def replace_specialties(self, hospital: Hospital, specialty_ids: List[UUID]) -> None:
        """Swap the hospital's specialty links; caller commits"""
        hospital.specialty_links = [
            HospitalMedicalSpecialty(medical_specialty_id=sid)
            for sid in dict.fromkeys(specialty_ids)
        ]
        self.db.flush()

    def replace_categories(self, hospital: Hospital, category_ids: List[UUID]) -> None:
        """Swap the hospital's category links; caller commits"""
        hospital.category_links = [
            HospitalCategoryLink(category_id=cid) for cid in dict.fromkeys(category_ids)
        ]
        self.db.flush()

    def delete_room_data(self, hospital_id: UUID) -> None:
        """Remove consultation messages and memos for every room of the hospital"""
        self.db.query(ConsultationMessage).filter(
            ConsultationMessage.hospital_id == hospital_id
        ).delete(synchronize_session=False)
        self.db.query(ConsultationMemo).filter(
            ConsultationMemo.hospital_id == hospital_id
        ).delete(synchronize_session=False)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def get_images(self, hospital_id: UUID, active_only: bool = True) -> List[HospitalImage]:
        query = self.db.query(HospitalImage).filter(HospitalImage.hospital_id == hospital_id)
        if active_only:
            query = query.filter(HospitalImage.is_active.is_(True))
        return query.order_by(HospitalImage.image_type, HospitalImage.order).all()

    def get_image(self, hospital_id: UUID, image_id: UUID) -> Optional[HospitalImage]:
        return (
            self.db.query(HospitalImage)
            .filter(HospitalImage.id == image_id, HospitalImage.hospital_id == hospital_id)
            .first()
        )

    def get_thumbnails(self, hospital_ids: List[UUID]) -> Dict[UUID, HospitalImage]:
        """First active THUMBNAIL image per hospital, keyed by hospital id"""
        if not hospital_ids:
            return {}
        images = (
            self.db.query(HospitalImage)
            .filter(
                HospitalImage.hospital_id.in_(set(hospital_ids)),
                HospitalImage.image_type == HospitalImageType.THUMBNAIL,
                HospitalImage.is_active.is_(True),
            )
            .order_by(HospitalImage.order, HospitalImage.created_at)
            .all()
        )
        thumbnails = {}
        for image in images:
            thumbnails.setdefault(image.hospital_id, image)
        return thumbnails


class MedicalSpecialtyRepository(BaseRepository[MedicalSpecialty]):
    """Repository for medical specialty data access"""

    def __init__(self, db: Session):
        super().__init__(db, MedicalSpecialty)

    def list_all(self, is_active: Optional[bool] = None) -> List[MedicalSpecialty]:
        query = self.db.query(MedicalSpecialty)
        if is_active is not None:
            query = query.filter(MedicalSpecialty.is_active == is_active)
        return query.order_by(MedicalSpecialty.order, MedicalSpecialty.created_at).all()

    def get_many(self, specialty_ids: List[UUID]) -> List[MedicalSpecialty]:
        if not specialty_ids:
            return []
        return (
            self.db.query(MedicalSpecialty)
            .filter(MedicalSpecialty.id.in_(set(specialty_ids)))
            .all()
        )

    def is_in_use(self, specialty_id: UUID) -> bool:
        """True when any hospital, doctor, review or child specialty still references it"""
        for model, column in (
            (HospitalMedicalSpecialty, HospitalMedicalSpecialty.medical_specialty_id),
            (DoctorMedicalSpecialty, DoctorMedicalSpecialty.medical_specialty_id),
            (Review, Review.medical_specialty_id),
            (MedicalSpecialty, MedicalSpecialty.parent_id),
        ):
            if self.db.query(model).filter(column == specialty_id).first() is not None:
                return True
        return False


class HospitalCategoryRepository(BaseRepository[HospitalCategory]):
    """Repository for hospital categories and their hospital counts"""

    def __init__(self, db: Session):
        super().__init__(db, HospitalCategory)

    def list_with_counts(
        self, is_active: Optional[bool] = None
    ) -> List[Tuple[HospitalCategory, int]]:
        counts = (
            self.db.query(
                HospitalCategoryLink.category_id,
                func.count(HospitalCategoryLink.hospital_id).label("n"),
            )
            .group_by(HospitalCategoryLink.category_id)
            .subquery()
        )
        query = self.db.query(HospitalCategory, func.coalesce(counts.c.n, 0)).outerjoin(
            counts, counts.c.category_id == HospitalCategory.id
        )
        if is_active is not None:
            query = query.filter(HospitalCategory.is_active == is_active)
        rows = query.order_by(
            HospitalCategory.order.asc().nulls_last(),
            HospitalCategory.created_at.desc(),
            HospitalCategory.id.desc(),
        ).all()
        return [(category, int(n)) for category, n in rows]

    def count_hospitals(self, category_id: UUID) -> int:
        return (
            self.db.query(func.count(HospitalCategoryLink.hospital_id))
            .filter(HospitalCategoryLink.category_id == category_id)
            .scalar()
            or 0
        )

    def get_many(self, category_ids: List[UUID]) -> List[HospitalCategory]:
        if not category_ids:
            return []
        return (
            self.db.query(HospitalCategory)
            .filter(HospitalCategory.id.in_(set(category_ids)))
            .all()
        )

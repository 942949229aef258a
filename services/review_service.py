from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Review, ReviewImage
from domain.schemas.review_schemas import (
    ReviewBatchActiveResult,
    ReviewCreate,
    ReviewUpdate,
)
from domain.enums import ReviewImageType, ReviewUserType
from repositories import (
    ReviewRepository,
    UserRepository,
    HospitalRepository,
    MedicalSpecialtyRepository,
)
from adapters import storage_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from app.helpers import decode_localized_text

logger = logging.getLogger("kdoc_admin.reviews")

MAX_IMAGES_PER_TYPE = 10


class ReviewService:
    @staticmethod
    def list_reviews(
        db: Session,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        hospital_id: Optional[uuid.UUID] = None,
        medical_specialty_id: Optional[uuid.UUID] = None,
        rating: Optional[int] = None,
        is_recommended: Optional[bool] = None,
        user_type: Optional[ReviewUserType] = None,
    ) -> Tuple[List[Review], bool]:
        """Returns (reviews, has_next)."""
        return ReviewRepository(db).search(
            page,
            limit,
            search=search,
            hospital_id=hospital_id,
            medical_specialty_id=medical_specialty_id,
            rating=rating,
            is_recommended=is_recommended,
            user_type=user_type,
        )

    @staticmethod
    def get_review(db: Session, review_id: uuid.UUID) -> Review:
        review = ReviewRepository(db).get_by_id(review_id)
        if not review:
            raise NotFoundError("Review not found")
        return review

    @staticmethod
    def _validate_rating(rating: Optional[int]) -> None:
        if rating is not None and not 1 <= rating <= 5:
            raise ServiceValidationError("Rating must be between 1 and 5")

    @staticmethod
    def _check_specialty(db: Session, specialty_id: Optional[uuid.UUID]) -> None:
        if specialty_id is not None and not MedicalSpecialtyRepository(db).exists(
            specialty_id
        ):
            raise ServiceValidationError("Medical specialty not found")

    @staticmethod
    def create_review(db: Session, payload: ReviewCreate) -> Review:
        ReviewService._validate_rating(payload.rating)
        if not UserRepository(db).exists(payload.user_id):
            raise ServiceValidationError("User not found")
        if not HospitalRepository(db).exists(payload.hospital_id):
            raise ServiceValidationError("Hospital not found")
        ReviewService._check_specialty(db, payload.medical_specialty_id)

        data = payload.model_dump()
        data["title"] = decode_localized_text(data["title"])
        data["content"] = decode_localized_text(data["content"])
        review = ReviewRepository(db).create(Review(**data, view_count=0))
        logger.info("Created review %s for hospital %s", review.id, review.hospital_id)
        return review

    @staticmethod
    def update_review(db: Session, review_id: uuid.UUID, payload: ReviewUpdate) -> Review:
        review = ReviewService.get_review(db, review_id)
        data = payload.model_dump(exclude_unset=True)
        ReviewService._validate_rating(data.get("rating"))
        if "rating" in data and data["rating"] is None:
            raise ServiceValidationError("Rating must be between 1 and 5")
        ReviewService._check_specialty(db, data.get("medical_specialty_id"))
        for key in ("is_recommended", "is_active"):
            if key in data and data[key] is None:
                data.pop(key)
        for key in ("title", "content"):
            if key in data:
                data[key] = decode_localized_text(data[key])

        for field, value in data.items():
            setattr(review, field, value)
        return ReviewRepository(db).update(review)

    @staticmethod
    def _check_is_active(is_active) -> None:
        if not isinstance(is_active, bool):
            raise ServiceValidationError("is_active is required and must be a boolean")

    @staticmethod
    def set_active_for_reviews(
        db: Session, review_ids: Optional[List[uuid.UUID]], is_active
    ) -> ReviewBatchActiveResult:
        """Show or hide the given reviews in one transaction."""
        if not review_ids:
            raise ServiceValidationError("review_ids must be a non-empty list")
        ReviewService._check_is_active(is_active)
        try:
            updated = ReviewRepository(db).set_active(is_active, review_ids=review_ids)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error updating %d reviews", len(review_ids))
            raise
        logger.info("Set is_active=%s on %d reviews", is_active, updated)
        return ReviewBatchActiveResult(updated_count=updated, is_active=is_active)

    @staticmethod
    def set_active_for_hospital(
        db: Session, hospital_id: Optional[uuid.UUID], is_active
    ) -> ReviewBatchActiveResult:
        """Show or hide every review of a hospital in one transaction."""
        if hospital_id is None:
            raise ServiceValidationError("hospital_id is required")
        ReviewService._check_is_active(is_active)
        if not HospitalRepository(db).exists(hospital_id):
            raise NotFoundError("Hospital not found")
        try:
            updated = ReviewRepository(db).set_active(is_active, hospital_id=hospital_id)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error updating reviews of hospital %s", hospital_id)
            raise
        logger.info(
            "Set is_active=%s on %d reviews of hospital %s", is_active, updated, hospital_id
        )
        return ReviewBatchActiveResult(
            updated_count=updated, is_active=is_active, hospital_id=hospital_id
        )

    @staticmethod
    def delete_review(db: Session, review_id: uuid.UUID) -> None:
        review = ReviewService.get_review(db, review_id)
        stored_paths = [img.path for img in review.images]
        try:
            # images are removed by the cascade
            db.delete(review)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting review %s", review_id)
            raise
        for path in stored_paths:
            storage_adapter.delete_file(path)

    @staticmethod
    def get_images(db: Session, review_id: uuid.UUID) -> List[ReviewImage]:
        ReviewService.get_review(db, review_id)
        return ReviewRepository(db).get_images(review_id)

    @staticmethod
    def add_image(
        db: Session,
        review_id: uuid.UUID,
        image_type: ReviewImageType,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
        alt: Optional[str] = None,
    ) -> ReviewImage:
        repo = ReviewRepository(db)
        ReviewService.get_review(db, review_id)
        existing = repo.count_images(review_id, image_type)
        if existing >= MAX_IMAGES_PER_TYPE:
            raise ServiceValidationError(
                f"A review can have at most {MAX_IMAGES_PER_TYPE} {image_type.value} images"
            )
        stored = storage_adapter.upload_image(
            f"reviews/{review_id}/{image_type.value.lower()}",
            filename,
            content,
            content_type,
        )
        image = ReviewImage(
            review_id=review_id,
            image_type=image_type,
            image_url=stored.url,
            path=stored.path,
            alt=alt or filename,
            order=existing,
            is_active=True,
        )
        try:
            return repo.create(image)
        except Exception:
            db.rollback()
            storage_adapter.delete_file(stored.path)
            raise

"""
Review Repository - Data access layer for reviews and their images
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_, and_, func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Review, ReviewImage, User, Hospital
from domain.enums import ReviewImageType, ReviewUserType
from app.helpers import INTERNAL_EMAIL_DOMAINS


def _internal_email_clause():
    email = func.lower(User.email)
    return or_(*[email.like(f"%{domain}") for domain in INTERNAL_EMAIL_DOMAINS])


class ReviewRepository(BaseRepository[Review]):
    """Repository for review data access"""

    def __init__(self, db: Session):
        super().__init__(db, Review)

    def search(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        hospital_id: Optional[UUID] = None,
        medical_specialty_id: Optional[UUID] = None,
        rating: Optional[int] = None,
        is_recommended: Optional[bool] = None,
        user_type: Optional[ReviewUserType] = None,
    ) -> Tuple[List[Review], bool]:
        """
        Fetch one page of reviews without counting the whole table.

        Reads ``limit + 1`` rows; the extra row only tells whether a next
        page exists and is not returned.

        Returns:
            (reviews, has_next)
        """
        query = (
            self.db.query(Review)
            .join(User, Review.user_id == User.id)
            .join(Hospital, Review.hospital_id == Hospital.id)
        )
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    User.name.ilike(pattern),
                    User.display_name.ilike(pattern),
                    Hospital.name["ko_KR"].as_string().ilike(pattern),
                )
            )
        if hospital_id is not None:
            query = query.filter(Review.hospital_id == hospital_id)
        if medical_specialty_id is not None:
            query = query.filter(Review.medical_specialty_id == medical_specialty_id)
        if rating is not None:
            query = query.filter(Review.rating == rating)
        if is_recommended is not None:
            query = query.filter(Review.is_recommended == is_recommended)
        if user_type == ReviewUserType.ADMIN:
            query = query.filter(_internal_email_clause())
        elif user_type == ReviewUserType.REAL:
            query = query.filter(and_(User.email.isnot(None), ~_internal_email_clause()))

        rows = (
            query.order_by(Review.created_at.desc(), Review.id.desc())
            .offset((page - 1) * limit)
            .limit(limit + 1)
            .all()
        )
        return rows[:limit], len(rows) > limit

    def set_active(
        self,
        is_active: bool,
        review_ids: Optional[List[UUID]] = None,
        hospital_id: Optional[UUID] = None,
    ) -> int:
        """Flip ``is_active`` on the selected reviews; caller commits"""
        query = self.db.query(Review)
        if review_ids is not None:
            query = query.filter(Review.id.in_(set(review_ids)))
        if hospital_id is not None:
            query = query.filter(Review.hospital_id == hospital_id)
        return query.update({Review.is_active: is_active}, synchronize_session="fetch")

    def get_images(self, review_id: UUID) -> List[ReviewImage]:
        return (
            self.db.query(ReviewImage)
            .filter(ReviewImage.review_id == review_id)
            .order_by(ReviewImage.image_type, ReviewImage.order)
            .all()
        )

    def count_images(self, review_id: UUID, image_type: ReviewImageType) -> int:
        return (
            self.db.query(func.count(ReviewImage.id))
            .filter(ReviewImage.review_id == review_id, ReviewImage.image_type == image_type)
            .scalar()
            or 0
        )

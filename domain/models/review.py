"""
Review models.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
    Integer,
    Boolean,
    CheckConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.helpers import utcnow
from domain.models.database import Base, JSONType
from domain.enums import ReviewImageType


class Review(Base):
    """Patient review of a hospital treatment"""

    __tablename__ = "reviews"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    medical_specialty_id = Column(
        Uuid, ForeignKey("medical_specialties.id", ondelete="SET NULL")
    )
    title = Column(JSONType)
    content = Column(JSONType)
    concerns = Column(Text)
    rating = Column(Integer, nullable=False)
    is_recommended = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    user = relationship("User", back_populates="reviews")
    hospital = relationship("Hospital", back_populates="reviews")
    medical_specialty = relationship("MedicalSpecialty")
    images = relationship(
        "ReviewImage",
        back_populates="review",
        order_by="ReviewImage.order",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )


class ReviewImage(Base):
    """Before/after photos attached to a review"""

    __tablename__ = "review_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    review_id = Column(
        Uuid, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_type = Column(
        SQLEnum(ReviewImageType, name="review_image_type", native_enum=False),
        nullable=False,
    )
    image_url = Column(Text, nullable=False)
    path = Column(Text)
    alt = Column(Text)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    review = relationship("Review", back_populates="images")

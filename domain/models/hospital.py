"""
Hospital, medical specialty and hospital category models.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
    Integer,
    Float,
    Boolean,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.helpers import utcnow
from domain.models.database import Base, JSONType
from domain.enums import ApprovalStatus, HospitalImageType


class MedicalSpecialty(Base):
    """Medical specialty (dermatology, plastic surgery, ...), optionally nested"""

    __tablename__ = "medical_specialties"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(JSONType, nullable=False)
    specialty_type = Column(Text, nullable=False)
    parent_id = Column(Uuid, ForeignKey("medical_specialties.id", ondelete="SET NULL"))
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class Hospital(Base):
    """Hospital listed on the platform"""

    __tablename__ = "hospitals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(JSONType, nullable=False)
    address = Column(JSONType)
    directions = Column(JSONType)
    description = Column(JSONType)
    phone_number = Column(Text)
    email = Column(Text)
    opening_hours = Column(JSONType)
    prices = Column(JSONType)
    memo = Column(Text)
    ranking = Column(Integer)
    rating = Column(Float, nullable=False, default=0)
    discount_rate = Column(Float)
    approval_status = Column(
        SQLEnum(ApprovalStatus, name="approval_status", native_enum=False),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    enable_jp = Column(Boolean, nullable=False, default=False)
    has_clone = Column(Boolean, nullable=False, default=False)
    review_count = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    bookmark_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    images = relationship(
        "HospitalImage",
        back_populates="hospital",
        order_by="HospitalImage.order",
        cascade="all, delete-orphan",
    )
    specialty_links = relationship(
        "HospitalMedicalSpecialty", back_populates="hospital", cascade="all, delete-orphan"
    )
    category_links = relationship(
        "HospitalCategoryLink", back_populates="hospital", cascade="all, delete-orphan"
    )
    doctors = relationship(
        "Doctor", back_populates="hospital", cascade="all, delete-orphan"
    )
    reviews = relationship(
        "Review", back_populates="hospital", cascade="all, delete-orphan"
    )

    @property
    def medical_specialty_ids(self):
        return [link.medical_specialty_id for link in self.specialty_links]

    @property
    def hospital_category_ids(self):
        return [link.category_id for link in self.category_links]


class HospitalImage(Base):
    """Hospital images by type; localized types carry per-locale links"""

    __tablename__ = "hospital_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_type = Column(
        SQLEnum(HospitalImageType, name="hospital_image_type", native_enum=False),
        nullable=False,
    )
    image_url = Column(Text, nullable=False)
    path = Column(Text)
    alt = Column(Text)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    localized_links = Column(JSONType)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    hospital = relationship("Hospital", back_populates="images")


class HospitalMedicalSpecialty(Base):
    """Link table between hospitals and medical specialties"""

    __tablename__ = "hospital_medical_specialties"

    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), primary_key=True
    )
    medical_specialty_id = Column(
        Uuid, ForeignKey("medical_specialties.id", ondelete="CASCADE"), primary_key=True
    )

    hospital = relationship("Hospital", back_populates="specialty_links")
    medical_specialty = relationship("MedicalSpecialty")


class HospitalCategory(Base):
    """Admin-defined grouping of hospitals shown as a filter in the apps"""

    __tablename__ = "hospital_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(JSONType, nullable=False)
    description = Column(JSONType)
    order = Column(Integer)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    hospital_links = relationship(
        "HospitalCategoryLink", back_populates="category", cascade="all, delete-orphan"
    )


class HospitalCategoryLink(Base):
    """Link table between hospitals and hospital categories"""

    __tablename__ = "hospital_category_links"

    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), primary_key=True
    )
    category_id = Column(
        Uuid, ForeignKey("hospital_categories.id", ondelete="CASCADE"), primary_key=True
    )

    hospital = relationship("Hospital", back_populates="category_links")
    category = relationship("HospitalCategory", back_populates="hospital_links")

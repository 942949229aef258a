"""
Doctor models.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    Date,
    ForeignKey,
    Uuid,
    Integer,
    Boolean,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.helpers import utcnow
from domain.models.database import Base, JSONType
from domain.enums import ApprovalStatus, DoctorImageType, Gender


class Doctor(Base):
    """Doctor working at a hospital"""

    __tablename__ = "doctors"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(JSONType, nullable=False)
    position = Column(JSONType)
    career = Column(JSONType)
    license_number = Column(Text)
    license_date = Column(Date)
    description = Column(Text)
    gender = Column(SQLEnum(Gender, name="doctor_gender", native_enum=False))
    order = Column(Integer)
    stop = Column(Boolean, nullable=False, default=False)
    approval_status = Column(
        SQLEnum(ApprovalStatus, name="doctor_approval_status", native_enum=False),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    view_count = Column(Integer, nullable=False, default=0)
    bookmark_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    hospital = relationship("Hospital", back_populates="doctors")
    images = relationship(
        "DoctorImage",
        back_populates="doctor",
        order_by="DoctorImage.order",
        cascade="all, delete-orphan",
    )
    specialty_links = relationship(
        "DoctorMedicalSpecialty", back_populates="doctor", cascade="all, delete-orphan"
    )

    @property
    def medical_specialty_ids(self):
        return [link.medical_specialty_id for link in self.specialty_links]


class DoctorImage(Base):
    """Doctor profile photo and career certificates"""

    __tablename__ = "doctor_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    doctor_id = Column(
        Uuid, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_type = Column(
        SQLEnum(DoctorImageType, name="doctor_image_type", native_enum=False),
        nullable=False,
    )
    image_url = Column(Text, nullable=False)
    path = Column(Text)
    alt = Column(Text)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    doctor = relationship("Doctor", back_populates="images")


class DoctorMedicalSpecialty(Base):
    __tablename__ = "doctor_medical_specialties"

    doctor_id = Column(Uuid, ForeignKey("doctors.id", ondelete="CASCADE"), primary_key=True)
    medical_specialty_id = Column(
        Uuid, ForeignKey("medical_specialties.id", ondelete="CASCADE"), primary_key=True
    )

    doctor = relationship("Doctor", back_populates="specialty_links")
    medical_specialty = relationship("MedicalSpecialty")

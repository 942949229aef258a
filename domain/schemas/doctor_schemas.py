from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from domain.enums import ApprovalStatus, DoctorImageType, Gender
from domain.schemas.common import LocalizedText, HospitalBrief


class DoctorCreate(BaseModel):
    hospital_id: UUID
    name: LocalizedText
    position: Optional[LocalizedText] = None
    career: Optional[LocalizedText] = None
    license_number: Optional[str] = None
    license_date: Optional[date] = None
    description: Optional[str] = None
    gender: Optional[Gender] = None
    order: Optional[int] = Field(None, ge=0)
    medical_specialty_ids: List[UUID] = Field(default_factory=list)


class DoctorUpdate(BaseModel):
    hospital_id: Optional[UUID] = None
    name: Optional[LocalizedText] = None
    position: Optional[LocalizedText] = None
    career: Optional[LocalizedText] = None
    license_number: Optional[str] = None
    license_date: Optional[date] = None
    description: Optional[str] = None
    gender: Optional[Gender] = None
    order: Optional[int] = Field(None, ge=0)
    stop: Optional[bool] = None
    approval_status: Optional[ApprovalStatus] = None
    medical_specialty_ids: Optional[List[UUID]] = None


class DoctorImageResponse(BaseModel):
    id: UUID
    doctor_id: UUID
    image_type: DoctorImageType
    image_url: str
    path: Optional[str]
    alt: Optional[str]
    order: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class DoctorResponse(BaseModel):
    id: UUID
    hospital_id: UUID
    hospital: Optional[HospitalBrief] = None
    name: LocalizedText
    position: Optional[LocalizedText]
    career: Optional[LocalizedText]
    license_number: Optional[str]
    license_date: Optional[date]
    description: Optional[str]
    gender: Optional[Gender]
    order: Optional[int]
    stop: bool
    approval_status: ApprovalStatus
    view_count: int
    bookmark_count: int
    medical_specialty_ids: List[UUID] = []
    images: List[DoctorImageResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from domain.enums import ApprovalStatus, HospitalImageType
from domain.schemas.common import LocalizedText


class MedicalSpecialtyCreate(BaseModel):
    name: LocalizedText
    specialty_type: str = Field(..., min_length=1, max_length=100)
    parent_id: Optional[UUID] = None
    order: int = Field(default=0, ge=0)
    is_active: bool = True


class MedicalSpecialtyUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    specialty_type: Optional[str] = Field(None, min_length=1, max_length=100)
    parent_id: Optional[UUID] = None
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class MedicalSpecialtyResponse(BaseModel):
    id: UUID
    name: LocalizedText
    specialty_type: str
    parent_id: Optional[UUID]
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class HospitalCategoryCreate(BaseModel):
    name: LocalizedText
    description: Optional[LocalizedText] = None
    order: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class HospitalCategoryUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class HospitalCategoryResponse(BaseModel):
    id: UUID
    name: LocalizedText
    description: Optional[LocalizedText]
    order: Optional[int]
    is_active: bool
    hospital_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class HospitalCategoryDeleteResult(BaseModel):
    """Categories still linked to hospitals are deactivated instead of removed"""

    id: UUID
    deleted: bool
    deactivated: bool = False


class HospitalCreate(BaseModel):
    """Payload for registering a hospital. New hospitals start as PENDING."""

    name: LocalizedText
    address: Optional[LocalizedText] = None
    directions: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    opening_hours: Optional[Dict[str, Any]] = None
    prices: Optional[Dict[str, Any]] = None
    memo: Optional[str] = None
    ranking: Optional[int] = Field(None, ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    discount_rate: Optional[float] = Field(None, ge=0, le=100)
    enable_jp: bool = False
    has_clone: bool = False
    medical_specialty_ids: List[UUID] = Field(default_factory=list)
    hospital_category_ids: List[UUID] = Field(default_factory=list)


class HospitalUpdate(BaseModel):
    """Partial update; only fields present in the request are written."""

    name: Optional[LocalizedText] = None
    address: Optional[LocalizedText] = None
    directions: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    opening_hours: Optional[Dict[str, Any]] = None
    prices: Optional[Dict[str, Any]] = None
    memo: Optional[str] = None
    ranking: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    discount_rate: Optional[float] = Field(None, ge=0, le=100)
    approval_status: Optional[ApprovalStatus] = None
    enable_jp: Optional[bool] = None
    has_clone: Optional[bool] = None
    medical_specialty_ids: Optional[List[UUID]] = None
    hospital_category_ids: Optional[List[UUID]] = None


class HospitalImageResponse(BaseModel):
    id: UUID
    hospital_id: UUID
    image_type: HospitalImageType
    image_url: str
    path: Optional[str]
    alt: Optional[str]
    order: int
    is_active: bool
    localized_links: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class HospitalSummary(BaseModel):
    """Row of the hospital list"""

    id: UUID
    name: LocalizedText
    address: Optional[LocalizedText]
    phone_number: Optional[str]
    ranking: Optional[int]
    rating: float
    approval_status: ApprovalStatus
    enable_jp: bool
    has_clone: bool
    review_count: int
    view_count: int
    bookmark_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class HospitalResponse(HospitalSummary):
    directions: Optional[LocalizedText]
    description: Optional[LocalizedText]
    email: Optional[str]
    opening_hours: Optional[Dict[str, Any]]
    prices: Optional[Dict[str, Any]]
    memo: Optional[str]
    discount_rate: Optional[float]
    medical_specialty_ids: List[UUID] = []
    hospital_category_ids: List[UUID] = []
    images: List[HospitalImageResponse] = []

from pydantic import BaseModel, Field
from typing import Any, Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import ReviewImageType
from domain.schemas.common import LocalizedText, UserBrief, HospitalBrief


class ReviewCreate(BaseModel):
    user_id: UUID
    hospital_id: UUID
    medical_specialty_id: Optional[UUID] = None
    title: Optional[LocalizedText] = None
    content: Optional[LocalizedText] = None
    concerns: Optional[str] = None
    rating: int
    is_recommended: bool = True
    is_active: bool = True


class ReviewUpdate(BaseModel):
    medical_specialty_id: Optional[UUID] = None
    title: Optional[LocalizedText] = None
    content: Optional[LocalizedText] = None
    concerns: Optional[str] = None
    rating: Optional[int] = None
    is_recommended: Optional[bool] = None
    is_active: Optional[bool] = None


class ReviewBatchActiveRequest(BaseModel):
    """Fields are checked by the service so a bad body answers 400"""

    review_ids: Optional[List[UUID]] = None
    is_active: Any = None


class ReviewHospitalBatchActiveRequest(BaseModel):
    hospital_id: Optional[UUID] = None
    is_active: Any = None


class ReviewBatchActiveResult(BaseModel):
    updated_count: int
    is_active: bool
    hospital_id: Optional[UUID] = None


class ReviewImageResponse(BaseModel):
    id: UUID
    review_id: UUID
    image_type: ReviewImageType
    image_url: str
    path: Optional[str]
    alt: Optional[str]
    order: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ReviewResponse(BaseModel):
    id: UUID
    user_id: UUID
    hospital_id: UUID
    medical_specialty_id: Optional[UUID]
    user: Optional[UserBrief] = None
    hospital: Optional[HospitalBrief] = None
    title: Optional[LocalizedText]
    content: Optional[LocalizedText]
    concerns: Optional[str]
    rating: int
    is_recommended: bool
    is_active: bool
    view_count: int
    images: List[ReviewImageResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReviewPage(BaseModel):
    """Review list page; no total count, has_next comes from a look-ahead row"""

    items: List[ReviewResponse]
    page: int = Field(..., ge=1)
    limit: int
    has_next: bool
    has_prev: bool

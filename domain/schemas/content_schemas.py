from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import BannerType, NoticeType
from domain.schemas.common import LocalizedText


# ---------------------------------------------------------------------------
# Event banners
# ---------------------------------------------------------------------------


class BannerCreate(BaseModel):
    """Banner payload. Title keys are short language codes (ko, en, th, zh, ja, hi)."""

    title: LocalizedText
    link_url: Optional[str] = None
    order: int = 0
    is_active: bool = True
    type: BannerType = BannerType.MAIN
    start_date: datetime
    end_date: Optional[datetime] = None


class BannerUpdate(BaseModel):
    title: Optional[LocalizedText] = None
    link_url: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None
    type: Optional[BannerType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class BannerImageResponse(BaseModel):
    id: UUID
    banner_id: UUID
    locale: str
    image_url: str
    path: Optional[str]
    alt: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BannerResponse(BaseModel):
    id: UUID
    title: LocalizedText
    link_url: Optional[str]
    order: int
    is_active: bool
    type: BannerType
    start_date: datetime
    end_date: Optional[datetime]
    images: List[BannerImageResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------


class NoticeCreate(BaseModel):
    title: LocalizedText
    content: LocalizedText
    type: NoticeType = NoticeType.GENERAL
    is_active: bool = True
    created_by: Optional[str] = None


class NoticeUpdate(BaseModel):
    title: Optional[LocalizedText] = None
    content: Optional[LocalizedText] = None
    type: Optional[NoticeType] = None
    is_active: Optional[bool] = None
    updated_by: Optional[str] = None


class NoticeFileResponse(BaseModel):
    id: UUID
    notice_id: UUID
    file_name: str
    file_url: str
    path: Optional[str]
    mime_type: Optional[str]
    file_size: Optional[int]
    created_at: datetime

    model_config = {"from_attributes": True}


class NoticeResponse(BaseModel):
    id: UUID
    title: LocalizedText
    content: LocalizedText
    type: NoticeType
    is_active: bool
    created_by: Optional[str]
    updated_by: Optional[str]
    files: List[NoticeFileResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# YouTube videos
# ---------------------------------------------------------------------------


class YoutubeVideoCategoryCreate(BaseModel):
    name: LocalizedText
    description: Optional[LocalizedText] = None
    order: int = Field(default=0, ge=0)
    is_active: bool = True


class YoutubeVideoCategoryUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class YoutubeVideoCategoryResponse(BaseModel):
    id: UUID
    name: LocalizedText
    description: Optional[LocalizedText]
    order: int
    is_active: bool
    video_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class YoutubeVideoCategoryBrief(BaseModel):
    id: UUID
    name: LocalizedText

    model_config = {"from_attributes": True}


class YoutubeVideoCreate(BaseModel):
    category_id: UUID
    title: LocalizedText
    description: Optional[LocalizedText] = None
    video_url: LocalizedText
    order: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class YoutubeVideoUpdate(BaseModel):
    category_id: Optional[UUID] = None
    title: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    video_url: Optional[LocalizedText] = None
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class YoutubeVideoThumbnailResponse(BaseModel):
    id: UUID
    video_id: UUID
    locale: str
    image_url: str
    path: Optional[str]
    alt: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class YoutubeVideoResponse(BaseModel):
    id: UUID
    category_id: UUID
    category: Optional[YoutubeVideoCategoryBrief] = None
    title: LocalizedText
    description: Optional[LocalizedText]
    video_url: LocalizedText
    order: Optional[int]
    is_active: bool
    thumbnails: List[YoutubeVideoThumbnailResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

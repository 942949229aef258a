from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import UserStatus, UserRole, Gender


class UserCreate(BaseModel):
    email: EmailStr
    phone_number: Optional[str] = None
    name: Optional[str] = Field(None, max_length=100)
    display_name: Optional[str] = Field(None, max_length=100)
    nick_name: Optional[str] = Field(None, max_length=20)
    locale: Optional[str] = None
    gender: Optional[Gender] = None
    role: UserRole = UserRole.USER
    user_status: UserStatus = UserStatus.ACTIVE


class UserUpdate(BaseModel):
    phone_number: Optional[str] = None
    name: Optional[str] = Field(None, max_length=100)
    display_name: Optional[str] = Field(None, max_length=100)
    nick_name: Optional[str] = Field(None, max_length=20)
    locale: Optional[str] = None
    gender: Optional[Gender] = None
    role: Optional[UserRole] = None
    user_status: Optional[UserStatus] = None


class UserResponse(BaseModel):
    id: UUID
    email: str
    phone_number: Optional[str]
    name: Optional[str]
    display_name: Optional[str]
    nick_name: Optional[str]
    locale: Optional[str]
    gender: Optional[Gender]
    role: UserRole
    user_status: UserStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkStatusRequest(BaseModel):
    user_ids: List[UUID] = Field(default_factory=list)
    status: UserStatus


class BulkStatusResult(BaseModel):
    updated: int
    status: UserStatus


class UserStats(BaseModel):
    """Counts over real accounts (staff seed domains excluded)"""

    total: int
    active: int
    inactive: int
    suspended: int
    deleted: int
    new_this_month: int
    new_this_week: int


class NicknameBackfillResult(BaseModel):
    success: int
    failed: int
    errors: List[str] = []

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import SenderType, InvitationCodeKind
from domain.schemas.common import LocalizedText, UserBrief


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


class SendMessageRequest(BaseModel):
    # Presence is checked by the service so the caller gets a 400, not a 422
    hospital_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    content: Optional[str] = None
    sender_type: Optional[SenderType] = None


class MessageUpdateRequest(BaseModel):
    content: Optional[str] = None
    hospital_id: Optional[UUID] = None
    user_id: Optional[UUID] = None


class MessageResponse(BaseModel):
    id: UUID
    hospital_id: UUID
    user_id: UUID
    content: str
    sender_type: SenderType
    created_at: datetime
    user_name: Optional[str] = None

    model_config = {"from_attributes": True}


class ChatHistoryResponse(BaseModel):
    """One page of a room's history, oldest message first"""

    messages: List[MessageResponse]
    has_more: bool
    next_cursor: Optional[str] = None


class ChatRoomResponse(BaseModel):
    hospital_id: UUID
    user_id: UUID
    hospital_name: LocalizedText
    hospital_thumbnail_url: Optional[str] = None
    last_message_content: str
    last_message_date: datetime
    last_message_sender_type: SenderType
    user_display_name: str
    unread_count: int = 0


class RoomInfoResponse(BaseModel):
    hospital_name: str
    user_name: str


# ---------------------------------------------------------------------------
# Memos
# ---------------------------------------------------------------------------


class MemoCreate(BaseModel):
    hospital_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    content: Optional[str] = None
    created_by: Optional[UUID] = None


class MemoUpdate(BaseModel):
    content: Optional[str] = None
    is_pinned: Optional[bool] = None
    is_completed: Optional[bool] = None


class MemoActionRequest(BaseModel):
    action: str


class MemoResponse(BaseModel):
    id: UUID
    hospital_id: UUID
    user_id: UUID
    content: str
    is_pinned: bool
    is_completed: bool
    created_by: Optional[UUID]
    creator: Optional[UserBrief] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Invitation codes
# ---------------------------------------------------------------------------


class InvitationCodeCreate(BaseModel):
    kind: Optional[str] = None
    expires_in_days: Optional[int] = None


class InvitationCodeUser(BaseModel):
    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None

    model_config = {"from_attributes": True}


class InvitationCodeResponse(BaseModel):
    id: UUID
    code: str
    kind: InvitationCodeKind
    expires_at: Optional[datetime]
    created_at: datetime
    used_by: Optional[InvitationCodeUser] = None

    model_config = {"from_attributes": True}

"""Consultation chat and memo routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.schemas.common import DeleteResult
from domain.schemas.consultation_schemas import (
    ChatHistoryResponse,
    ChatRoomResponse,
    MemoActionRequest,
    MemoCreate,
    MemoResponse,
    MemoUpdate,
    MessageResponse,
    MessageUpdateRequest,
    RoomInfoResponse,
    SendMessageRequest,
)
from services.consultation_service import ConsultationService, ConsultationMemoService
from api.responses import APIResponse, success_response

router = APIRouter(prefix="/consultations", tags=["Consultations"])
logger = logging.getLogger("kdoc_admin.api.consultations")


@router.get("/chat-rooms", response_model=APIResponse[List[ChatRoomResponse]])
def get_chat_rooms(db: Session = Depends(get_db_session)):
    """One entry per (hospital, user) room, most recently active first."""
    return success_response(data=ConsultationService.get_chat_rooms(db))


@router.get("/chat-history", response_model=APIResponse[ChatHistoryResponse])
def get_chat_history(
    hospital_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    limit: Optional[int] = Query(None, description="Page size, 1 to 100 (default 50)"),
    cursor: Optional[str] = Query(
        None, description="next_cursor of the previous page (ISO-8601 timestamp)"
    ),
    db: Session = Depends(get_db_session),
):
    """
    **Read a room's history backwards in time.**

    Messages come back oldest first. Pass the returned ``next_cursor`` to
    load the page before it; ``has_more`` is false on the oldest page.
    """
    history = ConsultationService.get_chat_history(
        db, hospital_id, user_id, limit=limit, cursor=cursor
    )
    return success_response(data=history)


@router.get("/room-info", response_model=APIResponse[RoomInfoResponse])
def get_room_info(
    hospital_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    db: Session = Depends(get_db_session),
):
    return success_response(data=ConsultationService.get_room_info(db, hospital_id, user_id))


@router.post(
    "/send-message",
    response_model=APIResponse[MessageResponse],
    status_code=status.HTTP_201_CREATED,
)
def send_message(payload: SendMessageRequest, db: Session = Depends(get_db_session)):
    message = ConsultationService.send_message(db, payload)
    return success_response(data=message, message="Message sent")


@router.patch("/messages/{message_id}", response_model=APIResponse[MessageResponse])
def update_message(
    message_id: UUID,
    payload: MessageUpdateRequest,
    db: Session = Depends(get_db_session),
):
    """Edit an admin message. User messages cannot be edited (403)."""
    message = ConsultationService.update_message(
        db,
        message_id,
        payload.content,
        hospital_id=payload.hospital_id,
        user_id=payload.user_id,
    )
    return success_response(data=message)


@router.delete("/messages/{message_id}", response_model=APIResponse[DeleteResult])
def delete_message(
    message_id: UUID,
    hospital_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    db: Session = Depends(get_db_session),
):
    ConsultationService.delete_message(
        db, message_id, hospital_id=hospital_id, user_id=user_id
    )
    return success_response(data=DeleteResult(id=message_id))


# ---------------------------------------------------------------------------
# Memos
# ---------------------------------------------------------------------------


@router.get("/memos", response_model=APIResponse[List[MemoResponse]])
def list_memos(
    hospital_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    db: Session = Depends(get_db_session),
):
    memos = ConsultationMemoService.list_memos(db, hospital_id, user_id)
    return success_response(data=[MemoResponse.model_validate(m) for m in memos])


@router.post(
    "/memos", response_model=APIResponse[MemoResponse], status_code=status.HTTP_201_CREATED
)
def create_memo(payload: MemoCreate, db: Session = Depends(get_db_session)):
    memo = ConsultationMemoService.create_memo(db, payload)
    return success_response(data=MemoResponse.model_validate(memo))


@router.put("/memos/{memo_id}", response_model=APIResponse[MemoResponse])
def update_memo(memo_id: UUID, payload: MemoUpdate, db: Session = Depends(get_db_session)):
    memo = ConsultationMemoService.update_memo(db, memo_id, payload)
    return success_response(data=MemoResponse.model_validate(memo))


@router.patch("/memos/{memo_id}", response_model=APIResponse[MemoResponse])
def apply_memo_action(
    memo_id: UUID, payload: MemoActionRequest, db: Session = Depends(get_db_session)
):
    """Toggle a memo flag: ``toggle_pin`` or ``toggle_complete``."""
    memo = ConsultationMemoService.apply_action(db, memo_id, payload.action)
    return success_response(data=MemoResponse.model_validate(memo))


@router.delete("/memos/{memo_id}", response_model=APIResponse[DeleteResult])
def delete_memo(memo_id: UUID, db: Session = Depends(get_db_session)):
    ConsultationMemoService.delete_memo(db, memo_id)
    return success_response(data=DeleteResult(id=memo_id))

"""
Consultation service: admin side of the hospital/user chat rooms.

A room is identified by the (hospital_id, user_id) pair; it exists as soon
as one message has been sent. History is read with keyset pagination on
``created_at`` so that new messages arriving while staff scroll back do
not shift the pages.
"""

from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import ConsultationMessage, ConsultationMemo, User
from domain.schemas.consultation_schemas import (
    ChatHistoryResponse,
    ChatRoomResponse,
    MemoCreate,
    MemoUpdate,
    MessageResponse,
    RoomInfoResponse,
    SendMessageRequest,
)
from domain.enums import MemoAction, SenderType
from repositories import (
    ConsultationMessageRepository,
    ConsultationMemoRepository,
    HospitalRepository,
    UserRepository,
)
from app.config import settings
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from app.helpers import as_utc, get_first_available_text, get_localized_text

logger = logging.getLogger("kdoc_admin.consultations")


def _user_name(user: Optional[User], fallback: str) -> str:
    if user is None:
        return fallback
    return user.display_name or user.name or fallback


def _parse_cursor(cursor: Optional[str]) -> Optional[datetime]:
    if not cursor:
        return None
    try:
        parsed = datetime.fromisoformat(cursor.replace("Z", "+00:00"))
    except ValueError as e:
        raise ServiceValidationError("Invalid cursor") from e
    return as_utc(parsed)


def _to_message_response(message: ConsultationMessage) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        hospital_id=message.hospital_id,
        user_id=message.user_id,
        content=message.content,
        sender_type=message.sender_type,
        created_at=as_utc(message.created_at),
        user_name=_user_name(message.user, "User"),
    )


class ConsultationService:
    @staticmethod
    def get_chat_rooms(db: Session) -> List[ChatRoomResponse]:
        latest = ConsultationMessageRepository(db).get_latest_per_room()
        thumbnails = HospitalRepository(db).get_thumbnails([m.hospital_id for m in latest])
        rooms = []
        for message in latest:
            thumbnail = thumbnails.get(message.hospital_id)
            rooms.append(
                ChatRoomResponse(
                    hospital_id=message.hospital_id,
                    user_id=message.user_id,
                    hospital_name=message.hospital.name if message.hospital else {},
                    hospital_thumbnail_url=thumbnail.image_url if thumbnail else None,
                    last_message_content=message.content,
                    last_message_date=as_utc(message.created_at),
                    last_message_sender_type=message.sender_type,
                    user_display_name=_user_name(message.user, "Anonymous"),
                    unread_count=0,
                )
            )
        return rooms

    @staticmethod
    def get_chat_history(
        db: Session,
        hospital_id: Optional[uuid.UUID],
        user_id: Optional[uuid.UUID],
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> ChatHistoryResponse:
        """
        Return one page of a room's messages in chronological order.

        ``cursor`` is the ``next_cursor`` of the previous page; only messages
        strictly older than it are returned.
        """
        if hospital_id is None or user_id is None:
            raise ServiceValidationError("hospital_id and user_id are required")
        if limit is None:
            limit = settings.chat_history_default_limit
        limit = max(1, min(limit, settings.chat_history_max_limit))

        rows, has_more = ConsultationMessageRepository(db).get_history_page(
            hospital_id, user_id, limit, _parse_cursor(cursor)
        )
        messages = [_to_message_response(row) for row in reversed(rows)]
        next_cursor = None
        if has_more and messages:
            next_cursor = messages[0].created_at.isoformat()
        return ChatHistoryResponse(
            messages=messages, has_more=has_more, next_cursor=next_cursor
        )

    @staticmethod
    def get_room_info(
        db: Session, hospital_id: Optional[uuid.UUID], user_id: Optional[uuid.UUID]
    ) -> RoomInfoResponse:
        if hospital_id is None or user_id is None:
            raise ServiceValidationError("hospital_id and user_id are required")
        hospital = HospitalRepository(db).get_by_id(hospital_id)
        if not hospital:
            raise NotFoundError("Hospital not found")
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        hospital_name = get_localized_text(hospital.name, "ko_KR") or get_first_available_text(
            hospital.name
        )
        return RoomInfoResponse(
            hospital_name=hospital_name, user_name=_user_name(user, "User")
        )

    @staticmethod
    def _clean_content(content: Optional[str]) -> str:
        content = (content or "").strip()
        if not content:
            raise ServiceValidationError("Message content is required")
        if len(content) > settings.chat_message_max_length:
            raise ServiceValidationError(
                "Message content too long",
                details={"max_length": settings.chat_message_max_length},
            )
        return content

    @staticmethod
    def send_message(db: Session, payload: SendMessageRequest) -> MessageResponse:
        missing = [
            field
            for field in ("hospital_id", "user_id", "content", "sender_type")
            if getattr(payload, field) is None
        ]
        if missing:
            raise ServiceValidationError(
                "Missing required fields", details={"missing_fields": missing}
            )
        content = ConsultationService._clean_content(payload.content)
        if not HospitalRepository(db).exists(payload.hospital_id):
            raise ServiceValidationError("Hospital not found")
        if not UserRepository(db).exists(payload.user_id):
            raise ServiceValidationError("User not found")

        message = ConsultationMessageRepository(db).create(
            ConsultationMessage(
                hospital_id=payload.hospital_id,
                user_id=payload.user_id,
                content=content,
                sender_type=payload.sender_type,
            )
        )
        logger.info(
            "%s message %s sent in room (%s, %s)",
            payload.sender_type.value,
            message.id,
            payload.hospital_id,
            payload.user_id,
        )
        return _to_message_response(message)

    @staticmethod
    def _get_admin_message(
        db: Session,
        message_id: uuid.UUID,
        hospital_id: Optional[uuid.UUID],
        user_id: Optional[uuid.UUID],
        verb: str,
    ) -> ConsultationMessage:
        message = ConsultationMessageRepository(db).find_message(
            message_id, hospital_id=hospital_id, user_id=user_id
        )
        if not message:
            raise NotFoundError("Message not found")
        if message.sender_type != SenderType.ADMIN:
            raise ForbiddenError(f"Can only {verb} admin messages")
        return message

    @staticmethod
    def update_message(
        db: Session,
        message_id: uuid.UUID,
        content: Optional[str],
        hospital_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> MessageResponse:
        message = ConsultationService._get_admin_message(
            db, message_id, hospital_id, user_id, "edit"
        )
        message.content = ConsultationService._clean_content(content)
        return _to_message_response(ConsultationMessageRepository(db).update(message))

    @staticmethod
    def delete_message(
        db: Session,
        message_id: uuid.UUID,
        hospital_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> None:
        message = ConsultationService._get_admin_message(
            db, message_id, hospital_id, user_id, "delete"
        )
        ConsultationMessageRepository(db).delete(message)
        logger.info("Deleted admin message %s", message_id)


class ConsultationMemoService:
    @staticmethod
    def list_memos(
        db: Session, hospital_id: Optional[uuid.UUID], user_id: Optional[uuid.UUID]
    ) -> List[ConsultationMemo]:
        if hospital_id is None or user_id is None:
            raise ServiceValidationError("hospital_id and user_id are required")
        return ConsultationMemoRepository(db).get_for_room(hospital_id, user_id)

    @staticmethod
    def get_memo(db: Session, memo_id: uuid.UUID) -> ConsultationMemo:
        memo = ConsultationMemoRepository(db).get_by_id(memo_id)
        if not memo:
            raise NotFoundError("Memo not found")
        return memo

    @staticmethod
    def create_memo(db: Session, payload: MemoCreate) -> ConsultationMemo:
        content = (payload.content or "").strip()
        if payload.user_id is None or payload.hospital_id is None or not content:
            raise ServiceValidationError("user_id, hospital_id and content are required")
        user_repo = UserRepository(db)
        if not HospitalRepository(db).exists(payload.hospital_id):
            raise ServiceValidationError("Hospital not found")
        if not user_repo.exists(payload.user_id):
            raise ServiceValidationError("User not found")
        if payload.created_by is not None and not user_repo.exists(payload.created_by):
            raise ServiceValidationError("Memo author not found")

        return ConsultationMemoRepository(db).create(
            ConsultationMemo(
                hospital_id=payload.hospital_id,
                user_id=payload.user_id,
                content=content,
                created_by=payload.created_by,
                is_pinned=False,
                is_completed=False,
            )
        )

    @staticmethod
    def update_memo(db: Session, memo_id: uuid.UUID, payload: MemoUpdate) -> ConsultationMemo:
        memo = ConsultationMemoService.get_memo(db, memo_id)
        if payload.content is None and payload.is_pinned is None and payload.is_completed is None:
            raise ServiceValidationError(
                "At least one of content, is_pinned or is_completed is required"
            )
        if payload.content is not None:
            content = payload.content.strip()
            if not content:
                raise ServiceValidationError("Memo content cannot be empty")
            memo.content = content
        if payload.is_pinned is not None:
            memo.is_pinned = payload.is_pinned
        if payload.is_completed is not None:
            memo.is_completed = payload.is_completed
        return ConsultationMemoRepository(db).update(memo)

    @staticmethod
    def apply_action(db: Session, memo_id: uuid.UUID, action: str) -> ConsultationMemo:
        memo = ConsultationMemoService.get_memo(db, memo_id)
        if action == MemoAction.TOGGLE_PIN.value:
            memo.is_pinned = not memo.is_pinned
        elif action == MemoAction.TOGGLE_COMPLETE.value:
            memo.is_completed = not memo.is_completed
        else:
            raise ServiceValidationError(
                "Invalid action", details={"allowed": [a.value for a in MemoAction]}
            )
        return ConsultationMemoRepository(db).update(memo)

    @staticmethod
    def delete_memo(db: Session, memo_id: uuid.UUID) -> None:
        memo = ConsultationMemoService.get_memo(db, memo_id)
        ConsultationMemoRepository(db).delete(memo)

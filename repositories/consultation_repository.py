"""
Consultation Repository - Data access layer for chat messages, memos and invitation codes
"""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import ConsultationMessage, ConsultationMemo, InvitationCode


class ConsultationMessageRepository(BaseRepository[ConsultationMessage]):
    """Repository for consultation chat messages"""

    def __init__(self, db: Session):
        super().__init__(db, ConsultationMessage)

    def get_history_page(
        self,
        hospital_id: UUID,
        user_id: UUID,
        limit: int,
        cursor: Optional[datetime] = None,
    ) -> Tuple[List[ConsultationMessage], bool]:
        """
        Keyset page of a room's history walking backwards in time.

        Reads ``limit + 1`` rows newest first starting strictly before
        ``cursor``; the extra row only signals that older messages exist.

        Returns:
            (messages newest first, has_more)
        """
        query = self.db.query(ConsultationMessage).filter(
            ConsultationMessage.hospital_id == hospital_id,
            ConsultationMessage.user_id == user_id,
        )
        if cursor is not None:
            query = query.filter(ConsultationMessage.created_at < cursor)
        rows = (
            query.order_by(
                ConsultationMessage.created_at.desc(), ConsultationMessage.id.desc()
            )
            .limit(limit + 1)
            .all()
        )
        return rows[:limit], len(rows) > limit

    def get_latest_per_room(self) -> List[ConsultationMessage]:
        """Latest message of every (hospital, user) room, newest room first"""
        latest = (
            self.db.query(
                ConsultationMessage.hospital_id,
                ConsultationMessage.user_id,
                func.max(ConsultationMessage.created_at).label("last_at"),
            )
            .group_by(ConsultationMessage.hospital_id, ConsultationMessage.user_id)
            .subquery()
        )
        messages = (
            self.db.query(ConsultationMessage)
            .join(
                latest,
                and_(
                    ConsultationMessage.hospital_id == latest.c.hospital_id,
                    ConsultationMessage.user_id == latest.c.user_id,
                    ConsultationMessage.created_at == latest.c.last_at,
                ),
            )
            .order_by(ConsultationMessage.created_at.desc(), ConsultationMessage.id.desc())
            .all()
        )
        # rows sharing the latest timestamp of a room collapse to one
        rooms = {}
        for message in messages:
            rooms.setdefault((message.hospital_id, message.user_id), message)
        return list(rooms.values())

    def find_message(
        self,
        message_id: UUID,
        hospital_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> Optional[ConsultationMessage]:
        query = self.db.query(ConsultationMessage).filter(
            ConsultationMessage.id == message_id
        )
        if hospital_id is not None:
            query = query.filter(ConsultationMessage.hospital_id == hospital_id)
        if user_id is not None:
            query = query.filter(ConsultationMessage.user_id == user_id)
        return query.first()


class ConsultationMemoRepository(BaseRepository[ConsultationMemo]):
    def __init__(self, db: Session):
        super().__init__(db, ConsultationMemo)

    def get_for_room(self, hospital_id: UUID, user_id: UUID) -> List[ConsultationMemo]:
        """Pinned memos first, then newest first"""
        return (
            self.db.query(ConsultationMemo)
            .filter(
                ConsultationMemo.hospital_id == hospital_id,
                ConsultationMemo.user_id == user_id,
            )
            .order_by(
                ConsultationMemo.is_pinned.desc(),
                ConsultationMemo.created_at.desc(),
                ConsultationMemo.id.desc(),
            )
            .all()
        )


class InvitationCodeRepository(BaseRepository[InvitationCode]):
    def __init__(self, db: Session):
        super().__init__(db, InvitationCode)

    def list_all(self) -> List[InvitationCode]:
        return (
            self.db.query(InvitationCode)
            .order_by(InvitationCode.created_at.desc(), InvitationCode.id.desc())
            .all()
        )

    def get_by_code(self, code: str) -> Optional[InvitationCode]:
        return self.db.query(InvitationCode).filter(InvitationCode.code == code).first()

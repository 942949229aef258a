"""
Consultation chat, memo and invitation code models.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
    Boolean,
    Index,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.helpers import utcnow
from domain.models.database import Base
from domain.enums import SenderType, InvitationCodeKind


class ConsultationMessage(Base):
    """One chat message in the (hospital, user) consultation room"""

    __tablename__ = "consultation_messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    sender_type = Column(
        SQLEnum(SenderType, name="sender_type", native_enum=False), nullable=False
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    hospital = relationship("Hospital")
    user = relationship("User")

    __table_args__ = (
        Index("ix_consultation_room_created", "hospital_id", "user_id", "created_at"),
    )


class ConsultationMemo(Base):
    """Staff note attached to a consultation room"""

    __tablename__ = "consultation_memos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hospital_id = Column(
        Uuid, ForeignKey("hospitals.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    creator = relationship("User", foreign_keys=[created_by])

    __table_args__ = (Index("ix_consultation_memo_room", "hospital_id", "user_id"),)


class InvitationCode(Base):
    """Sign-up code; used by at most one user"""

    __tablename__ = "invitation_codes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(Text, unique=True, nullable=False)
    kind = Column(
        SQLEnum(InvitationCodeKind, name="invitation_code_kind", native_enum=False),
        nullable=False,
    )
    expires_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    used_by = relationship("User", back_populates="invitation_code", uselist=False)

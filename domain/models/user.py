"""
User-related database models.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.helpers import utcnow
from domain.models.database import Base
from domain.enums import UserStatus, UserRole, Gender


class User(Base):
    """Platform user (patients and staff seed accounts)"""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, unique=True, nullable=False)
    phone_number = Column(Text, unique=True)
    name = Column(Text)
    display_name = Column(Text)
    nick_name = Column(Text)
    locale = Column(Text)
    user_status = Column(
        SQLEnum(UserStatus, name="user_status", native_enum=False),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    role = Column(
        SQLEnum(UserRole, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.USER,
    )
    gender = Column(SQLEnum(Gender, name="user_gender", native_enum=False))
    invitation_code_id = Column(
        Uuid, ForeignKey("invitation_codes.id", ondelete="SET NULL"), unique=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    invitation_code = relationship("InvitationCode", back_populates="used_by")
    reviews = relationship("Review", back_populates="user")

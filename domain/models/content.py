"""
Content models: event banners, notices and YouTube videos.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
    Integer,
    Boolean,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.helpers import utcnow
from domain.models.database import Base, JSONType
from domain.enums import BannerType, NoticeType


class EventBanner(Base):
    """Promotional banner shown in the app, one image per language"""

    __tablename__ = "event_banners"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(JSONType, nullable=False)
    link_url = Column(Text)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    type = Column(
        SQLEnum(BannerType, name="banner_type", native_enum=False),
        nullable=False,
        default=BannerType.MAIN,
    )
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    images = relationship(
        "EventBannerImage",
        back_populates="banner",
        order_by="EventBannerImage.locale",
        cascade="all, delete-orphan",
    )


class EventBannerImage(Base):
    __tablename__ = "event_banner_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    banner_id = Column(
        Uuid, ForeignKey("event_banners.id", ondelete="CASCADE"), nullable=False
    )
    locale = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    path = Column(Text)
    alt = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    banner = relationship("EventBanner", back_populates="images")

    __table_args__ = (
        UniqueConstraint("banner_id", "locale", name="uq_banner_image_locale"),
    )


class Notice(Base):
    """Announcement shown to app users; removed by soft delete"""

    __tablename__ = "notices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(JSONType, nullable=False)
    content = Column(JSONType, nullable=False)
    type = Column(
        SQLEnum(NoticeType, name="notice_type", native_enum=False),
        nullable=False,
        default=NoticeType.GENERAL,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(Text)
    updated_by = Column(Text)
    deleted_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    files = relationship(
        "NoticeFile",
        back_populates="notice",
        order_by="NoticeFile.created_at",
        cascade="all, delete-orphan",
    )


class NoticeFile(Base):
    __tablename__ = "notice_files"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    notice_id = Column(
        Uuid, ForeignKey("notices.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_name = Column(Text, nullable=False)
    file_url = Column(Text, nullable=False)
    path = Column(Text)
    mime_type = Column(Text)
    file_size = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    notice = relationship("Notice", back_populates="files")


class YoutubeVideoCategory(Base):
    __tablename__ = "youtube_video_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(JSONType, nullable=False)
    description = Column(JSONType)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    videos = relationship("YoutubeVideo", back_populates="category")


class YoutubeVideo(Base):
    """YouTube video metadata; title, description and URL vary per locale"""

    __tablename__ = "youtube_videos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id = Column(
        Uuid, ForeignKey("youtube_video_categories.id"), nullable=False, index=True
    )
    title = Column(JSONType, nullable=False)
    description = Column(JSONType)
    video_url = Column(JSONType, nullable=False)
    order = Column(Integer)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    category = relationship("YoutubeVideoCategory", back_populates="videos")
    thumbnails = relationship(
        "YoutubeVideoThumbnail",
        back_populates="video",
        order_by="YoutubeVideoThumbnail.locale",
        cascade="all, delete-orphan",
    )


class YoutubeVideoThumbnail(Base):
    __tablename__ = "youtube_video_thumbnails"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    video_id = Column(
        Uuid, ForeignKey("youtube_videos.id", ondelete="CASCADE"), nullable=False
    )
    locale = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    path = Column(Text)
    alt = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    video = relationship("YoutubeVideo", back_populates="thumbnails")

    __table_args__ = (
        UniqueConstraint("video_id", "locale", name="uq_youtube_thumbnail_locale"),
    )

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import YoutubeVideo, YoutubeVideoCategory, YoutubeVideoThumbnail
from domain.schemas.content_schemas import (
    YoutubeVideoCategoryCreate,
    YoutubeVideoCategoryUpdate,
    YoutubeVideoCreate,
    YoutubeVideoUpdate,
)
from repositories import YoutubeVideoRepository, YoutubeVideoCategoryRepository
from adapters import storage_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from app.helpers import SUPPORTED_LOCALES, has_any_localized_text

logger = logging.getLogger("kdoc_admin.youtube")


class YoutubeVideoCategoryService:
    @staticmethod
    def list_categories(db: Session) -> List[Tuple[YoutubeVideoCategory, int]]:
        """Categories ordered by ``order`` with their video counts."""
        return YoutubeVideoCategoryRepository(db).list_with_counts()

    @staticmethod
    def get_category(db: Session, category_id: uuid.UUID) -> YoutubeVideoCategory:
        category = YoutubeVideoCategoryRepository(db).get_by_id(category_id)
        if not category:
            raise NotFoundError("Video category not found")
        return category

    @staticmethod
    def create_category(
        db: Session, payload: YoutubeVideoCategoryCreate
    ) -> YoutubeVideoCategory:
        if not has_any_localized_text(payload.name):
            raise ServiceValidationError("Category name is required")
        return YoutubeVideoCategoryRepository(db).create(
            YoutubeVideoCategory(**payload.model_dump())
        )

    @staticmethod
    def update_category(
        db: Session, category_id: uuid.UUID, payload: YoutubeVideoCategoryUpdate
    ) -> YoutubeVideoCategory:
        category = YoutubeVideoCategoryService.get_category(db, category_id)
        data = payload.model_dump(exclude_unset=True)
        if "name" in data and not has_any_localized_text(data["name"]):
            raise ServiceValidationError("Category name is required")
        for field, value in data.items():
            if value is not None or field == "description":
                setattr(category, field, value)
        return YoutubeVideoCategoryRepository(db).update(category)

    @staticmethod
    def delete_category(db: Session, category_id: uuid.UUID) -> None:
        repo = YoutubeVideoCategoryRepository(db)
        category = YoutubeVideoCategoryService.get_category(db, category_id)
        if repo.count_videos(category_id):
            raise ServiceValidationError("Cannot delete a category that still has videos")
        repo.delete(category)


class YoutubeVideoService:
    @staticmethod
    def list_videos(
        db: Session,
        page: int = 1,
        page_size: int = 10,
        category_id: Optional[uuid.UUID] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[YoutubeVideo], int]:
        return YoutubeVideoRepository(db).search(
            page, page_size, category_id=category_id, is_active=is_active
        )

    @staticmethod
    def get_video(db: Session, video_id: uuid.UUID) -> YoutubeVideo:
        video = YoutubeVideoRepository(db).get_by_id(video_id)
        if not video:
            raise NotFoundError("Video not found")
        return video

    @staticmethod
    def _check_category(db: Session, category_id: uuid.UUID) -> None:
        if not YoutubeVideoCategoryRepository(db).exists(category_id):
            raise ServiceValidationError("Video category not found")

    @staticmethod
    def create_video(db: Session, payload: YoutubeVideoCreate) -> YoutubeVideo:
        YoutubeVideoService._check_category(db, payload.category_id)
        if not has_any_localized_text(payload.title):
            raise ServiceValidationError("Video title is required")
        if not has_any_localized_text(payload.video_url):
            raise ServiceValidationError("Video URL is required")
        video = YoutubeVideoRepository(db).create(YoutubeVideo(**payload.model_dump()))
        logger.info("Created video %s in category %s", video.id, video.category_id)
        return video

    @staticmethod
    def update_video(
        db: Session, video_id: uuid.UUID, payload: YoutubeVideoUpdate
    ) -> YoutubeVideo:
        video = YoutubeVideoService.get_video(db, video_id)
        data = payload.model_dump(exclude_unset=True)
        if data.get("category_id") is not None and data["category_id"] != video.category_id:
            YoutubeVideoService._check_category(db, data["category_id"])
        for key in ("title", "video_url"):
            if key in data and not has_any_localized_text(data[key]):
                raise ServiceValidationError(f"Video {key.replace('_', ' ')} is required")
        for key in ("category_id", "is_active"):
            if key in data and data[key] is None:
                data.pop(key)
        for field, value in data.items():
            setattr(video, field, value)
        return YoutubeVideoRepository(db).update(video)

    @staticmethod
    def delete_video(db: Session, video_id: uuid.UUID) -> None:
        video = YoutubeVideoService.get_video(db, video_id)
        stored_paths = [thumb.path for thumb in video.thumbnails]
        try:
            db.delete(video)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting video %s", video_id)
            raise
        for path in stored_paths:
            storage_adapter.delete_file(path)

    @staticmethod
    def get_thumbnails(db: Session, video_id: uuid.UUID) -> List[YoutubeVideoThumbnail]:
        YoutubeVideoService.get_video(db, video_id)
        return YoutubeVideoRepository(db).get_thumbnails(video_id)

    @staticmethod
    def upload_thumbnail(
        db: Session,
        video_id: uuid.UUID,
        locale: str,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
        alt: Optional[str] = None,
    ) -> YoutubeVideoThumbnail:
        """Create or replace the thumbnail of one locale."""
        if locale not in SUPPORTED_LOCALES:
            raise ServiceValidationError(
                "Unsupported locale", details={"allowed": list(SUPPORTED_LOCALES)}
            )
        repo = YoutubeVideoRepository(db)
        YoutubeVideoService.get_video(db, video_id)
        stored = storage_adapter.upload_image(
            f"youtube-videos/{video_id}/{locale}", filename, content, content_type
        )

        thumbnail = repo.get_thumbnail(video_id, locale)
        old_path = thumbnail.path if thumbnail else None
        try:
            if thumbnail is None:
                thumbnail = YoutubeVideoThumbnail(video_id=video_id, locale=locale)
                db.add(thumbnail)
            thumbnail.image_url = stored.url
            thumbnail.path = stored.path
            thumbnail.alt = alt or filename
            db.commit()
            db.refresh(thumbnail)
        except Exception:
            db.rollback()
            storage_adapter.delete_file(stored.path)
            logger.exception("Error saving %s thumbnail for video %s", locale, video_id)
            raise

        if old_path and old_path != stored.path:
            storage_adapter.delete_file(old_path)
        return thumbnail

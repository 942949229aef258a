from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Notice, NoticeFile
from domain.schemas.content_schemas import NoticeCreate, NoticeUpdate
from repositories import NoticeRepository
from adapters import storage_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from app.helpers import has_any_localized_text, utcnow

logger = logging.getLogger("kdoc_admin.notices")


class NoticeService:
    @staticmethod
    def list_notices(
        db: Session,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Notice], int]:
        return NoticeRepository(db).search(
            page, page_size, search=search, is_active=is_active
        )

    @staticmethod
    def get_notice(db: Session, notice_id: uuid.UUID) -> Notice:
        notice = NoticeRepository(db).get_by_id(notice_id)
        if not notice:
            raise NotFoundError("Notice not found")
        return notice

    @staticmethod
    def create_notice(db: Session, payload: NoticeCreate) -> Notice:
        if not has_any_localized_text(payload.title):
            raise ServiceValidationError("Title is required in at least one language")
        if not has_any_localized_text(payload.content):
            raise ServiceValidationError("Content is required in at least one language")
        notice = NoticeRepository(db).create(Notice(**payload.model_dump()))
        logger.info("Created notice %s", notice.id)
        return notice

    @staticmethod
    def update_notice(db: Session, notice_id: uuid.UUID, payload: NoticeUpdate) -> Notice:
        notice = NoticeService.get_notice(db, notice_id)
        data = payload.model_dump(exclude_unset=True)
        if "title" in data and not has_any_localized_text(data["title"]):
            raise ServiceValidationError("Title is required in at least one language")
        if "content" in data and not has_any_localized_text(data["content"]):
            raise ServiceValidationError("Content is required in at least one language")
        for key in ("type", "is_active"):
            if key in data and data[key] is None:
                data.pop(key)
        for field, value in data.items():
            setattr(notice, field, value)
        return NoticeRepository(db).update(notice)

    @staticmethod
    def delete_notice(db: Session, notice_id: uuid.UUID) -> None:
        """Soft delete: the row stays but disappears from every query."""
        notice = NoticeService.get_notice(db, notice_id)
        notice.deleted_at = utcnow()
        notice.is_active = False
        NoticeRepository(db).update(notice)
        logger.info("Soft-deleted notice %s", notice_id)

    @staticmethod
    def add_file(
        db: Session,
        notice_id: uuid.UUID,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> NoticeFile:
        NoticeService.get_notice(db, notice_id)
        stored = storage_adapter.upload_file(
            f"notices/{notice_id}", filename, content, content_type
        )
        notice_file = NoticeFile(
            notice_id=notice_id,
            file_name=filename or stored.path.rsplit("/", 1)[-1],
            file_url=stored.url,
            path=stored.path,
            mime_type=stored.content_type,
            file_size=stored.size,
        )
        try:
            return NoticeRepository(db).create(notice_file)
        except Exception:
            db.rollback()
            storage_adapter.delete_file(stored.path)
            raise

    @staticmethod
    def delete_file(db: Session, notice_id: uuid.UUID, file_id: uuid.UUID) -> None:
        repo = NoticeRepository(db)
        notice_file = repo.get_file(notice_id, file_id)
        if not notice_file:
            raise NotFoundError("Notice file not found")
        path = notice_file.path
        repo.delete(notice_file)
        storage_adapter.delete_file(path)

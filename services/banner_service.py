from typing import List, Optional, Tuple
from datetime import datetime
from urllib.parse import urlparse
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import EventBanner, EventBannerImage
from domain.schemas.content_schemas import BannerCreate, BannerUpdate
from domain.enums import BannerType, SortDirection
from repositories import BannerRepository
from adapters import storage_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from app.helpers import BANNER_LOCALES, as_utc

logger = logging.getLogger("kdoc_admin.banners")


def _normalize_link_url(link_url: Optional[str]) -> Optional[str]:
    """Trimmed absolute http(s) URL, or None for an empty value."""
    if link_url is None:
        return None
    link_url = link_url.strip()
    if not link_url:
        return None
    parsed = urlparse(link_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ServiceValidationError("Link URL must be a valid http(s) URL")
    return link_url


def _validate_title(title: dict) -> None:
    missing = [
        loc
        for loc in BANNER_LOCALES
        if not isinstance(title.get(loc), str) or not title[loc].strip()
    ]
    if missing:
        raise ServiceValidationError(
            "Title is required for all languages", details={"missing_locales": missing}
        )


def _validate_dates(start_date: datetime, end_date: Optional[datetime]) -> None:
    if end_date is not None and as_utc(end_date) <= as_utc(start_date):
        raise ServiceValidationError("End date must be after start date")


class BannerService:
    @staticmethod
    def list_banners(
        db: Session,
        page: int = 1,
        page_size: int = 20,
        is_active: Optional[bool] = None,
        banner_type: Optional[BannerType] = None,
        order_by: str = "order",
        order_direction: SortDirection = SortDirection.ASC,
    ) -> Tuple[List[EventBanner], int]:
        return BannerRepository(db).search(
            page,
            page_size,
            is_active=is_active,
            banner_type=banner_type,
            order_by=order_by,
            order_direction=order_direction,
        )

    @staticmethod
    def get_banner(db: Session, banner_id: uuid.UUID) -> EventBanner:
        banner = BannerRepository(db).get_by_id(banner_id)
        if not banner:
            raise NotFoundError("Banner not found")
        return banner

    @staticmethod
    def create_banner(db: Session, payload: BannerCreate) -> EventBanner:
        """
        Validate and create a banner.

        Rules:
            - title has non-empty text for every banner language
            - link_url, when given, is an absolute http(s) URL (stored trimmed)
            - order is not negative
            - end_date, when given, is after start_date
        """
        _validate_title(payload.title)
        if payload.order < 0:
            raise ServiceValidationError("Order must be 0 or greater")
        _validate_dates(payload.start_date, payload.end_date)

        data = payload.model_dump()
        data["link_url"] = _normalize_link_url(payload.link_url)
        banner = BannerRepository(db).create(EventBanner(**data))
        logger.info("Created banner %s", banner.id)
        return banner

    @staticmethod
    def update_banner(db: Session, banner_id: uuid.UUID, payload: BannerUpdate) -> EventBanner:
        banner = BannerService.get_banner(db, banner_id)
        data = payload.model_dump(exclude_unset=True)

        if "title" in data:
            _validate_title(data["title"] or {})
        if data.get("order") is not None and data["order"] < 0:
            raise ServiceValidationError("Order must be 0 or greater")
        if "link_url" in data:
            data["link_url"] = _normalize_link_url(data["link_url"])
        for key in ("order", "is_active", "type", "start_date"):
            if key in data and data[key] is None:
                data.pop(key)
        _validate_dates(
            data.get("start_date", banner.start_date),
            data.get("end_date", banner.end_date),
        )

        for field, value in data.items():
            setattr(banner, field, value)
        return BannerRepository(db).update(banner)

    @staticmethod
    def toggle_active(db: Session, banner_id: uuid.UUID) -> EventBanner:
        banner = BannerService.get_banner(db, banner_id)
        banner.is_active = not banner.is_active
        return BannerRepository(db).update(banner)

    @staticmethod
    def delete_banner(db: Session, banner_id: uuid.UUID) -> None:
        banner = BannerService.get_banner(db, banner_id)
        stored_paths = [img.path for img in banner.images]
        try:
            db.delete(banner)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting banner %s", banner_id)
            raise
        for path in stored_paths:
            storage_adapter.delete_file(path)

    @staticmethod
    def upload_image(
        db: Session,
        banner_id: uuid.UUID,
        locale: str,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> EventBannerImage:
        """Store the banner image for one language, replacing any previous one."""
        if locale not in BANNER_LOCALES:
            raise ServiceValidationError(
                "Unsupported banner locale", details={"allowed": list(BANNER_LOCALES)}
            )
        repo = BannerRepository(db)
        BannerService.get_banner(db, banner_id)
        stored = storage_adapter.upload_image(
            f"banners/{banner_id}/{locale}", filename, content, content_type
        )

        image = repo.get_image(banner_id, locale)
        old_path = image.path if image else None
        try:
            if image is None:
                image = EventBannerImage(banner_id=banner_id, locale=locale)
                db.add(image)
            image.image_url = stored.url
            image.path = stored.path
            image.alt = filename
            db.commit()
            db.refresh(image)
        except Exception:
            db.rollback()
            storage_adapter.delete_file(stored.path)
            logger.exception("Error saving %s image for banner %s", locale, banner_id)
            raise

        if old_path and old_path != stored.path:
            storage_adapter.delete_file(old_path)
        return image

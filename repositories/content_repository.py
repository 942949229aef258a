"""
Content Repository - Data access layer for banners, notices and YouTube videos
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import (
    EventBanner,
    EventBannerImage,
    Notice,
    NoticeFile,
    YoutubeVideo,
    YoutubeVideoCategory,
    YoutubeVideoThumbnail,
)
from domain.enums import BannerType, SortDirection
from app.helpers import SUPPORTED_LOCALES

BANNER_SORT_COLUMNS = {
    "created_at": EventBanner.created_at,
    "order": EventBanner.order,
    "start_date": EventBanner.start_date,
}


class BannerRepository(BaseRepository[EventBanner]):
    """Repository for event banner data access"""

    def __init__(self, db: Session):
        super().__init__(db, EventBanner)

    def search(
        self,
        page: int,
        page_size: int,
        is_active: Optional[bool] = None,
        banner_type: Optional[BannerType] = None,
        order_by: str = "order",
        order_direction: SortDirection = SortDirection.ASC,
    ) -> Tuple[List[EventBanner], int]:
        query = self.db.query(EventBanner)
        if is_active is not None:
            query = query.filter(EventBanner.is_active == is_active)
        if banner_type is not None:
            query = query.filter(EventBanner.type == banner_type)
        column = BANNER_SORT_COLUMNS.get(order_by, EventBanner.order)
        direction = column.desc() if order_direction == SortDirection.DESC else column.asc()
        query = query.order_by(direction, EventBanner.id)
        return self.paginate(query, page, page_size)

    def get_image(self, banner_id: UUID, locale: str) -> Optional[EventBannerImage]:
        return (
            self.db.query(EventBannerImage)
            .filter(EventBannerImage.banner_id == banner_id, EventBannerImage.locale == locale)
            .first()
        )


class NoticeRepository(BaseRepository[Notice]):
    """Repository for notice data access; soft-deleted rows are invisible"""

    def __init__(self, db: Session):
        super().__init__(db, Notice)

    def get_by_id(self, notice_id: UUID) -> Optional[Notice]:
        return (
            self.db.query(Notice)
            .filter(Notice.id == notice_id, Notice.deleted_at.is_(None))
            .first()
        )

    def search(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Notice], int]:
        query = self.db.query(Notice).filter(Notice.deleted_at.is_(None))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(*[Notice.title[loc].as_string().ilike(pattern) for loc in SUPPORTED_LOCALES])
            )
        if is_active is not None:
            query = query.filter(Notice.is_active == is_active)
        query = query.order_by(Notice.created_at.desc(), Notice.id.desc())
        return self.paginate(query, page, page_size)

    def get_file(self, notice_id: UUID, file_id: UUID) -> Optional[NoticeFile]:
        return (
            self.db.query(NoticeFile)
            .filter(NoticeFile.id == file_id, NoticeFile.notice_id == notice_id)
            .first()
        )


class YoutubeVideoCategoryRepository(BaseRepository[YoutubeVideoCategory]):
    def __init__(self, db: Session):
        super().__init__(db, YoutubeVideoCategory)

    def list_with_counts(self) -> List[Tuple[YoutubeVideoCategory, int]]:
        counts = (
            self.db.query(YoutubeVideo.category_id, func.count(YoutubeVideo.id).label("n"))
            .group_by(YoutubeVideo.category_id)
            .subquery()
        )
        rows = (
            self.db.query(YoutubeVideoCategory, func.coalesce(counts.c.n, 0))
            .outerjoin(counts, counts.c.category_id == YoutubeVideoCategory.id)
            .order_by(YoutubeVideoCategory.order, YoutubeVideoCategory.created_at)
            .all()
        )
        return [(category, int(n)) for category, n in rows]

    def count_videos(self, category_id: UUID) -> int:
        return (
            self.db.query(func.count(YoutubeVideo.id))
            .filter(YoutubeVideo.category_id == category_id)
            .scalar()
            or 0
        )


class YoutubeVideoRepository(BaseRepository[YoutubeVideo]):
    """Repository for YouTube video data access"""

    def __init__(self, db: Session):
        super().__init__(db, YoutubeVideo)

    def search(
        self,
        page: int,
        page_size: int,
        category_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[YoutubeVideo], int]:
        query = self.db.query(YoutubeVideo)
        if category_id is not None:
            query = query.filter(YoutubeVideo.category_id == category_id)
        if is_active is not None:
            query = query.filter(YoutubeVideo.is_active == is_active)
        query = query.order_by(
            YoutubeVideo.order.asc().nulls_last(),
            YoutubeVideo.created_at.desc(),
            YoutubeVideo.id.desc(),
        )
        return self.paginate(query, page, page_size)

    def get_thumbnails(self, video_id: UUID) -> List[YoutubeVideoThumbnail]:
        return (
            self.db.query(YoutubeVideoThumbnail)
            .filter(YoutubeVideoThumbnail.video_id == video_id)
            .order_by(YoutubeVideoThumbnail.locale)
            .all()
        )

    def get_thumbnail(self, video_id: UUID, locale: str) -> Optional[YoutubeVideoThumbnail]:
        return (
            self.db.query(YoutubeVideoThumbnail)
            .filter(
                YoutubeVideoThumbnail.video_id == video_id,
                YoutubeVideoThumbnail.locale == locale,
            )
            .first()
        )

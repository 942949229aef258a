"""YouTube video and category routes"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.schemas.common import DeleteResult
from domain.schemas.content_schemas import (
    YoutubeVideoCategoryCreate,
    YoutubeVideoCategoryUpdate,
    YoutubeVideoCategoryResponse,
    YoutubeVideoCreate,
    YoutubeVideoUpdate,
    YoutubeVideoResponse,
    YoutubeVideoThumbnailResponse,
)
from services.youtube_service import YoutubeVideoCategoryService, YoutubeVideoService
from api.responses import APIResponse, PaginatedResponse, paginated_response, success_response

category_router = APIRouter(prefix="/youtube-video-categories", tags=["YouTube Videos"])
router = APIRouter(prefix="/youtube-videos", tags=["YouTube Videos"])
logger = logging.getLogger("kdoc_admin.api.youtube")


def _category_response(category, video_count: int = 0) -> YoutubeVideoCategoryResponse:
    response = YoutubeVideoCategoryResponse.model_validate(category)
    response.video_count = video_count
    return response


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@category_router.get("", response_model=APIResponse[List[YoutubeVideoCategoryResponse]])
def list_video_categories(db: Session = Depends(get_db_session)):
    categories = YoutubeVideoCategoryService.list_categories(db)
    return success_response(data=[_category_response(c, n) for c, n in categories])


@category_router.post(
    "",
    response_model=APIResponse[YoutubeVideoCategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_video_category(
    payload: YoutubeVideoCategoryCreate, db: Session = Depends(get_db_session)
):
    category = YoutubeVideoCategoryService.create_category(db, payload)
    return success_response(data=_category_response(category))


@category_router.put(
    "/{category_id}", response_model=APIResponse[YoutubeVideoCategoryResponse]
)
def update_video_category(
    category_id: UUID,
    payload: YoutubeVideoCategoryUpdate,
    db: Session = Depends(get_db_session),
):
    category = YoutubeVideoCategoryService.update_category(db, category_id, payload)
    return success_response(data=_category_response(category, len(category.videos)))


@category_router.delete("/{category_id}", response_model=APIResponse[DeleteResult])
def delete_video_category(category_id: UUID, db: Session = Depends(get_db_session)):
    """Only empty categories can be deleted."""
    YoutubeVideoCategoryService.delete_category(db, category_id)
    return success_response(data=DeleteResult(id=category_id))


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------


@router.get("", response_model=APIResponse[PaginatedResponse[YoutubeVideoResponse]])
def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db_session),
):
    videos, total = YoutubeVideoService.list_videos(
        db, page=page, page_size=limit, category_id=category_id, is_active=is_active
    )
    items = [YoutubeVideoResponse.model_validate(v) for v in videos]
    return success_response(data=paginated_response(items, total, page, limit))


@router.get("/{video_id}", response_model=APIResponse[YoutubeVideoResponse])
def get_video(video_id: UUID, db: Session = Depends(get_db_session)):
    video = YoutubeVideoService.get_video(db, video_id)
    return success_response(data=YoutubeVideoResponse.model_validate(video))


@router.post(
    "",
    response_model=APIResponse[YoutubeVideoResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_video(payload: YoutubeVideoCreate, db: Session = Depends(get_db_session)):
    video = YoutubeVideoService.create_video(db, payload)
    return success_response(
        data=YoutubeVideoResponse.model_validate(video), message="Video created"
    )


@router.put("/{video_id}", response_model=APIResponse[YoutubeVideoResponse])
def update_video(
    video_id: UUID, payload: YoutubeVideoUpdate, db: Session = Depends(get_db_session)
):
    video = YoutubeVideoService.update_video(db, video_id, payload)
    return success_response(data=YoutubeVideoResponse.model_validate(video))


@router.delete("/{video_id}", response_model=APIResponse[DeleteResult])
def delete_video(video_id: UUID, db: Session = Depends(get_db_session)):
    YoutubeVideoService.delete_video(db, video_id)
    return success_response(data=DeleteResult(id=video_id), message="Video deleted")


@router.get(
    "/{video_id}/thumbnails",
    response_model=APIResponse[List[YoutubeVideoThumbnailResponse]],
)
def get_video_thumbnails(video_id: UUID, db: Session = Depends(get_db_session)):
    thumbnails = YoutubeVideoService.get_thumbnails(db, video_id)
    return success_response(
        data=[YoutubeVideoThumbnailResponse.model_validate(t) for t in thumbnails]
    )


@router.post(
    "/{video_id}/thumbnails",
    response_model=APIResponse[YoutubeVideoThumbnailResponse],
    status_code=status.HTTP_201_CREATED,
)
def upload_video_thumbnail(
    video_id: UUID,
    file: UploadFile = File(...),
    locale: str = Form(...),
    alt: Optional[str] = Form(None),
    db: Session = Depends(get_db_session),
):
    """Create or replace the thumbnail for one locale."""
    thumbnail = YoutubeVideoService.upload_thumbnail(
        db,
        video_id,
        locale,
        file.filename,
        file.file.read(),
        file.content_type,
        alt=alt,
    )
    return success_response(data=YoutubeVideoThumbnailResponse.model_validate(thumbnail))

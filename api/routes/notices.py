"""Notice routes"""

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from domain.models import get_db_session
from domain.schemas.common import DeleteResult
from domain.schemas.content_schemas import (
    NoticeCreate,
    NoticeUpdate,
    NoticeResponse,
    NoticeFileResponse,
)
from services.notice_service import NoticeService
from api.responses import APIResponse, PaginatedResponse, paginated_response, success_response

router = APIRouter(prefix="/notices", tags=["Notices"])
logger = logging.getLogger("kdoc_admin.api.notices")


@router.get("", response_model=APIResponse[PaginatedResponse[NoticeResponse]])
def list_notices(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Matches the title in any language"),
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db_session),
):
    notices, total = NoticeService.list_notices(
        db, page=page, page_size=limit, search=search, is_active=is_active
    )
    items = [NoticeResponse.model_validate(n) for n in notices]
    return success_response(data=paginated_response(items, total, page, limit))


@router.get("/{notice_id}", response_model=APIResponse[NoticeResponse])
def get_notice(notice_id: UUID, db: Session = Depends(get_db_session)):
    notice = NoticeService.get_notice(db, notice_id)
    return success_response(data=NoticeResponse.model_validate(notice))


@router.post(
    "", response_model=APIResponse[NoticeResponse], status_code=status.HTTP_201_CREATED
)
def create_notice(payload: NoticeCreate, db: Session = Depends(get_db_session)):
    notice = NoticeService.create_notice(db, payload)
    return success_response(
        data=NoticeResponse.model_validate(notice), message="Notice created"
    )


@router.patch("/{notice_id}", response_model=APIResponse[NoticeResponse])
def update_notice(
    notice_id: UUID, payload: NoticeUpdate, db: Session = Depends(get_db_session)
):
    notice = NoticeService.update_notice(db, notice_id, payload)
    return success_response(data=NoticeResponse.model_validate(notice))


@router.delete("/{notice_id}", response_model=APIResponse[DeleteResult])
def delete_notice(notice_id: UUID, db: Session = Depends(get_db_session)):
    """Soft delete; the notice disappears from the admin and the app."""
    NoticeService.delete_notice(db, notice_id)
    return success_response(data=DeleteResult(id=notice_id), message="Notice deleted")


@router.post(
    "/{notice_id}/files",
    response_model=APIResponse[NoticeFileResponse],
    status_code=status.HTTP_201_CREATED,
)
def upload_notice_file(
    notice_id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db_session),
):
    notice_file = NoticeService.add_file(
        db, notice_id, file.filename, file.file.read(), file.content_type
    )
    return success_response(data=NoticeFileResponse.model_validate(notice_file))


@router.delete("/{notice_id}/files/{file_id}", response_model=APIResponse[DeleteResult])
def delete_notice_file(
    notice_id: UUID, file_id: UUID, db: Session = Depends(get_db_session)
):
    NoticeService.delete_file(db, notice_id, file_id)
    return success_response(data=DeleteResult(id=file_id))

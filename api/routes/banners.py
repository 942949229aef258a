"""Event banner routes"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Literal, Optional

from domain.models import get_db_session
from domain.enums import BannerType, SortDirection
from domain.schemas.common import DeleteResult
from domain.schemas.content_schemas import (
    BannerCreate,
    BannerUpdate,
    BannerResponse,
    BannerImageResponse,
)
from services.banner_service import BannerService
from api.responses import APIResponse, PaginatedResponse, paginated_response, success_response

router = APIRouter(prefix="/banners", tags=["Banners"])
logger = logging.getLogger("kdoc_admin.api.banners")


@router.get("", response_model=APIResponse[PaginatedResponse[BannerResponse]])
def list_banners(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    is_active: Optional[bool] = None,
    type: Optional[BannerType] = None,
    order_by: Literal["created_at", "order", "start_date"] = "order",
    order_direction: SortDirection = SortDirection.ASC,
    db: Session = Depends(get_db_session),
):
    banners, total = BannerService.list_banners(
        db,
        page=page,
        page_size=limit,
        is_active=is_active,
        banner_type=type,
        order_by=order_by,
        order_direction=order_direction,
    )
    items = [BannerResponse.model_validate(b) for b in banners]
    return success_response(data=paginated_response(items, total, page, limit))


@router.get("/{banner_id}", response_model=APIResponse[BannerResponse])
def get_banner(banner_id: UUID, db: Session = Depends(get_db_session)):
    banner = BannerService.get_banner(db, banner_id)
    return success_response(data=BannerResponse.model_validate(banner))


@router.post(
    "", response_model=APIResponse[BannerResponse], status_code=status.HTTP_201_CREATED
)
def create_banner(payload: BannerCreate, db: Session = Depends(get_db_session)):
    banner = BannerService.create_banner(db, payload)
    return success_response(
        data=BannerResponse.model_validate(banner), message="Banner created"
    )


@router.put("/{banner_id}", response_model=APIResponse[BannerResponse])
def update_banner(
    banner_id: UUID, payload: BannerUpdate, db: Session = Depends(get_db_session)
):
    banner = BannerService.update_banner(db, banner_id, payload)
    return success_response(data=BannerResponse.model_validate(banner))


@router.patch("/{banner_id}/toggle-active", response_model=APIResponse[BannerResponse])
def toggle_banner_active(banner_id: UUID, db: Session = Depends(get_db_session)):
    banner = BannerService.toggle_active(db, banner_id)
    state = "activated" if banner.is_active else "deactivated"
    return success_response(
        data=BannerResponse.model_validate(banner), message=f"Banner {state}"
    )


@router.delete("/{banner_id}", response_model=APIResponse[DeleteResult])
def delete_banner(banner_id: UUID, db: Session = Depends(get_db_session)):
    BannerService.delete_banner(db, banner_id)
    return success_response(data=DeleteResult(id=banner_id), message="Banner deleted")


@router.post(
    "/{banner_id}/images",
    response_model=APIResponse[BannerImageResponse],
    status_code=status.HTTP_201_CREATED,
)
def upload_banner_image(
    banner_id: UUID,
    file: UploadFile = File(...),
    locale: str = Form(..., description="Banner language: ko, en, th, zh, ja or hi"),
    db: Session = Depends(get_db_session),
):
    image = BannerService.upload_image(
        db, banner_id, locale, file.filename, file.file.read(), file.content_type
    )
    return success_response(data=BannerImageResponse.model_validate(image))

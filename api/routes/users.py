"""User management routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Literal, Optional

from domain.models import get_db_session
from domain.enums import SortDirection, UserStatus
from domain.schemas.user_schemas import (
    BulkStatusRequest,
    BulkStatusResult,
    NicknameBackfillResult,
    UserCreate,
    UserResponse,
    UserStats,
    UserUpdate,
)
from services.user_service import UserService
from api.responses import APIResponse, PaginatedResponse, paginated_response, success_response

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("kdoc_admin.api.users")


@router.get("", response_model=APIResponse[PaginatedResponse[UserResponse]])
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(
        None, description="Name, display name, nickname, email or phone number"
    ),
    status: Optional[UserStatus] = None,
    locale: Optional[str] = None,
    sort_by: Literal["created_at", "updated_at", "name", "email"] = "created_at",
    sort_order: SortDirection = SortDirection.DESC,
    db: Session = Depends(get_db_session),
):
    users, total = UserService.list_users(
        db,
        page=page,
        page_size=limit,
        search=search,
        status=status,
        locale=locale,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items = [UserResponse.model_validate(u) for u in users]
    return success_response(data=paginated_response(items, total, page, limit))


@router.get("/stats", response_model=APIResponse[UserStats])
def get_user_stats(db: Session = Depends(get_db_session)):
    """Account counts; staff seed accounts (@example.com, @dummy.com) are left out."""
    return success_response(data=UserService.get_stats(db))


@router.patch("/bulk-status", response_model=APIResponse[BulkStatusResult])
def bulk_update_user_status(
    payload: BulkStatusRequest, db: Session = Depends(get_db_session)
):
    result = UserService.bulk_update_status(db, payload.user_ids, payload.status)
    return success_response(data=result, message=f"{result.updated} users updated")


@router.post("/nicknames/backfill", response_model=APIResponse[NicknameBackfillResult])
def backfill_nicknames(db: Session = Depends(get_db_session)):
    """Generate nicknames for every user that has none."""
    return success_response(data=UserService.backfill_nicknames(db))


@router.post(
    "", response_model=APIResponse[UserResponse], status_code=status.HTTP_201_CREATED
)
def create_user(payload: UserCreate, db: Session = Depends(get_db_session)):
    user = UserService.create_user(db, payload)
    return success_response(data=UserResponse.model_validate(user), message="User created")


@router.get("/{user_id}", response_model=APIResponse[UserResponse])
def get_user(user_id: UUID, db: Session = Depends(get_db_session)):
    user = UserService.get_user(db, user_id)
    return success_response(data=UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=APIResponse[UserResponse])
def update_user(user_id: UUID, payload: UserUpdate, db: Session = Depends(get_db_session)):
    user = UserService.update_user(db, user_id, payload)
    return success_response(data=UserResponse.model_validate(user))

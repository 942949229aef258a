"""Hospital category routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.schemas.hospital_schemas import (
    HospitalCategoryCreate,
    HospitalCategoryUpdate,
    HospitalCategoryResponse,
    HospitalCategoryDeleteResult,
)
from services.hospital_service import HospitalCategoryService
from api.responses import APIResponse, success_response

router = APIRouter(prefix="/hospital-categories", tags=["Hospital Categories"])


def _category_response(category, hospital_count: int = 0) -> HospitalCategoryResponse:
    response = HospitalCategoryResponse.model_validate(category)
    response.hospital_count = hospital_count
    return response


@router.get("", response_model=APIResponse[List[HospitalCategoryResponse]])
def list_hospital_categories(
    is_active: Optional[bool] = None, db: Session = Depends(get_db_session)
):
    categories = HospitalCategoryService.list_categories(db, is_active=is_active)
    return success_response(data=[_category_response(c, n) for c, n in categories])


@router.get("/{category_id}", response_model=APIResponse[HospitalCategoryResponse])
def get_hospital_category(category_id: UUID, db: Session = Depends(get_db_session)):
    category = HospitalCategoryService.get_category(db, category_id)
    count = HospitalCategoryService.count_hospitals(db, category_id)
    return success_response(data=_category_response(category, count))


@router.post(
    "",
    response_model=APIResponse[HospitalCategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_hospital_category(
    payload: HospitalCategoryCreate, db: Session = Depends(get_db_session)
):
    category = HospitalCategoryService.create_category(db, payload)
    return success_response(data=_category_response(category))


@router.put("/{category_id}", response_model=APIResponse[HospitalCategoryResponse])
def update_hospital_category(
    category_id: UUID,
    payload: HospitalCategoryUpdate,
    db: Session = Depends(get_db_session),
):
    category = HospitalCategoryService.update_category(db, category_id, payload)
    count = HospitalCategoryService.count_hospitals(db, category_id)
    return success_response(data=_category_response(category, count))


@router.delete("/{category_id}", response_model=APIResponse[HospitalCategoryDeleteResult])
def delete_hospital_category(category_id: UUID, db: Session = Depends(get_db_session)):
    """Categories still linked to hospitals are deactivated instead of deleted."""
    deleted = HospitalCategoryService.delete_category(db, category_id)
    if not deleted:
        return success_response(
            data=HospitalCategoryDeleteResult(id=category_id, deleted=False, deactivated=True),
            message="Hospital category is in use and was deactivated",
        )
    return success_response(data=HospitalCategoryDeleteResult(id=category_id, deleted=True))

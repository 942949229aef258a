"""Hospital management routes"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.enums import ApprovalStatus, HospitalImageType
from domain.schemas.common import DeleteResult
from domain.schemas.hospital_schemas import (
    HospitalCreate,
    HospitalUpdate,
    HospitalResponse,
    HospitalSummary,
    HospitalImageResponse,
)
from services.hospital_service import HospitalService
from api.responses import APIResponse, PaginatedResponse, paginated_response, success_response

router = APIRouter(prefix="/hospitals", tags=["Hospitals"])
logger = logging.getLogger("kdoc_admin.api.hospitals")


@router.get("", response_model=APIResponse[PaginatedResponse[HospitalSummary]])
def list_hospitals(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Matches the Korean or English name"),
    approval_status: Optional[ApprovalStatus] = None,
    enable_jp: Optional[bool] = None,
    has_clone: Optional[bool] = None,
    db: Session = Depends(get_db_session),
):
    hospitals, total = HospitalService.list_hospitals(
        db,
        page=page,
        page_size=limit,
        search=search,
        approval_status=approval_status,
        enable_jp=enable_jp,
        has_clone=has_clone,
    )
    items = [HospitalSummary.model_validate(h) for h in hospitals]
    return success_response(data=paginated_response(items, total, page, limit))


@router.get("/{hospital_id}", response_model=APIResponse[HospitalResponse])
def get_hospital(hospital_id: UUID, db: Session = Depends(get_db_session)):
    hospital = HospitalService.get_hospital(db, hospital_id)
    return success_response(data=HospitalResponse.model_validate(hospital))


@router.post(
    "",
    response_model=APIResponse[HospitalResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_hospital(payload: HospitalCreate, db: Session = Depends(get_db_session)):
    """Create a hospital together with its medical specialty links."""
    hospital = HospitalService.create_hospital(db, payload)
    return success_response(
        data=HospitalResponse.model_validate(hospital), message="Hospital created"
    )


@router.put("/{hospital_id}", response_model=APIResponse[HospitalResponse])
def update_hospital(
    hospital_id: UUID, payload: HospitalUpdate, db: Session = Depends(get_db_session)
):
    hospital = HospitalService.update_hospital(db, hospital_id, payload)
    return success_response(data=HospitalResponse.model_validate(hospital))


@router.delete("/{hospital_id}", response_model=APIResponse[DeleteResult])
def delete_hospital(hospital_id: UUID, db: Session = Depends(get_db_session)):
    """
    Delete a hospital and everything attached to it: images, specialty links,
    doctors, reviews and consultation room data. Stored files are removed too.
    """
    HospitalService.delete_hospital(db, hospital_id)
    return success_response(data=DeleteResult(id=hospital_id), message="Hospital deleted")


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


@router.get("/{hospital_id}/images", response_model=APIResponse[List[HospitalImageResponse]])
def get_hospital_images(hospital_id: UUID, db: Session = Depends(get_db_session)):
    images = HospitalService.get_images(db, hospital_id)
    return success_response(data=[HospitalImageResponse.model_validate(i) for i in images])


@router.post(
    "/{hospital_id}/images",
    response_model=APIResponse[HospitalImageResponse],
    status_code=status.HTTP_201_CREATED,
)
def upload_hospital_image(
    hospital_id: UUID,
    file: UploadFile = File(...),
    image_type: HospitalImageType = Form(...),
    alt: Optional[str] = Form(None),
    order: int = Form(0),
    db: Session = Depends(get_db_session),
):
    image = HospitalService.add_image(
        db,
        hospital_id,
        image_type,
        file.filename,
        file.file.read(),
        file.content_type,
        alt=alt,
        order=order,
    )
    return success_response(data=HospitalImageResponse.model_validate(image))


@router.delete(
    "/{hospital_id}/images/{image_id}", response_model=APIResponse[DeleteResult]
)
def delete_hospital_image(
    hospital_id: UUID, image_id: UUID, db: Session = Depends(get_db_session)
):
    HospitalService.delete_image(db, hospital_id, image_id)
    return success_response(data=DeleteResult(id=image_id))

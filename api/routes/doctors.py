"""Doctor management routes"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from domain.models import get_db_session
from domain.enums import ApprovalStatus, DoctorImageType, Gender
from domain.schemas.common import DeleteResult
from domain.schemas.doctor_schemas import (
    DoctorCreate,
    DoctorUpdate,
    DoctorResponse,
    DoctorImageResponse,
)
from services.doctor_service import DoctorService
from api.responses import APIResponse, PaginatedResponse, paginated_response, success_response

router = APIRouter(prefix="/doctors", tags=["Doctors"])
logger = logging.getLogger("kdoc_admin.api.doctors")


@router.get("", response_model=APIResponse[PaginatedResponse[DoctorResponse]])
def list_doctors(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    hospital_id: Optional[UUID] = None,
    gender: Optional[Gender] = None,
    approval_status: Optional[ApprovalStatus] = None,
    stop: Optional[bool] = None,
    db: Session = Depends(get_db_session),
):
    """
    List doctors.

    ``search`` matches the Korean name, license number, description or the
    Korean name of the doctor's hospital.
    """
    doctors, total = DoctorService.list_doctors(
        db,
        page=page,
        page_size=limit,
        search=search,
        hospital_id=hospital_id,
        gender=gender,
        approval_status=approval_status,
        stop=stop,
    )
    items = [DoctorResponse.model_validate(d) for d in doctors]
    return success_response(data=paginated_response(items, total, page, limit))


@router.get("/{doctor_id}", response_model=APIResponse[DoctorResponse])
def get_doctor(doctor_id: UUID, db: Session = Depends(get_db_session)):
    doctor = DoctorService.get_doctor(db, doctor_id)
    return success_response(data=DoctorResponse.model_validate(doctor))


@router.post(
    "", response_model=APIResponse[DoctorResponse], status_code=status.HTTP_201_CREATED
)
def create_doctor(payload: DoctorCreate, db: Session = Depends(get_db_session)):
    doctor = DoctorService.create_doctor(db, payload)
    return success_response(
        data=DoctorResponse.model_validate(doctor), message="Doctor created"
    )


@router.put("/{doctor_id}", response_model=APIResponse[DoctorResponse])
def update_doctor(
    doctor_id: UUID, payload: DoctorUpdate, db: Session = Depends(get_db_session)
):
    doctor = DoctorService.update_doctor(db, doctor_id, payload)
    return success_response(data=DoctorResponse.model_validate(doctor))


@router.delete("/{doctor_id}", response_model=APIResponse[DeleteResult])
def delete_doctor(doctor_id: UUID, db: Session = Depends(get_db_session)):
    DoctorService.delete_doctor(db, doctor_id)
    return success_response(data=DeleteResult(id=doctor_id), message="Doctor deleted")


@router.post(
    "/{doctor_id}/images",
    response_model=APIResponse[DoctorImageResponse],
    status_code=status.HTTP_201_CREATED,
)
def upload_doctor_image(
    doctor_id: UUID,
    file: UploadFile = File(...),
    image_type: DoctorImageType = Form(...),
    alt: Optional[str] = Form(None),
    order: int = Form(0),
    db: Session = Depends(get_db_session),
):
    """Upload a PROFILE or CAREER image; a new PROFILE image replaces the old one."""
    image = DoctorService.add_image(
        db,
        doctor_id,
        image_type,
        file.filename,
        file.file.read(),
        file.content_type,
        alt=alt,
        order=order,
    )
    return success_response(data=DoctorImageResponse.model_validate(image))


@router.delete("/images/{image_id}", response_model=APIResponse[DeleteResult])
def delete_doctor_image(image_id: UUID, db: Session = Depends(get_db_session)):
    DoctorService.delete_image(db, image_id)
    return success_response(data=DeleteResult(id=image_id))

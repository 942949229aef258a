"""Medical specialty routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.schemas.common import DeleteResult
from domain.schemas.hospital_schemas import (
    MedicalSpecialtyCreate,
    MedicalSpecialtyUpdate,
    MedicalSpecialtyResponse,
)
from services.hospital_service import MedicalSpecialtyService
from api.responses import APIResponse, success_response

router = APIRouter(prefix="/medical-specialties", tags=["Medical Specialties"])


@router.get("", response_model=APIResponse[List[MedicalSpecialtyResponse]])
def list_medical_specialties(
    is_active: Optional[bool] = None, db: Session = Depends(get_db_session)
):
    specialties = MedicalSpecialtyService.list_specialties(db, is_active=is_active)
    return success_response(
        data=[MedicalSpecialtyResponse.model_validate(s) for s in specialties]
    )


@router.post(
    "",
    response_model=APIResponse[MedicalSpecialtyResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_medical_specialty(
    payload: MedicalSpecialtyCreate, db: Session = Depends(get_db_session)
):
    specialty = MedicalSpecialtyService.create_specialty(db, payload)
    return success_response(data=MedicalSpecialtyResponse.model_validate(specialty))


@router.put("/{specialty_id}", response_model=APIResponse[MedicalSpecialtyResponse])
def update_medical_specialty(
    specialty_id: UUID,
    payload: MedicalSpecialtyUpdate,
    db: Session = Depends(get_db_session),
):
    specialty = MedicalSpecialtyService.update_specialty(db, specialty_id, payload)
    return success_response(data=MedicalSpecialtyResponse.model_validate(specialty))


@router.delete("/{specialty_id}", response_model=APIResponse[DeleteResult])
def delete_medical_specialty(specialty_id: UUID, db: Session = Depends(get_db_session)):
    """Fails with 400 while hospitals, doctors or reviews still use the specialty."""
    MedicalSpecialtyService.delete_specialty(db, specialty_id)
    return success_response(data=DeleteResult(id=specialty_id))

"""Invitation code routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
from typing import List

from domain.models import get_db_session
from domain.schemas.common import DeleteResult
from domain.schemas.consultation_schemas import InvitationCodeCreate, InvitationCodeResponse
from services.invitation_service import InvitationCodeService
from api.responses import APIResponse, success_response

router = APIRouter(prefix="/invitation-codes", tags=["Invitation Codes"])


@router.get("", response_model=APIResponse[List[InvitationCodeResponse]])
def list_invitation_codes(db: Session = Depends(get_db_session)):
    codes = InvitationCodeService.list_codes(db)
    return success_response(data=[InvitationCodeResponse.model_validate(c) for c in codes])


@router.post(
    "",
    response_model=APIResponse[InvitationCodeResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_invitation_code(
    payload: InvitationCodeCreate, db: Session = Depends(get_db_session)
):
    """Issue a VIP code (never expires) or a PAYMENT_REFERENCE code."""
    code = InvitationCodeService.create_code(db, payload)
    return success_response(
        data=InvitationCodeResponse.model_validate(code), message="Invitation code created"
    )


@router.delete("/{code_id}", response_model=APIResponse[DeleteResult])
def delete_invitation_code(code_id: UUID, db: Session = Depends(get_db_session)):
    InvitationCodeService.delete_code(db, code_id)
    return success_response(data=DeleteResult(id=code_id))

"""Review moderation routes"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from domain.models import get_db_session
from domain.enums import ReviewImageType, ReviewUserType
from domain.schemas.common import DeleteResult
from domain.schemas.review_schemas import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewImageResponse,
    ReviewPage,
    ReviewBatchActiveRequest,
    ReviewHospitalBatchActiveRequest,
    ReviewBatchActiveResult,
)
from services.review_service import ReviewService
from api.responses import APIResponse, success_response

router = APIRouter(prefix="/reviews", tags=["Reviews"])
logger = logging.getLogger("kdoc_admin.api.reviews")


@router.get("", response_model=APIResponse[ReviewPage])
def list_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, description="User name or hospital name"),
    hospital_id: Optional[UUID] = None,
    medical_specialty_id: Optional[UUID] = None,
    rating: Optional[int] = Query(None, ge=1, le=5),
    is_recommended: Optional[bool] = None,
    user_type: Optional[ReviewUserType] = Query(
        None, description="admin: staff seed accounts, real: everyone else"
    ),
    db: Session = Depends(get_db_session),
):
    reviews, has_next = ReviewService.list_reviews(
        db,
        page=page,
        limit=limit,
        search=search,
        hospital_id=hospital_id,
        medical_specialty_id=medical_specialty_id,
        rating=rating,
        is_recommended=is_recommended,
        user_type=user_type,
    )
    return success_response(
        data=ReviewPage(
            items=[ReviewResponse.model_validate(r) for r in reviews],
            page=page,
            limit=limit,
            has_next=has_next,
            has_prev=page > 1,
        )
    )


@router.post("/batch", response_model=APIResponse[ReviewBatchActiveResult])
def batch_set_review_active(
    payload: ReviewBatchActiveRequest, db: Session = Depends(get_db_session)
):
    result = ReviewService.set_active_for_reviews(db, payload.review_ids, payload.is_active)
    return success_response(data=result, message=f"{result.updated_count} reviews updated")


@router.post("/batch-by-hospital", response_model=APIResponse[ReviewBatchActiveResult])
def batch_set_hospital_review_active(
    payload: ReviewHospitalBatchActiveRequest, db: Session = Depends(get_db_session)
):
    """Show or hide every review of one hospital."""
    result = ReviewService.set_active_for_hospital(db, payload.hospital_id, payload.is_active)
    return success_response(data=result, message=f"{result.updated_count} reviews updated")


@router.get("/{review_id}", response_model=APIResponse[ReviewResponse])
def get_review(review_id: UUID, db: Session = Depends(get_db_session)):
    review = ReviewService.get_review(db, review_id)
    return success_response(data=ReviewResponse.model_validate(review))


@router.post(
    "", response_model=APIResponse[ReviewResponse], status_code=status.HTTP_201_CREATED
)
def create_review(payload: ReviewCreate, db: Session = Depends(get_db_session)):
    review = ReviewService.create_review(db, payload)
    return success_response(
        data=ReviewResponse.model_validate(review), message="Review created"
    )


@router.put("/{review_id}", response_model=APIResponse[ReviewResponse])
def update_review(
    review_id: UUID, payload: ReviewUpdate, db: Session = Depends(get_db_session)
):
    review = ReviewService.update_review(db, review_id, payload)
    return success_response(data=ReviewResponse.model_validate(review))


@router.delete("/{review_id}", response_model=APIResponse[DeleteResult])
def delete_review(review_id: UUID, db: Session = Depends(get_db_session)):
    ReviewService.delete_review(db, review_id)
    return success_response(data=DeleteResult(id=review_id), message="Review deleted")


@router.post(
    "/{review_id}/images",
    response_model=APIResponse[ReviewImageResponse],
    status_code=status.HTTP_201_CREATED,
)
def upload_review_image(
    review_id: UUID,
    file: UploadFile = File(...),
    image_type: ReviewImageType = Form(...),
    alt: Optional[str] = Form(None),
    db: Session = Depends(get_db_session),
):
    image = ReviewService.add_image(
        db,
        review_id,
        image_type,
        file.filename,
        file.file.read(),
        file.content_type,
        alt=alt,
    )
    return success_response(data=ReviewImageResponse.model_validate(image))

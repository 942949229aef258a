"""Dashboard statistics routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from domain.models import get_db_session
from domain.schemas.dashboard_schemas import (
    ActivityItem,
    DashboardStats,
    MonthlyCount,
    MonthlyReviewStats,
    SpecialtyReviewStats,
    StatusCount,
)
from services.dashboard_service import DashboardService
from api.responses import APIResponse, success_response

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=APIResponse[DashboardStats])
def get_dashboard_stats(db: Session = Depends(get_db_session)):
    return success_response(data=DashboardService.get_stats(db))


@router.get("/user-status", response_model=APIResponse[List[StatusCount]])
def get_user_status(db: Session = Depends(get_db_session)):
    return success_response(data=DashboardService.get_user_status_distribution(db))


@router.get("/hospital-approval", response_model=APIResponse[List[StatusCount]])
def get_hospital_approval(db: Session = Depends(get_db_session)):
    return success_response(data=DashboardService.get_hospital_approval_distribution(db))


@router.get("/doctor-approval", response_model=APIResponse[List[StatusCount]])
def get_doctor_approval(db: Session = Depends(get_db_session)):
    return success_response(data=DashboardService.get_doctor_approval_distribution(db))


@router.get("/monthly-users", response_model=APIResponse[List[MonthlyCount]])
def get_monthly_users(db: Session = Depends(get_db_session)):
    """New users per month over the last six months, oldest first."""
    return success_response(data=DashboardService.get_monthly_users(db))


@router.get("/monthly-reviews", response_model=APIResponse[List[MonthlyReviewStats]])
def get_monthly_reviews(db: Session = Depends(get_db_session)):
    return success_response(data=DashboardService.get_monthly_reviews(db))


@router.get("/specialty-reviews", response_model=APIResponse[List[SpecialtyReviewStats]])
def get_specialty_reviews(db: Session = Depends(get_db_session)):
    return success_response(data=DashboardService.get_specialty_reviews(db))


@router.get("/recent-activity", response_model=APIResponse[List[ActivityItem]])
def get_recent_activity(
    limit: int = Query(10, ge=1, le=50), db: Session = Depends(get_db_session)
):
    return success_response(data=DashboardService.get_recent_activity(db, limit=limit))

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from uuid import UUID


class DashboardStats(BaseModel):
    total_users: int
    total_hospitals: int
    total_reviews: int
    total_doctors: int
    total_consultations: int
    active_users: int
    approved_hospitals: int
    approved_doctors: int
    average_rating: float


class StatusCount(BaseModel):
    status: str
    count: int
    percentage: float


class MonthlyCount(BaseModel):
    month: str  # "YYYY-MM"
    count: int


class MonthlyReviewStats(BaseModel):
    month: str
    count: int
    average_rating: float


class SpecialtyReviewStats(BaseModel):
    specialty_type: str
    count: int
    average_rating: float


class ActivityItem(BaseModel):
    """One entry of the merged recent-activity feed"""

    type: str  # user | hospital | review | consultation
    id: UUID
    title: str
    description: Optional[str] = None
    created_at: datetime

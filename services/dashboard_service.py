"""
Dashboard service - aggregate figures for the admin home page.
"""

from typing import Dict, List, Tuple
from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from domain.models import ConsultationMessage, Doctor, Hospital, MedicalSpecialty, Review, User
from domain.schemas.dashboard_schemas import (
    ActivityItem,
    DashboardStats,
    MonthlyCount,
    MonthlyReviewStats,
    SpecialtyReviewStats,
    StatusCount,
)
from domain.enums import ApprovalStatus, UserStatus
from app.helpers import as_utc, get_first_available_text, utcnow

logger = logging.getLogger("kdoc_admin.dashboard")

MONTHS_WINDOW = 6


def _last_months(count: int = MONTHS_WINDOW) -> Tuple[datetime, List[str]]:
    """First instant of the oldest month and the ``YYYY-MM`` keys, oldest first."""
    now = utcnow()
    year, month = now.year, now.month
    keys = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    keys.reverse()
    first_year, first_month = (int(part) for part in keys[0].split("-"))
    start = now.replace(
        year=first_year, month=first_month, day=1, hour=0, minute=0, second=0, microsecond=0
    )
    return start, keys


def _distribution(rows: List[Tuple[object, int]]) -> List[StatusCount]:
    total = sum(count for _, count in rows)
    result = []
    for status, count in rows:
        percentage = round(count * 100.0 / total, 2) if total else 0.0
        result.append(
            StatusCount(
                status=getattr(status, "value", str(status)),
                count=count,
                percentage=percentage,
            )
        )
    return sorted(result, key=lambda item: item.count, reverse=True)


def _round_avg(value) -> float:
    return round(float(value), 2) if value is not None else 0.0


class DashboardService:
    @staticmethod
    def get_stats(db: Session) -> DashboardStats:
        return DashboardStats(
            total_users=db.query(func.count(User.id)).scalar() or 0,
            total_hospitals=db.query(func.count(Hospital.id)).scalar() or 0,
            total_reviews=db.query(func.count(Review.id)).scalar() or 0,
            total_doctors=db.query(func.count(Doctor.id)).scalar() or 0,
            total_consultations=db.query(func.count(ConsultationMessage.id)).scalar() or 0,
            active_users=db.query(func.count(User.id))
            .filter(User.user_status == UserStatus.ACTIVE)
            .scalar()
            or 0,
            approved_hospitals=db.query(func.count(Hospital.id))
            .filter(Hospital.approval_status == ApprovalStatus.APPROVED)
            .scalar()
            or 0,
            approved_doctors=db.query(func.count(Doctor.id))
            .filter(Doctor.approval_status == ApprovalStatus.APPROVED)
            .scalar()
            or 0,
            average_rating=_round_avg(db.query(func.avg(Review.rating)).scalar()),
        )

    @staticmethod
    def get_user_status_distribution(db: Session) -> List[StatusCount]:
        rows = db.query(User.user_status, func.count(User.id)).group_by(User.user_status).all()
        return _distribution(rows)

    @staticmethod
    def get_hospital_approval_distribution(db: Session) -> List[StatusCount]:
        rows = (
            db.query(Hospital.approval_status, func.count(Hospital.id))
            .group_by(Hospital.approval_status)
            .all()
        )
        return _distribution(rows)

    @staticmethod
    def get_doctor_approval_distribution(db: Session) -> List[StatusCount]:
        rows = (
            db.query(Doctor.approval_status, func.count(Doctor.id))
            .group_by(Doctor.approval_status)
            .all()
        )
        return _distribution(rows)

    @staticmethod
    def get_monthly_users(db: Session) -> List[MonthlyCount]:
        start, keys = _last_months()
        counts: Dict[str, int] = {key: 0 for key in keys}
        for (created_at,) in db.query(User.created_at).filter(User.created_at >= start):
            key = as_utc(created_at).strftime("%Y-%m")
            if key in counts:
                counts[key] += 1
        return [MonthlyCount(month=key, count=counts[key]) for key in keys]

    @staticmethod
    def get_monthly_reviews(db: Session) -> List[MonthlyReviewStats]:
        start, keys = _last_months()
        buckets: Dict[str, List[int]] = {key: [] for key in keys}
        rows = db.query(Review.created_at, Review.rating).filter(Review.created_at >= start)
        for created_at, rating in rows:
            key = as_utc(created_at).strftime("%Y-%m")
            if key in buckets:
                buckets[key].append(rating)
        return [
            MonthlyReviewStats(
                month=key,
                count=len(buckets[key]),
                average_rating=round(sum(buckets[key]) / len(buckets[key]), 2)
                if buckets[key]
                else 0.0,
            )
            for key in keys
        ]

    @staticmethod
    def get_specialty_reviews(db: Session) -> List[SpecialtyReviewStats]:
        rows = (
            db.query(
                MedicalSpecialty.specialty_type,
                func.count(Review.id),
                func.avg(Review.rating),
            )
            .join(Review, Review.medical_specialty_id == MedicalSpecialty.id)
            .group_by(MedicalSpecialty.specialty_type)
            .order_by(func.count(Review.id).desc(), MedicalSpecialty.specialty_type)
            .all()
        )
        return [
            SpecialtyReviewStats(
                specialty_type=specialty_type, count=count, average_rating=_round_avg(avg)
            )
            for specialty_type, count, avg in rows
        ]

    @staticmethod
    def get_recent_activity(db: Session, limit: int = 10) -> List[ActivityItem]:
        """Newest users, hospitals, reviews and messages merged into one feed."""
        items: List[ActivityItem] = []

        for user in db.query(User).order_by(User.created_at.desc()).limit(limit):
            items.append(
                ActivityItem(
                    type="user",
                    id=user.id,
                    title=user.display_name or user.name or user.email,
                    description="New user registered",
                    created_at=as_utc(user.created_at),
                )
            )
        for hospital in db.query(Hospital).order_by(Hospital.created_at.desc()).limit(limit):
            items.append(
                ActivityItem(
                    type="hospital",
                    id=hospital.id,
                    title=get_first_available_text(hospital.name) or "Hospital",
                    description=f"Hospital added ({hospital.approval_status.value})",
                    created_at=as_utc(hospital.created_at),
                )
            )
        for review in db.query(Review).order_by(Review.created_at.desc()).limit(limit):
            items.append(
                ActivityItem(
                    type="review",
                    id=review.id,
                    title=get_first_available_text(review.title) or "Review",
                    description=f"Rated {review.rating}/5",
                    created_at=as_utc(review.created_at),
                )
            )
        messages = (
            db.query(ConsultationMessage)
            .order_by(ConsultationMessage.created_at.desc())
            .limit(limit)
        )
        for message in messages:
            items.append(
                ActivityItem(
                    type="consultation",
                    id=message.id,
                    title=message.content[:50],
                    description=f"{message.sender_type.value} message",
                    created_at=as_utc(message.created_at),
                )
            )

        items.sort(key=lambda item: item.created_at, reverse=True)
        return items[:limit]

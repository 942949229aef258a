"""API routes package"""

from fastapi import APIRouter, Depends

from api.dependencies import require_admin
from . import (
    banners,
    consultations,
    dashboard,
    doctors,
    health,
    hospital_categories,
    hospitals,
    invitation_codes,
    medical_specialties,
    notices,
    reviews,
    users,
    youtube_videos,
)

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
for _router in (
    hospitals.router,
    hospital_categories.router,
    doctors.router,
    reviews.router,
    medical_specialties.router,
    banners.router,
    notices.router,
    consultations.router,
    invitation_codes.router,
    youtube_videos.category_router,
    youtube_videos.router,
    users.router,
    dashboard.router,
):
    admin_router.include_router(_router)

__all__ = ["admin_router", "health"]

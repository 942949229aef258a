"""Services package - Business logic layer"""

from services.hospital_service import (
    HospitalCategoryService,
    HospitalService,
    MedicalSpecialtyService,
)
from services.doctor_service import DoctorService
from services.review_service import ReviewService
from services.banner_service import BannerService
from services.notice_service import NoticeService
from services.youtube_service import YoutubeVideoCategoryService, YoutubeVideoService
from services.consultation_service import ConsultationService, ConsultationMemoService
from services.invitation_service import InvitationCodeService
from services.user_service import UserService
from services.dashboard_service import DashboardService

__all__ = [
    "HospitalService",
    "HospitalCategoryService",
    "MedicalSpecialtyService",
    "DoctorService",
    "ReviewService",
    "BannerService",
    "NoticeService",
    "YoutubeVideoCategoryService",
    "YoutubeVideoService",
    "ConsultationService",
    "ConsultationMemoService",
    "InvitationCodeService",
    "UserService",
    "DashboardService",
]

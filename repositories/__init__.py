"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.hospital_repository import (
    HospitalRepository,
    HospitalCategoryRepository,
    MedicalSpecialtyRepository,
)
from repositories.doctor_repository import DoctorRepository
from repositories.review_repository import ReviewRepository
from repositories.content_repository import (
    BannerRepository,
    NoticeRepository,
    YoutubeVideoCategoryRepository,
    YoutubeVideoRepository,
)
from repositories.consultation_repository import (
    ConsultationMessageRepository,
    ConsultationMemoRepository,
    InvitationCodeRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "HospitalRepository",
    "HospitalCategoryRepository",
    "MedicalSpecialtyRepository",
    "DoctorRepository",
    "ReviewRepository",
    "BannerRepository",
    "NoticeRepository",
    "YoutubeVideoCategoryRepository",
    "YoutubeVideoRepository",
    "ConsultationMessageRepository",
    "ConsultationMemoRepository",
    "InvitationCodeRepository",
]

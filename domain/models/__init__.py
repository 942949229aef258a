"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import User
from domain.models.hospital import (
    Hospital,
    HospitalCategory,
    HospitalCategoryLink,
    HospitalImage,
    HospitalMedicalSpecialty,
    MedicalSpecialty,
)
from domain.models.doctor import Doctor, DoctorImage, DoctorMedicalSpecialty
from domain.models.review import Review, ReviewImage
from domain.models.content import (
    EventBanner,
    EventBannerImage,
    Notice,
    NoticeFile,
    YoutubeVideoCategory,
    YoutubeVideo,
    YoutubeVideoThumbnail,
)
from domain.models.consultation import (
    ConsultationMessage,
    ConsultationMemo,
    InvitationCode,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Users
    "User",
    # Hospitals
    "Hospital",
    "HospitalCategory",
    "HospitalCategoryLink",
    "HospitalImage",
    "HospitalMedicalSpecialty",
    "MedicalSpecialty",
    # Doctors
    "Doctor",
    "DoctorImage",
    "DoctorMedicalSpecialty",
    # Reviews
    "Review",
    "ReviewImage",
    # Content
    "EventBanner",
    "EventBannerImage",
    "Notice",
    "NoticeFile",
    "YoutubeVideoCategory",
    "YoutubeVideo",
    "YoutubeVideoThumbnail",
    # Consultations
    "ConsultationMessage",
    "ConsultationMemo",
    "InvitationCode",
]

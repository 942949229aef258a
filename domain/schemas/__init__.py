"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.common import LocalizedText, UserBrief, HospitalBrief, DeleteResult
from domain.schemas.hospital_schemas import (
    HospitalCreate,
    HospitalUpdate,
    HospitalResponse,
    HospitalSummary,
    HospitalImageResponse,
    MedicalSpecialtyCreate,
    MedicalSpecialtyUpdate,
    MedicalSpecialtyResponse,
)
from domain.schemas.doctor_schemas import (
    DoctorCreate,
    DoctorUpdate,
    DoctorResponse,
    DoctorImageResponse,
)
from domain.schemas.review_schemas import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewImageResponse,
    ReviewPage,
)
from domain.schemas.content_schemas import (
    BannerCreate,
    BannerUpdate,
    BannerResponse,
    BannerImageResponse,
    NoticeCreate,
    NoticeUpdate,
    NoticeResponse,
    NoticeFileResponse,
    YoutubeVideoCategoryCreate,
    YoutubeVideoCategoryUpdate,
    YoutubeVideoCategoryResponse,
    YoutubeVideoCreate,
    YoutubeVideoUpdate,
    YoutubeVideoResponse,
    YoutubeVideoThumbnailResponse,
)
from domain.schemas.consultation_schemas import (
    SendMessageRequest,
    MessageUpdateRequest,
    MessageResponse,
    ChatHistoryResponse,
    ChatRoomResponse,
    RoomInfoResponse,
    MemoCreate,
    MemoUpdate,
    MemoActionRequest,
    MemoResponse,
    InvitationCodeCreate,
    InvitationCodeResponse,
)
from domain.schemas.user_schemas import (
    UserCreate,
    UserUpdate,
    UserResponse,
    BulkStatusRequest,
    BulkStatusResult,
    UserStats,
    NicknameBackfillResult,
)
from domain.schemas.dashboard_schemas import (
    DashboardStats,
    StatusCount,
    MonthlyCount,
    MonthlyReviewStats,
    SpecialtyReviewStats,
    ActivityItem,
)

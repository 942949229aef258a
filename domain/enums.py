"""
Domain enums for KDoc Admin.
Contains all enumeration types used across the domain models.
"""

import enum


class ApprovalStatus(str, enum.Enum):
    """Review state of hospitals and doctors"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    WAITING_APPROVAL = "WAITING_APPROVAL"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class HospitalImageType(str, enum.Enum):
    MAIN = "MAIN"
    THUMBNAIL = "THUMBNAIL"
    DETAIL = "DETAIL"
    INTERIOR = "INTERIOR"
    PROCEDURE_DETAIL = "PROCEDURE_DETAIL"
    VIDEO_THUMBNAIL = "VIDEO_THUMBNAIL"


class DoctorImageType(str, enum.Enum):
    PROFILE = "PROFILE"
    CAREER = "CAREER"


class ReviewImageType(str, enum.Enum):
    BEFORE = "BEFORE"
    AFTER = "AFTER"


class BannerType(str, enum.Enum):
    MAIN = "MAIN"
    RIBBON = "RIBBON"


class NoticeType(str, enum.Enum):
    GENERAL = "GENERAL"
    EVENT = "EVENT"
    UPDATE = "UPDATE"
    MAINTENANCE = "MAINTENANCE"


class SenderType(str, enum.Enum):
    """Author side of a consultation message"""

    USER = "USER"
    ADMIN = "ADMIN"


class InvitationCodeKind(str, enum.Enum):
    VIP = "VIP"
    PAYMENT_REFERENCE = "PAYMENT_REFERENCE"


class MemoAction(str, enum.Enum):
    TOGGLE_PIN = "toggle_pin"
    TOGGLE_COMPLETE = "toggle_complete"


class ReviewUserType(str, enum.Enum):
    """Whether a review was written by a staff seed account or a real user"""

    ADMIN = "admin"
    REAL = "real"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

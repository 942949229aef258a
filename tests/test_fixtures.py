"""
Shared test data factories for the KDoc Admin test suite.

Each ``make_*`` helper inserts a row with realistic defaults into the given
session and returns it; keyword arguments override any column.
"""

import uuid
from datetime import timedelta

from app.helpers import utcnow
from domain.enums import (
    ApprovalStatus,
    BannerType,
    HospitalImageType,
    InvitationCodeKind,
    SenderType,
    UserStatus,
)
from domain.models import (
    ConsultationMemo,
    ConsultationMessage,
    Doctor,
    EventBanner,
    Hospital,
    HospitalCategory,
    HospitalCategoryLink,
    HospitalImage,
    InvitationCode,
    MedicalSpecialty,
    Notice,
    Review,
    User,
    YoutubeVideo,
    YoutubeVideoCategory,
)

# Smallest valid PNG header; storage only checks type and size
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

BANNER_TITLE = {
    "ko": "봄맞이 이벤트",
    "en": "Spring event",
    "th": "กิจกรรมฤดูใบไม้ผลิ",
    "zh": "春季活動",
    "ja": "春のイベント",
    "hi": "वसंत कार्यक्रम",
}


def unique_email(prefix: str = "patient", domain: str = "gmail.com") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4().hex[:8]}@{domain}"


def _save(db, entity):
    db.add(entity)
    db.commit()
    db.refresh(entity)
    return entity


def make_user(db, **overrides):
    data = {
        "email": unique_email(),
        "name": "Kim Minji",
        "display_name": "Minji",
        "locale": "ko_KR",
        "user_status": UserStatus.ACTIVE,
    }
    data.update(overrides)
    return _save(db, User(**data))


def make_specialty(db, **overrides):
    data = {
        "name": {"ko_KR": "성형외과", "en_US": "Plastic Surgery"},
        "specialty_type": "PLASTIC_SURGERY",
        "order": 0,
        "is_active": True,
    }
    data.update(overrides)
    return _save(db, MedicalSpecialty(**data))


def make_hospital(db, **overrides):
    data = {
        "name": {"ko_KR": "서울성형외과", "en_US": "Seoul Plastic Surgery"},
        "address": {"ko_KR": "서울시 강남구", "en_US": "Gangnam-gu, Seoul"},
        "phone_number": "02-555-0100",
        "approval_status": ApprovalStatus.APPROVED,
    }
    data.update(overrides)
    return _save(db, Hospital(**data))


def make_hospital_category(db, hospitals=(), **overrides):
    data = {"name": {"ko_KR": "피부과 전문", "en_US": "Skin clinics"}, "order": 0}
    data.update(overrides)
    category = HospitalCategory(**data)
    category.hospital_links = [HospitalCategoryLink(hospital_id=h.id) for h in hospitals]
    return _save(db, category)


def make_hospital_image(db, hospital, **overrides):
    data = {
        "hospital_id": hospital.id,
        "image_type": HospitalImageType.THUMBNAIL,
        "image_url": "http://testserver/static/hospitals/thumb.png",
        "path": "hospitals/thumb.png",
        "order": 0,
        "is_active": True,
    }
    data.update(overrides)
    return _save(db, HospitalImage(**data))


def make_doctor(db, hospital, **overrides):
    data = {
        "hospital_id": hospital.id,
        "name": {"ko_KR": "이준호", "en_US": "Lee Junho"},
        "license_number": f"LIC-{uuid.uuid4().hex[:6]}",
        "approval_status": ApprovalStatus.PENDING,
    }
    data.update(overrides)
    return _save(db, Doctor(**data))


def make_review(db, user, hospital, **overrides):
    data = {
        "user_id": user.id,
        "hospital_id": hospital.id,
        "title": {"ko_KR": "만족스러운 상담"},
        "content": {"ko_KR": "친절하게 설명해 주셨어요."},
        "rating": 5,
    }
    data.update(overrides)
    return _save(db, Review(**data))


def make_banner(db, **overrides):
    data = {
        "title": dict(BANNER_TITLE),
        "link_url": "https://kdoc.example.org/events/spring",
        "order": 0,
        "type": BannerType.MAIN,
        "start_date": utcnow(),
        "end_date": utcnow() + timedelta(days=30),
    }
    data.update(overrides)
    return _save(db, EventBanner(**data))


def make_notice(db, **overrides):
    data = {
        "title": {"ko_KR": "서비스 점검 안내", "en_US": "Scheduled maintenance"},
        "content": {"ko_KR": "점검 시간 동안 이용이 제한됩니다."},
    }
    data.update(overrides)
    return _save(db, Notice(**data))


def make_message(db, hospital, user, **overrides):
    data = {
        "hospital_id": hospital.id,
        "user_id": user.id,
        "content": "안녕하세요, 상담 문의드립니다.",
        "sender_type": SenderType.USER,
    }
    data.update(overrides)
    return _save(db, ConsultationMessage(**data))


def make_memo(db, hospital, user, **overrides):
    data = {
        "hospital_id": hospital.id,
        "user_id": user.id,
        "content": "Call back after 3pm",
    }
    data.update(overrides)
    return _save(db, ConsultationMemo(**data))


def make_invitation_code(db, **overrides):
    data = {"code": f"VIP-{uuid.uuid4().hex[:8].upper()}", "kind": InvitationCodeKind.VIP}
    data.update(overrides)
    return _save(db, InvitationCode(**data))


def make_video_category(db, **overrides):
    data = {"name": {"ko_KR": "시술 안내", "en_US": "Procedures"}, "order": 0}
    data.update(overrides)
    return _save(db, YoutubeVideoCategory(**data))


def make_video(db, category, **overrides):
    data = {
        "category_id": category.id,
        "title": {"ko_KR": "쌍꺼풀 수술 과정", "en_US": "Double eyelid surgery"},
        "video_url": {"ko_KR": "https://www.youtube.com/watch?v=abc123"},
    }
    data.update(overrides)
    return _save(db, YoutubeVideo(**data))

"""
Hospital and medical specialty API tests against an in-memory database.
"""

import uuid

from domain.enums import ApprovalStatus, HospitalImageType, SenderType
from domain.models import (
    ConsultationMemo,
    ConsultationMessage,
    Doctor,
    Hospital,
    HospitalImage,
    Review,
)
from test_fixtures import (
    PNG_BYTES,
    make_doctor,
    make_hospital,
    make_hospital_image,
    make_memo,
    make_message,
    make_review,
    make_specialty,
    make_user,
)

BASE = "/api/admin/hospitals"


def test_create_hospital_starts_pending_with_specialties(client, db_session):
    specialty = make_specialty(db_session)

    r = client.post(
        BASE,
        json={
            "name": {"ko_KR": "강남미소의원", "en_US": "Gangnam Miso Clinic"},
            "phone_number": "02-123-4567",
            "medical_specialty_ids": [str(specialty.id)],
        },
    )

    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["approval_status"] == "PENDING"
    assert data["review_count"] == 0
    assert data["medical_specialty_ids"] == [str(specialty.id)]


def test_create_hospital_with_unknown_specialty_returns_400(client):
    r = client.post(
        BASE,
        json={"name": {"ko_KR": "병원"}, "medical_specialty_ids": [str(uuid.uuid4())]},
    )

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Medical specialty not found"


def test_create_hospital_with_inactive_specialty_returns_400(client, db_session):
    specialty = make_specialty(db_session, is_active=False)

    r = client.post(
        BASE,
        json={"name": {"ko_KR": "병원"}, "medical_specialty_ids": [str(specialty.id)]},
    )

    assert r.status_code == 400


def test_list_hospitals_filters_and_searches(client, db_session):
    make_hospital(db_session, name={"ko_KR": "서울성형외과", "en_US": "Seoul Plastic"})
    make_hospital(
        db_session,
        name={"ko_KR": "부산피부과", "en_US": "Busan Derma"},
        approval_status=ApprovalStatus.PENDING,
        enable_jp=True,
    )

    r = client.get(BASE, params={"search": "busan"})
    assert r.status_code == 200
    page = r.json()["data"]
    assert page["total"] == 1
    assert page["items"][0]["name"]["en_US"] == "Busan Derma"

    r = client.get(BASE, params={"approval_status": "APPROVED"})
    assert [h["name"]["ko_KR"] for h in r.json()["data"]["items"]] == ["서울성형외과"]

    r = client.get(BASE, params={"enable_jp": "true"})
    assert r.json()["data"]["total"] == 1


def test_list_hospitals_paginates(client, db_session):
    for i in range(3):
        make_hospital(db_session, name={"ko_KR": f"병원 {i}"})

    r = client.get(BASE, params={"page": 2, "limit": 2})

    page = r.json()["data"]
    assert page["total"] == 3
    assert len(page["items"]) == 1
    assert page["has_prev"] is True
    assert page["has_next"] is False


def test_get_missing_hospital_returns_404(client):
    r = client.get(f"{BASE}/{uuid.uuid4()}")

    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"


def test_update_hospital_replaces_specialties(client, db_session):
    first = make_specialty(db_session, specialty_type="DERMATOLOGY")
    second = make_specialty(db_session, specialty_type="DENTISTRY")
    hospital = make_hospital(db_session)
    client.put(f"{BASE}/{hospital.id}", json={"medical_specialty_ids": [str(first.id)]})

    r = client.put(
        f"{BASE}/{hospital.id}",
        json={"memo": "VIP partner", "medical_specialty_ids": [str(second.id)]},
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["memo"] == "VIP partner"
    assert data["medical_specialty_ids"] == [str(second.id)]
    assert data["name"]["ko_KR"] == "서울성형외과"


def test_update_hospital_ignores_null_flags(client, db_session):
    hospital = make_hospital(db_session, enable_jp=True, rating=4.5)

    r = client.put(
        f"{BASE}/{hospital.id}",
        json={
            "enable_jp": None,
            "has_clone": None,
            "rating": None,
            "approval_status": None,
            "memo": None,
        },
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["enable_jp"] is True
    assert data["has_clone"] is False
    assert data["rating"] == 4.5
    assert data["approval_status"] == "APPROVED"
    assert data["memo"] is None


def test_delete_hospital_removes_dependent_rows(client, db_session):
    hospital = make_hospital(db_session)
    user = make_user(db_session)
    make_hospital_image(db_session, hospital)
    make_doctor(db_session, hospital)
    make_review(db_session, user, hospital)
    make_message(db_session, hospital, user, sender_type=SenderType.ADMIN)
    make_memo(db_session, hospital, user)

    r = client.delete(f"{BASE}/{hospital.id}")

    assert r.status_code == 200
    assert r.json()["data"] == {"id": str(hospital.id), "deleted": True}
    db_session.expire_all()
    assert db_session.query(Hospital).count() == 0
    assert db_session.query(HospitalImage).count() == 0
    assert db_session.query(Doctor).count() == 0
    assert db_session.query(Review).count() == 0
    assert db_session.query(ConsultationMessage).count() == 0
    assert db_session.query(ConsultationMemo).count() == 0


def test_delete_missing_hospital_returns_404(client):
    assert client.delete(f"{BASE}/{uuid.uuid4()}").status_code == 404


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def test_upload_and_delete_hospital_image(client, db_session, storage):
    hospital = make_hospital(db_session)

    r = client.post(
        f"{BASE}/{hospital.id}/images",
        files={"file": ("lobby.png", PNG_BYTES, "image/png")},
        data={"image_type": "INTERIOR", "alt": "Lobby", "order": "2"},
    )

    assert r.status_code == 201
    image = r.json()["data"]
    assert image["image_type"] == "INTERIOR"
    assert image["alt"] == "Lobby"
    assert image["order"] == 2
    assert image["path"].startswith(f"hospitals/{hospital.id}/interior/")
    assert (storage.base_dir / image["path"]).exists()

    r = client.get(f"{BASE}/{hospital.id}/images")
    assert [i["id"] for i in r.json()["data"]] == [image["id"]]

    r = client.delete(f"{BASE}/{hospital.id}/images/{image['id']}")
    assert r.status_code == 200
    assert not (storage.base_dir / image["path"]).exists()


def test_upload_hospital_image_rejects_pdf(client, db_session):
    hospital = make_hospital(db_session)

    r = client.post(
        f"{BASE}/{hospital.id}/images",
        files={"file": ("menu.pdf", b"%PDF-1.7", "application/pdf")},
        data={"image_type": "MAIN"},
    )

    assert r.status_code == 400


def test_delete_image_of_other_hospital_returns_404(client, db_session):
    owner = make_hospital(db_session)
    other = make_hospital(db_session)
    image = make_hospital_image(db_session, owner, image_type=HospitalImageType.MAIN)

    r = client.delete(f"{BASE}/{other.id}/images/{image.id}")

    assert r.status_code == 404


# ---------------------------------------------------------------------------
# Medical specialties
# ---------------------------------------------------------------------------


def test_medical_specialty_crud(client):
    r = client.post(
        "/api/admin/medical-specialties",
        json={"name": {"ko_KR": "안과", "en_US": "Ophthalmology"}, "specialty_type": "EYE"},
    )
    assert r.status_code == 201
    specialty_id = r.json()["data"]["id"]

    r = client.put(
        f"/api/admin/medical-specialties/{specialty_id}", json={"is_active": False}
    )
    assert r.json()["data"]["is_active"] is False

    r = client.get("/api/admin/medical-specialties", params={"is_active": "false"})
    assert [s["id"] for s in r.json()["data"]] == [specialty_id]

    r = client.delete(f"/api/admin/medical-specialties/{specialty_id}")
    assert r.status_code == 200


def test_delete_specialty_in_use_returns_400(client, db_session):
    specialty = make_specialty(db_session)
    user = make_user(db_session)
    hospital = make_hospital(db_session)
    make_review(db_session, user, hospital, medical_specialty_id=specialty.id)

    r = client.delete(f"/api/admin/medical-specialties/{specialty.id}")

    assert r.status_code == 400


def test_update_specialty_ignores_null_fields(client, db_session):
    specialty = make_specialty(db_session, order=3)

    r = client.put(
        f"/api/admin/medical-specialties/{specialty.id}",
        json={"specialty_type": None, "order": None, "is_active": None},
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["specialty_type"] == "PLASTIC_SURGERY"
    assert data["order"] == 3
    assert data["is_active"] is True


def test_delete_parent_specialty_with_children_returns_400(client, db_session):
    parent = make_specialty(db_session)
    child = make_specialty(db_session, specialty_type="EYELID", parent_id=parent.id)

    r = client.delete(f"/api/admin/medical-specialties/{parent.id}")

    assert r.status_code == 400
    assert "child specialties" in r.json()["error"]["message"]

    assert client.delete(f"/api/admin/medical-specialties/{child.id}").status_code == 200
    assert client.delete(f"/api/admin/medical-specialties/{parent.id}").status_code == 200

"""
Doctor API tests.
"""

import uuid

from domain.enums import ApprovalStatus
from test_fixtures import PNG_BYTES, make_doctor, make_hospital, make_specialty

BASE = "/api/admin/doctors"


def test_create_doctor_is_pending_and_not_stopped(client, db_session):
    hospital = make_hospital(db_session)
    specialty = make_specialty(db_session)

    r = client.post(
        BASE,
        json={
            "hospital_id": str(hospital.id),
            "name": {"ko_KR": "박서연", "en_US": "Park Seoyeon"},
            "gender": "FEMALE",
            "license_date": "2015-03-01",
            "medical_specialty_ids": [str(specialty.id)],
        },
    )

    assert r.status_code == 201
    data = r.json()["data"]
    assert data["approval_status"] == "PENDING"
    assert data["stop"] is False
    assert data["hospital"]["id"] == str(hospital.id)
    assert data["medical_specialty_ids"] == [str(specialty.id)]
    assert data["license_date"] == "2015-03-01"


def test_create_doctor_for_unknown_hospital_returns_400(client):
    r = client.post(
        BASE, json={"hospital_id": str(uuid.uuid4()), "name": {"ko_KR": "김의사"}}
    )

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Hospital not found"


def test_create_doctor_with_inactive_specialty_returns_400(client, db_session):
    hospital = make_hospital(db_session)
    specialty = make_specialty(db_session, is_active=False)

    r = client.post(
        BASE,
        json={
            "hospital_id": str(hospital.id),
            "name": {"ko_KR": "김의사"},
            "medical_specialty_ids": [str(specialty.id)],
        },
    )

    assert r.status_code == 400


def test_create_doctor_with_blank_name_returns_400(client, db_session):
    hospital = make_hospital(db_session)

    r = client.post(BASE, json={"hospital_id": str(hospital.id), "name": {"ko_KR": " "}})

    assert r.status_code == 400


def test_list_doctors_searches_hospital_name(client, db_session):
    gangnam = make_hospital(db_session, name={"ko_KR": "강남클리닉"})
    busan = make_hospital(db_session, name={"ko_KR": "부산클리닉"})
    make_doctor(db_session, gangnam)
    make_doctor(db_session, busan, approval_status=ApprovalStatus.APPROVED)

    r = client.get(BASE, params={"search": "부산"})

    page = r.json()["data"]
    assert page["total"] == 1
    assert page["items"][0]["hospital_id"] == str(busan.id)

    r = client.get(BASE, params={"approval_status": "PENDING"})
    assert [d["hospital_id"] for d in r.json()["data"]["items"]] == [str(gangnam.id)]


def test_update_doctor_approves_and_stops(client, db_session):
    doctor = make_doctor(db_session, make_hospital(db_session))

    r = client.put(
        f"{BASE}/{doctor.id}", json={"approval_status": "APPROVED", "stop": True}
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["approval_status"] == "APPROVED"
    assert data["stop"] is True
    assert data["name"]["ko_KR"] == "이준호"


def test_update_doctor_ignores_null_flags(client, db_session):
    doctor = make_doctor(db_session, make_hospital(db_session))

    r = client.put(f"{BASE}/{doctor.id}", json={"stop": None, "approval_status": None})

    assert r.status_code == 200
    assert r.json()["data"]["stop"] is False
    assert r.json()["data"]["approval_status"] == "PENDING"


def test_update_doctor_to_unknown_hospital_returns_400(client, db_session):
    doctor = make_doctor(db_session, make_hospital(db_session))

    r = client.put(f"{BASE}/{doctor.id}", json={"hospital_id": str(uuid.uuid4())})

    assert r.status_code == 400


def test_new_profile_image_replaces_previous_one(client, db_session, storage):
    doctor = make_doctor(db_session, make_hospital(db_session))

    def upload(image_type):
        r = client.post(
            f"{BASE}/{doctor.id}/images",
            files={"file": ("photo.png", PNG_BYTES, "image/png")},
            data={"image_type": image_type},
        )
        assert r.status_code == 201
        return r.json()["data"]

    first = upload("PROFILE")
    career = upload("CAREER")
    second = upload("PROFILE")

    assert not (storage.base_dir / first["path"]).exists()
    images = client.get(f"{BASE}/{doctor.id}").json()["data"]["images"]
    assert sorted(i["id"] for i in images) == sorted([career["id"], second["id"]])


def test_delete_doctor_image_and_doctor(client, db_session):
    doctor = make_doctor(db_session, make_hospital(db_session))
    image = client.post(
        f"{BASE}/{doctor.id}/images",
        files={"file": ("photo.png", PNG_BYTES, "image/png")},
        data={"image_type": "CAREER"},
    ).json()["data"]

    assert client.delete(f"{BASE}/images/{image['id']}").status_code == 200
    assert client.delete(f"{BASE}/images/{image['id']}").status_code == 404

    assert client.delete(f"{BASE}/{doctor.id}").status_code == 200
    assert client.get(f"{BASE}/{doctor.id}").status_code == 404

"""
Review API tests.
"""

import uuid

from domain.models import Review
from services import review_service
from test_fixtures import (
    PNG_BYTES,
    make_hospital,
    make_review,
    make_user,
    unique_email,
)

BASE = "/api/admin/reviews"


def test_create_review_decodes_html_entities(client, db_session):
    user = make_user(db_session)
    hospital = make_hospital(db_session)

    r = client.post(
        BASE,
        json={
            "user_id": str(user.id),
            "hospital_id": str(hospital.id),
            "title": {"en_US": "Clean &amp; friendly"},
            "content": {"en_US": "&quot;Highly&quot; recommended, it&#39;s great"},
            "rating": 4,
        },
    )

    assert r.status_code == 201
    data = r.json()["data"]
    assert data["title"]["en_US"] == "Clean & friendly"
    assert data["content"]["en_US"] == "\"Highly\" recommended, it's great"
    assert data["view_count"] == 0
    assert data["user"]["id"] == str(user.id)


def test_create_review_with_out_of_range_rating_returns_400(client, db_session):
    user = make_user(db_session)
    hospital = make_hospital(db_session)

    r = client.post(
        BASE,
        json={"user_id": str(user.id), "hospital_id": str(hospital.id), "rating": 6},
    )

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Rating must be between 1 and 5"


def test_create_review_for_unknown_user_returns_400(client, db_session):
    hospital = make_hospital(db_session)

    r = client.post(
        BASE,
        json={"user_id": str(uuid.uuid4()), "hospital_id": str(hospital.id), "rating": 3},
    )

    assert r.status_code == 400


def test_list_reviews_reports_has_next_without_total(client, db_session):
    user = make_user(db_session)
    hospital = make_hospital(db_session)
    for _ in range(3):
        make_review(db_session, user, hospital)

    first = client.get(BASE, params={"limit": 2}).json()["data"]
    second = client.get(BASE, params={"limit": 2, "page": 2}).json()["data"]

    assert len(first["items"]) == 2
    assert first["has_next"] is True
    assert "total" not in first
    assert len(second["items"]) == 1
    assert second["has_next"] is False
    assert second["has_prev"] is True


def test_list_reviews_filters_by_user_type(client, db_session):
    hospital = make_hospital(db_session)
    staff = make_user(db_session, email=unique_email("seed", "example.com"))
    patient = make_user(db_session)
    staff_review = make_review(db_session, staff, hospital)
    patient_review = make_review(db_session, patient, hospital, rating=2)

    def ids(user_type):
        r = client.get(BASE, params={"user_type": user_type})
        return [item["id"] for item in r.json()["data"]["items"]]

    admin_ids = ids("admin")
    real_ids = ids("real")

    assert admin_ids == [str(staff_review.id)]
    assert real_ids == [str(patient_review.id)]

    r = client.get(BASE, params={"rating": 2})
    assert [i["id"] for i in r.json()["data"]["items"]] == [str(patient_review.id)]


def test_update_review_rating_validation(client, db_session):
    review = make_review(db_session, make_user(db_session), make_hospital(db_session))

    assert client.put(f"{BASE}/{review.id}", json={"rating": 0}).status_code == 400

    r = client.put(
        f"{BASE}/{review.id}",
        json={"rating": 3, "is_recommended": False, "title": {"ko_KR": "보통 &lt;3"}},
    )
    data = r.json()["data"]
    assert data["rating"] == 3
    assert data["is_recommended"] is False
    assert data["title"]["ko_KR"] == "보통 <3"


def test_update_review_ignores_null_flags(client, db_session):
    review = make_review(db_session, make_user(db_session), make_hospital(db_session))

    r = client.put(f"{BASE}/{review.id}", json={"is_active": None, "is_recommended": None})

    assert r.status_code == 200
    assert r.json()["data"]["is_active"] is True
    assert r.json()["data"]["is_recommended"] is True


def test_upload_review_images_up_to_limit(client, db_session, monkeypatch):
    monkeypatch.setattr(review_service, "MAX_IMAGES_PER_TYPE", 2)
    review = make_review(db_session, make_user(db_session), make_hospital(db_session))

    def upload(image_type):
        return client.post(
            f"{BASE}/{review.id}/images",
            files={"file": ("after.png", PNG_BYTES, "image/png")},
            data={"image_type": image_type},
        )

    assert upload("AFTER").json()["data"]["order"] == 0
    assert upload("AFTER").json()["data"]["order"] == 1
    r = upload("AFTER")
    assert r.status_code == 400
    assert upload("BEFORE").status_code == 201


def test_delete_review_removes_images(client, db_session, storage):
    review = make_review(db_session, make_user(db_session), make_hospital(db_session))
    image = client.post(
        f"{BASE}/{review.id}/images",
        files={"file": ("before.png", PNG_BYTES, "image/png")},
        data={"image_type": "BEFORE"},
    ).json()["data"]

    r = client.delete(f"{BASE}/{review.id}")

    assert r.status_code == 200
    assert not (storage.base_dir / image["path"]).exists()
    assert client.get(f"{BASE}/{review.id}").status_code == 404


# ---------------------------------------------------------------------------
# Batch activation
# ---------------------------------------------------------------------------


def test_batch_hides_selected_reviews(client, db_session):
    user = make_user(db_session)
    hospital = make_hospital(db_session)
    first = make_review(db_session, user, hospital)
    second = make_review(db_session, user, hospital)
    untouched = make_review(db_session, user, hospital)

    r = client.post(
        f"{BASE}/batch",
        json={"review_ids": [str(first.id), str(second.id)], "is_active": False},
    )

    assert r.status_code == 200
    assert r.json()["data"] == {"updated_count": 2, "is_active": False, "hospital_id": None}
    db_session.expire_all()
    assert db_session.get(Review, first.id).is_active is False
    assert db_session.get(Review, untouched.id).is_active is True


def test_batch_validation(client, db_session):
    review = make_review(db_session, make_user(db_session), make_hospital(db_session))

    r = client.post(f"{BASE}/batch", json={"review_ids": [], "is_active": True})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "review_ids must be a non-empty list"

    r = client.post(f"{BASE}/batch", json={"review_ids": [str(review.id)], "is_active": "yes"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "is_active is required and must be a boolean"

    r = client.post(f"{BASE}/batch", json={"review_ids": [str(review.id)]})
    assert r.status_code == 400


def test_batch_by_hospital_only_touches_that_hospital(client, db_session):
    user = make_user(db_session)
    hospital = make_hospital(db_session)
    other = make_hospital(db_session)
    make_review(db_session, user, hospital)
    make_review(db_session, user, hospital)
    kept = make_review(db_session, user, other)

    r = client.post(
        f"{BASE}/batch-by-hospital",
        json={"hospital_id": str(hospital.id), "is_active": False},
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["updated_count"] == 2
    assert data["hospital_id"] == str(hospital.id)
    db_session.expire_all()
    assert db_session.query(Review).filter(Review.is_active.is_(False)).count() == 2
    assert db_session.get(Review, kept.id).is_active is True


def test_batch_by_hospital_validation(client):
    r = client.post(f"{BASE}/batch-by-hospital", json={"is_active": True})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "hospital_id is required"

    r = client.post(
        f"{BASE}/batch-by-hospital",
        json={"hospital_id": str(uuid.uuid4()), "is_active": 1},
    )
    assert r.status_code == 400

    r = client.post(
        f"{BASE}/batch-by-hospital",
        json={"hospital_id": str(uuid.uuid4()), "is_active": True},
    )
    assert r.status_code == 404

"""
Hospital category API tests, including category links on hospitals.
"""

import uuid

from domain.models import HospitalCategory, HospitalCategoryLink
from test_fixtures import make_hospital, make_hospital_category

BASE = "/api/admin/hospital-categories"
HOSPITALS = "/api/admin/hospitals"


def test_create_and_get_category(client):
    r = client.post(
        BASE,
        json={
            "name": {"ko_KR": "눈 성형", "en_US": "Eye surgery"},
            "description": {"en_US": "Double eyelid and canthoplasty"},
            "order": 1,
        },
    )

    assert r.status_code == 201
    data = r.json()["data"]
    assert data["is_active"] is True
    assert data["hospital_count"] == 0

    r = client.get(f"{BASE}/{data['id']}")
    assert r.json()["data"]["name"]["en_US"] == "Eye surgery"


def test_create_category_requires_name(client):
    r = client.post(BASE, json={"name": {"ko_KR": "  "}})

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Hospital category name is required"


def test_get_unknown_category_returns_404(client):
    assert client.get(f"{BASE}/{uuid.uuid4()}").status_code == 404


def test_list_categories_with_counts_and_filter(client, db_session):
    hospital = make_hospital(db_session)
    unordered = make_hospital_category(db_session, order=None)
    second = make_hospital_category(db_session, order=2, hospitals=[hospital])
    first = make_hospital_category(db_session, order=1, is_active=False)

    rows = client.get(BASE).json()["data"]

    assert [(row["id"], row["hospital_count"]) for row in rows] == [
        (str(first.id), 0),
        (str(second.id), 1),
        (str(unordered.id), 0),
    ]

    rows = client.get(BASE, params={"is_active": "false"}).json()["data"]
    assert [row["id"] for row in rows] == [str(first.id)]


def test_update_category(client, db_session):
    category = make_hospital_category(db_session)

    r = client.put(
        f"{BASE}/{category.id}",
        json={"order": 5, "description": None, "is_active": None},
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["order"] == 5
    assert data["description"] is None
    assert data["is_active"] is True

    assert client.put(f"{BASE}/{category.id}", json={"name": {}}).status_code == 400


def test_delete_unused_category(client, db_session):
    category = make_hospital_category(db_session)

    r = client.delete(f"{BASE}/{category.id}")

    assert r.status_code == 200
    assert r.json()["data"] == {"id": str(category.id), "deleted": True, "deactivated": False}
    assert client.get(f"{BASE}/{category.id}").status_code == 404


def test_delete_category_in_use_deactivates_it(client, db_session):
    hospital = make_hospital(db_session)
    category = make_hospital_category(db_session, hospitals=[hospital])

    r = client.delete(f"{BASE}/{category.id}")

    assert r.status_code == 200
    assert r.json()["data"]["deactivated"] is True
    db_session.expire_all()
    assert db_session.get(HospitalCategory, category.id).is_active is False
    assert db_session.query(HospitalCategoryLink).count() == 1


def test_hospital_create_and_update_category_links(client, db_session):
    skin = make_hospital_category(db_session)
    eyes = make_hospital_category(db_session, name={"en_US": "Eye clinics"})

    r = client.post(
        HOSPITALS,
        json={"name": {"ko_KR": "강남안과"}, "hospital_category_ids": [str(skin.id)]},
    )
    assert r.status_code == 201
    hospital_id = r.json()["data"]["id"]
    assert r.json()["data"]["hospital_category_ids"] == [str(skin.id)]

    r = client.put(f"{HOSPITALS}/{hospital_id}", json={"hospital_category_ids": [str(eyes.id)]})
    assert r.json()["data"]["hospital_category_ids"] == [str(eyes.id)]
    assert client.get(f"{BASE}/{eyes.id}").json()["data"]["hospital_count"] == 1


def test_hospital_with_unknown_or_inactive_category_returns_400(client, db_session):
    hidden = make_hospital_category(db_session, is_active=False)

    r = client.post(
        HOSPITALS,
        json={"name": {"ko_KR": "강남안과"}, "hospital_category_ids": [str(uuid.uuid4())]},
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Hospital category not found"

    r = client.post(
        HOSPITALS,
        json={"name": {"ko_KR": "강남안과"}, "hospital_category_ids": [str(hidden.id)]},
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Hospital category is not active"


def test_deleting_hospital_keeps_its_categories(client, db_session):
    hospital = make_hospital(db_session)
    category = make_hospital_category(db_session, hospitals=[hospital])

    assert client.delete(f"{HOSPITALS}/{hospital.id}").status_code == 200

    db_session.expire_all()
    assert db_session.get(HospitalCategory, category.id) is not None
    assert db_session.query(HospitalCategoryLink).count() == 0

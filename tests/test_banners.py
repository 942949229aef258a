"""
Event banner API tests.
"""

import uuid
from datetime import timedelta

from app.helpers import utcnow
from domain.enums import BannerType
from domain.models import EventBannerImage
from test_fixtures import BANNER_TITLE, PNG_BYTES, make_banner

BASE = "/api/admin/banners"


def banner_payload(**overrides):
    payload = {
        "title": dict(BANNER_TITLE),
        "link_url": "  https://kdoc.example.org/events/summer  ",
        "order": 1,
        "type": "RIBBON",
        "start_date": "2026-06-01T00:00:00Z",
        "end_date": "2026-06-30T00:00:00Z",
    }
    payload.update(overrides)
    return payload


def test_create_banner_trims_link_url(client):
    r = client.post(BASE, json=banner_payload())

    assert r.status_code == 201
    data = r.json()["data"]
    assert data["link_url"] == "https://kdoc.example.org/events/summer"
    assert data["type"] == "RIBBON"
    assert data["is_active"] is True
    assert data["images"] == []


def test_create_banner_requires_title_in_every_language(client):
    title = dict(BANNER_TITLE)
    title["hi"] = "  "
    del title["th"]

    r = client.post(BASE, json=banner_payload(title=title))

    assert r.status_code == 400
    error = r.json()["error"]
    assert error["message"] == "Title is required for all languages"
    assert sorted(error["details"]["missing_locales"]) == ["hi", "th"]


def test_create_banner_rejects_relative_link(client):
    r = client.post(BASE, json=banner_payload(link_url="/events/summer"))

    assert r.status_code == 400


def test_create_banner_blank_link_is_stored_as_null(client):
    r = client.post(BASE, json=banner_payload(link_url="   "))

    assert r.json()["data"]["link_url"] is None


def test_create_banner_rejects_end_before_start(client):
    r = client.post(
        BASE,
        json=banner_payload(
            start_date="2026-06-30T00:00:00Z", end_date="2026-06-01T00:00:00Z"
        ),
    )

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "End date must be after start date"


def test_create_banner_rejects_negative_order(client):
    assert client.post(BASE, json=banner_payload(order=-1)).status_code == 400


def test_list_banners_filters_and_sorts(client, db_session):
    make_banner(db_session, order=2)
    make_banner(db_session, order=0, type=BannerType.RIBBON)
    make_banner(db_session, order=1, is_active=False)

    r = client.get(BASE, params={"order_by": "order", "order_direction": "desc"})
    assert [b["order"] for b in r.json()["data"]["items"]] == [2, 1, 0]

    r = client.get(BASE, params={"type": "RIBBON"})
    assert [b["order"] for b in r.json()["data"]["items"]] == [0]

    r = client.get(BASE, params={"is_active": "false"})
    assert r.json()["data"]["total"] == 1


def test_list_banners_rejects_unknown_sort_column(client):
    r = client.get(BASE, params={"order_by": "title"})

    assert r.status_code == 422


def test_update_banner_checks_dates_against_stored_values(client, db_session):
    banner = make_banner(db_session)

    r = client.put(
        f"{BASE}/{banner.id}",
        json={"end_date": (utcnow() - timedelta(days=1)).isoformat()},
    )
    assert r.status_code == 400

    r = client.put(f"{BASE}/{banner.id}", json={"order": 5, "link_url": None})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["order"] == 5
    assert data["link_url"] is None


def test_toggle_active_flips_flag(client, db_session):
    banner = make_banner(db_session)

    r = client.patch(f"{BASE}/{banner.id}/toggle-active")
    assert r.json()["data"]["is_active"] is False
    assert r.json()["message"] == "Banner deactivated"

    r = client.patch(f"{BASE}/{banner.id}/toggle-active")
    assert r.json()["data"]["is_active"] is True


def test_upload_banner_image_replaces_same_locale(client, db_session, storage):
    banner = make_banner(db_session)

    def upload(locale):
        return client.post(
            f"{BASE}/{banner.id}/images",
            files={"file": (f"{locale}.png", PNG_BYTES, "image/png")},
            data={"locale": locale},
        )

    first = upload("ko").json()["data"]
    second = upload("ko").json()["data"]
    upload("en")

    assert first["id"] == second["id"]
    assert first["path"] != second["path"]
    assert not (storage.base_dir / first["path"]).exists()
    assert (storage.base_dir / second["path"]).exists()
    assert db_session.query(EventBannerImage).count() == 2

    images = client.get(f"{BASE}/{banner.id}").json()["data"]["images"]
    assert [i["locale"] for i in images] == ["en", "ko"]


def test_upload_banner_image_rejects_unknown_locale(client, db_session):
    banner = make_banner(db_session)

    r = client.post(
        f"{BASE}/{banner.id}/images",
        files={"file": ("fr.png", PNG_BYTES, "image/png")},
        data={"locale": "fr"},
    )

    assert r.status_code == 400


def test_delete_banner(client, db_session):
    banner = make_banner(db_session)

    assert client.delete(f"{BASE}/{banner.id}").status_code == 200
    assert client.get(f"{BASE}/{banner.id}").status_code == 404
    assert client.delete(f"{BASE}/{uuid.uuid4()}").status_code == 404

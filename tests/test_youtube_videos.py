"""
YouTube video and category API tests.
"""

import uuid

from test_fixtures import PNG_BYTES, make_video, make_video_category

CATEGORIES = "/api/admin/youtube-video-categories"
VIDEOS = "/api/admin/youtube-videos"


def test_categories_list_with_video_counts(client, db_session):
    busy = make_video_category(db_session, order=1)
    empty = make_video_category(db_session, name={"en_US": "Recovery"}, order=0)
    make_video(db_session, busy)
    make_video(db_session, busy)

    rows = client.get(CATEGORIES).json()["data"]

    assert [(row["id"], row["video_count"]) for row in rows] == [
        (str(empty.id), 0),
        (str(busy.id), 2),
    ]


def test_category_crud(client):
    r = client.post(CATEGORIES, json={"name": {"ko_KR": "후기", "en_US": "Reviews"}})
    assert r.status_code == 201
    category_id = r.json()["data"]["id"]

    r = client.put(f"{CATEGORIES}/{category_id}", json={"order": 3, "is_active": False})
    data = r.json()["data"]
    assert data["order"] == 3
    assert data["is_active"] is False
    assert data["video_count"] == 0

    assert client.delete(f"{CATEGORIES}/{category_id}").status_code == 200


def test_category_requires_name(client):
    assert client.post(CATEGORIES, json={"name": {"en_US": ""}}).status_code == 400


def test_category_with_videos_cannot_be_deleted(client, db_session):
    category = make_video_category(db_session)
    make_video(db_session, category)

    r = client.delete(f"{CATEGORIES}/{category.id}")

    assert r.status_code == 400


def test_create_video(client, db_session):
    category = make_video_category(db_session)

    r = client.post(
        VIDEOS,
        json={
            "category_id": str(category.id),
            "title": {"en_US": "Rhinoplasty recovery"},
            "video_url": {"en_US": "https://www.youtube.com/watch?v=xyz789"},
            "order": 2,
        },
    )

    assert r.status_code == 201
    data = r.json()["data"]
    assert data["category"]["id"] == str(category.id)
    assert data["is_active"] is True
    assert data["thumbnails"] == []


def test_create_video_validation(client, db_session):
    category = make_video_category(db_session)
    base = {
        "category_id": str(category.id),
        "title": {"en_US": "Title"},
        "video_url": {"en_US": "https://youtu.be/abc"},
    }

    r = client.post(VIDEOS, json={**base, "category_id": str(uuid.uuid4())})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Video category not found"

    assert client.post(VIDEOS, json={**base, "title": {"en_US": " "}}).status_code == 400
    assert client.post(VIDEOS, json={**base, "video_url": {}}).status_code == 400


def test_list_videos_by_category(client, db_session):
    first = make_video_category(db_session)
    second = make_video_category(db_session)
    make_video(db_session, first)
    make_video(db_session, second, is_active=False)

    r = client.get(VIDEOS, params={"category_id": str(first.id)})
    assert r.json()["data"]["total"] == 1
    assert r.json()["data"]["page_size"] == 10

    r = client.get(VIDEOS, params={"is_active": "false"})
    assert [v["category_id"] for v in r.json()["data"]["items"]] == [str(second.id)]


def test_update_video_moves_category(client, db_session):
    video = make_video(db_session, make_video_category(db_session))
    target = make_video_category(db_session)

    r = client.put(
        f"{VIDEOS}/{video.id}", json={"category_id": str(target.id), "is_active": None}
    )

    data = r.json()["data"]
    assert data["category_id"] == str(target.id)
    assert data["is_active"] is True


def test_thumbnail_upsert_per_locale(client, db_session, storage):
    video = make_video(db_session, make_video_category(db_session))

    def upload(locale):
        return client.post(
            f"{VIDEOS}/{video.id}/thumbnails",
            files={"file": ("thumb.png", PNG_BYTES, "image/png")},
            data={"locale": locale, "alt": f"{locale} thumbnail"},
        )

    first = upload("ja_JP").json()["data"]
    second = upload("ja_JP").json()["data"]
    upload("ko_KR")

    assert first["id"] == second["id"]
    assert second["alt"] == "ja_JP thumbnail"
    assert not (storage.base_dir / first["path"]).exists()

    thumbs = client.get(f"{VIDEOS}/{video.id}/thumbnails").json()["data"]
    assert [t["locale"] for t in thumbs] == ["ja_JP", "ko_KR"]

    assert upload("fr_FR").status_code == 400


def test_delete_video_removes_thumbnails(client, db_session, storage):
    video = make_video(db_session, make_video_category(db_session))
    thumb = client.post(
        f"{VIDEOS}/{video.id}/thumbnails",
        files={"file": ("thumb.png", PNG_BYTES, "image/png")},
        data={"locale": "en_US"},
    ).json()["data"]

    assert client.delete(f"{VIDEOS}/{video.id}").status_code == 200
    assert not (storage.base_dir / thumb["path"]).exists()
    assert client.get(f"{VIDEOS}/{video.id}/thumbnails").status_code == 404

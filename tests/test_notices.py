"""
Notice API tests.
"""

from domain.models import Notice
from test_fixtures import make_notice

BASE = "/api/admin/notices"


def test_create_notice_defaults(client):
    r = client.post(
        BASE,
        json={
            "title": {"en_US": "New clinics in Busan"},
            "content": {"en_US": "Three partner hospitals joined this month."},
            "created_by": "ops@kdoc.kr",
        },
    )

    assert r.status_code == 201
    data = r.json()["data"]
    assert data["type"] == "GENERAL"
    assert data["is_active"] is True
    assert data["created_by"] == "ops@kdoc.kr"
    assert data["files"] == []


def test_create_notice_without_any_content_text_returns_400(client):
    r = client.post(
        BASE, json={"title": {"en_US": "Title"}, "content": {"en_US": "", "ko_KR": " "}}
    )

    assert r.status_code == 400


def test_list_notices_searches_titles_in_any_language(client, db_session):
    make_notice(db_session, title={"ja_JP": "メンテナンスのお知らせ"})
    make_notice(db_session)

    r = client.get(BASE, params={"search": "メンテナンス"})

    assert r.json()["data"]["total"] == 1


def test_patch_notice_only_changes_given_fields(client, db_session):
    notice = make_notice(db_session)

    r = client.patch(
        f"{BASE}/{notice.id}", json={"type": "MAINTENANCE", "updated_by": "ops"}
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["type"] == "MAINTENANCE"
    assert data["updated_by"] == "ops"
    assert data["title"]["en_US"] == "Scheduled maintenance"


def test_patch_notice_with_empty_title_returns_400(client, db_session):
    notice = make_notice(db_session)

    r = client.patch(f"{BASE}/{notice.id}", json={"title": {"en_US": ""}})

    assert r.status_code == 400


def test_delete_notice_is_soft(client, db_session):
    notice = make_notice(db_session)

    r = client.delete(f"{BASE}/{notice.id}")

    assert r.status_code == 200
    assert client.get(f"{BASE}/{notice.id}").status_code == 404
    assert client.get(BASE).json()["data"]["total"] == 0
    assert client.delete(f"{BASE}/{notice.id}").status_code == 404

    db_session.expire_all()
    row = db_session.get(Notice, notice.id)
    assert row is not None
    assert row.deleted_at is not None
    assert row.is_active is False


def test_notice_file_upload_and_delete(client, db_session, storage):
    notice = make_notice(db_session)

    r = client.post(
        f"{BASE}/{notice.id}/files",
        files={"file": ("schedule.pdf", b"%PDF-1.7 maintenance", "application/pdf")},
    )

    assert r.status_code == 201
    stored = r.json()["data"]
    assert stored["file_name"] == "schedule.pdf"
    assert stored["mime_type"] == "application/pdf"
    assert stored["file_size"] == len(b"%PDF-1.7 maintenance")
    assert stored["path"].startswith(f"notices/{notice.id}/")

    files = client.get(f"{BASE}/{notice.id}").json()["data"]["files"]
    assert [f["id"] for f in files] == [stored["id"]]

    r = client.delete(f"{BASE}/{notice.id}/files/{stored['id']}")
    assert r.status_code == 200
    assert not (storage.base_dir / stored["path"]).exists()
    assert client.delete(f"{BASE}/{notice.id}/files/{stored['id']}").status_code == 404

import pytest

from directory_service.app.models.social_media_links import SocialMediaLink


@pytest.fixture
def make_link(db):
    def _make(platform: str, sort_order: int = 100, is_active: bool = True) -> SocialMediaLink:
        link = SocialMediaLink(
            platform=platform,
            url=f"https://{platform}.com/directory",
            display_name=platform.title(),
            icon_class=f"fab fa-{platform}",
            sort_order=sort_order,
            is_active=is_active,
        )
        db.add(link)
        db.commit()
        db.refresh(link)
        return link
    return _make


def test_create_link(client, admin, headers_for):
    resp = client.post("/api/admin/social-media", headers=headers_for(admin), json={
        "platform": "Instagram",
        "url": "https://instagram.com/directory",
        "displayName": "Instagram",
        "iconClass": "fab fa-instagram",
        "sortOrder": 2,
    })

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["platform"] == "instagram"
    assert data["isActive"] is True
    assert data["sortOrder"] == 2


@pytest.mark.parametrize("overrides", [
    {"platform": "myspace"},
    {"url": "ftp://instagram.com"},
    {"sortOrder": -1},
])
def test_create_link_validation(client, admin, headers_for, overrides):
    payload = {
        "platform": "instagram",
        "url": "https://instagram.com/directory",
        "displayName": "Instagram",
        "iconClass": "fab fa-instagram",
    }
    payload.update(overrides)

    resp = client.post("/api/admin/social-media", headers=headers_for(admin), json=payload)

    assert resp.status_code == 400


def test_platform_is_unique(client, admin, headers_for, make_link):
    make_link("facebook")

    resp = client.post("/api/admin/social-media", headers=headers_for(admin), json={
        "platform": "facebook",
        "url": "https://facebook.com/other",
        "displayName": "Facebook",
        "iconClass": "fab fa-facebook",
    })

    assert resp.status_code == 400


def test_public_listing_shows_active_links_in_order(client, make_link):
    make_link("youtube", sort_order=3)
    make_link("facebook", sort_order=1)
    make_link("tiktok", sort_order=2, is_active=False)

    data = client.get("/api/social-media").json()["data"]

    assert [link["platform"] for link in data] == ["facebook", "youtube"]


def test_admin_listing_shows_everything(client, admin, headers_for, make_link):
    make_link("facebook")
    make_link("tiktok", is_active=False)

    data = client.get("/api/admin/social-media", headers=headers_for(admin)).json()["data"]

    assert len(data) == 2


def test_update_and_delete_link(client, admin, headers_for, make_link):
    link = make_link("twitter")
    headers = headers_for(admin)

    updated = client.put(f"/api/admin/social-media/{link.id}", headers=headers,
                         json={"displayName": "X", "url": ""})

    assert updated.status_code == 200
    assert updated.json()["data"]["displayName"] == "X"
    assert updated.json()["data"]["url"] == "https://twitter.com/directory"

    assert client.delete(f"/api/admin/social-media/{link.id}", headers=headers).status_code == 200
    assert client.delete(f"/api/admin/social-media/{link.id}", headers=headers).status_code == 404


def test_update_to_taken_platform_fails(client, admin, headers_for, make_link):
    make_link("facebook")
    link = make_link("twitter")

    resp = client.put(f"/api/admin/social-media/{link.id}", headers=headers_for(admin),
                      json={"platform": "facebook"})

    assert resp.status_code == 400


def test_reorder(client, admin, headers_for, make_link):
    first = make_link("facebook", sort_order=1)
    second = make_link("youtube", sort_order=2)

    resp = client.put("/api/admin/social-media/reorder", headers=headers_for(admin), json={"items": [
        {"id": first.id, "sortOrder": 5},
        {"id": second.id, "sortOrder": 0},
    ]})

    assert resp.status_code == 200
    assert [link["platform"] for link in resp.json()["data"]] == ["youtube", "facebook"]


def test_reorder_with_unknown_id_changes_nothing(client, db, admin, headers_for, make_link):
    link = make_link("facebook", sort_order=1)

    resp = client.put("/api/admin/social-media/reorder", headers=headers_for(admin), json={"items": [
        {"id": link.id, "sortOrder": 9},
        {"id": 999, "sortOrder": 0},
    ]})

    assert resp.status_code == 404
    db.expire_all()
    assert db.get(SocialMediaLink, link.id).sort_order == 1


def test_bulk_action_all_succeed(client, db, admin, headers_for, make_link):
    ids = [make_link("facebook", is_active=False).id, make_link("youtube", is_active=False).id]

    resp = client.post("/api/admin/social-media/bulk-action", headers=headers_for(admin),
                       json={"linkIds": ids, "action": "activate"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["successCount"] == 2
    assert data["status"] == "complete"
    db.expire_all()
    assert all(link.is_active for link in db.query(SocialMediaLink).all())


def test_bulk_action_partial_failure_is_multi_status(client, admin, headers_for, make_link):
    link = make_link("facebook")

    resp = client.post("/api/admin/social-media/bulk-action", headers=headers_for(admin),
                       json={"linkIds": [link.id, 999], "action": "deactivate"})

    assert resp.status_code == 207
    data = resp.json()["data"]
    assert data["successCount"] == 1
    assert data["failureCount"] == 1
    assert data["totalRequested"] == 2
    assert data["errors"] == ["Link 999: Social media link not found"]


def test_bulk_action_delete(client, db, admin, headers_for, make_link):
    ids = [make_link("facebook").id, make_link("youtube").id]

    resp = client.post("/api/admin/social-media/bulk-action", headers=headers_for(admin),
                       json={"linkIds": ids, "action": "delete"})

    assert resp.status_code == 200
    db.expire_all()
    assert db.query(SocialMediaLink).count() == 0


@pytest.mark.parametrize("payload", [
    {"linkIds": [1], "action": "explode"},
    {"linkIds": [1]},
    {"linkIds": [], "action": "activate"},
])
def test_bulk_action_rejects_bad_input(client, db, admin, headers_for, make_link, payload):
    make_link("facebook")

    resp = client.post("/api/admin/social-media/bulk-action", headers=headers_for(admin), json=payload)

    assert resp.status_code == 400
    db.expire_all()
    assert db.query(SocialMediaLink).one().is_active is True


def test_bulk_toggle(client, db, admin, headers_for, make_link):
    ids = [make_link("facebook").id, make_link("youtube").id]

    resp = client.post("/api/admin/social-media/bulk-toggle", headers=headers_for(admin),
                       json={"linkIds": ids, "isActive": False})

    assert resp.status_code == 200
    db.expire_all()
    assert not any(link.is_active for link in db.query(SocialMediaLink).all())


def test_bulk_update(client, db, admin, headers_for, make_link):
    facebook = make_link("facebook")
    youtube = make_link("youtube")

    resp = client.patch("/api/admin/social-media/bulk", headers=headers_for(admin), json={"updates": [
        {"id": facebook.id, "displayName": "Facebook Page"},
        {"id": youtube.id, "platform": "facebook"},
    ]})

    assert resp.status_code == 207
    data = resp.json()["data"]
    assert data["successCount"] == 1
    assert "already exists" in data["errors"][0]
    db.expire_all()
    assert db.get(SocialMediaLink, facebook.id).display_name == "Facebook Page"
    assert db.get(SocialMediaLink, youtube.id).platform == "youtube"


def test_social_media_admin_requires_admin(client, other_user, headers_for):
    assert client.get("/api/admin/social-media", headers=headers_for(other_user)).status_code == 403

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from directory_service.app.crud import ownership_claims_crud
from directory_service.app.models.businesses import Business
from directory_service.app.models.ownership_claims import OwnershipClaim

CLAIM_MESSAGE = "I have run this bakery since 2004 and can prove it"


@pytest.fixture
def pending_claim(db, other_user, make_business):
    business = make_business("Corner Bakery")
    claim = OwnershipClaim(user_id=other_user.id, business_id=business.place_id,
                           message=CLAIM_MESSAGE, status="pending")
    db.add(claim)
    db.commit()
    db.refresh(claim)
    return claim


def test_claim_then_approval_transfers_ownership(client, db, admin, other_user, headers_for, make_business):
    business = make_business("Harbor Cafe")
    user_headers = headers_for(other_user)

    short = client.post("/api/ownership-claims", headers=user_headers,
                        json={"businessId": business.place_id, "message": "I own this"})
    assert short.status_code == 400

    created = client.post("/api/ownership-claims", headers=user_headers, json={
        "userId": other_user.id,
        "businessId": business.place_id,
        "message": CLAIM_MESSAGE,
    })
    assert created.status_code == 201
    claim = created.json()["data"]
    assert claim["status"] == "pending"
    assert claim["businessTitle"] == "Harbor Cafe"

    approved = client.post(f"/api/admin/ownership-claims/{claim['id']}/approve",
                           headers=headers_for(admin), json={"adminMessage": "Verified by phone"})

    assert approved.status_code == 200
    data = approved.json()["data"]
    assert data["claim"]["status"] == "approved"
    assert data["claim"]["adminMessage"] == "Verified by phone"
    assert data["claim"]["reviewedBy"] == admin.id
    assert data["claim"]["userName"] == "Sam User"
    assert data["claim"]["reviewerEmail"] == "ops@example.com"
    assert data["business"]["ownerId"] == other_user.id
    db.expire_all()
    assert db.get(Business, business.place_id).owner_id == other_user.id


def test_claim_for_missing_business(client, other_user, headers_for):
    resp = client.post("/api/ownership-claims", headers=headers_for(other_user),
                       json={"businessId": "biz_missing", "message": CLAIM_MESSAGE})

    assert resp.status_code == 404


def test_claim_requires_authentication(client, make_business):
    business = make_business()

    resp = client.post("/api/ownership-claims", json={"businessId": business.place_id, "message": CLAIM_MESSAGE})

    assert resp.status_code == 401


def test_cannot_claim_for_someone_else(client, owner, other_user, headers_for, make_business):
    business = make_business()

    resp = client.post("/api/ownership-claims", headers=headers_for(other_user), json={
        "userId": owner.id,
        "businessId": business.place_id,
        "message": CLAIM_MESSAGE,
    })

    assert resp.status_code == 403


def test_duplicate_pending_claim_is_rejected(client, other_user, headers_for, pending_claim):
    resp = client.post("/api/ownership-claims", headers=headers_for(other_user),
                       json={"businessId": pending_claim.business_id, "message": CLAIM_MESSAGE})

    assert resp.status_code == 400


def test_owner_cannot_claim_own_business(client, owner, headers_for, make_business):
    business = make_business(owner_id=owner.id)

    resp = client.post("/api/ownership-claims", headers=headers_for(owner),
                       json={"businessId": business.place_id, "message": CLAIM_MESSAGE})

    assert resp.status_code == 400


def test_resolved_claim_cannot_be_resolved_again(client, db, admin, headers_for, pending_claim):
    headers = headers_for(admin)
    url = f"/api/admin/ownership-claims/{pending_claim.id}"

    assert client.post(f"{url}/approve", headers=headers, json={}).status_code == 200

    again = client.post(f"{url}/approve", headers=headers, json={})
    reject = client.post(f"{url}/reject", headers=headers, json={"adminMessage": "Changed my mind"})

    assert again.status_code == 409
    assert reject.status_code == 409
    db.expire_all()
    assert db.get(OwnershipClaim, pending_claim.id).status == "approved"


def test_reject_requires_reason_and_leaves_business_alone(client, db, admin, headers_for, pending_claim):
    headers = headers_for(admin)
    url = f"/api/admin/ownership-claims/{pending_claim.id}/reject"

    assert client.post(url, headers=headers, json={"adminMessage": "No"}).status_code == 400

    resp = client.post(url, headers=headers, json={"adminMessage": "Documents did not match"})

    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "rejected"
    db.expire_all()
    assert db.get(Business, pending_claim.business_id).owner_id is None

    approve = client.post(f"/api/admin/ownership-claims/{pending_claim.id}/approve", headers=headers, json={})
    assert approve.status_code == 409


def test_admin_message_editable_after_resolution(client, admin, headers_for, pending_claim):
    headers = headers_for(admin)
    url = f"/api/admin/ownership-claims/{pending_claim.id}"
    client.post(f"{url}/reject", headers=headers, json={"adminMessage": "Documents did not match"})

    resp = client.patch(f"{url}/admin-message", headers=headers,
                        json={"adminMessage": "Please resubmit with a utility bill"})

    assert resp.status_code == 200
    assert resp.json()["data"]["adminMessage"] == "Please resubmit with a utility bill"
    assert resp.json()["data"]["status"] == "rejected"


def test_approve_missing_claim(client, admin, headers_for):
    resp = client.post("/api/admin/ownership-claims/999/approve", headers=headers_for(admin), json={})

    assert resp.status_code == 404


def test_non_admin_cannot_approve(client, other_user, headers_for, pending_claim):
    resp = client.post(f"/api/admin/ownership-claims/{pending_claim.id}/approve",
                       headers=headers_for(other_user), json={})

    assert resp.status_code == 403


def test_admin_listing_stats_and_filter(client, admin, headers_for, pending_claim):
    headers = headers_for(admin)
    client.post(f"/api/admin/ownership-claims/{pending_claim.id}/approve", headers=headers, json={})

    everything = client.get("/api/admin/ownership-claims", headers=headers).json()["data"]
    pending = client.get("/api/admin/ownership-claims", params={"status": "pending"},
                         headers=headers).json()["data"]
    stats = client.get("/api/admin/ownership-claims/stats", headers=headers).json()["data"]

    assert len(everything) == 1
    assert everything[0]["userEmail"] == "someone@example.com"
    assert pending == []
    assert stats == {"total": 1, "pending": 0, "approved": 1, "rejected": 0}


def test_get_and_delete_claim(client, db, admin, headers_for, pending_claim):
    headers = headers_for(admin)
    url = f"/api/admin/ownership-claims/{pending_claim.id}"

    assert client.get(url, headers=headers).json()["data"]["id"] == pending_claim.id
    assert client.delete(url, headers=headers).status_code == 200
    assert client.get(url, headers=headers).status_code == 404


def test_user_claim_listing_is_self_or_admin(client, owner, other_user, admin, headers_for, pending_claim):
    own = client.get(f"/api/ownership-claims/user/{other_user.id}", headers=headers_for(other_user))
    mine = client.get("/api/ownership-claims/mine", headers=headers_for(other_user))
    as_admin = client.get(f"/api/ownership-claims/user/{other_user.id}", headers=headers_for(admin))
    snooping = client.get(f"/api/ownership-claims/user/{other_user.id}", headers=headers_for(owner))

    assert len(own.json()["data"]) == 1
    assert len(mine.json()["data"]) == 1
    assert len(as_admin.json()["data"]) == 1
    assert snooping.status_code == 403


def test_failed_approval_leaves_claim_and_owner_unchanged(db, monkeypatch, admin, identity, pending_claim):
    claim_id = pending_claim.id
    business_id = pending_claim.business_id

    def broken_commit():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db, "commit", broken_commit)

    with pytest.raises(HTTPException) as exc:
        ownership_claims_crud.approve_claim(db, claim_id, identity(admin), "Looks fine")

    assert exc.value.status_code == 500
    monkeypatch.undo()
    db.expire_all()
    assert db.get(OwnershipClaim, claim_id).status == "pending"
    assert db.get(Business, business_id).owner_id is None


def test_rejecting_resolved_claim_without_reason_is_invalid_state(client, db, admin, headers_for, pending_claim):
    pending_claim.status = "approved"
    db.commit()

    resp = client.post(f"/api/admin/ownership-claims/{pending_claim.id}/reject",
                       headers=headers_for(admin), json={})

    assert resp.status_code == 409
    db.expire_all()
    assert db.get(OwnershipClaim, pending_claim.id).status == "approved"

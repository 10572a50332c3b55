import pytest
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from directory_service.app.crud import bulk_operations
from directory_service.app.models.businesses import Business
from directory_service.app.schemas.bulk_operations_schemas import BulkOperationResult


@pytest.mark.parametrize("payload", [
    {"businessIds": []},
    {},
    {"businessIds": "biz_1"},
    {"businessIds": [""]},
    {"businessIds": [f"biz_{i}" for i in range(101)]},
])
def test_bulk_delete_rejects_bad_id_lists(client, db, admin, headers_for, make_business, payload):
    make_business()

    resp = client.post("/api/admin/businesses/bulk-delete", headers=headers_for(admin), json=payload)

    assert resp.status_code == 400
    body = resp.json()
    assert body["data"] is None
    assert "deletedCount" not in body
    db.expire_all()
    assert db.query(Business).count() == 1


def test_bulk_delete_reports_partial_success(client, db, admin, headers_for, make_business):
    first = make_business("First")
    second = make_business("Second")

    resp = client.post("/api/admin/businesses/bulk-delete", headers=headers_for(admin),
                       json={"businessIds": [first.place_id, "biz_missing", second.place_id]})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["deletedCount"] == 2
    assert data["totalRequested"] == 3
    assert data["successCount"] + data["failureCount"] == data["totalRequested"]
    assert len(data["errors"]) == 1
    assert "biz_missing" in data["errors"][0]
    assert "not found" in data["errors"][0]
    assert data["message"].startswith("Partially successful: 2 of 3")
    db.expire_all()
    assert db.query(Business).count() == 0


def test_bulk_delete_all_succeed(client, admin, headers_for, make_business):
    ids = [make_business(f"Shop {i}").place_id for i in range(3)]

    data = client.post("/api/admin/businesses/bulk-delete", headers=headers_for(admin),
                       json={"businessIds": ids}).json()["data"]

    assert data["deletedCount"] == 3
    assert data["errors"] == []
    assert data["message"] == "Successfully deleted all 3 business(es)"


def test_bulk_delete_requires_admin(client, other_user, headers_for, make_business):
    business = make_business()

    resp = client.post("/api/admin/businesses/bulk-delete", headers=headers_for(other_user),
                       json={"businessIds": [business.place_id]})

    assert resp.status_code == 403


def test_bulk_feature(client, db, admin, headers_for, make_business):
    a = make_business("A")
    b = make_business("B")

    resp = client.post("/api/admin/businesses/bulk-feature", headers=headers_for(admin),
                       json={"businessIds": [a.place_id, b.place_id, "biz_missing"], "featured": True})

    data = resp.json()["data"]
    assert data["successCount"] == 2
    assert data["failureCount"] == 1
    assert data["status"] == "partial"
    db.expire_all()
    assert all(biz.featured for biz in db.query(Business).all())


def test_mass_category_update(client, db, admin, headers_for, make_business):
    a = make_business("A", category="Food")
    b = make_business("B", category="Retail")

    resp = client.patch("/api/admin/businesses/mass-category", headers=headers_for(admin),
                        json={"businessIds": [a.place_id, b.place_id], "category": "Services"})

    data = resp.json()["data"]
    assert data["status"] == "complete"
    db.expire_all()
    assert {biz.category for biz in db.query(Business).all()} == {"Services"}


def test_apply_batch_isolates_database_failures(db, make_business):
    keep_id = make_business("Keep").place_id
    rename_id = make_business("Rename").place_id

    def op(session, place_id):
        if place_id == keep_id:
            raise SQLAlchemyError("connection dropped")
        session.get(Business, place_id).title = "Renamed"

    result = bulk_operations.apply_batch(db, [keep_id, rename_id], op, "Business")

    assert result.success_count == 1
    assert result.failure_count == 1
    assert result.errors == [f"Business {keep_id}: Database operation failed"]
    db.expire_all()
    assert db.get(Business, rename_id).title == "Renamed"


def test_validate_bulk_ids_raises_before_any_work():
    with pytest.raises(HTTPException) as exc:
        bulk_operations.validate_bulk_ids([], "businessIds")

    assert exc.value.status_code == 400


@pytest.mark.parametrize("success, failure, expected", [
    (3, 0, "Successfully deleted all 3 business(es)"),
    (0, 2, "Failed to process any business(es). 2 error(s) occurred"),
    (1, 1, "Partially successful: 1 of 2 business(es) deleted. 1 error(s) occurred"),
])
def test_summarize(success, failure, expected):
    result = BulkOperationResult(success_count=success, failure_count=failure,
                                 total_requested=success + failure)

    assert bulk_operations.summarize(result, "business(es)", "deleted") == expected

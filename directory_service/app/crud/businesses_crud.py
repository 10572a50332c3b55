# businesses_crud.py
import logging
from typing import Dict, List, Optional

from fastapi import status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import BusinessStatus
from ..models.businesses import Business
from ..schemas.bulk_operations_schemas import BulkDeleteResponse, BulkOperationResult
from ..schemas.businesses_schemas import (
    BusinessCreate, BusinessOut, BusinessRequest, BusinessUpdate, OwnerBusinessUpdate
)
from . import bulk_operations

logger = logging.getLogger(__name__)


def get_businesses(db: Session, params: BusinessRequest, public_only: bool = False) -> Dict:
    business_query = db.query(Business)

    if public_only:
        business_query = business_query.filter(
            Business.status == BusinessStatus.ACTIVE.value)
    elif params.status and params.status.lower() != "all":
        business_query = business_query.filter(
            func.lower(Business.status) == params.status.lower())

    # ------------- Filters --------------
    if params.category and params.category.lower() != "all":
        business_query = business_query.filter(
            func.lower(Business.category) == params.category.lower())

    if params.city and params.city.lower() != "all":
        business_query = business_query.filter(
            func.lower(Business.city) == params.city.lower())

    if params.featured is not None:
        business_query = business_query.filter(
            Business.featured == params.featured)

    if params.search:
        s = f"%{params.search}%"
        business_query = business_query.filter(
            or_(Business.title.ilike(s), Business.description.ilike(s),
                Business.address.ilike(s))
        )

    total = business_query.with_entities(func.count(Business.place_id)).scalar()

    businesses = (
        business_query
        .order_by(Business.featured.desc(), Business.title.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {
        "businesses": [BusinessOut.model_validate(b) for b in businesses],
        "total": total,
    }


def get_featured_businesses(db: Session, limit: int = 12) -> List[BusinessOut]:
    businesses = (
        db.query(Business)
        .filter(Business.featured == True,
                Business.status == BusinessStatus.ACTIVE.value)
        .order_by(Business.updated_at.desc())
        .limit(limit)
        .all()
    )
    return [BusinessOut.model_validate(b) for b in businesses]


def get_business_by_id(db: Session, place_id: str) -> Optional[Business]:
    return db.query(Business).filter(Business.place_id == place_id).first()


def get_business_or_404(db: Session, place_id: str) -> Business:
    business = get_business_by_id(db, place_id)
    if not business:
        return error_response(
            message="Business not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )
    return business


def get_businesses_for_owner(db: Session, user_id: str) -> List[BusinessOut]:
    businesses = (
        db.query(Business)
        .filter(Business.owner_id == user_id)
        .order_by(Business.title.asc())
        .all()
    )
    return [BusinessOut.model_validate(b) for b in businesses]


def _validate_owner(db: Session, owner_id: Optional[str]):
    if owner_id is None:
        return
    if not db.query(Users.id).filter(Users.id == owner_id).first():
        return error_response(
            message=f"Owner '{owner_id}' does not exist",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )


def create_business(db: Session, business: BusinessCreate) -> BusinessOut:
    data = business.model_dump()
    _validate_owner(db, data.get("owner_id"))

    if data.get("status") is None:
        data["status"] = BusinessStatus.ACTIVE.value
    data["featured"] = bool(data.get("featured"))

    # place_id is always assigned here, never taken from the caller
    db_business = Business(**data)
    db.add(db_business)
    db.commit()
    db.refresh(db_business)

    logger.info("Created business %s", db_business.place_id)
    return BusinessOut.model_validate(db_business)


def update_business(db: Session, place_id: str, business: BusinessUpdate) -> BusinessOut:
    db_business = get_business_or_404(db, place_id)

    update_data = business.model_dump(exclude_unset=True)

    # "" was already cleaned to None; None clears the owner
    if "owner_id" in update_data:
        _validate_owner(db, update_data["owner_id"])

    if "title" in update_data and update_data["title"] is None:
        return error_response(
            message="Title cannot be empty",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    for key in ("featured", "status"):
        if key in update_data and update_data[key] is None:
            update_data.pop(key)

    for key, value in update_data.items():
        setattr(db_business, key, value)

    db.commit()
    db.refresh(db_business)
    return BusinessOut.model_validate(db_business)


def update_owned_business(db: Session, current_user: UserToken, place_id: str,
                          business: OwnerBusinessUpdate) -> BusinessOut:
    db_business = get_business_or_404(db, place_id)

    if db_business.owner_id != current_user.user_id and not current_user.is_admin:
        return error_response(
            message="You can only edit businesses you own",
            status_code=str(AppStatusCode.ACCESS_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )

    update_data = business.model_dump(exclude_unset=True)
    if "title" in update_data and update_data["title"] is None:
        return error_response(
            message="Title cannot be empty",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    for key, value in update_data.items():
        setattr(db_business, key, value)

    db.commit()
    db.refresh(db_business)
    return BusinessOut.model_validate(db_business)


def remove_business(db: Session, place_id: str):
    """Stage the delete without committing; callers own the transaction."""
    db_business = get_business_or_404(db, place_id)
    db.delete(db_business)
    db.flush()


def delete_business(db: Session, place_id: str) -> Dict:
    remove_business(db, place_id)
    db.commit()
    logger.info("Deleted business %s", place_id)
    return {"place_id": place_id, "message": "Business deleted successfully"}


def apply_featured(db: Session, place_id: str, featured: bool) -> Business:
    db_business = get_business_or_404(db, place_id)
    db_business.featured = featured
    db.flush()
    return db_business


def set_featured(db: Session, place_id: str, featured: bool) -> BusinessOut:
    db_business = apply_featured(db, place_id, featured)
    db.commit()
    db.refresh(db_business)
    logger.info("Business %s featured set to %s", place_id, featured)
    return BusinessOut.model_validate(db_business)


def bulk_delete_businesses(db: Session, business_ids) -> BulkDeleteResponse:
    ids = bulk_operations.validate_bulk_ids(business_ids, "businessIds")

    result = bulk_operations.apply_batch(db, ids, remove_business, "Business")
    return BulkDeleteResponse(
        message=bulk_operations.summarize(result, "business(es)", "deleted"),
        deleted_count=result.success_count,
        success_count=result.success_count,
        failure_count=result.failure_count,
        total_requested=result.total_requested,
        errors=result.errors,
    )


def bulk_set_featured(db: Session, business_ids, featured: bool) -> BulkOperationResult:
    ids = bulk_operations.validate_bulk_ids(business_ids, "businessIds")

    def toggle(session: Session, place_id: str):
        apply_featured(session, place_id, featured)

    return bulk_operations.apply_batch(db, ids, toggle, "Business")


def mass_update_category(db: Session, business_ids, category: str) -> BulkOperationResult:
    ids = bulk_operations.validate_bulk_ids(business_ids, "businessIds")

    def recategorize(session: Session, place_id: str):
        db_business = get_business_or_404(session, place_id)
        db_business.category = category
        session.flush()

    return bulk_operations.apply_batch(db, ids, recategorize, "Business")

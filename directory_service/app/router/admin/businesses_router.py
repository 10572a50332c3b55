from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_db
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud import bulk_operations
from ...crud import businesses_crud as crud
from ...schemas.bulk_operations_schemas import (
    BulkBusinessIdsRequest, BulkFeatureRequest, MassCategoryRequest
)
from ...schemas.businesses_schemas import (
    BusinessCreate, BusinessListResponse, BusinessRequest, BusinessUpdate, FeaturedToggleRequest
)

router = APIRouter(
    prefix="/api/admin/businesses",
    tags=["Admin Businesses"],
    dependencies=[Depends(allow_admin)],
)


@router.get("")
def list_businesses(
    params: BusinessRequest = Depends(),
    db: Session = Depends(get_db)
):
    result = crud.get_businesses(db, params)
    return success_response(data=BusinessListResponse(**result))


@router.post("", status_code=201)
def create_business(
    business: BusinessCreate,
    db: Session = Depends(get_db)
):
    created = crud.create_business(db, business)
    return success_response(data=created, message="Business created successfully",
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


# ----------------- Bulk operations -----------------
# declared before /{place_id} so the literal paths win
@router.post("/bulk-delete")
def bulk_delete(
    request: BulkBusinessIdsRequest,
    db: Session = Depends(get_db)
):
    result = crud.bulk_delete_businesses(db, request.business_ids)
    return success_response(data=result, message=result.message,
                            status_code=AppStatusCode.BULK_OPERATION_COMPLETED
                            if result.failure_count == 0 else AppStatusCode.BULK_OPERATION_PARTIAL)


@router.post("/bulk-feature")
def bulk_feature(
    request: BulkFeatureRequest,
    db: Session = Depends(get_db)
):
    result = crud.bulk_set_featured(db, request.business_ids, request.featured)
    verb = "featured" if request.featured else "unfeatured"
    summary = bulk_operations.summary_response(result, "business(es)", verb)
    return success_response(data=summary, message=summary.message,
                            status_code=AppStatusCode.BULK_OPERATION_COMPLETED
                            if result.failure_count == 0 else AppStatusCode.BULK_OPERATION_PARTIAL)


@router.patch("/mass-category")
def mass_category(
    request: MassCategoryRequest,
    db: Session = Depends(get_db)
):
    result = crud.mass_update_category(db, request.business_ids, request.category)
    summary = bulk_operations.summary_response(result, "business(es)", "recategorized")
    return success_response(data=summary, message=summary.message,
                            status_code=AppStatusCode.BULK_OPERATION_COMPLETED
                            if result.failure_count == 0 else AppStatusCode.BULK_OPERATION_PARTIAL)


# ----------------- Single business -----------------
@router.patch("/{place_id}")
def update_business(
    place_id: str,
    business: BusinessUpdate,
    db: Session = Depends(get_db)
):
    updated = crud.update_business(db, place_id, business)
    return success_response(data=updated, message="Business updated successfully",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.patch("/{place_id}/featured")
def toggle_featured(
    place_id: str,
    request: FeaturedToggleRequest,
    db: Session = Depends(get_db)
):
    updated = crud.set_featured(db, place_id, request.featured)
    return success_response(data=updated, message="Featured status updated",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{place_id}")
def delete_business(
    place_id: str,
    db: Session = Depends(get_db)
):
    return success_response(data=crud.delete_business(db, place_id),
                            message="Business deleted successfully",
                            status_code=AppStatusCode.DELETED_SUCCESSFULLY)

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import businesses_crud as crud
from ..schemas.businesses_schemas import (
    BusinessListResponse, BusinessOut, BusinessRequest, OwnerBusinessUpdate
)

router = APIRouter(prefix="/api/businesses", tags=["Businesses"])


# ----------------- Public listing -----------------
@router.get("")
def list_businesses(
    params: BusinessRequest = Depends(),
    db: Session = Depends(get_db)
):
    result = crud.get_businesses(db, params, public_only=True)
    return success_response(data=BusinessListResponse(**result))


@router.get("/featured")
def featured_businesses(
    limit: int = Query(12, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return success_response(data=crud.get_featured_businesses(db, limit))


# ----------------- Owner -----------------
@router.get("/mine")
def my_businesses(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return success_response(data=crud.get_businesses_for_owner(db, current_user.user_id))


@router.get("/{place_id}")
def get_business(place_id: str, db: Session = Depends(get_db)):
    business = crud.get_business_or_404(db, place_id)
    return success_response(data=BusinessOut.model_validate(business))


@router.put("/{place_id}")
def update_my_business(
    place_id: str,
    business: OwnerBusinessUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    updated = crud.update_owned_business(db, current_user, place_id, business)
    return success_response(data=updated, message="Business updated successfully",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)

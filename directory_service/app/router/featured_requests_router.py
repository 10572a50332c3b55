from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, ensure_self_or_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import featured_requests_crud as crud
from ..schemas.featured_requests_schemas import (
    FeaturedRequestCreate, FeaturedRequestQueryParams, FeaturedRequestReview
)

router = APIRouter(
    prefix="/api/featured-requests",
    tags=["Featured Requests"],
    dependencies=[Depends(validate_current_token)],
)


@router.post("", status_code=201)
def submit_featured_request(
    request: FeaturedRequestCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    created = crud.create_featured_request(db, current_user, request)
    return success_response(data=created, message="Featured request submitted successfully",
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/eligibility/{business_id}")
def featured_eligibility(
    business_id: str,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return success_response(data=crud.check_eligibility(db, current_user, business_id))


@router.get("/user/{user_id}")
def requests_for_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    ensure_self_or_admin(current_user, user_id)
    return success_response(data=crud.get_requests_for_user(db, user_id))


# ----------------- Admin -----------------
@router.get("/admin")
def all_requests(
    params: FeaturedRequestQueryParams = Depends(),
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return success_response(data=crud.get_all_requests(db, params.status))


@router.put("/{request_id}/review")
def review_request(
    request_id: int,
    review: FeaturedRequestReview,
    db: Session = Depends(get_db),
    admin: UserToken = Depends(allow_admin)
):
    reviewed = crud.review_featured_request(
        db, request_id, admin, review.status, review.admin_message)
    return success_response(data=reviewed, message=f"Featured request {reviewed.status}",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud import ownership_claims_crud as crud
from ...schemas.ownership_claims_schemas import (
    ClaimAdminMessageUpdate, ClaimQueryParams, ClaimReviewRequest
)

router = APIRouter(
    prefix="/api/admin/ownership-claims",
    tags=["Admin Ownership Claims"],
    dependencies=[Depends(allow_admin)],
)


@router.get("")
def list_claims(
    params: ClaimQueryParams = Depends(),
    db: Session = Depends(get_db)
):
    return success_response(data=crud.get_claims(db, params.status))


@router.get("/stats")
def claim_stats(db: Session = Depends(get_db)):
    return success_response(data=crud.get_claim_stats(db))


@router.get("/{claim_id}")
def get_claim(claim_id: int, db: Session = Depends(get_db)):
    return success_response(data=crud.get_claim(db, claim_id))


@router.post("/{claim_id}/approve")
def approve_claim(
    claim_id: int,
    review: ClaimReviewRequest,
    db: Session = Depends(get_db),
    admin: UserToken = Depends(allow_admin)
):
    result = crud.approve_claim(db, claim_id, admin, review.admin_message)
    return success_response(data=result, message="Ownership claim approved",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{claim_id}/reject")
def reject_claim(
    claim_id: int,
    review: ClaimReviewRequest,
    db: Session = Depends(get_db),
    admin: UserToken = Depends(allow_admin)
):
    result = crud.reject_claim(db, claim_id, admin, review.admin_message)
    return success_response(data=result, message="Ownership claim rejected",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.patch("/{claim_id}/admin-message")
def update_admin_message(
    claim_id: int,
    update: ClaimAdminMessageUpdate,
    db: Session = Depends(get_db)
):
    result = crud.update_claim_admin_message(db, claim_id, update.admin_message)
    return success_response(data=result, message="Admin message updated",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{claim_id}")
def delete_claim(claim_id: int, db: Session = Depends(get_db)):
    return success_response(data=crud.delete_claim(db, claim_id),
                            message="Ownership claim deleted",
                            status_code=AppStatusCode.DELETED_SUCCESSFULLY)

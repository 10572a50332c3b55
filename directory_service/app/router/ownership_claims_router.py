from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import ensure_self_or_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import ownership_claims_crud as crud
from ..schemas.ownership_claims_schemas import OwnershipClaimCreate

router = APIRouter(
    prefix="/api/ownership-claims",
    tags=["Ownership Claims"],
    dependencies=[Depends(validate_current_token)],
)


@router.post("", status_code=201)
def submit_claim(
    claim: OwnershipClaimCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    created = crud.create_claim(db, current_user, claim)
    return success_response(data=created, message="Ownership claim submitted successfully",
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/mine")
def my_claims(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return success_response(data=crud.get_claims_for_user(db, current_user.user_id))


@router.get("/user/{user_id}")
def claims_for_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    ensure_self_or_admin(current_user, user_id)
    return success_response(data=crud.get_claims_for_user(db, user_id))

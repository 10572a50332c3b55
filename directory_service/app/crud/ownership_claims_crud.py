import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import status
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import RequestStatus
from ..models.businesses import Business
from ..models.ownership_claims import OwnershipClaim
from ..schemas.businesses_schemas import BusinessOut
from ..schemas.ownership_claims_schemas import (
    ClaimApprovalOut, ClaimStats, OwnershipClaimCreate, OwnershipClaimOut
)
from .businesses_crud import get_business_by_id

logger = logging.getLogger(__name__)


def _to_out(claim: OwnershipClaim) -> OwnershipClaimOut:
    out = OwnershipClaimOut.model_validate(claim)
    if claim.business:
        out.business_title = claim.business.title
    if claim.user:
        out.user_email = claim.user.email
        out.user_first_name = claim.user.first_name
        out.user_last_name = claim.user.last_name
        out.user_name = claim.user.full_name
    if claim.reviewer:
        out.reviewer_email = claim.reviewer.email
    return out


def _claim_query(db: Session):
    return db.query(OwnershipClaim).options(
        joinedload(OwnershipClaim.business),
        joinedload(OwnershipClaim.user),
    )


def get_claim_or_404(db: Session, claim_id: int, lock: bool = False) -> OwnershipClaim:
    query = db.query(OwnershipClaim).filter(OwnershipClaim.id == claim_id)
    if lock:
        query = query.with_for_update()
    claim = query.first()
    if not claim:
        return error_response(
            message="Ownership claim not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )
    return claim


def _ensure_pending(claim: OwnershipClaim):
    if claim.status != RequestStatus.pending.value:
        return error_response(
            message=f"Claim has already been {claim.status}",
            status_code=str(AppStatusCode.INVALID_STATE),
            http_status=status.HTTP_409_CONFLICT
        )


def create_claim(db: Session, current_user: UserToken, data: OwnershipClaimCreate) -> OwnershipClaimOut:
    user_id = data.user_id or current_user.user_id
    if user_id != current_user.user_id and not current_user.is_admin:
        return error_response(
            message="You can only submit claims for yourself",
            status_code=str(AppStatusCode.ACCESS_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )

    message = (data.message or "").strip()
    if len(message) < settings.CLAIM_MESSAGE_MIN_LENGTH:
        return error_response(
            message=f"Message must be at least {settings.CLAIM_MESSAGE_MIN_LENGTH} characters",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    business = get_business_by_id(db, data.business_id)
    if not business:
        return error_response(
            message="Business not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )

    if business.owner_id == user_id:
        return error_response(
            message="You already own this business",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    existing = db.query(OwnershipClaim).filter(
        OwnershipClaim.user_id == user_id,
        OwnershipClaim.business_id == business.place_id,
        OwnershipClaim.status.in_([RequestStatus.pending.value, RequestStatus.approved.value])
    ).first()
    if existing:
        return error_response(
            message=f"You already have a {existing.status} claim for this business",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    claim = OwnershipClaim(
        user_id=user_id,
        business_id=business.place_id,
        message=message,
        status=RequestStatus.pending.value,
    )
    db.add(claim)
    db.commit()
    db.refresh(claim)

    logger.info("Ownership claim %s submitted by %s for %s", claim.id, user_id, business.place_id)
    return _to_out(claim)


def approve_claim(db: Session, claim_id: int, admin: UserToken,
                  admin_message: Optional[str] = None) -> ClaimApprovalOut:
    """
    Resolve a pending claim and hand the business to the claimant.

    The claim row is locked for the duration of the transaction so a second
    concurrent approval sees the terminal status and fails. The claim update
    and the owner transfer are committed together.
    """
    claim = get_claim_or_404(db, claim_id, lock=True)
    _ensure_pending(claim)

    business = db.query(Business).filter(
        Business.place_id == claim.business_id).with_for_update().first()
    if not business:
        db.rollback()
        return error_response(
            message="Business not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )

    try:
        claim.status = RequestStatus.approved.value
        claim.admin_message = admin_message
        claim.reviewed_by = admin.user_id
        claim.reviewed_at = datetime.now(timezone.utc)
        business.owner_id = claim.user_id
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Approving ownership claim %s failed", claim_id)
        return error_response(
            message="Failed to approve ownership claim",
            status_code=str(AppStatusCode.DATABASE_ERROR),
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    db.refresh(claim)
    db.refresh(business)
    logger.info("Ownership claim %s approved by %s; %s now owned by %s",
                claim_id, admin.user_id, business.place_id, claim.user_id)

    return ClaimApprovalOut(
        claim=_to_out(claim),
        business=BusinessOut.model_validate(business)
    )


def reject_claim(db: Session, claim_id: int, admin: UserToken,
                 admin_message: Optional[str]) -> OwnershipClaimOut:
    claim = get_claim_or_404(db, claim_id, lock=True)
    _ensure_pending(claim)

    message = (admin_message or "").strip()
    if len(message) < settings.REJECTION_MESSAGE_MIN_LENGTH:
        return error_response(
            message=f"A rejection reason of at least {settings.REJECTION_MESSAGE_MIN_LENGTH} characters is required",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    claim.status = RequestStatus.rejected.value
    claim.admin_message = message
    claim.reviewed_by = admin.user_id
    claim.reviewed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(claim)

    logger.info("Ownership claim %s rejected by %s", claim_id, admin.user_id)
    return _to_out(claim)


def update_claim_admin_message(db: Session, claim_id: int, admin_message: str) -> OwnershipClaimOut:
    claim = get_claim_or_404(db, claim_id)
    claim.admin_message = admin_message
    db.commit()
    db.refresh(claim)
    return _to_out(claim)


def delete_claim(db: Session, claim_id: int):
    claim = get_claim_or_404(db, claim_id)
    db.delete(claim)
    db.commit()
    logger.info("Ownership claim %s deleted", claim_id)
    return {"id": claim_id}


def get_claim(db: Session, claim_id: int) -> OwnershipClaimOut:
    return _to_out(get_claim_or_404(db, claim_id))


def get_claims(db: Session, claim_status: Optional[str] = None) -> List[OwnershipClaimOut]:
    query = _claim_query(db)
    if claim_status:
        query = query.filter(OwnershipClaim.status == claim_status)
    claims = query.order_by(OwnershipClaim.created_at.desc(), OwnershipClaim.id.desc()).all()
    return [_to_out(c) for c in claims]


def get_claims_for_user(db: Session, user_id: str) -> List[OwnershipClaimOut]:
    claims = (
        _claim_query(db)
        .filter(OwnershipClaim.user_id == user_id)
        .order_by(OwnershipClaim.created_at.desc(), OwnershipClaim.id.desc())
        .all()
    )
    return [_to_out(c) for c in claims]


def get_claim_stats(db: Session) -> ClaimStats:
    rows = (
        db.query(OwnershipClaim.status, func.count(OwnershipClaim.id))
        .group_by(OwnershipClaim.status)
        .all()
    )
    counts = {claim_status: count for claim_status, count in rows}
    return ClaimStats(
        total=sum(counts.values()),
        pending=counts.get(RequestStatus.pending.value, 0),
        approved=counts.get(RequestStatus.approved.value, 0),
        rejected=counts.get(RequestStatus.rejected.value, 0),
    )

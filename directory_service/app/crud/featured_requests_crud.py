import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import RequestStatus, ReviewDecision
from ..models.businesses import Business
from ..models.featured_requests import FeaturedRequest
from ..schemas.featured_requests_schemas import (
    FeaturedEligibility, FeaturedRequestCreate, FeaturedRequestOut
)
from .businesses_crud import get_business_by_id

logger = logging.getLogger(__name__)


def _to_out(request: FeaturedRequest) -> FeaturedRequestOut:
    out = FeaturedRequestOut.model_validate(request)
    if request.business:
        out.business_title = request.business.title
        out.business_city = request.business.city
    if request.user:
        out.user_email = request.user.email
    return out


def _ineligibility_reason(db: Session, user_id: str, business: Business) -> Optional[str]:
    """None when the user may ask for the business to be featured."""
    if business.featured:
        return "Business is already featured"

    pending = db.query(FeaturedRequest.id).filter(
        FeaturedRequest.business_id == business.place_id,
        FeaturedRequest.status == RequestStatus.pending.value
    ).first()
    if pending:
        return "A featured request is already pending for this business (duplicate request)"

    if business.owner_id != user_id:
        return "Only the business owner can request featuring"

    return None


def check_eligibility(db: Session, current_user: UserToken, business_id: str) -> FeaturedEligibility:
    business = get_business_by_id(db, business_id)
    if not business:
        return error_response(
            message="Business not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )

    reason = _ineligibility_reason(db, current_user.user_id, business)
    return FeaturedEligibility(business_id=business_id, eligible=reason is None, reason=reason)


def create_featured_request(db: Session, current_user: UserToken,
                            data: FeaturedRequestCreate) -> FeaturedRequestOut:
    business = get_business_by_id(db, data.business_id)
    if not business:
        return error_response(
            message="Business not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )

    reason = _ineligibility_reason(db, current_user.user_id, business)
    if reason:
        return error_response(
            message=reason,
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    request = FeaturedRequest(
        business_id=business.place_id,
        user_id=current_user.user_id,
        message=data.message,
        status=RequestStatus.pending.value,
    )
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        # lost the race against another submission for the same business
        db.rollback()
        return error_response(
            message="A featured request is already pending for this business (duplicate request)",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )
    db.refresh(request)

    logger.info("Featured request %s submitted for %s", request.id, business.place_id)
    return _to_out(request)


def get_requests_for_user(db: Session, user_id: str) -> List[FeaturedRequestOut]:
    requests = (
        db.query(FeaturedRequest)
        .options(joinedload(FeaturedRequest.business), joinedload(FeaturedRequest.user))
        .filter(FeaturedRequest.user_id == user_id)
        .order_by(FeaturedRequest.created_at.desc(), FeaturedRequest.id.desc())
        .all()
    )
    return [_to_out(r) for r in requests]


def get_all_requests(db: Session, request_status: Optional[str] = None) -> List[FeaturedRequestOut]:
    query = db.query(FeaturedRequest).options(
        joinedload(FeaturedRequest.business), joinedload(FeaturedRequest.user))
    if request_status:
        query = query.filter(FeaturedRequest.status == request_status)
    requests = query.order_by(
        FeaturedRequest.created_at.desc(), FeaturedRequest.id.desc()).all()
    return [_to_out(r) for r in requests]


def review_featured_request(db: Session, request_id: int, admin: UserToken,
                            decision: str, admin_message: Optional[str] = None) -> FeaturedRequestOut:
    if decision not in (ReviewDecision.approved.value, ReviewDecision.rejected.value):
        return error_response(
            message="Status must be 'approved' or 'rejected'",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    request = db.query(FeaturedRequest).filter(
        FeaturedRequest.id == request_id).with_for_update().first()
    if not request:
        return error_response(
            message="Featured request not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )

    if request.status != RequestStatus.pending.value:
        return error_response(
            message=f"Featured request has already been {request.status}",
            status_code=str(AppStatusCode.INVALID_STATE),
            http_status=status.HTTP_409_CONFLICT
        )

    business = None
    if decision == ReviewDecision.approved.value:
        business = db.query(Business).filter(
            Business.place_id == request.business_id).with_for_update().first()
        if not business:
            db.rollback()
            return error_response(
                message="Business not found",
                status_code=str(AppStatusCode.NOT_FOUND),
                http_status=status.HTTP_404_NOT_FOUND
            )

    try:
        request.status = decision
        request.admin_message = admin_message
        request.reviewed_by = admin.user_id
        request.reviewed_at = datetime.now(timezone.utc)
        if business is not None:
            business.featured = True

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Reviewing featured request %s failed", request_id)
        return error_response(
            message="Failed to review featured request",
            status_code=str(AppStatusCode.DATABASE_ERROR),
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    db.refresh(request)
    logger.info("Featured request %s %s by %s", request_id, decision, admin.user_id)
    return _to_out(request)

from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.core.schemas import CamelModel
from shared.utils.enums import RequestStatus
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .businesses_schemas import BusinessOut


class OwnershipClaimCreate(EmptyStringModel):
    business_id: str
    message: Optional[str] = None
    # optional; defaults to the caller and must match it unless caller is admin
    user_id: Optional[str] = None


class ClaimReviewRequest(EmptyStringModel):
    admin_message: Optional[str] = None


class ClaimAdminMessageUpdate(EmptyStringModel):
    admin_message: str = Field(..., min_length=1)


class OwnershipClaimOut(CamelModel):
    id: int
    user_id: str
    business_id: str
    message: str
    status: str
    admin_message: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    business_title: Optional[str] = None
    user_email: Optional[str] = None
    user_first_name: Optional[str] = None
    user_last_name: Optional[str] = None
    user_name: Optional[str] = None
    reviewer_email: Optional[str] = None


class ClaimApprovalOut(CamelModel):
    claim: OwnershipClaimOut
    business: BusinessOut


class ClaimQueryParams(EmptyStringModel):
    status: Optional[RequestStatus] = None


class ClaimStats(CamelModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0

from datetime import datetime
from typing import Optional

from shared.core.schemas import CamelModel
from shared.utils.enums import RequestStatus, ReviewDecision
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class FeaturedRequestCreate(EmptyStringModel):
    business_id: str
    message: Optional[str] = None


class FeaturedRequestReview(EmptyStringModel):
    status: ReviewDecision
    admin_message: Optional[str] = None


class FeaturedRequestOut(CamelModel):
    id: int
    business_id: str
    user_id: str
    message: Optional[str] = None
    status: str
    admin_message: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    business_title: Optional[str] = None
    business_city: Optional[str] = None
    user_email: Optional[str] = None


class FeaturedEligibility(CamelModel):
    business_id: str
    eligible: bool
    reason: Optional[str] = None


class FeaturedRequestQueryParams(EmptyStringModel):
    status: Optional[RequestStatus] = None

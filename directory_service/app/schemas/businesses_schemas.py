from datetime import datetime
from typing import List, Optional
from pydantic import Field

from shared.core.schemas import CamelModel, CommonQueryParams
from shared.utils.enums import BusinessStatus
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class BusinessBase(EmptyStringModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class BusinessCreate(BusinessBase):
    featured: Optional[bool] = False
    owner_id: Optional[str] = None
    status: Optional[BusinessStatus] = BusinessStatus.ACTIVE


class BusinessUpdate(EmptyStringModel):
    """Admin partial update; every field optional, "" clears a field."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    featured: Optional[bool] = None
    owner_id: Optional[str] = None
    status: Optional[BusinessStatus] = None


class OwnerBusinessUpdate(EmptyStringModel):
    """Fields a business owner may edit on their own listing."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class FeaturedToggleRequest(CamelModel):
    featured: bool


class BusinessOut(CamelModel):
    place_id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    featured: bool = False
    owner_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessRequest(CommonQueryParams):
    category: Optional[str] = None
    city: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[str] = None


class BusinessListResponse(CamelModel):
    businesses: List[BusinessOut]
    total: int

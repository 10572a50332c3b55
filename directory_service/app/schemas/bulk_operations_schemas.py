from typing import Any, List, Optional
from pydantic import Field

from shared.core.schemas import CamelModel


class BulkOperationResult(CamelModel):
    """Per-call outcome of a batch; never persisted."""
    success_count: int = 0
    failure_count: int = 0
    total_requested: int = 0
    errors: List[str] = Field(default_factory=list)


class BulkBusinessIdsRequest(CamelModel):
    # typed loosely so an empty or malformed list reaches the bulk validator
    business_ids: Optional[Any] = None


class BulkFeatureRequest(BulkBusinessIdsRequest):
    featured: bool


class MassCategoryRequest(BulkBusinessIdsRequest):
    category: str = Field(..., min_length=1, max_length=100)


class BulkDeleteResponse(CamelModel):
    message: str
    deleted_count: int
    success_count: int
    failure_count: int
    total_requested: int
    errors: List[str] = Field(default_factory=list)


class BulkSummaryResponse(CamelModel):
    message: str
    status: str  # complete | partial | failed
    success_count: int
    failure_count: int
    total_requested: int
    errors: List[str] = Field(default_factory=list)

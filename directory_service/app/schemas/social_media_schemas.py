from datetime import datetime
from typing import Any, List, Optional
from pydantic import Field, field_validator

from shared.core.schemas import CamelModel
from shared.utils.enums import SOCIAL_MEDIA_PLATFORMS
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


def _check_platform(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.lower()
    if value not in SOCIAL_MEDIA_PLATFORMS:
        raise ValueError(
            f"Invalid platform. Supported platforms: {', '.join(SOCIAL_MEDIA_PLATFORMS)}")
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not value.lower().startswith(("http://", "https://")):
        raise ValueError("Invalid URL format")
    return value


class SocialMediaLinkCreate(EmptyStringModel):
    platform: str
    url: str
    display_name: str
    icon_class: str
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = True

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, value):
        return _check_platform(value)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value):
        return _check_url(value)


class SocialMediaLinkUpdate(EmptyStringModel):
    platform: Optional[str] = None
    url: Optional[str] = None
    display_name: Optional[str] = None
    icon_class: Optional[str] = None
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, value):
        return _check_platform(value)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value):
        return _check_url(value)


class SocialMediaLinkOut(CamelModel):
    id: int
    platform: str
    url: str
    display_name: str
    icon_class: str
    sort_order: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SocialMediaBulkActionRequest(CamelModel):
    link_ids: Optional[Any] = None
    action: Optional[str] = None


class SocialMediaBulkToggleRequest(CamelModel):
    link_ids: Optional[Any] = None
    is_active: bool


class SocialMediaBulkUpdateItem(SocialMediaLinkUpdate):
    id: int


class SocialMediaBulkUpdateRequest(CamelModel):
    updates: List[SocialMediaBulkUpdateItem] = Field(default_factory=list)


class SocialMediaReorderItem(CamelModel):
    id: int
    sort_order: int = Field(..., ge=0)


class SocialMediaReorderRequest(CamelModel):
    items: List[SocialMediaReorderItem]

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, TypeVar

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserToken(BaseModel):
    """Identity resolved for the current request."""
    user_id: str
    session_id: str
    role: str
    email: Optional[str] = None
    status: Optional[str] = None
    exp: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    skip: Optional[int] = 0
    limit: Optional[int] = 50


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str

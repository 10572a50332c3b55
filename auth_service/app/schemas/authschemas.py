from datetime import datetime
from pydantic import EmailStr, Field
from typing import Optional

from shared.core.schemas import CamelModel
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class RegisterRequest(EmptyStringModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(EmptyStringModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    status: str
    created_at: Optional[datetime] = None


class AuthenticationResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

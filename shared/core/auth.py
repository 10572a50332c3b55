from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole, UserStatus
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken
from shared.core.database import get_db

# The session cookie is the primary carrier; a bearer header is accepted too.
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict) -> str:
    payload = data.copy()
    expires = datetime.now(timezone.utc) + \
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def _read_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


def verify_token(db: Session, token: str) -> UserToken:
    """Decode a session token and make sure its login session is still active."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        user = UserToken(**payload)
    except ExpiredSignatureError:
        return error_response(
            message="Session has expired",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED),
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    except (JWTError, ValidationError):
        return error_response(
            message="Invalid session token",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == user.session_id,
        UserLoginSession.user_id == user.user_id
    ).first()

    if not session or not session.is_active:
        return error_response(
            message="Session has been logged out or is inactive",
            status_code=str(AppStatusCode.AUTHENTICATION_SESSION_TIMEOUT),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    return user


def validate_current_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    token = _read_token(request, credentials)
    if not token:
        return error_response(
            message="Authentication required",
            status_code=str(AppStatusCode.AUTHENTICATION_REQUIRED),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    user_data = verify_token(db, token)

    user = db.query(Users).filter(Users.id == user_data.user_id).first()
    if not user:
        return error_response(
            message="User not found",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if user.status.lower() != UserStatus.ACTIVE.value:
        return error_response(
            message="User is not active. Access denied",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INACTIVE),
            http_status=status.HTTP_403_FORBIDDEN
        )

    # role is always read from the users table, never trusted from the token
    user_data.role = user.role
    user_data.email = user.email
    user_data.status = user.status
    return user_data


def allow_admin(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
    if current_user.role != UserRole.ADMIN.value:
        return error_response(
            message="Admin access required",
            status_code=str(AppStatusCode.ACCESS_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )

    return current_user


def ensure_self_or_admin(current_user: UserToken, user_id: str):
    """Users may only read their own records unless they are admins."""
    if current_user.user_id != user_id and not current_user.is_admin:
        return error_response(
            message="Access denied",
            status_code=str(AppStatusCode.ACCESS_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )

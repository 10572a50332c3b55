import logging
from fastapi import Request, Response, status
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole, UserStatus
from ..schemas.authschemas import (
    AuthenticationResponse, LoginRequest, RegisterRequest, UserResponse
)

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str):
    return db.query(Users).filter(Users.email == email.lower()).first()


def register_user(db: Session, request: RegisterRequest) -> UserResponse:
    if get_user_by_email(db, request.email):
        return error_response(
            message=f"Email '{request.email}' is already registered.",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    # self registration always yields a regular user; admins are seeded
    user = Users(
        email=request.email.lower(),
        first_name=request.first_name,
        last_name=request.last_name,
        role=UserRole.USER.value,
        status=UserStatus.ACTIVE.value,
    )
    user.set_password(request.password)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return UserResponse.model_validate(user)


def create_user_session(request: Request, db: Session, user: Users) -> str:
    """Open a login session row and return the signed token bound to it."""
    session = UserLoginSession(
        user_id=user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=(request.headers.get("user-agent") or "")[:255],
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    return auth.create_access_token({
        "user_id": user.id,
        "session_id": session.id,
        "role": user.role,
        "email": user.email,
    })


def set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
    )


def login_user(request: Request, response: Response, db: Session, credentials: LoginRequest) -> AuthenticationResponse:
    user = get_user_by_email(db, credentials.email)
    if not user or not user.verify_password(credentials.password):
        return error_response(
            message="Invalid email or password",
            status_code=str(AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if user.status.lower() != UserStatus.ACTIVE.value:
        return error_response(
            message="User is not active. Access denied",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INACTIVE),
            http_status=status.HTTP_403_FORBIDDEN
        )

    token = create_user_session(request, db, user)
    set_session_cookie(response, token)

    logger.info("User %s logged in", user.id)
    return AuthenticationResponse(
        access_token=token,
        user=UserResponse.model_validate(user),
    )


def logout_user(response: Response, db: Session, current_user: UserToken):
    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == current_user.session_id).first()
    if session:
        session.is_active = False
        db.commit()

    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


def get_current_user(db: Session, current_user: UserToken) -> UserResponse:
    user = db.query(Users).filter(Users.id == current_user.user_id).first()
    return UserResponse.model_validate(user)

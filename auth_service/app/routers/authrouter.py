from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas import authschemas
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Directory Auth"])


@router.post("/register", status_code=201)
def register(
        request: authschemas.RegisterRequest,
        db: Session = Depends(get_db)):
    user = authservices.register_user(db, request)
    return success_response(data=user, message="User registered successfully",
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/login")
def login(
        credentials: authschemas.LoginRequest,
        request: Request,
        response: Response,
        db: Session = Depends(get_db)):
    result = authservices.login_user(request, response, db, credentials)
    return success_response(data=result, message="Logged in successfully")


@router.post("/logout")
def logout(
        response: Response,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return success_response(data=authservices.logout_user(response, db, current_user),
                            message="Logged out successfully")


@router.get("/me")
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return success_response(data=authservices.get_current_user(db, current_user))

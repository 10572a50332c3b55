import os

# must be set before the apps import shared.core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, SessionLocal, engine
from shared.core.schemas import UserToken
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users, bcrypt_context
from auth_service.app.main import app as auth_app
from directory_service.app.main import app as directory_app
from directory_service.app.models.businesses import Business

PASSWORD = "correct-horse-battery"
_password_hash = None


def password_hash() -> str:
    global _password_hash
    if _password_hash is None:
        _password_hash = bcrypt_context.hash(PASSWORD)
    return _password_hash


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(directory_app)


@pytest.fixture
def auth_client():
    return TestClient(auth_app)


@pytest.fixture
def make_user(db):
    def _make(email: str, role: str = "user", status: str = "active", first_name: str = "Test") -> Users:
        user = Users(
            email=email,
            first_name=first_name,
            last_name="User",
            password=password_hash(),
            role=role,
            status=status,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com", first_name="Olivia")


@pytest.fixture
def other_user(make_user):
    return make_user("someone@example.com", first_name="Sam")


@pytest.fixture
def admin(make_user):
    return make_user("ops@example.com", role="admin", first_name="Ada")


@pytest.fixture
def headers_for(db):
    def _headers(user: Users) -> dict:
        session = UserLoginSession(user_id=user.id)
        db.add(session)
        db.commit()
        db.refresh(session)
        token = create_access_token({
            "user_id": user.id,
            "session_id": session.id,
            "role": user.role,
            "email": user.email,
        })
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def identity():
    def _identity(user: Users) -> UserToken:
        return UserToken(user_id=user.id, session_id="test-session", role=user.role, email=user.email)
    return _identity


@pytest.fixture
def make_business(db):
    def _make(title: str = "Corner Bakery", **fields) -> Business:
        fields.setdefault("category", "Food")
        fields.setdefault("city", "Springfield")
        business = Business(title=title, **fields)
        db.add(business)
        db.commit()
        db.refresh(business)
        return business
    return _make

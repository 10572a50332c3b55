"""
Seed an admin account, or promote an existing user to admin.

    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=... python -m shared.data.admin_user_insert
"""
import logging
import os

from sqlalchemy.exc import SQLAlchemyError

from shared.core.database import Base, SessionLocal, engine
from shared.models.users import Users
from shared.models import user_login_session  # noqa: F401  registers the table
from shared.utils.enums import UserRole, UserStatus

logger = logging.getLogger(__name__)


def ensure_admin(db, email: str, password: str, first_name: str = "Site", last_name: str = "Admin") -> Users:
    user = db.query(Users).filter(Users.email == email.lower()).first()

    if user:
        if user.role == UserRole.ADMIN.value:
            logger.info("Admin already exists: %s", user.email)
            return user
        user.role = UserRole.ADMIN.value
        user.status = UserStatus.ACTIVE.value
        db.commit()
        logger.info("Promoted %s to admin", user.email)
        return user

    user = Users(
        email=email.lower(),
        first_name=first_name,
        last_name=last_name,
        role=UserRole.ADMIN.value,
        status=UserStatus.ACTIVE.value,
    )
    user.set_password(password)
    db.add(user)
    db.commit()
    logger.info("Admin created: %s", user.email)
    return user


def main():
    logging.basicConfig(level=logging.INFO)
    email = os.getenv("ADMIN_EMAIL", "admin@example.com")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        raise SystemExit("ADMIN_PASSWORD must be set")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_admin(db, email, password)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating admin user")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()

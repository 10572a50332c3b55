import uuid
from sqlalchemy import (
    Column, String, Boolean, ForeignKey, TIMESTAMP, func
)
from sqlalchemy.orm import relationship
from ..core.database import Base


class UserLoginSession(Base):
    __tablename__ = "user_login_sessions"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey(
        "users.id", ondelete="CASCADE"), nullable=False, index=True)
    ip_address = Column(String(50), nullable=True)
    user_agent = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    last_accessed_at = Column(TIMESTAMP(timezone=True),
                              server_default=func.now(), onupdate=func.now())

    user = relationship("Users", backref="login_sessions")

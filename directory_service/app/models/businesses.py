import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


def generate_place_id() -> str:
    return f"biz_{uuid.uuid4().hex}"


class Business(Base):
    __tablename__ = "businesses"

    place_id = Column(String(128), primary_key=True, default=generate_place_id)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    category = Column(String(100), index=True)

    address = Column(String(300))
    city = Column(String(100), index=True)
    state = Column(String(100))
    zip_code = Column(String(20))
    phone = Column(String(40))
    email = Column(String(200))
    website = Column(String(300))

    featured = Column(Boolean, default=False, nullable=False)
    # NULL means unclaimed
    owner_id = Column(String(64), ForeignKey(
        "users.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String(16), default="active", nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    ownership_claims = relationship(
        "OwnershipClaim", back_populates="business", cascade="all, delete-orphan")
    featured_requests = relationship(
        "FeaturedRequest", back_populates="business", cascade="all, delete-orphan")

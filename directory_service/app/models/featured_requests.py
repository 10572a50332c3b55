from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func, text
from sqlalchemy.orm import relationship
from shared.core.database import Base


class FeaturedRequest(Base):
    __tablename__ = "featured_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(String(128), ForeignKey(
        "businesses.place_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey(
        "users.id", ondelete="CASCADE"), nullable=False, index=True)

    message = Column(Text)
    status = Column(String(16), default="pending", nullable=False)
    # pending | approved | rejected

    admin_message = Column(Text)
    reviewed_by = Column(String(64), ForeignKey("users.id"))
    reviewed_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="featured_requests")
    user = relationship("Users", foreign_keys=[user_id])

    __table_args__ = (
        # at most one pending request per business
        Index(
            "uq_featured_request_pending_business",
            "business_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

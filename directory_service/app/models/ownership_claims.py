from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class OwnershipClaim(Base):
    __tablename__ = "ownership_claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey(
        "users.id", ondelete="CASCADE"), nullable=False, index=True)
    business_id = Column(String(128), ForeignKey(
        "businesses.place_id", ondelete="CASCADE"), nullable=False, index=True)

    message = Column(Text, nullable=False)
    status = Column(String(16), default="pending", nullable=False)
    # pending | approved | rejected

    admin_message = Column(Text)
    reviewed_by = Column(String(64), ForeignKey("users.id"))
    reviewed_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="ownership_claims")
    user = relationship("Users", foreign_keys=[user_id])
    reviewer = relationship("Users", foreign_keys=[reviewed_by])

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from shared.core.database import Base


class SocialMediaLink(Base):
    __tablename__ = "social_media_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    platform = Column(String(32), unique=True, nullable=False)
    url = Column(String(500), nullable=False)
    display_name = Column(String(100), nullable=False)
    icon_class = Column(String(100), nullable=False)
    sort_order = Column(Integer, default=100, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

"""Business ORM model: one storefront a user collects reviews for."""

from sqlalchemy import Column, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship

from reviewdash.database import Base


class Business(Base):
    """
    A business owned by a dashboard user.
    user_id is the id issued by the external auth provider.
    """

    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(Text, nullable=False)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    reviews = relationship("Review", back_populates="business")
    platform_connections = relationship("BusinessPlatform", back_populates="business")

"""Review platform reference data and per-business platform connections."""

from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from reviewdash.database import Base


class ReviewPlatform(Base):
    """A review source such as Google or Yelp. Read-only reference data."""

    __tablename__ = "review_platforms"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False)
    slug = Column(String(50), nullable=False, unique=True)
    icon_url = Column(Text, nullable=True)


class BusinessPlatform(Base):
    """A platform a business has connected for review syncing."""

    __tablename__ = "business_platforms"
    __table_args__ = (UniqueConstraint("business_id", "platform_id"),)

    id = Column(String(36), primary_key=True)
    business_id = Column(
        String(36),
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
    )
    platform_id = Column(
        String(36),
        ForeignKey("review_platforms.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    business = relationship("Business", back_populates="platform_connections")

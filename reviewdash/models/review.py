"""Review ORM model: raw review facts synced or imported from a platform."""

from sqlalchemy import (
    Boolean, Column, Float, ForeignKey, JSON, Numeric, String, Text,
    TIMESTAMP, false,
)
from sqlalchemy.orm import relationship

from reviewdash.database import Base


class Review(Base):
    """
    A single customer review.
    sentiment and categories are filled in by the analysis pipeline;
    sentiment stays NULL until the review has been analysed.
    responded_at is only meaningful when has_response is true.
    """

    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True)
    business_id = Column(
        String(36),
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    platform_id = Column(String(36), nullable=False)

    rating = Column(Numeric(3, 1), nullable=False)
    review_text = Column(Text, nullable=True)

    sentiment = Column(String(20), nullable=True)   # 'positive' | 'neutral' | 'negative'
    sentiment_score = Column(Float, nullable=True)
    categories = Column(JSON, nullable=True, default=list)

    reviewed_at = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    has_response = Column(Boolean, nullable=False, default=False, server_default=false())
    responded_at = Column(TIMESTAMP(timezone=True), nullable=True)

    # Relationships
    business = relationship("Business", back_populates="reviews")
    ai_responses = relationship(
        "AIResponse", back_populates="review", cascade="all, delete-orphan"
    )

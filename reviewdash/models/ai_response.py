"""AIResponse ORM model: drafted replies generated for a review."""

from sqlalchemy import Column, ForeignKey, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship

from reviewdash.database import Base


class AIResponse(Base):
    """An AI-drafted reply. The dashboard only counts these."""

    __tablename__ = "ai_responses"

    id = Column(String(36), primary_key=True)
    review_id = Column(
        String(36),
        ForeignKey("reviews.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    review = relationship("Review", back_populates="ai_responses")

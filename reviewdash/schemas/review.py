"""
Pydantic schemas for the review facts consumed by the aggregation engine.
Validated once at the fetch boundary so the engine works on typed records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reviewdash.utils.time_buckets import as_utc


class ReviewRecord(BaseModel):
    """
    One stored customer review.

    sentiment is None until the review has been analysed. Any other value is
    kept verbatim; rollups match it exactly.
    responded_at is only meaningful when has_response is True.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    business_id: str
    platform_id: str
    rating: float
    sentiment: Optional[str] = None
    reviewed_at: datetime
    has_response: bool = False
    responded_at: Optional[datetime] = None
    categories: list[str] = Field(default_factory=list)
    sentiment_score: Optional[float] = None

    @field_validator("reviewed_at", "responded_at")
    @classmethod
    def _normalise_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Storage may hand back naive datetimes; those are UTC."""
        return as_utc(value) if value is not None else None

    @field_validator("categories", mode="before")
    @classmethod
    def _categories_default(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def is_responded(self) -> bool:
        """A reply exists and its timestamp is known."""
        return self.has_response and self.responded_at is not None


class PlatformRecord(BaseModel):
    """Review platform reference data (Google, Yelp, ...)."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str
    slug: str
    icon_url: Optional[str] = None

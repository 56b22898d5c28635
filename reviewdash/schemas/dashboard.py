"""
Pydantic schemas for the dashboard overview payload.

Field names serialise to camelCase for the JSON-consuming dashboard, except
LatestReview which keeps the snake_case keys the review cards already read.
Every model is frozen: an overview is computed, returned and discarded.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DashboardModel(BaseModel):
    """Base for camelCase, immutable dashboard payload parts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DashboardStats(DashboardModel):
    """Headline numbers shown at the top of the dashboard."""

    business_count: int = 0
    connected_platforms: int = 0
    total_reviews: int = 0
    ai_responses: int = 0
    avg_rating: float = 0.0
    response_rate: int = 0             # 0–100
    pending_reviews: int = 0
    weekly_change: int = 0             # unbounded, may be negative


class TrendPoint(DashboardModel):
    """One calendar-month bucket of the review trend chart."""

    month: str                         # "Jan" … "Dec"
    reviews: int = 0
    responses: int = 0
    avg_rating: float = 0.0


class SentimentSlice(DashboardModel):
    label: str                         # "Positive" | "Neutral" | "Negative"
    value: int = 0


class PlatformPerformance(DashboardModel):
    """Review volume and response rate for one platform."""

    platform: str
    icon: str
    reviews: int
    response_rate: int                 # 0–100


class CategoryShare(DashboardModel):
    category: str
    count: int
    share: int                         # percent of total reviews


class LatestReview(BaseModel):
    """Compact review row for the 'latest reviews' card."""

    model_config = ConfigDict(frozen=True)

    id: str
    platform: str
    rating: float
    sentiment: Optional[str] = None
    reviewed_at: datetime
    has_response: bool


class ResponseTime(DashboardModel):
    """Reply latency summary. median_hours is None when nothing was answered."""

    median_hours: Optional[int] = None
    same_day_percent: int = 0


class DashboardOverview(DashboardModel):
    """
    Top-level dashboard payload. Shape is fixed regardless of data volume:
    review_trend always has one point per trend month and
    sentiment_breakdown always has exactly three slices.
    """

    stats: DashboardStats
    review_trend: list[TrendPoint]
    sentiment_breakdown: list[SentimentSlice]
    platform_performance: list[PlatformPerformance]
    category_breakdown: list[CategoryShare]
    latest_reviews: list[LatestReview]
    response_time: ResponseTime

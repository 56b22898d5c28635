"""Pydantic schemas for the business metrics bundle behind the insights panel."""

from __future__ import annotations

from typing import Literal

from reviewdash.schemas.dashboard import DashboardModel


class SentimentCounts(DashboardModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class CategoryCount(DashboardModel):
    category: str
    count: int


class PlatformRating(DashboardModel):
    platform: str
    review_count: int
    avg_rating: float


class ResponseTimeMetrics(DashboardModel):
    """Unlike the dashboard card, median_hours is 0 when nothing was answered."""

    median_hours: int = 0
    same_day_percentage: float = 0.0


class RecentTrends(DashboardModel):
    review_velocity: Literal["increasing", "stable", "decreasing"]
    sentiment_trend: Literal["improving", "stable", "declining"]


class BusinessMetrics(DashboardModel):
    """
    Deterministic metrics computed over a business's most recent reviews.
    response_rate is a fraction in [0, 1], not a percentage.
    """

    total_reviews: int
    avg_rating: float
    response_rate: float
    sentiment_breakdown: SentimentCounts
    top_categories: list[CategoryCount]
    platform_performance: list[PlatformRating]
    response_time: ResponseTimeMetrics
    recent_trends: RecentTrends

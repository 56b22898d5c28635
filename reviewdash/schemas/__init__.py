"""Pydantic schemas package."""

from reviewdash.schemas.review import PlatformRecord, ReviewRecord
from reviewdash.schemas.dashboard import (
    CategoryShare,
    DashboardOverview,
    DashboardStats,
    LatestReview,
    PlatformPerformance,
    ResponseTime,
    SentimentSlice,
    TrendPoint,
)
from reviewdash.schemas.insights import BusinessMetrics

__all__ = [
    "PlatformRecord", "ReviewRecord",
    "CategoryShare", "DashboardOverview", "DashboardStats", "LatestReview",
    "PlatformPerformance", "ResponseTime", "SentimentSlice", "TrendPoint",
    "BusinessMetrics",
]

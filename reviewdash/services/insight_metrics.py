"""
Business metrics for the insights panel.

Deterministic numbers only; turning them into prose is someone else's job.
Shares the responded/latency/category derivations with the dashboard engine
so both panels agree on what "responded" and "same day" mean.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from reviewdash.schemas.insights import (
    BusinessMetrics,
    CategoryCount,
    PlatformRating,
    RecentTrends,
    ResponseTimeMetrics,
    SentimentCounts,
)
from reviewdash.schemas.review import PlatformRecord, ReviewRecord
from reviewdash.services.aggregation import (
    ReviewSnapshot,
    rank_categories,
    ratings_of,
    responded_reviews,
    response_latencies,
    same_day_count,
    sentiment_counts,
)
from reviewdash.utils.platform_icons import UNKNOWN_PLATFORM_SHORT_NAME
from reviewdash.utils.stats import HOUR_SECONDS, mean, median, round_half_up, round_int
from reviewdash.utils.time_buckets import as_utc

RECENT_WINDOW = timedelta(days=30)

# Mean sentiment_score must move by more than this to count as a trend
SENTIMENT_TREND_THRESHOLD = 0.1


def compute_business_metrics(
    snapshot: ReviewSnapshot,
    now: datetime,
    top_categories: int = 5,
) -> BusinessMetrics:
    """Compute the metrics bundle for `snapshot` as of `now`."""
    reviews = snapshot.reviews
    total = len(reviews)
    responded = len(responded_reviews(reviews))

    categories = [
        CategoryCount(category=category, count=count)
        for category, count in rank_categories(reviews, top_categories)
    ]

    return BusinessMetrics(
        total_reviews=total,
        avg_rating=mean(ratings_of(reviews)),
        response_rate=round_half_up(responded / total, 4) if total else 0.0,
        sentiment_breakdown=SentimentCounts(**sentiment_counts(reviews)),
        top_categories=categories,
        platform_performance=_platform_ratings(reviews, snapshot.platforms),
        response_time=_response_time(reviews),
        recent_trends=_recent_trends(reviews, as_utc(now)),
    )


def _platform_ratings(
    reviews: Sequence[ReviewRecord],
    platforms: dict[str, PlatformRecord],
) -> list[PlatformRating]:
    """Review count and mean rating per platform, in first-seen order."""
    grouped: dict[str, list[float]] = {}
    for review in reviews:
        grouped.setdefault(review.platform_id, []).append(float(review.rating))

    rows: list[PlatformRating] = []
    for platform_id, ratings in grouped.items():
        platform = platforms.get(platform_id)
        rows.append(
            PlatformRating(
                platform=platform.name if platform else UNKNOWN_PLATFORM_SHORT_NAME,
                review_count=len(ratings),
                avg_rating=mean(ratings),
            )
        )
    return rows


def _response_time(reviews: Sequence[ReviewRecord]) -> ResponseTimeMetrics:
    latencies = response_latencies(reviews)
    if not latencies:
        return ResponseTimeMetrics(median_hours=0, same_day_percentage=0.0)
    return ResponseTimeMetrics(
        median_hours=round_int(median(latencies) / HOUR_SECONDS),
        same_day_percentage=round_half_up(same_day_count(latencies) / len(latencies) * 100, 1),
    )


def _recent_trends(reviews: Sequence[ReviewRecord], now: datetime) -> RecentTrends:
    """
    Compare the last 30 days against everything older.
    Velocity looks at counts, sentiment at mean sentiment_score.
    """
    cutoff = now - RECENT_WINDOW
    recent = [r for r in reviews if r.reviewed_at >= cutoff]
    older = [r for r in reviews if r.reviewed_at < cutoff]

    if not recent and not older:
        velocity = "stable"
    elif not older or len(recent) > len(older):
        velocity = "increasing"
    elif len(recent) < len(older):
        velocity = "decreasing"
    else:
        velocity = "stable"

    if not older:
        sentiment = "stable"
    else:
        recent_avg = _mean_sentiment_score(recent)
        older_avg = _mean_sentiment_score(older)
        if recent_avg > older_avg + SENTIMENT_TREND_THRESHOLD:
            sentiment = "improving"
        elif recent_avg < older_avg - SENTIMENT_TREND_THRESHOLD:
            sentiment = "declining"
        else:
            sentiment = "stable"

    return RecentTrends(review_velocity=velocity, sentiment_trend=sentiment)


def _mean_sentiment_score(reviews: Sequence[ReviewRecord]) -> float:
    # Unscored reviews count as 0
    if not reviews:
        return 0.0
    return sum(r.sentiment_score or 0.0 for r in reviews) / len(reviews)

"""
DashboardAggregator: pure review analytics engine.
No DB calls. No clock reads. Turns one fetched ReviewSnapshot into a
DashboardOverview.

Derivations (each reads the same review list, none reads another's output):
  Review trend       : N UTC calendar-month buckets, oldest first
  Headline stats     : totals, response rate, average rating, weekly change
  Sentiment breakdown: fixed positive / neutral / negative slices
  Platform rollup    : volume + response rate per platform, busiest first
  Category rollup    : top-K category mentions
  Latest reviews     : most recent reviews, newest first
  Response time      : median reply latency and same-day share

Never raises on sparse data: every ratio has a zero-denominator branch and
every top-K / median has an empty-input branch.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Sequence

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
from reviewdash.schemas.review import PlatformRecord, ReviewRecord
from reviewdash.utils.platform_icons import (
    DEFAULT_PLATFORM_SLUG,
    UNKNOWN_PLATFORM_NAME,
    UNKNOWN_PLATFORM_SHORT_NAME,
    platform_icon,
)
from reviewdash.utils.stats import (
    DAY_SECONDS,
    HOUR_SECONDS,
    mean,
    median,
    percent,
    round_int,
)
from reviewdash.utils.time_buckets import as_utc, format_month, is_same_month, month_buckets

logger = logging.getLogger(__name__)

SENTIMENT_LABELS: tuple[str, ...] = ("positive", "neutral", "negative")

_WEEK = timedelta(days=7)


@dataclass(frozen=True)
class ReviewSnapshot:
    """
    Everything the engine needs, already fetched and validated.
    ai_responses and connected_platforms are passed through unchanged.
    """

    reviews: list[ReviewRecord] = field(default_factory=list)
    platforms: dict[str, PlatformRecord] = field(default_factory=dict)
    business_count: int = 0
    ai_responses: int = 0
    connected_platforms: int = 0


# ── Shared derivations ─────────────────────────────────────────────────────────


def responded_reviews(reviews: Iterable[ReviewRecord]) -> list[ReviewRecord]:
    """Reviews with a reply AND a known reply timestamp."""
    return [r for r in reviews if r.is_responded]


def response_latencies(reviews: Iterable[ReviewRecord]) -> list[float]:
    """
    Reply latency in seconds for every responded review.
    A reply stamped before its review is clamped to 0 and logged.
    """
    latencies: list[float] = []
    for review in responded_reviews(reviews):
        seconds = (review.responded_at - review.reviewed_at).total_seconds()
        if seconds < 0:
            logger.warning(
                "Review %s responded_at precedes reviewed_at by %.0fs, clamping latency to 0",
                review.id, -seconds,
            )
            seconds = 0.0
        latencies.append(seconds)
    return latencies


def same_day_count(latencies: Iterable[float]) -> int:
    """Number of replies recorded within 24 hours."""
    return sum(1 for seconds in latencies if seconds <= DAY_SECONDS)


def sentiment_counts(reviews: Sequence[ReviewRecord]) -> dict[str, int]:
    """Exact-match counts per sentiment label; unanalysed reviews are skipped."""
    counts = Counter(r.sentiment for r in reviews if r.sentiment is not None)
    return {label: counts.get(label, 0) for label in SENTIMENT_LABELS}


def rank_categories(reviews: Iterable[ReviewRecord], limit: int) -> list[tuple[str, int]]:
    """
    Most mentioned categories, highest count first.
    Mentions are not deduplicated per review. Ties keep first-seen order.
    """
    counter: Counter[str] = Counter()
    for review in reviews:
        counter.update(review.categories)
    # Counter keeps insertion order and sorted() is stable
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def ratings_of(reviews: Iterable[ReviewRecord]) -> list[float]:
    return [float(r.rating) for r in reviews]


# ── Engine ─────────────────────────────────────────────────────────────────────


class DashboardAggregator:
    """
    Pure Python aggregator. Receives a pre-fetched snapshot and the current
    time, returns a DashboardOverview. Shares nothing between calls, so one
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        trend_months: int = 6,
        top_categories: int = 5,
        latest_reviews: int = 5,
    ) -> None:
        self.trend_months = trend_months
        self.top_categories = top_categories
        self.latest_reviews = latest_reviews

    def aggregate(self, snapshot: ReviewSnapshot, now: datetime) -> DashboardOverview:
        """
        Build the full DashboardOverview for `snapshot` as of `now`.
        Zero businesses short-circuits to the empty overview.
        """
        now = as_utc(now)
        if snapshot.business_count == 0:
            return self.empty(now)

        reviews = snapshot.reviews
        overview = DashboardOverview(
            stats=self._headline_stats(snapshot, now),
            review_trend=self._review_trend(reviews, now),
            sentiment_breakdown=self._sentiment_breakdown(reviews),
            platform_performance=self._platform_performance(reviews, snapshot.platforms),
            category_breakdown=self._category_breakdown(reviews),
            latest_reviews=self._latest_reviews(reviews, snapshot.platforms),
            response_time=self._response_time(reviews),
        )
        logger.debug(
            "Dashboard aggregated: %d reviews across %d businesses, %d trend buckets",
            len(reviews), snapshot.business_count, len(overview.review_trend),
        )
        return overview

    def empty(self, now: datetime) -> DashboardOverview:
        """
        Zero-shaped overview: scalars at zero/None, trend still has one point
        per month, sentiment still has three slices, other lists empty.
        """
        return DashboardOverview(
            stats=DashboardStats(),
            review_trend=self._review_trend([], as_utc(now)),
            sentiment_breakdown=self._sentiment_breakdown([]),
            platform_performance=[],
            category_breakdown=[],
            latest_reviews=[],
            response_time=ResponseTime(median_hours=None, same_day_percent=0),
        )

    # ── Time buckets ───────────────────────────────────────────────────────────

    def _review_trend(self, reviews: Sequence[ReviewRecord], now: datetime) -> list[TrendPoint]:
        """One point per UTC calendar month, ending with the month of `now`."""
        points: list[TrendPoint] = []
        for bucket in month_buckets(now, self.trend_months):
            in_bucket = [r for r in reviews if is_same_month(r.reviewed_at, bucket)]
            points.append(
                TrendPoint(
                    month=format_month(bucket),
                    reviews=len(in_bucket),
                    responses=sum(1 for r in in_bucket if r.has_response),
                    avg_rating=mean(ratings_of(in_bucket)),
                )
            )
        return points

    # ── Headline stats ─────────────────────────────────────────────────────────

    def _headline_stats(self, snapshot: ReviewSnapshot, now: datetime) -> DashboardStats:
        reviews = snapshot.reviews
        total = len(reviews)
        responded = len(responded_reviews(reviews))
        return DashboardStats(
            business_count=snapshot.business_count,
            connected_platforms=snapshot.connected_platforms,
            total_reviews=total,
            ai_responses=snapshot.ai_responses,
            avg_rating=mean(ratings_of(reviews)),
            response_rate=percent(responded, total),
            pending_reviews=total - responded,
            weekly_change=self._weekly_change(reviews, now),
        )

    @staticmethod
    def _weekly_change(reviews: Sequence[ReviewRecord], now: datetime) -> int:
        """
        Percent change of review volume in [now-7d, now) against
        [now-14d, now-7d). 100 when only the current week has reviews.
        """
        current_start = now - _WEEK
        previous_start = now - 2 * _WEEK
        current = sum(1 for r in reviews if current_start <= r.reviewed_at < now)
        previous = sum(1 for r in reviews if previous_start <= r.reviewed_at < current_start)

        if previous == 0:
            return 100 if current > 0 else 0
        return round_int((current - previous) / previous * 100)

    # ── Rollups ────────────────────────────────────────────────────────────────

    @staticmethod
    def _sentiment_breakdown(reviews: Sequence[ReviewRecord]) -> list[SentimentSlice]:
        counts = sentiment_counts(reviews)
        return [
            SentimentSlice(label=label.capitalize(), value=counts[label])
            for label in SENTIMENT_LABELS
        ]

    @staticmethod
    def _platform_performance(
        reviews: Sequence[ReviewRecord],
        platforms: dict[str, PlatformRecord],
    ) -> list[PlatformPerformance]:
        """
        Group by platform_id in first-seen order, busiest platform first.
        Unknown platform ids become an 'Unknown Platform' row.
        """
        volume: dict[str, list[int]] = {}  # platform_id → [reviews, responded]
        for review in reviews:
            counts = volume.setdefault(review.platform_id, [0, 0])
            counts[0] += 1
            if review.has_response:
                counts[1] += 1

        rows: list[PlatformPerformance] = []
        for platform_id, (count, responded) in volume.items():
            platform = platforms.get(platform_id)
            slug = platform.slug if platform else DEFAULT_PLATFORM_SLUG
            rows.append(
                PlatformPerformance(
                    platform=platform.name if platform else UNKNOWN_PLATFORM_NAME,
                    icon=platform_icon(slug),
                    reviews=count,
                    response_rate=percent(responded, count),
                )
            )
        rows.sort(key=lambda row: row.reviews, reverse=True)
        return rows

    def _category_breakdown(self, reviews: Sequence[ReviewRecord]) -> list[CategoryShare]:
        total = len(reviews)
        return [
            CategoryShare(category=category, count=count, share=percent(count, total))
            for category, count in rank_categories(reviews, self.top_categories)
        ]

    def _latest_reviews(
        self,
        reviews: Sequence[ReviewRecord],
        platforms: dict[str, PlatformRecord],
    ) -> list[LatestReview]:
        newest = sorted(reviews, key=lambda r: r.reviewed_at, reverse=True)
        latest: list[LatestReview] = []
        for review in newest[: self.latest_reviews]:
            platform = platforms.get(review.platform_id)
            latest.append(
                LatestReview(
                    id=review.id,
                    platform=platform.name if platform else UNKNOWN_PLATFORM_SHORT_NAME,
                    rating=review.rating,
                    sentiment=review.sentiment,
                    reviewed_at=review.reviewed_at,
                    has_response=review.has_response,
                )
            )
        return latest

    # ── Response latency ───────────────────────────────────────────────────────

    @staticmethod
    def _response_time(reviews: Sequence[ReviewRecord]) -> ResponseTime:
        latencies = response_latencies(reviews)
        if not latencies:
            return ResponseTime(median_hours=None, same_day_percent=0)

        return ResponseTime(
            median_hours=round_int(median(latencies) / HOUR_SECONDS),
            same_day_percent=percent(same_day_count(latencies), len(latencies)),
        )

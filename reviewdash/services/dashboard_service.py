"""
Dashboard service. Fetches a caller's review snapshot and runs the pure
aggregations over it.

Nothing is cached: every call recomputes from the current database state.
"now" is always passed in by the caller so results are reproducible.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reviewdash.config import settings
from reviewdash.schemas.dashboard import DashboardOverview
from reviewdash.schemas.insights import BusinessMetrics
from reviewdash.services.aggregation import DashboardAggregator
from reviewdash.services.insight_metrics import compute_business_metrics
from reviewdash.services.review_fetch import BusinessNotFoundError, fetch_review_snapshot

logger = logging.getLogger(__name__)

# ── Module-level singletons ────────────────────────────────────────────────────

_aggregator = DashboardAggregator(
    trend_months=settings.trend_months,
    top_categories=settings.top_categories,
    latest_reviews=settings.latest_reviews,
)


async def get_dashboard_overview(
    user_id: str,
    db: AsyncSession,
    now: datetime,
    business_id: Optional[str] = None,
) -> DashboardOverview:
    """
    Return the DashboardOverview for the caller's businesses.
    Raises BusinessNotFoundError when `business_id` is not one of them.
    """
    snapshot = await fetch_review_snapshot(user_id, db, business_id=business_id)
    overview = _aggregator.aggregate(snapshot, now)
    logger.info(
        "Dashboard overview for user=%s business=%s: %d reviews",
        user_id, business_id or "*", overview.stats.total_reviews,
    )
    return overview


async def get_business_metrics(
    user_id: str,
    db: AsyncSession,
    now: datetime,
    business_id: Optional[str] = None,
) -> BusinessMetrics:
    """
    Return metrics over the most recent `insights_review_limit` reviews.
    Raises BusinessNotFoundError when the caller has no matching business.
    """
    snapshot = await fetch_review_snapshot(
        user_id,
        db,
        business_id=business_id,
        review_limit=settings.insights_review_limit,
    )
    if snapshot.business_count == 0:
        raise BusinessNotFoundError("No businesses found. Please add a business first.")

    return compute_business_metrics(snapshot, now, top_categories=settings.top_categories)

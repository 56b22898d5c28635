"""
Review fetch boundary. Loads one caller's review facts from the database
and validates them into a ReviewSnapshot for the aggregation engine.

Pipeline:
  1. Resolve the caller's businesses (optionally one requested business)
  2. Load their reviews, newest first (optionally capped)
  3. Count AI-drafted replies among those reviews
  4. Load platform reference data and distinct connected platforms

Read-only. Database errors are logged and re-raised for the router to map.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdash.models import AIResponse, Business, BusinessPlatform, Review, ReviewPlatform
from reviewdash.schemas.review import PlatformRecord, ReviewRecord
from reviewdash.services.aggregation import ReviewSnapshot

logger = logging.getLogger(__name__)


class BusinessNotFoundError(Exception):
    """Raised when a requested business does not exist or belongs to someone else."""


async def fetch_business_ids(
    user_id: str,
    db: AsyncSession,
    business_id: Optional[str] = None,
) -> list[str]:
    """
    Return ids of businesses owned by `user_id`.
    With `business_id`, return just that one or raise BusinessNotFoundError.
    """
    stmt = select(Business.id).where(Business.user_id == user_id)
    if business_id:
        stmt = stmt.where(Business.id == business_id)

    result = await db.execute(stmt)
    ids = list(result.scalars().all())

    if business_id and not ids:
        raise BusinessNotFoundError(f"Business {business_id} not found")
    return ids


async def fetch_review_snapshot(
    user_id: str,
    db: AsyncSession,
    business_id: Optional[str] = None,
    review_limit: Optional[int] = None,
) -> ReviewSnapshot:
    """
    Build the ReviewSnapshot for the caller's businesses.
    Returns an empty snapshot (business_count=0) when the caller owns none.
    """
    try:
        business_ids = await fetch_business_ids(user_id, db, business_id)
        if not business_ids:
            return ReviewSnapshot()

        reviews = await _fetch_reviews(business_ids, db, review_limit)
        ai_responses = await _count_ai_responses([r.id for r in reviews], db)
        platforms = await _fetch_platforms(db)
        connected = await _count_connected_platforms(business_ids, db)
    except SQLAlchemyError as exc:
        logger.error("Failed to load review snapshot for user %s: %s", user_id, exc)
        raise

    logger.debug(
        "Review snapshot for user %s: %d businesses, %d reviews, %d platforms",
        user_id, len(business_ids), len(reviews), len(platforms),
    )
    return ReviewSnapshot(
        reviews=reviews,
        platforms=platforms,
        business_count=len(business_ids),
        ai_responses=ai_responses,
        connected_platforms=connected,
    )


# ── Queries ────────────────────────────────────────────────────────────────────


async def _fetch_reviews(
    business_ids: list[str],
    db: AsyncSession,
    limit: Optional[int],
) -> list[ReviewRecord]:
    stmt = (
        select(Review)
        .where(Review.business_id.in_(business_ids))
        .order_by(Review.reviewed_at.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)

    result = await db.execute(stmt)
    return [ReviewRecord.model_validate(row) for row in result.scalars().all()]


async def _count_ai_responses(review_ids: list[str], db: AsyncSession) -> int:
    if not review_ids:
        return 0
    result = await db.execute(
        select(func.count(AIResponse.id)).where(AIResponse.review_id.in_(review_ids))
    )
    return result.scalar() or 0


async def _fetch_platforms(db: AsyncSession) -> dict[str, PlatformRecord]:
    result = await db.execute(select(ReviewPlatform))
    return {
        platform.id: PlatformRecord.model_validate(platform)
        for platform in result.scalars().all()
    }


async def _count_connected_platforms(business_ids: list[str], db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count(func.distinct(BusinessPlatform.platform_id))).where(
            BusinessPlatform.business_id.in_(business_ids)
        )
    )
    return result.scalar() or 0

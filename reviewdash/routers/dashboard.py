"""
Dashboard endpoints: called by the dashboard front end with X-User-ID header.

Endpoints:
  GET /dashboard/overview  : headline stats, trend, rollups, latency
  GET /dashboard/metrics   : metrics bundle for the insights panel

The user id header is trusted; session verification happens upstream.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdash.database import get_db
from reviewdash.schemas.dashboard import DashboardOverview
from reviewdash.schemas.insights import BusinessMetrics
from reviewdash.services.dashboard_service import get_business_metrics, get_dashboard_overview
from reviewdash.services.review_fetch import BusinessNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


# ── Dependencies ─────────────────────────────────────────────────────────────


def get_now() -> datetime:
    """Current UTC time. Overridden in tests to pin the clock."""
    return datetime.now(timezone.utc)


def _validate_uid(x_user_id: str = Header(..., alias="X-User-ID")) -> str:
    """Parse and validate X-User-ID header as a UUID."""
    try:
        return str(uuid.UUID(x_user_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format, must be a UUID",
            headers={"X-Error-Code": "MISSING_USER_ID"},
        )


def _not_found(exc: BusinessNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
        headers={"X-Error-Code": "BUSINESS_NOT_FOUND"},
    )


def _load_failed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unable to load data",
    )


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.get("/overview", response_model=DashboardOverview)
async def overview(
    business_id: Optional[str] = Query(default=None, alias="businessId"),
    user_id: str = Depends(_validate_uid),
    now: datetime = Depends(get_now),
    db: AsyncSession = Depends(get_db),
) -> DashboardOverview:
    """
    Return the dashboard overview for all of the caller's businesses,
    or only `businessId` when given.

    A caller with no businesses gets a zero-filled overview, never an error.
    """
    try:
        return await get_dashboard_overview(user_id, db, now, business_id=business_id)
    except BusinessNotFoundError as exc:
        raise _not_found(exc)
    except SQLAlchemyError as exc:
        logger.error("Dashboard overview failed for user %s: %s", user_id, exc)
        raise _load_failed() from exc


@router.get("/metrics", response_model=BusinessMetrics)
async def metrics(
    business_id: Optional[str] = Query(default=None, alias="businessId"),
    user_id: str = Depends(_validate_uid),
    now: datetime = Depends(get_now),
    db: AsyncSession = Depends(get_db),
) -> BusinessMetrics:
    """
    Return deterministic business metrics over the caller's most recent
    reviews. 404 when the caller has no businesses.
    """
    try:
        return await get_business_metrics(user_id, db, now, business_id=business_id)
    except BusinessNotFoundError as exc:
        raise _not_found(exc)
    except SQLAlchemyError as exc:
        logger.error("Business metrics failed for user %s: %s", user_id, exc)
        raise _load_failed() from exc

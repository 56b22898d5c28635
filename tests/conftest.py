import itertools
import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time; point them at a throwaway database first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "test")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from reviewdash.models import AIResponse, Base, Business, BusinessPlatform, Review, ReviewPlatform
from reviewdash.schemas.review import PlatformRecord, ReviewRecord
from reviewdash.services.aggregation import DashboardAggregator, ReviewSnapshot

OWNER_ID = "5b0c0d3e-8f43-4c4a-9d7a-2f6f1f9a0b11"
OTHER_OWNER_ID = "0e6b1c52-3a1d-4b8e-a0a4-6a3e1b7c9d22"


@pytest.fixture
def now() -> datetime:
    """Pinned wall clock: mid-October 2026, UTC."""
    return datetime(2026, 10, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def platforms() -> dict[str, PlatformRecord]:
    return {
        "p-google": PlatformRecord(id="p-google", name="Google", slug="google"),
        "p-yelp": PlatformRecord(id="p-yelp", name="Yelp", slug="yelp"),
        "p-forum": PlatformRecord(id="p-forum", name="Local Forum", slug="local-forum"),
    }


@pytest.fixture
def make_review(now):
    """Factory for ReviewRecord with sensible defaults; override any field."""
    counter = itertools.count(1)

    def _make(**overrides) -> ReviewRecord:
        data = {
            "id": f"r{next(counter)}",
            "business_id": "b1",
            "platform_id": "p-google",
            "rating": 5,
            "sentiment": None,
            "reviewed_at": now - timedelta(days=1),
            "has_response": False,
            "responded_at": None,
            "categories": [],
        }
        data.update(overrides)
        return ReviewRecord(**data)

    return _make


@pytest.fixture
def make_snapshot(platforms):
    def _make(reviews, **overrides) -> ReviewSnapshot:
        data = {
            "reviews": list(reviews),
            "platforms": platforms,
            "business_count": 1,
            "ai_responses": 0,
            "connected_platforms": 0,
        }
        data.update(overrides)
        return ReviewSnapshot(**data)

    return _make


@pytest.fixture
def aggregator() -> DashboardAggregator:
    return DashboardAggregator(trend_months=6, top_categories=5, latest_reviews=5)


# ── Database ───────────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def db_session():
    """Fresh in-memory SQLite database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession, now: datetime):
    """
    Two businesses for OWNER_ID, one for OTHER_OWNER_ID.

    b1: three reviews (Google x2, Yelp x1), one answered after 3h,
        one AI draft.
    b2: one review on a platform id with no platform record.
    b3 (other owner): one review that must never leak.
    """
    db_session.add_all([
        ReviewPlatform(id="p-google", name="Google", slug="google"),
        ReviewPlatform(id="p-yelp", name="Yelp", slug="yelp"),
        Business(id="b1", user_id=OWNER_ID, name="Corner Bakery"),
        Business(id="b2", user_id=OWNER_ID, name="Corner Bakery Annex"),
        Business(id="b3", user_id=OTHER_OWNER_ID, name="Somebody Else"),
    ])
    await db_session.flush()

    db_session.add_all([
        BusinessPlatform(id="c1", business_id="b1", platform_id="p-google"),
        BusinessPlatform(id="c2", business_id="b1", platform_id="p-yelp"),
        BusinessPlatform(id="c3", business_id="b2", platform_id="p-google"),
        BusinessPlatform(id="c4", business_id="b3", platform_id="p-yelp"),
        Review(
            id="r1", business_id="b1", platform_id="p-google", rating=5,
            sentiment="positive", categories=["service", "price"],
            reviewed_at=now - timedelta(days=2),
            has_response=True, responded_at=now - timedelta(days=2) + timedelta(hours=3),
        ),
        Review(
            id="r2", business_id="b1", platform_id="p-google", rating=3,
            sentiment="neutral", categories=["service"],
            reviewed_at=now - timedelta(days=40),
        ),
        Review(
            id="r3", business_id="b1", platform_id="p-yelp", rating=2,
            sentiment="negative", categories=None,
            reviewed_at=now - timedelta(days=10),
        ),
        Review(
            id="r4", business_id="b2", platform_id="p-retired", rating=4,
            sentiment=None, categories=["parking"],
            reviewed_at=now - timedelta(days=1),
        ),
        Review(
            id="r5", business_id="b3", platform_id="p-yelp", rating=1,
            sentiment="negative", reviewed_at=now - timedelta(days=1),
        ),
    ])
    await db_session.flush()

    db_session.add_all([
        AIResponse(id="a1", review_id="r1", content="Thanks for stopping by!"),
        AIResponse(id="a2", review_id="r5", content="Sorry to hear that."),
    ])
    await db_session.commit()
    return db_session

"""
create_tables.py: idempotent table creation script.
Run this before starting the service against a fresh database.
Safe to run multiple times (create_all skips existing tables).

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio

from reviewdash.database import engine
from reviewdash.models import Base  # noqa: F401, registers the models


async def main() -> None:
    """Create all tables."""
    print("Creating tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("  ✓ All tables created (IF NOT EXISTS)")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

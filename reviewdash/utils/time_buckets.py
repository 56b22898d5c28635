"""
UTC calendar-month buckets for the review trend chart.

Months are calendar months in UTC, never rolling 30-day windows.
"""

from __future__ import annotations

from datetime import datetime, timezone

# Fixed English labels so output never depends on the process locale
MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_buckets(now: datetime, count: int) -> list[datetime]:
    """
    Return `count` first-of-month UTC datetimes ending at the month of `now`,
    oldest first. Contiguous, no gaps or duplicates.
    """
    now = as_utc(now)
    # Months since year 0 makes stepping back across years plain arithmetic
    current = now.year * 12 + (now.month - 1)
    buckets: list[datetime] = []
    for offset in range(count - 1, -1, -1):
        year, month_index = divmod(current - offset, 12)
        buckets.append(datetime(year, month_index + 1, 1, tzinfo=timezone.utc))
    return buckets


def is_same_month(value: datetime, bucket: datetime) -> bool:
    """True when `value` falls in the UTC year+month of `bucket`."""
    value = as_utc(value)
    return value.year == bucket.year and value.month == bucket.month


def format_month(bucket: datetime) -> str:
    """Short month label, e.g. 'Oct'."""
    return MONTH_LABELS[bucket.month - 1]

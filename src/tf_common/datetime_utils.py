"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def start_of_month(now: datetime | None = None) -> datetime:
    """First instant of the calendar month containing *now* (UTC by default)."""
    now = now or utc_now()
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

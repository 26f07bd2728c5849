# services/common/time_utils.py
from __future__ import annotations
from datetime import datetime, timezone

UTC = timezone.utc


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def epoch_seconds(dt: datetime | None = None) -> int:
    """Whole seconds since the Unix epoch for `dt` (defaults to now)."""
    dt = dt or now_utc()
    return int(dt.timestamp())


def from_epoch(seconds: int) -> datetime:
    """Aware UTC datetime for an epoch value. Raises for years outside 1..9999."""
    return datetime.fromtimestamp(seconds, UTC)


def to_iso_z(dt: datetime, *, timespec: str = "seconds") -> str:
    """Serialize any datetime to ISO-8601 in UTC with trailing 'Z'."""
    return dt.astimezone(UTC).isoformat(timespec=timespec).replace("+00:00", "Z")


def epoch_to_iso_z(seconds: int) -> str | None:
    """ISO-8601 'Z' string for an epoch value, or None when no datetime can hold it."""
    try:
        return to_iso_z(from_epoch(seconds))
    except (OverflowError, OSError, ValueError):
        return None

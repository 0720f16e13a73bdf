"""UTC datetime helpers used at the persistence boundary."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as UTC; naive values are taken to already be UTC.

    Drivers may hand back naive timestamps for timezone-less columns, so
    repositories normalise every datetime they expose through this.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)

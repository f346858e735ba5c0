"""
Datetime utilities for consistent timestamp handling.
Booking timestamps are always stored as timezone-aware UTC.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def parse_iso_datetime(iso_string: str) -> datetime:
    """
    Parse an ISO format datetime string to a timezone-aware datetime.
    Handles both 'Z' suffix and '+00:00' timezone formats.

    Raises:
        ValueError: If datetime string cannot be parsed
    """
    normalized = iso_string.replace("Z", "+00:00")

    try:
        dt = datetime.fromisoformat(normalized)
    except ValueError as e:
        raise ValueError(f"Invalid datetime string: {iso_string}") from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso_string(dt: datetime) -> str:
    """Convert datetime to ISO format string, assuming UTC for naive values."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.isoformat()


def format_display_datetime(dt: datetime) -> str:
    """Render a timestamp for chat messages, e.g. ``05.03.2025 14:07``."""
    return dt.strftime("%d.%m.%Y %H:%M")

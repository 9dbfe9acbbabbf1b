"""
neweden Formatters

Display helpers shared by the CLI commands.
"""

from datetime import datetime, timezone

from ..universe.units import METERS_PER_LIGHTYEAR

# =============================================================================
# Timestamps
# =============================================================================


def format_datetime(dt: datetime) -> str:
    """
    Format datetime for display.

    Returns:
        ISO format string like "2026-01-15T12:30:00Z"
    """
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def get_utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_utc_timestamp() -> str:
    """Current UTC time as an ISO timestamp string."""
    return format_datetime(get_utc_now())


# =============================================================================
# Distance
# =============================================================================


def meters_to_lightyears(meters: float) -> float:
    return meters / METERS_PER_LIGHTYEAR

"""Staleness checks for fetched forecast documents."""

from datetime import UTC, datetime


def is_forecast_stale(
    generated_at_iso: str, max_age_minutes: int, now: datetime | None = None
) -> bool:
    """Check if a forecast is stale based on its generation time.

    An absent or unparseable timestamp counts as stale.
    """
    return forecast_staleness_hours(generated_at_iso, now) * 60 > max_age_minutes


def forecast_staleness_hours(
    generated_at_iso: str, now: datetime | None = None
) -> float:
    """Get the age of a forecast in hours."""
    if now is None:
        now = datetime.now(UTC)
    generated = _parse_timestamp(generated_at_iso)
    if generated is None:
        return float("inf")
    return (now - generated).total_seconds() / 3600


def _parse_timestamp(iso_str: str) -> datetime | None:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    try:
        dt = datetime.fromisoformat(iso_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt
    except (ValueError, TypeError):
        return None

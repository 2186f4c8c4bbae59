"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from typing import TypeAlias

DateKey: TypeAlias = str  # YYYY-MM-DD


def utc_now() -> datetime:
    return datetime.now(UTC)

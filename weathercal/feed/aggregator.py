"""Daily aggregator: folds forecast periods into one summary per calendar date.

Both folds key on the calendar date of a period's provider-local start time
(the part before the ``T``). No timezone conversion is applied, so an hourly
period starting at ``2024-06-01T23:00:00-05:00`` belongs to 2024-06-01.
"""

import logging
import math
import re
from collections.abc import Iterable
from datetime import date

from weathercal.models.calendar import DailyDescription, DailyStats
from weathercal.models.common import DateKey
from weathercal.models.errors import ParseError
from weathercal.models.forecast import ForecastPeriod

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INT_RE = re.compile(r"^[+-]?\d+$")
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def period_date(start_time: str) -> DateKey:
    """Return the YYYY-MM-DD calendar date of a period start timestamp."""
    key = start_time.split("T", 1)[0].strip()
    if not _DATE_RE.match(key):
        raise ParseError("start_time", start_time)
    try:
        date.fromisoformat(key)
    except ValueError:
        raise ParseError("start_time", start_time) from None
    return key


def parse_int(value: object, field: str) -> int:
    """Parse an integer forecast field.

    Integral floats are accepted; other floats are rounded to the nearest
    integer. Strings must be plain decimal integers.
    """
    if isinstance(value, bool):
        raise ParseError(field, value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParseError(field, value)
        return round(value)
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        return int(value.strip())
    raise ParseError(field, value)


def parse_wind_speed(text: object) -> int:
    """Parse the leading integer of a wind speed such as "10 mph" or "5 to 10 mph"."""
    if isinstance(text, int) and not isinstance(text, bool):
        return text
    if isinstance(text, str):
        m = _LEADING_INT_RE.match(text)
        if m is not None:
            return int(m.group(1))
    raise ParseError("wind_speed", text)


def parse_precipitation(value: object) -> int:
    """Parse a precipitation probability; missing means 0."""
    if value is None:
        return 0
    return parse_int(value, "precipitation_chance")


def fold_daily(periods: Iterable[ForecastPeriod]) -> dict[DateKey, DailyDescription]:
    """Fold day/night periods into one description per date.

    A second period for the same slot overwrites the first.
    """
    descriptions: dict[DateKey, DailyDescription] = {}
    for period in periods:
        key = period_date(period.start_time)
        desc = descriptions.setdefault(key, DailyDescription())
        if period.is_daytime:
            desc.day = period.detailed_forecast
        else:
            desc.night = period.detailed_forecast
    return descriptions


def fold_hourly(periods: Iterable[ForecastPeriod]) -> dict[DateKey, DailyStats]:
    """Fold hourly periods into high/low/precipitation stats per date.

    Keys keep first-seen order. The result does not depend on period order.
    """
    stats: dict[DateKey, DailyStats] = {}
    for period in periods:
        key = period_date(period.start_time)
        temperature = parse_int(period.temperature, "temperature")
        wind = parse_wind_speed(period.wind_speed)
        precip = parse_precipitation(period.precipitation_chance)

        current = stats.get(key)
        if current is None:
            stats[key] = DailyStats.seed(temperature, wind, precip)
        else:
            current.update(temperature, wind, precip)

    logger.debug("Aggregated hourly periods into %d dates", len(stats))
    return stats

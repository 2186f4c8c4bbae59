"""Forecast fetcher: resolves a coordinate and retrieves both period lists."""

import logging

from weathercal.ingest.nws_client import NwsClient
from weathercal.models.errors import FetchError
from weathercal.models.forecast import ForecastBundle, ForecastPeriod

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, nws_client: NwsClient):
        self.nws = nws_client

    def fetch(self, latitude: float, longitude: float) -> ForecastBundle:
        """Fetch the hourly and daily (day/night) forecasts for a coordinate.

        One points lookup, then one request per forecast document. Any
        failure propagates; there is no partial bundle.
        """
        endpoints = self.nws.resolve_endpoints(latitude, longitude)

        hourly_raw = self.nws.get_forecast(endpoints.hourly_url)
        hourly = _extract_periods(hourly_raw, endpoints.hourly_url)
        logger.info("Fetched %d hourly periods", len(hourly))

        daily_raw = self.nws.get_forecast(endpoints.forecast_url)
        daily = _extract_periods(daily_raw, endpoints.forecast_url)
        logger.info("Fetched %d daily periods", len(daily))

        return ForecastBundle(
            endpoints=endpoints,
            hourly=hourly,
            daily=daily,
            hourly_generated_at=_generated_at(hourly_raw),
            daily_generated_at=_generated_at(daily_raw),
        )


def _extract_periods(raw: dict, url: str) -> list[ForecastPeriod]:
    """Convert `properties.periods` of a forecast document into ForecastPeriods."""
    properties = raw.get("properties") or {}
    periods = properties.get("periods")
    if not isinstance(periods, list) or not periods:
        raise FetchError(f"No forecast periods in document from {url}")

    return [
        ForecastPeriod(
            number=int(p.get("number") or 0),
            name=p.get("name") or "",
            start_time=p.get("startTime") or "",
            is_daytime=bool(p.get("isDaytime", False)),
            temperature=p.get("temperature"),
            wind_speed=p.get("windSpeed") or "",
            precipitation_chance=_precipitation_value(
                p.get("probabilityOfPrecipitation")
            ),
            detailed_forecast=p.get("detailedForecast") or "",
            short_forecast=p.get("shortForecast") or "",
        )
        for p in periods
    ]


def _precipitation_value(raw: object) -> int | float | str | None:
    # NWS wraps the value as {"unitCode": "wmoUnit:percent", "value": 20}
    if isinstance(raw, dict):
        return raw.get("value")
    return raw


def _generated_at(raw: dict) -> str:
    properties = raw.get("properties") or {}
    return properties.get("generatedAt") or properties.get("updateTime") or ""

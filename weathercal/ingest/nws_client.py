"""NWS (api.weather.gov) client: points lookup and forecast retrieval."""

import logging
import time

import httpx

from weathercal.models.errors import FetchError, ResolutionError
from weathercal.models.forecast import ForecastEndpoints

logger = logging.getLogger(__name__)

NWS_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = "weathercal/0.1.0"


class NwsClient:
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_base_delay: float = 5.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def resolve_endpoints(self, latitude: float, longitude: float) -> ForecastEndpoints:
        """Look up the forecast and hourly forecast URLs for a coordinate.

        The API accepts at most four decimal places per coordinate.
        """
        url = f"{self.base_url}/points/{round(latitude, 4)},{round(longitude, 4)}"
        try:
            data = self._get_json(url)
        except FetchError as e:
            raise ResolutionError(f"Points lookup failed for {url}: {e}") from e

        properties = data.get("properties") or {}
        forecast_url = properties.get("forecast") or ""
        hourly_url = properties.get("forecastHourly") or ""
        if not forecast_url or not hourly_url:
            raise ResolutionError(
                f"Points lookup for {url} returned no forecast URLs "
                f"(forecast={forecast_url!r}, forecastHourly={hourly_url!r})"
            )

        endpoints = ForecastEndpoints(
            forecast_url=forecast_url,
            hourly_url=hourly_url,
            grid_id=properties.get("gridId") or "",
            grid_x=properties.get("gridX"),
            grid_y=properties.get("gridY"),
            time_zone=properties.get("timeZone") or "",
        )
        logger.info(
            "Resolved %s,%s to grid %s/%s,%s",
            latitude, longitude, endpoints.grid_id, endpoints.grid_x, endpoints.grid_y,
        )
        return endpoints

    def get_forecast(self, url: str) -> dict:
        """Fetch a forecast document (daily periods or hourly)."""
        return self._get_json(url)

    def _get_json(self, url: str) -> dict:
        """GET a JSON document, retrying on 503/429 when retries are enabled."""
        headers = {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(
                    url, headers=headers, timeout=self.timeout, follow_redirects=True
                )
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "NWS request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise FetchError(f"Request to {url} failed: {e}") from e

            if resp.status_code in (503, 429) and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "NWS %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    url, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                time.sleep(delay)
                continue
            return _decode(url, resp)

        raise AssertionError("unreachable")


def _decode(url: str, resp: httpx.Response) -> dict:
    if resp.status_code >= 400:
        raise FetchError(
            f"HTTP {resp.status_code} from {url}: {resp.text[:200]}",
            resp.status_code,
        )
    if not resp.content.strip():
        raise FetchError(f"Empty response from {url}", resp.status_code)
    try:
        data = resp.json()
    except ValueError as e:
        raise FetchError(f"Invalid JSON from {url}: {e}", resp.status_code) from e
    if not isinstance(data, dict) or not data:
        raise FetchError(f"Empty document from {url}", resp.status_code)
    return data

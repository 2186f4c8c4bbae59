"""NWS forecast data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ForecastEndpoints:
    forecast_url: str
    hourly_url: str
    grid_id: str = ""
    grid_x: int | None = None
    grid_y: int | None = None
    time_zone: str = ""


@dataclass(frozen=True)
class ForecastPeriod:
    number: int
    name: str
    start_time: str  # provider-local ISO timestamp
    is_daytime: bool
    temperature: int | float | str | None
    wind_speed: str  # free text, e.g. "10 mph"
    precipitation_chance: int | float | str | None
    detailed_forecast: str
    short_forecast: str = ""


@dataclass(frozen=True)
class ForecastBundle:
    endpoints: ForecastEndpoints
    hourly: list[ForecastPeriod] = field(default_factory=list)
    daily: list[ForecastPeriod] = field(default_factory=list)
    hourly_generated_at: str = ""
    daily_generated_at: str = ""

"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.weather.gov"
    user_agent: str = "weathercal/0.1.0"
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=0, ge=0)
    retry_base_delay_seconds: float = Field(default=5.0, ge=0.0)


class OutputConfig(BaseModel):
    model_config = {"extra": "forbid"}

    directory: str = "public"
    filename: str = Field(default="forecast.ics", min_length=1)

    @property
    def path(self) -> Path:
        return Path(self.directory) / self.filename


class CalendarConfig(BaseModel):
    model_config = {"extra": "forbid"}

    domain: str = Field(default="weathercal.local", min_length=1)
    name: str | None = None
    refresh_minutes: int | None = Field(default=None, ge=1)
    max_line_width: int = Field(default=75, ge=10, le=998)


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_max_age_minutes: int = Field(default=360, ge=1)
    log_file: str | None = None
    log_level: LogLevel = LogLevel.INFO


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    location: LocationConfig | None = None
    api: ApiConfig = ApiConfig()
    output: OutputConfig = OutputConfig()
    calendar: CalendarConfig = CalendarConfig()
    ops: OpsConfig = OpsConfig()

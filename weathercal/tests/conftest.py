"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weathercal.config.schema import AppConfig, LocationConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"
TEST_BASE_URL = "https://test-nws.example.com"


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def points_json() -> dict:
    return load_fixture("nws_points.json")


@pytest.fixture
def hourly_json() -> dict:
    return load_fixture("nws_forecast_hourly.json")


@pytest.fixture
def daily_json() -> dict:
    return load_fixture("nws_forecast_daily.json")


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Config pointing at the test API and a temporary output directory."""
    return AppConfig(
        location=LocationConfig(name="Topeka", latitude=39.0473, longitude=-95.6752),
        api={"base_url": TEST_BASE_URL},
        output={"directory": str(tmp_path / "public"), "filename": "forecast.ics"},
        calendar={"domain": "weather.example.org"},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "location": {"name": "Topeka", "latitude": 39.0473, "longitude": -95.6752},
        "api": {"base_url": TEST_BASE_URL},
        "output": {"directory": str(tmp_path / "public"), "filename": "forecast.ics"},
        "calendar": {"domain": "weather.example.org"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path

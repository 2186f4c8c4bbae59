"""Tests for the daily aggregator folds."""

import itertools

import pytest

from weathercal.feed.aggregator import (
    fold_daily,
    fold_hourly,
    parse_int,
    parse_precipitation,
    parse_wind_speed,
    period_date,
)
from weathercal.models.calendar import DailyStats
from weathercal.models.errors import ParseError
from weathercal.models.forecast import ForecastPeriod


def _hourly(start: str, temp, wind: str, precip=None) -> ForecastPeriod:
    return ForecastPeriod(
        number=0,
        name="",
        start_time=start,
        is_daytime=True,
        temperature=temp,
        wind_speed=wind,
        precipitation_chance=precip,
        detailed_forecast="",
    )


def _daily(start: str, is_daytime: bool, text: str) -> ForecastPeriod:
    return ForecastPeriod(
        number=0,
        name="",
        start_time=start,
        is_daytime=is_daytime,
        temperature=70,
        wind_speed="5 mph",
        precipitation_chance=None,
        detailed_forecast=text,
    )


EXAMPLE_HOURLY = [
    _hourly("2024-06-01T06:00:00-05:00", 60, "5 mph", 10),
    _hourly("2024-06-01T15:00:00-05:00", 75, "12 mph", 30),
    _hourly("2024-06-02T06:00:00-05:00", 65, "8 mph", 0),
]


class TestPeriodDate:
    def test_offset_timestamp(self):
        assert period_date("2024-06-01T23:00:00-05:00") == "2024-06-01"

    def test_no_timezone_conversion(self):
        # 23:00 at -05:00 is already June 2nd in UTC
        assert period_date("2024-06-01T23:00:00-05:00") != "2024-06-02"

    def test_date_only(self):
        assert period_date("2024-06-01") == "2024-06-01"

    @pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01T00:00:00", "20240601T0000"])
    def test_invalid(self, value: str):
        with pytest.raises(ParseError):
            period_date(value)


class TestParsers:
    def test_parse_int(self):
        assert parse_int(72, "temperature") == 72
        assert parse_int("-4", "temperature") == -4
        assert parse_int(71.0, "temperature") == 71
        assert parse_int(21.6, "temperature") == 22

    @pytest.mark.parametrize("value", [None, "warm", "7O", True, float("nan"), [72]])
    def test_parse_int_rejects(self, value):
        with pytest.raises(ParseError) as exc_info:
            parse_int(value, "temperature")
        assert exc_info.value.field == "temperature"

    def test_wind_leading_integer(self):
        assert parse_wind_speed("10 mph") == 10
        assert parse_wind_speed("5 to 15 mph") == 5
        assert parse_wind_speed(" 7 mph") == 7
        assert parse_wind_speed(12) == 12

    @pytest.mark.parametrize("value", ["", "calm", "mph 10", None])
    def test_wind_rejects(self, value):
        with pytest.raises(ParseError, match="wind_speed"):
            parse_wind_speed(value)

    def test_precipitation_missing_is_zero(self):
        assert parse_precipitation(None) == 0
        assert parse_precipitation(40) == 40

    def test_precipitation_rejects_text(self):
        with pytest.raises(ParseError, match="precipitation_chance"):
            parse_precipitation("likely")


class TestFoldHourly:
    def test_example(self):
        stats = fold_hourly(EXAMPLE_HOURLY)
        assert stats["2024-06-01"] == DailyStats(
            high_temp=75, low_temp=60, high_wind=12, low_wind=5, max_precip=30
        )
        assert stats["2024-06-02"] == DailyStats(
            high_temp=65, low_temp=65, high_wind=8, low_wind=8, max_precip=0
        )

    def test_first_seen_order(self):
        periods = [
            _hourly("2024-06-03T00:00:00", 50, "1 mph"),
            _hourly("2024-06-01T00:00:00", 50, "1 mph"),
            _hourly("2024-06-03T01:00:00", 50, "1 mph"),
        ]
        assert list(fold_hourly(periods)) == ["2024-06-03", "2024-06-01"]

    def test_missing_precipitation_is_zero(self):
        stats = fold_hourly([_hourly("2024-06-01T00:00:00", 50, "3 mph", None)])
        assert stats["2024-06-01"].max_precip == 0

    def test_bounds_hold_for_every_input(self):
        periods = [
            _hourly("2024-06-01T00:00:00", t, f"{w} mph", p)
            for t, w, p in [(58, 3, 0), (71, 14, 20), (66, 9, 60), (49, 2, None)]
        ]
        day = fold_hourly(periods)["2024-06-01"]
        for p in periods:
            assert day.low_temp <= p.temperature <= day.high_temp
            assert day.low_wind <= parse_wind_speed(p.wind_speed) <= day.high_wind
            assert day.max_precip >= parse_precipitation(p.precipitation_chance)
        assert day.high_temp >= day.low_temp
        assert day.high_wind >= day.low_wind

    def test_order_independent(self):
        expected = fold_hourly(EXAMPLE_HOURLY)
        for perm in itertools.permutations(EXAMPLE_HOURLY):
            assert fold_hourly(perm) == expected

    def test_unparseable_temperature_raises(self):
        periods = [_hourly("2024-06-01T00:00:00", "n/a", "5 mph")]
        with pytest.raises(ParseError, match="temperature"):
            fold_hourly(periods)

    def test_empty(self):
        assert fold_hourly([]) == {}


class TestFoldDaily:
    def test_example(self):
        descriptions = fold_daily([
            _daily("2024-06-01T06:00:00-05:00", True, "Sunny"),
            _daily("2024-06-01T18:00:00-05:00", False, "Clear"),
        ])
        assert descriptions["2024-06-01"].text == "Day: Sunny Night: Clear"

    def test_night_only(self):
        descriptions = fold_daily([_daily("2024-06-01T18:00:00-05:00", False, "Clear")])
        assert descriptions["2024-06-01"].text == "Night: Clear"

    def test_same_slot_overwrites(self):
        descriptions = fold_daily([
            _daily("2024-06-01T06:00:00", True, "Sunny"),
            _daily("2024-06-01T12:00:00", True, "Hot"),
        ])
        assert descriptions["2024-06-01"].day == "Hot"
        assert descriptions["2024-06-01"].night is None

"""Default forecast location used when the config names none."""

from weathercal.config.schema import LocationConfig

DEFAULT_LOCATION = LocationConfig(
    name="Topeka",
    latitude=39.0473,
    longitude=-95.6752,
)

"""Exceptions that abort a publish run."""


class WeatherCalError(Exception):
    """Base class for fatal pipeline errors."""


class ResolutionError(WeatherCalError):
    """Raised when the points lookup does not yield both forecast URLs."""


class FetchError(WeatherCalError):
    """Raised when a forecast document is unreachable, empty or not JSON."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(WeatherCalError):
    """Raised when a forecast field cannot be parsed."""

    def __init__(self, field: str, value: object):
        super().__init__(f"Cannot parse {field} from {value!r}")
        self.field = field
        self.value = value


class PublishError(WeatherCalError):
    """Raised when the calendar file cannot be replaced."""

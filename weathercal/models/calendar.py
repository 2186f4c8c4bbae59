"""Per-date aggregates and calendar event models."""

from dataclasses import dataclass
from datetime import date


@dataclass
class DailyStats:
    high_temp: int
    low_temp: int
    high_wind: int
    low_wind: int
    max_precip: int

    @classmethod
    def seed(cls, temperature: int, wind: int, precip: int) -> "DailyStats":
        return cls(
            high_temp=temperature,
            low_temp=temperature,
            high_wind=wind,
            low_wind=wind,
            max_precip=precip,
        )

    def update(self, temperature: int, wind: int, precip: int) -> None:
        self.high_temp = max(self.high_temp, temperature)
        self.low_temp = min(self.low_temp, temperature)
        self.high_wind = max(self.high_wind, wind)
        self.low_wind = min(self.low_wind, wind)
        self.max_precip = max(self.max_precip, precip)


@dataclass
class DailyDescription:
    day: str | None = None
    night: str | None = None

    @property
    def text(self) -> str:
        parts = []
        if self.day is not None:
            parts.append(f"Day: {self.day}")
        if self.night is not None:
            parts.append(f"Night: {self.night}")
        return " ".join(parts)


@dataclass(frozen=True)
class CalendarEvent:
    date: date
    uid: str
    sequence: int
    summary: str
    description: str

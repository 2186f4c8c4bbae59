"""Run reporting models."""

from dataclasses import dataclass, field


@dataclass
class RunSummary:
    run_id: str
    location: str
    dry_run: bool = False
    hourly_periods: int = 0
    daily_periods: int = 0
    dates_aggregated: int = 0
    events_published: int = 0
    sequences_carried: int = 0
    first_date: str = ""
    last_date: str = ""
    output_path: str = ""
    stale_forecasts: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)

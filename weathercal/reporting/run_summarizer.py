"""Run summarizer: collects pipeline outputs into a RunSummary."""

from collections.abc import Sequence

from weathercal.models.calendar import CalendarEvent
from weathercal.models.forecast import ForecastBundle
from weathercal.models.reporting import RunSummary


class RunSummarizer:
    def __init__(self, run_id: str, location: str, dry_run: bool = False):
        self.summary = RunSummary(run_id=run_id, location=location, dry_run=dry_run)

    def record_fetch(self, bundle: ForecastBundle) -> None:
        self.summary.hourly_periods = len(bundle.hourly)
        self.summary.daily_periods = len(bundle.daily)

    def record_stale(self, label: str) -> None:
        self.summary.stale_forecasts.append(label)

    def record_aggregation(self, dates_aggregated: int) -> None:
        self.summary.dates_aggregated = dates_aggregated

    def record_events(self, events: Sequence[CalendarEvent]) -> None:
        self.summary.events_published = len(events)
        self.summary.sequences_carried = sum(1 for e in events if e.sequence > 0)
        if events:
            self.summary.first_date = min(e.date for e in events).isoformat()
            self.summary.last_date = max(e.date for e in events).isoformat()

    def record_output(self, path: str) -> None:
        self.summary.output_path = path

    def record_duration(self, seconds: float) -> None:
        self.summary.duration_seconds = seconds

    def record_error(self, error: str) -> None:
        self.summary.errors.append(error)

    def finalize(self) -> RunSummary:
        return self.summary

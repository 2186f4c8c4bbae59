"""Output formatters for run summaries."""

from weathercal.models.reporting import RunSummary


def format_summary_text(s: RunSummary) -> str:
    """Plain text summary for logging."""
    mode = "dry-run" if s.dry_run else "publish"
    lines = [
        f"=== Forecast Feed ({mode}) | {s.location} | Run {s.run_id[:8]} ===",
        f"Fetched: {s.hourly_periods} hourly, {s.daily_periods} daily periods",
        f"Aggregated: {s.dates_aggregated} dates",
    ]
    if s.events_published:
        lines.append(
            f"Events: {s.events_published} ({s.first_date} .. {s.last_date}), "
            f"{s.sequences_carried} revised"
        )
    else:
        lines.append("Events: 0")
    if s.output_path:
        lines.append(f"Output: {s.output_path}")
    if s.stale_forecasts:
        lines.append(f"Stale: {', '.join(s.stale_forecasts)}")
    if s.errors:
        lines.append(f"Errors: {len(s.errors)}")
        lines.extend(f"  - {e}" for e in s.errors)
    lines.append(f"Duration: {s.duration_seconds:.1f}s")
    return "\n".join(lines)

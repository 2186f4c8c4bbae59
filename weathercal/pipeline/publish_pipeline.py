"""Publish pipeline: fetch, aggregate, revise, render and replace the feed."""

import logging
import time
import uuid

from weathercal.config.defaults import DEFAULT_LOCATION
from weathercal.config.schema import AppConfig
from weathercal.feed.aggregator import fold_daily, fold_hourly
from weathercal.feed.publisher import publish
from weathercal.feed.renderer import publishable_events, render_calendar
from weathercal.feed.revisions import RevisionResolver
from weathercal.ingest.forecast_fetcher import ForecastFetcher
from weathercal.ingest.nws_client import NwsClient
from weathercal.ingest.staleness import forecast_staleness_hours, is_forecast_stale
from weathercal.models.common import utc_now
from weathercal.models.forecast import ForecastBundle
from weathercal.models.reporting import RunSummary
from weathercal.reporting.formatters import format_summary_text
from weathercal.reporting.run_summarizer import RunSummarizer

logger = logging.getLogger(__name__)


class PublishPipeline:
    def __init__(
        self,
        config: AppConfig,
        client: NwsClient | None = None,
        dry_run: bool = False,
    ):
        self.config = config
        self.client = client
        self.dry_run = dry_run
        self.document: str | None = None

    def run(self) -> RunSummary:
        """Execute one publish cycle.

        Any failure is logged and recorded in the summary; the published
        file is only replaced after every step has succeeded.
        """
        start_time = time.monotonic()
        run_id = str(uuid.uuid4())
        location = self.config.location or DEFAULT_LOCATION
        summarizer = RunSummarizer(run_id, location.name, self.dry_run)
        output_path = self.config.output.path

        try:
            # 1. FETCH
            client = self.client or _build_client(self.config)
            bundle = ForecastFetcher(client).fetch(
                location.latitude, location.longitude
            )
            summarizer.record_fetch(bundle)
            self._check_staleness(bundle, summarizer)

            # 2. AGGREGATE
            stats = fold_hourly(bundle.hourly)
            descriptions = fold_daily(bundle.daily)
            summarizer.record_aggregation(len(stats))
            logger.info(
                "Aggregated %d dates of stats, %d dates of descriptions",
                len(stats), len(descriptions),
            )

            # 3. RESOLVE REVISIONS
            resolver = RevisionResolver.from_file(
                output_path, self.config.calendar.domain
            )
            events = publishable_events(resolver.resolve(stats, descriptions))
            summarizer.record_events(events)

            # 4. RENDER
            calendar = self.config.calendar
            self.document = render_calendar(
                events,
                domain=calendar.domain,
                generated_at=utc_now(),
                calendar_name=calendar.name,
                refresh_minutes=calendar.refresh_minutes,
                width=calendar.max_line_width,
            )

            # 5. PUBLISH
            if self.dry_run:
                logger.info("Dry run, leaving %s untouched", output_path)
            else:
                publish(self.document, output_path)
                summarizer.record_output(str(output_path))

        except Exception as e:
            logger.exception("Publish pipeline failed")
            summarizer.record_error(str(e))

        summarizer.record_duration(time.monotonic() - start_time)
        summary = summarizer.finalize()
        logger.info("\n%s", format_summary_text(summary))
        return summary

    def _check_staleness(
        self, bundle: ForecastBundle, summarizer: RunSummarizer
    ) -> None:
        max_age = self.config.ops.forecast_max_age_minutes
        for label, generated_at in (
            ("hourly", bundle.hourly_generated_at),
            ("daily", bundle.daily_generated_at),
        ):
            if is_forecast_stale(generated_at, max_age):
                logger.warning(
                    "%s forecast is stale: generated %.1fh ago (%s)",
                    label, forecast_staleness_hours(generated_at), generated_at or "unknown",
                )
                summarizer.record_stale(label)


def _build_client(config: AppConfig) -> NwsClient:
    api = config.api
    return NwsClient(
        base_url=api.base_url,
        user_agent=api.user_agent,
        timeout=api.timeout_seconds,
        max_retries=api.max_retries,
        retry_base_delay=api.retry_base_delay_seconds,
    )

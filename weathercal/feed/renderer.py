"""iCalendar rendering for the daily forecast feed."""

from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta

from weathercal.models.calendar import CalendarEvent, DailyStats

MAX_LINE_OCTETS = 75
CRLF = "\r\n"

HIGH_TEMP_GLYPH = "🔺"
LOW_TEMP_GLYPH = "🔻"
LOW_WIND_GLYPH = "🍃"
HIGH_WIND_GLYPH = "💨"
PRECIP_GLYPH = "☔"


def format_summary(stats: DailyStats) -> str:
    """Compact glyph encoding of a day's stats, e.g. "🔺75🔻60🍃5💨12☔30"."""
    return (
        f"{HIGH_TEMP_GLYPH}{stats.high_temp}"
        f"{LOW_TEMP_GLYPH}{stats.low_temp}"
        f"{LOW_WIND_GLYPH}{stats.low_wind}"
        f"{HIGH_WIND_GLYPH}{stats.high_wind}"
        f"{PRECIP_GLYPH}{stats.max_precip}"
    )


def escape_text(value: str) -> str:
    """Escape a TEXT property value (RFC 5545 section 3.3.11)."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def fold_line(line: str, width: int = MAX_LINE_OCTETS) -> list[str]:
    """Split a content line into physical lines of at most `width` octets.

    Continuation lines start with a single space, which counts towards the
    width. Characters are never split across lines.
    """
    physical: list[str] = []
    current = ""
    size = 0
    for ch in line:
        n = len(ch.encode("utf-8"))
        if size + n > width:
            physical.append(current)
            current = " "
            size = 1
        current += ch
        size += n
    physical.append(current)
    return physical


def publishable_events(events: Sequence[CalendarEvent]) -> list[CalendarEvent]:
    """Drop the event for the most recent date.

    The trailing forecast day is usually only partially covered by hourly
    periods, so its stats are not published.
    """
    if not events:
        return []
    latest = max(e.date for e in events)
    return [e for e in events if e.date != latest]


def format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")


def render_calendar(
    events: Sequence[CalendarEvent],
    domain: str,
    generated_at: datetime,
    calendar_name: str | None = None,
    refresh_minutes: int | None = None,
    width: int = MAX_LINE_OCTETS,
) -> str:
    """Render events into a complete VCALENDAR document with CRLF endings."""
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{domain}//weathercal//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    if calendar_name:
        lines.append(f"X-WR-CALNAME:{escape_text(calendar_name)}")
    if refresh_minutes:
        # Refresh hints; honoured by some clients only
        lines.append(f"REFRESH-INTERVAL;VALUE=DURATION:PT{refresh_minutes}M")
        lines.append(f"X-PUBLISHED-TTL:PT{refresh_minutes}M")

    dtstamp = format_timestamp(generated_at)
    for event in events:
        lines.extend([
            "BEGIN:VEVENT",
            f"UID:{event.uid}",
            f"SEQUENCE:{event.sequence}",
            f"DTSTAMP:{dtstamp}",
            f"DTSTART;VALUE=DATE:{format_date(event.date)}",
            f"DTEND;VALUE=DATE:{format_date(event.date + timedelta(days=1))}",
            f"SUMMARY:{escape_text(event.summary)}",
            f"DESCRIPTION:{escape_text(event.description)}",
            "END:VEVENT",
        ])
    lines.append("END:VCALENDAR")

    physical: list[str] = []
    for line in lines:
        physical.extend(fold_line(line, width))
    return CRLF.join(physical) + CRLF

"""Revision resolver: carries event SEQUENCE numbers over from the last publish.

The previously published calendar is the only record of past revisions. It is
scanned with a line-oriented parser that skips anything it does not
understand, so a missing, truncated or hand-edited file only means that
every event starts again at sequence 0.
"""

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path

from weathercal.feed.renderer import format_summary
from weathercal.models.calendar import CalendarEvent, DailyDescription, DailyStats
from weathercal.models.common import DateKey

logger = logging.getLogger(__name__)


def make_uid(day: DateKey | date, domain: str) -> str:
    key = day.isoformat() if isinstance(day, date) else day
    return f"{key}@{domain}"


def _unfold(text: str) -> list[str]:
    """Join continuation lines (leading space or tab) onto their content line."""
    lines: list[str] = []
    for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        if raw[:1] in (" ", "\t") and lines:
            lines[-1] += raw[1:]
        else:
            lines.append(raw)
    return lines


def _parse_sequence(value: str) -> int | None:
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def parse_sequences(text: str) -> dict[str, int]:
    """Map each event UID in a calendar document to its SEQUENCE.

    Blocks without a UID, without a valid non-negative SEQUENCE, or without
    an END:VEVENT are ignored. Properties of components nested inside an
    event (VALARM) are not attributed to the event. When a UID occurs more
    than once, the highest sequence wins.
    """
    sequences: dict[str, int] = {}
    in_event = False
    depth = 0
    uid: str | None = None
    sequence: int | None = None

    for line in _unfold(text):
        name, sep, value = line.partition(":")
        if not sep:
            continue
        name = name.split(";", 1)[0].strip().upper()
        value = value.strip()

        if name == "BEGIN":
            if value.upper() == "VEVENT":
                in_event = True
                depth = 0
                uid = None
                sequence = None
            elif in_event:
                depth += 1
        elif name == "END":
            if value.upper() == "VEVENT":
                if in_event and uid and sequence is not None:
                    sequences[uid] = max(sequence, sequences.get(uid, 0))
                in_event = False
            elif in_event and depth > 0:
                depth -= 1
        elif in_event and depth == 0:
            if name == "UID":
                uid = value
            elif name == "SEQUENCE":
                sequence = _parse_sequence(value)

    return sequences


def load_sequences(path: str | Path) -> dict[str, int]:
    """Read the previously published calendar; any failure yields no revisions."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No previous calendar at %s, all sequences start at 0", path)
        return {}
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable previous calendar %s: %s", path, e)
        return {}

    sequences = parse_sequences(text)
    if not sequences:
        logger.warning("No revisions found in previous calendar %s", path)
    else:
        logger.info("Loaded %d revisions from %s", len(sequences), path)
    return sequences


class RevisionResolver:
    def __init__(self, previous: Mapping[str, int], domain: str):
        self.previous = dict(previous)
        self.domain = domain

    @classmethod
    def from_file(cls, path: str | Path, domain: str) -> "RevisionResolver":
        return cls(load_sequences(path), domain)

    def next_sequence(self, uid: str) -> int:
        prior = self.previous.get(uid)
        return 0 if prior is None else prior + 1

    def resolve(
        self,
        stats: Mapping[DateKey, DailyStats],
        descriptions: Mapping[DateKey, DailyDescription],
    ) -> list[CalendarEvent]:
        """Build one revisioned event per date in `stats`, in stats order."""
        events: list[CalendarEvent] = []
        for key, day_stats in stats.items():
            uid = make_uid(key, self.domain)
            desc = descriptions.get(key)
            events.append(
                CalendarEvent(
                    date=date.fromisoformat(key),
                    uid=uid,
                    sequence=self.next_sequence(uid),
                    summary=format_summary(day_stats),
                    description=desc.text if desc is not None else "",
                )
            )
        return events

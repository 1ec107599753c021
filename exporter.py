# exporter.py
"""Markdown, CSV and JSON renderings of the habit collection."""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dates import (
    Instant,
    end_of_day,
    local_date,
    parse_date_key,
    parse_instant,
    start_of_day,
    to_date_key,
)
from models import Habit, habit_to_dict, is_completed, note_for

logger = logging.getLogger(__name__)

PRESETS = ("current_month", "last_30", "all_time", "custom")
DEFAULT_LOOKBACK_DAYS = 30

CSV_PREFIX = "habit-tracker-export"
MARKDOWN_PREFIX = "habit-tracker-summary"
BACKUP_PREFIX = "habit-tracker-backup"


# =========================
# Date range helpers
# =========================

def enumerate_date_keys(start: Instant, end: Instant) -> List[str]:
    """Every day key in [start, end], newest first. Empty if start > end."""
    first = local_date(start_of_day(start))
    last = local_date(end_of_day(end))
    keys = []
    current = last
    while current >= first:
        keys.append(to_date_key(current))
        current -= timedelta(days=1)
    return keys


def all_time_start(habits: Sequence[Habit], now: datetime) -> datetime:
    """Earliest log date or creation instant across all habits."""
    candidates = []
    for h in habits:
        for key in h.logs:
            d = parse_date_key(key)
            if d is not None:
                candidates.append(start_of_day(d))
        created = parse_instant(h.created_at)
        candidates.append(start_of_day(created) if created else start_of_day(now))
    if not candidates:
        return now - timedelta(days=DEFAULT_LOOKBACK_DAYS)
    return min(candidates)


def resolve_export_range(preset: str, habits: Sequence[Habit], now: Optional[datetime] = None,
                         custom_start: Optional[str] = None,
                         custom_end: Optional[str] = None) -> Tuple[datetime, datetime]:
    now = now or datetime.now()
    start, end = now, now

    if preset == "current_month":
        start = now.replace(day=1)
    elif preset == "last_30":
        start = now - timedelta(days=DEFAULT_LOOKBACK_DAYS)
    elif preset == "all_time":
        start = all_time_start(habits, now)
    elif preset == "custom":
        parsed_start = parse_date_key(custom_start)
        parsed_end = parse_date_key(custom_end)
        if custom_start and parsed_start is None:
            logger.warning("Ignoring malformed custom start date %r", custom_start)
        if custom_end and parsed_end is None:
            logger.warning("Ignoring malformed custom end date %r", custom_end)
        if parsed_start:
            start = start_of_day(parsed_start)
        if parsed_end:
            end = end_of_day(parsed_end)
    else:
        raise ValueError(f"Unknown export range '{preset}'. Expected one of {PRESETS}.")

    return start_of_day(start), end_of_day(end)


# =========================
# Renderers
# =========================

def to_markdown(habits: Sequence[Habit], start: Instant, end: Instant,
                today: Optional[Instant] = None) -> str:
    keys = enumerate_date_keys(start, end)
    lines = [
        f"# Habit Tracker Summary (Generated {to_date_key(today or datetime.now())})",
        f"Range: {to_date_key(start_of_day(start))} to {to_date_key(end_of_day(end))}",
        "",
    ]
    if not habits:
        lines.append("No habits found.")
        return "\n".join(lines)

    for habit in habits:
        lines.append(f"## {habit.name}")
        if habit.description:
            lines.append(f"> {habit.description}")
        lines.append("")
        lines.append("**Checklist:**")
        for key in keys:
            line = f"- [{'x' if is_completed(habit, key) else ' '}] {key}"
            note = note_for(habit, key)
            if note:
                line += f" — {' '.join(note.split())}"
            lines.append(line)
        lines.append("")
        lines.append("---")
    return "\n".join(lines) + "\n"


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def to_csv(habits: Sequence[Habit], start: Instant, end: Instant) -> str:
    keys = enumerate_date_keys(start, end)
    rows = ["Date,Habit Name,Status,Note"]
    for habit in habits:
        for key in keys:
            status = "Completed" if is_completed(habit, key) else "Missed"
            rows.append(f"{key},{_quote(habit.name)},{status},{_quote(note_for(habit, key) or '')}")
    return "\n".join(rows) + "\n"


def to_json(habits: Sequence[Habit]) -> str:
    return json.dumps([habit_to_dict(h) for h in habits], indent=2, ensure_ascii=False)


# =========================
# Files
# =========================

def export_filename(prefix: str, extension: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"{prefix}-{to_date_key(now)}_{now.strftime('%H-%M')}.{extension}"


def write_export(content: str, filename: str, directory) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / filename
    target.write_text(content, encoding="utf-8")
    logger.info("Wrote export %s", target)
    return target

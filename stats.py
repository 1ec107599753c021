# stats.py
"""Completion rates over day and month windows, plus weekly per-habit digests."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, NamedTuple, Optional, Sequence

from dates import month_days, shift_month, to_date_key
from models import Habit, is_completed


class RatePoint(NamedTuple):
    key: str      # 'YYYY-MM-DD' for days, 'YYYY-MM' for months
    label: str    # 'Oct 18' / 'Oct'
    rate: int


@dataclass
class WeeklySummary:
    name: str
    category: str
    completions: int
    consistency: int
    notes: str

    def as_payload(self) -> dict:
        return {
            "name": self.name,
            "category": self.category,
            "last7DaysCompletions": self.completions,
            "consistency": f"{self.consistency}%",
            "notes": self.notes,
        }


# =========================
# Rounding
# =========================

def percent(part: int, whole: int) -> int:
    """
    Integer percentage rounded half up, in exact integer arithmetic.
    A zero denominator gives 0.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def average_rate(points: Sequence[RatePoint]) -> int:
    if not points:
        return 0
    return percent(sum(p.rate for p in points), len(points) * 100)


# =========================
# Daily
# =========================

def daily_rate(habits: Sequence[Habit], date_key: str) -> int:
    done = sum(1 for h in habits if is_completed(h, date_key))
    return percent(done, len(habits))


def window_days(days: int, anchor: date) -> List[date]:
    """`days` consecutive dates ending at anchor (inclusive), oldest first."""
    return [anchor - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def day_label(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def windowed_daily_rates(habits: Sequence[Habit], days: int,
                         anchor: Optional[date] = None) -> List[RatePoint]:
    anchor = anchor or date.today()
    points = []
    for d in window_days(days, anchor):
        key = to_date_key(d)
        points.append(RatePoint(key, day_label(d), daily_rate(habits, key)))
    return points


# =========================
# Monthly
# =========================

def monthly_rate(habits: Sequence[Habit], year: int, month: int) -> int:
    keys = [to_date_key(d) for d in month_days(year, month)]
    done = sum(1 for h in habits for key in keys if is_completed(h, key))
    return percent(done, len(keys) * len(habits))


def habit_month_rate(habit: Habit, year: int, month: int) -> int:
    return monthly_rate([habit], year, month)


def monthly_rates_window(habits: Sequence[Habit], months: int,
                         anchor: Optional[date] = None) -> List[RatePoint]:
    anchor = anchor or date.today()
    points = []
    for delta in range(months - 1, -1, -1):
        year, month = shift_month(anchor.year, anchor.month, -delta)
        label = date(year, month, 1).strftime("%b")
        points.append(RatePoint(f"{year:04d}-{month:02d}", label, monthly_rate(habits, year, month)))
    return points


# =========================
# Totals / coaching digest
# =========================

def total_completions(habits: Sequence[Habit]) -> int:
    return sum(sum(1 for v in h.logs.values() if v) for h in habits)


def per_habit_weekly_summary(habits: Sequence[Habit],
                             reference: Optional[date] = None) -> List[WeeklySummary]:
    """
    For each habit: completions in the 7 days ending at reference, the
    consistency percentage, and the notes of that window as
    '[YYYY-MM-DD]: text' joined by '; ', oldest first.
    """
    keys = [to_date_key(d) for d in window_days(7, reference or date.today())]
    summaries = []
    for h in habits:
        completions = sum(1 for key in keys if is_completed(h, key))
        notes = "; ".join(f"[{key}]: {h.notes[key]}" for key in keys if h.notes.get(key))
        summaries.append(
            WeeklySummary(
                name=h.name,
                category=h.category,
                completions=completions,
                consistency=percent(completions, 7),
                notes=notes,
            )
        )
    return summaries

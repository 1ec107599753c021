"""Unit tests for the aggregation engine (stats.py)"""
from datetime import date

import pytest

from dates import to_date_key
from stats import (
    RatePoint,
    average_rate,
    daily_rate,
    habit_month_rate,
    monthly_rate,
    monthly_rates_window,
    per_habit_weekly_summary,
    percent,
    total_completions,
    windowed_daily_rates,
)


# ============================================================================
# Rounding
# ============================================================================

@pytest.mark.parametrize(
    "part, whole, expected",
    [(1, 2, 50), (1, 8, 13), (1, 3, 33), (2, 3, 67), (2, 31, 6), (0, 5, 0), (3, 0, 0)],
)
def test_percent_rounds_half_up(part, whole, expected):
    assert percent(part, whole) == expected


def test_average_rate():
    points = [RatePoint("a", "a", 50), RatePoint("b", "b", 25)]

    assert average_rate(points) == 38
    assert average_rate([]) == 0


# ============================================================================
# Daily rates
# ============================================================================

def test_read_scenario_daily(read_habit):
    assert daily_rate([read_habit], "2024-01-02") == 0
    assert daily_rate([read_habit], "2024-01-03") == 100


def test_two_habits_one_done_today(make_habit):
    today = to_date_key(date.today())
    habits = [make_habit("Read", logs=[today]), make_habit("Walk")]

    assert daily_rate(habits, today) == 50


def test_zero_habits_is_zero():
    assert daily_rate([], "2024-01-01") == 0
    assert monthly_rate([], 2024, 1) == 0


def test_empty_logs_are_zero(make_habit):
    habits = [make_habit("Read"), make_habit("Walk")]

    assert daily_rate(habits, "2024-01-01") == 0
    assert monthly_rate(habits, 2024, 2) == 0


def test_windowed_daily_rates_oldest_first(read_habit):
    points = windowed_daily_rates([read_habit], 7, anchor=date(2024, 1, 3))

    assert len(points) == 7
    assert points[0].key == "2023-12-28"
    assert points[-1].key == "2024-01-03"
    assert points[-1].label == "Jan 3"
    assert [p.rate for p in points] == [0, 0, 0, 0, 100, 0, 100]


def test_windowed_daily_rates_fourteen_days(read_habit):
    points = windowed_daily_rates([read_habit], 14, anchor=date(2024, 1, 14))

    assert len(points) == 14
    assert points[0].key == "2024-01-01"


# ============================================================================
# Monthly rates
# ============================================================================

def test_read_scenario_monthly(read_habit):
    """2 completions over 31 days and 1 habit"""
    assert monthly_rate([read_habit], 2024, 1) == 6


def test_monthly_rate_uses_real_month_length(make_habit):
    habit = make_habit("Walk", logs=[f"2023-02-{d:02d}" for d in range(1, 15)])

    # 14 of 28 days
    assert monthly_rate([habit], 2023, 2) == 50
    assert habit_month_rate(habit, 2023, 2) == 50


def test_monthly_rate_across_habits(make_habit):
    habits = [
        make_habit("Read", logs=[f"2024-04-{d:02d}" for d in range(1, 31)]),
        make_habit("Walk"),
    ]

    assert monthly_rate(habits, 2024, 4) == 50


def test_monthly_rates_window_crosses_year(read_habit):
    points = monthly_rates_window([read_habit], 6, anchor=date(2024, 2, 10))

    assert [p.key for p in points] == ["2023-09", "2023-10", "2023-11", "2023-12", "2024-01", "2024-02"]
    assert points[0].label == "Sep"
    assert points[4].rate == 6
    assert points[5].rate == 0


# ============================================================================
# Totals and weekly summary
# ============================================================================

def test_total_completions_ignores_notes(make_habit):
    habits = [
        make_habit("Read", logs=["2024-01-01", "2024-01-02"], notes={"2024-01-05": "away"}),
        make_habit("Walk", logs=["2024-01-01"]),
        make_habit("Code"),
    ]

    assert total_completions(habits) == 3


def test_weekly_summary(make_habit):
    habit = make_habit(
        "Run",
        logs=["2024-01-01", "2024-01-05", "2024-01-07", "2023-12-31"],
        notes={"2024-01-02": "sick", "2024-01-06": "busy day", "2023-12-20": "too old"},
        category="health",
    )

    [summary] = per_habit_weekly_summary([habit], reference=date(2024, 1, 7))

    assert summary.completions == 3
    assert summary.consistency == 43
    assert summary.notes == "[2024-01-02]: sick; [2024-01-06]: busy day"
    assert summary.as_payload() == {
        "name": "Run",
        "category": "health",
        "last7DaysCompletions": 3,
        "consistency": "43%",
        "notes": "[2024-01-02]: sick; [2024-01-06]: busy day",
    }


def test_weekly_summary_keeps_collection_order(make_habit):
    habits = [make_habit("B"), make_habit("A")]

    summaries = per_habit_weekly_summary(habits, reference=date(2024, 1, 7))

    assert [s.name for s in summaries] == ["B", "A"]
    assert all(s.notes == "" and s.consistency == 0 for s in summaries)

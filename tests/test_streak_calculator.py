"""
Tests for streak calculation.
"""

from datetime import date
from unittest.mock import patch

from daily_habits.streak_calculator import (
    calculate_current_streak,
    calculate_longest_streak,
    calculate_streak,
)


def test_basic_streak_three_consecutive_days():
    """Test basic streak calculation with 3 consecutive days."""
    history = ["2024-01-01", "2024-01-02", "2024-01-03"]

    result = calculate_streak(history, today=date(2024, 1, 3))

    assert result["current_streak"] == 3
    assert result["longest_streak"] == 3
    assert result["streak_active"] is True
    assert result["last_entry"] == "2024-01-03"


def test_empty_history_returns_zero_streak():
    """Empty history has no streak, whatever today is."""
    for today in (date(2024, 1, 3), date(1999, 12, 31)):
        result = calculate_streak([], today=today)

        assert result["current_streak"] == 0
        assert result["longest_streak"] == 0
        assert result["streak_active"] is False
        assert result["last_entry"] is None


def test_gap_stops_the_scan():
    """An entry older than a gap is not counted."""
    history = ["2024-01-01", "2024-01-03"]

    result = calculate_streak(history, today=date(2024, 1, 3))

    assert result["current_streak"] == 1


def test_streak_with_gap_counts_only_latest_run():
    history = ["2024-01-16", "2024-01-17", "2024-01-19", "2024-01-20"]

    result = calculate_streak(history, today=date(2024, 1, 20))

    assert result["current_streak"] == 2
    assert result["longest_streak"] == 2


def test_streak_requires_today():
    """A run ending yesterday is not a current streak."""
    history = ["2024-01-17", "2024-01-18", "2024-01-19"]

    result = calculate_streak(history, today=date(2024, 1, 20))

    assert result["current_streak"] == 0
    assert result["longest_streak"] == 3
    assert result["streak_active"] is False
    assert result["last_entry"] == "2024-01-19"


def test_unsorted_duplicate_history_is_normalized():
    history = ["2024-01-03", "2024-01-01", "2024-01-02", "2024-01-03"]

    result = calculate_streak(history, today=date(2024, 1, 3))

    assert result["current_streak"] == 3


def test_future_dates_do_not_extend_streak():
    history = ["2024-01-02", "2024-01-03", "2024-01-05"]

    result = calculate_streak(history, today=date(2024, 1, 3))

    assert result["current_streak"] == 0
    assert result["last_entry"] == "2024-01-05"


def test_streak_across_month_boundary():
    history = ["2024-02-28", "2024-02-29", "2024-03-01"]

    assert calculate_current_streak(history, date(2024, 3, 1)) == 3


@patch("daily_habits.streak_calculator.get_today", return_value=date(2024, 1, 2))
def test_today_defaults_to_current_date(mock_today):
    result = calculate_streak(["2024-01-01", "2024-01-02"])

    assert result["current_streak"] == 2


class TestLongestStreak:
    """Tests for calculate_longest_streak."""

    def test_empty(self):
        assert calculate_longest_streak([]) == 0

    def test_single_day(self):
        assert calculate_longest_streak(["2024-01-01"]) == 1

    def test_picks_longest_segment(self):
        history = [
            "2024-01-01",
            "2024-01-02",
            "2024-01-05",
            "2024-01-06",
            "2024-01-07",
            "2024-01-09",
        ]
        assert calculate_longest_streak(history) == 3

"""
Calculate habit streaks from completion histories.
"""

from datetime import date, timedelta

from daily_habits.dates import get_today, normalize_history, parse_date


def calculate_streak(history: list[str], today: date | None = None) -> dict:
    """
    Calculate streak information for a habit history.

    Args:
        history: Completion dates (YYYY-MM-DD), any order, may repeat
        today: Override today's date for testing. Defaults to current date.

    Returns:
        Dictionary with streak statistics:
        - current_streak: Consecutive days ending today
        - longest_streak: Longest run of consecutive days in the history
        - streak_active: Whether the habit was marked today
        - last_entry: Most recent completion date (or None)
    """
    if today is None:
        today = get_today()

    dates = normalize_history(history)
    if not dates:
        return {
            "current_streak": 0,
            "longest_streak": 0,
            "streak_active": False,
            "last_entry": None,
        }

    current_streak = calculate_current_streak(dates, today)
    longest_streak = max(calculate_longest_streak(dates), current_streak)

    return {
        "current_streak": current_streak,
        "longest_streak": longest_streak,
        "streak_active": parse_date(dates[-1]) == today,
        "last_entry": dates[-1],
    }


def calculate_current_streak(history: list[str], today: date) -> int:
    """
    Count consecutive completed days ending today.

    Walks the history from the newest entry backwards, expecting each entry
    to be exactly one day before the previous one (starting from today).
    The walk stops at the first entry that breaks the chain, so an entry
    older than a gap never counts.

    Args:
        history: Normalized history (unique dates, oldest first)
        today: The current local date

    Returns:
        Current streak count
    """
    expected = today + timedelta(days=1)
    streak = 0

    for entry in reversed(history):
        day = parse_date(entry)
        if expected - day != timedelta(days=1):
            break
        streak += 1
        expected = day

    return streak


def calculate_longest_streak(history: list[str]) -> int:
    """
    Calculate the longest run of consecutive days in a history.

    Args:
        history: Normalized history (unique dates, oldest first)

    Returns:
        Longest streak count
    """
    if not history:
        return 0

    longest = 1
    current = 1
    previous = parse_date(history[0])

    for entry in history[1:]:
        day = parse_date(entry)
        if day - previous == timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1
        previous = day

    return longest

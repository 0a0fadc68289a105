"""
Calendar-day helpers for habit histories.
"""

from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"


class InvalidDateError(ValueError):
    """Raised when a history entry is not a YYYY-MM-DD calendar date."""

    pass


def get_today() -> date:
    """Return today's date in local time."""
    return datetime.now().date()


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        InvalidDateError: If the string is not a valid calendar date
    """
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(f"{value!r} is not a YYYY-MM-DD date") from e


def format_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.strftime(DATE_FORMAT)


def normalize_history(history: list[str]) -> list[str]:
    """
    Deduplicate and sort a habit history.

    Each distinct calendar day appears exactly once in the result, sorted
    oldest first. Dates are compared as calendar days, not as strings.

    Args:
        history: Date strings in YYYY-MM-DD format, any order, may repeat

    Returns:
        Sorted list of unique YYYY-MM-DD strings

    Raises:
        InvalidDateError: If any entry is not a valid date
    """
    days = {parse_date(entry) for entry in history}
    return [format_date(day) for day in sorted(days)]

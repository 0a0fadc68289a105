"""
JSON-file storage for habits.

The whole habit list is loaded at the start of a command and rewritten
wholesale after any change. There is no locking: when two processes write
at once, the later write wins.
"""

import json
import os
from datetime import date
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from daily_habits.dates import format_date, get_today, normalize_history, parse_date
from daily_habits.streak_calculator import calculate_current_streak

APP_NAME = "daily-habits"


class HabitStoreError(Exception):
    """Raised when the habits file cannot be read or written."""

    pass


class HabitDataError(HabitStoreError):
    """Raised when the habits file does not contain a valid habit list."""

    pass


class Habit(BaseModel):
    """A tracked habit and its completion history."""

    name: str = Field(..., description="Unique habit name")
    streak: int = Field(0, ge=0, description="Cached current streak")
    history: list[str] = Field(default_factory=list, description="YYYY-MM-DD dates")


_habit_list = TypeAdapter(list[Habit])


def _get_default_habits_path() -> Path:
    """Get the default habits file path."""
    env_path = os.environ.get("HABITS_PATH")
    if env_path:
        return Path(env_path)

    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / APP_NAME / "habits.json"
    return Path.home() / ".local" / "share" / APP_NAME / "habits.json"


class HabitStore:
    """Reads and writes the habit list in a single JSON file."""

    def __init__(self, path: str | Path | None = None):
        """
        Initialize the habit store.

        Args:
            path: Path to the habits file.
                  Defaults to $XDG_DATA_HOME/daily-habits/habits.json
        """
        if path is None:
            path = _get_default_habits_path()
        self.path = Path(path)
        self._init_file()

    def _init_file(self) -> None:
        """Create the file with an empty list if it doesn't exist."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text("[]", encoding="utf-8")
        except OSError as e:
            raise HabitStoreError(f"Cannot create {self.path}: {e}") from e

    def load(self) -> list[Habit]:
        """
        Load all habits.

        Returns:
            Habits in file order

        Raises:
            HabitStoreError: If the file cannot be read
            HabitDataError: If the file content is not a valid habit list
        """
        try:
            contents = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise HabitDataError(f"{self.path} is not valid UTF-8 text") from e
        except OSError as e:
            raise HabitStoreError(f"Cannot read {self.path}: {e}") from e

        try:
            return _habit_list.validate_json(contents)
        except ValidationError as e:
            raise HabitDataError(
                f"{self.path} does not contain a valid habit list "
                f"({e.error_count()} error(s))"
            ) from e

    def save(self, habits: list[Habit]) -> None:
        """
        Write all habits, replacing the file content.

        Raises:
            HabitStoreError: If the file cannot be written
        """
        data = [habit.model_dump() for habit in habits]
        try:
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise HabitStoreError(f"Cannot write {self.path}: {e}") from e


def find_habit(habits: list[Habit], name: str) -> Habit | None:
    """Return the habit with the given name, or None."""
    for habit in habits:
        if habit.name == name:
            return habit
    return None


def add_habit(habits: list[Habit], name: str) -> bool:
    """
    Add a new habit with an empty history.

    Returns:
        False if a habit with that name already exists
    """
    if find_habit(habits, name) is not None:
        return False
    habits.append(Habit(name=name, streak=0, history=[]))
    return True


def remove_habit(habits: list[Habit], name: str) -> bool:
    """
    Remove the habit with the given name.

    Returns:
        False if no habit had that name
    """
    remaining = [habit for habit in habits if habit.name != name]
    if len(remaining) == len(habits):
        return False
    habits[:] = remaining
    return True


def mark_habit(
    habits: list[Habit],
    name: str,
    dates: list[str] | None = None,
    today: date | None = None,
) -> bool:
    """
    Mark days as done for a habit.

    Without dates, today is appended unless it is already the last entry.
    Explicit dates are appended as given. The history is sorted afterwards;
    duplicates are removed by recompute_streaks().

    Returns:
        False if the habit doesn't exist
    """
    habit = find_habit(habits, name)
    if habit is None:
        return False

    if dates:
        habit.history.extend(dates)
    else:
        if today is None:
            today = get_today()
        if not habit.history or parse_date(habit.history[-1]) != today:
            habit.history.append(format_date(today))

    habit.history.sort()
    return True


def unmark_habit(
    habits: list[Habit],
    name: str,
    dates: list[str] | None = None,
    today: date | None = None,
) -> bool:
    """
    Remove marked days from a habit.

    Without dates, today's entry is removed. Explicit dates are removed by
    exact string match; dates that were never marked are ignored.

    Returns:
        False if the habit doesn't exist
    """
    habit = find_habit(habits, name)
    if habit is None:
        return False

    if not dates:
        if today is None:
            today = get_today()
        dates = [format_date(today)]

    habit.history = sorted(entry for entry in habit.history if entry not in dates)
    return True


def recompute_streaks(habits: list[Habit], today: date | None = None) -> None:
    """
    Normalize every history and recompute the cached streaks.

    Raises:
        ValueError: If a history contains a malformed date
    """
    if today is None:
        today = get_today()

    for habit in habits:
        habit.history = normalize_history(habit.history)
        habit.streak = calculate_current_streak(habit.history, today)

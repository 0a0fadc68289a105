"""
CLI display functions for daily-habits.
"""

from datetime import date

from daily_habits.canvas import TerminalCanvas, render_heatmap
from daily_habits.heatmap import build_heatmap
from daily_habits.storage import Habit
from daily_habits.streak_calculator import calculate_streak


def display_streak(habit: Habit) -> None:
    """
    Display a habit's current streak.

    Args:
        habit: Habit whose streak has just been recomputed
    """
    current = habit.streak

    if current == 0:
        status = "No active streak"
    else:
        day_word = "day" if current == 1 else "days"
        status = f"Current Streak: {current} {day_word}"

    print(f"🔥 {habit.name}: {status}")


def format_habit_row(habit: Habit, longest: int, name_width: int) -> str:
    """
    Format one habit as a table row.

    Args:
        habit: Habit with a recomputed streak
        longest: Longest streak in the habit's history
        name_width: Width of the name column

    Returns:
        Formatted string for display
    """
    last_entry = habit.history[-1] if habit.history else ""
    return f"  {habit.name:<{name_width}}  {habit.streak:>6}  {longest:>6}  {last_entry}"


def display_habits(habits: list[Habit], today: date | None = None) -> None:
    """
    Display all habits as a table.

    Args:
        habits: Habits with recomputed streaks
        today: Override today's date for testing
    """
    if not habits:
        print("No habits yet. Add one with: daily-habits add <name>")
        return

    name_width = max(len("HABIT"), *(len(habit.name) for habit in habits))

    print(f"  {'HABIT':<{name_width}}  {'STREAK':>6}  {'BEST':>6}  LAST ENTRY")
    print("  " + "-" * (name_width + 28))

    for habit in habits:
        streak_info = calculate_streak(habit.history, today=today)
        print(format_habit_row(habit, streak_info["longest_streak"], name_width))


def display_graph(
    habits: list[Habit],
    today: date,
    width: int,
    canvas: TerminalCanvas | None = None,
) -> dict:
    """
    Render the blended heatmap of the given habits.

    Args:
        habits: Habits to graph together
        today: The current local date
        width: Terminal width in character cells
        canvas: Output canvas. Defaults to stdout.

    Returns:
        The heatmap that was drawn (see build_heatmap())
    """
    if canvas is None:
        canvas = TerminalCanvas()

    heatmap = build_heatmap([habit.history for habit in habits], today, width)
    render_heatmap(canvas, heatmap)
    return heatmap

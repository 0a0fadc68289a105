"""
daily-habits: A simple visual habit tracker

Entry point for the command-line application.
"""

import argparse
import sys

from daily_habits.canvas import TerminalSizeError, get_terminal_width
from daily_habits.cli import display_graph, display_habits, display_streak
from daily_habits.config import get_graph_width_override, validate_config
from daily_habits.dates import InvalidDateError, get_today
from daily_habits.storage import (
    Habit,
    HabitDataError,
    HabitStore,
    HabitStoreError,
    add_habit,
    find_habit,
    mark_habit,
    recompute_streaks,
    remove_habit,
    unmark_habit,
)

USAGE_NOTES = """\
Specify dates in YYYY-MM-DD format, separated with spaces.
If you mark a wrong date, undo it with unmark and the same arguments.
Habits are stored at $XDG_DATA_HOME/daily-habits/habits.json
(override with HABITS_PATH)."""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per action."""
    parser = argparse.ArgumentParser(
        prog="daily-habits",
        description="A simple visual habit tracker",
        epilog=USAGE_NOTES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all habits")

    graph = subparsers.add_parser("graph", help="Print the graph of your habits' history")
    graph.add_argument("names", nargs="*", help="Habits to graph (default: all)")

    mark = subparsers.add_parser("mark", help="Mark days as done, leave empty to mark today")
    mark.add_argument("name", help="Name of the habit")
    mark.add_argument("dates", nargs="*", help="Dates in YYYY-MM-DD format")

    unmark = subparsers.add_parser("unmark", help="Unmark days, leave empty to unmark today")
    unmark.add_argument("name", help="Name of the habit")
    unmark.add_argument("dates", nargs="*", help="Dates in YYYY-MM-DD format")

    add = subparsers.add_parser("add", help="Add a new habit")
    add.add_argument("name", help="Name of the habit")

    remove = subparsers.add_parser("remove", help="Remove a habit")
    remove.add_argument("name", help="Name of the habit")

    return parser


def _load_habits(store: HabitStore) -> list[Habit]:
    """Load habits, falling back to an empty list for a corrupt file."""
    try:
        return store.load()
    except HabitDataError as e:
        print(f"Warning: {e}. Starting with an empty habit list.", file=sys.stderr)
        return []


def _cmd_list(args, store: HabitStore, habits: list[Habit]) -> int:
    today = get_today()
    recompute_streaks(habits, today)
    store.save(habits)
    display_habits(habits, today=today)
    return 0


def _cmd_graph(args, store: HabitStore, habits: list[Habit]) -> int:
    if args.names:
        selected = []
        for name in args.names:
            habit = find_habit(habits, name)
            if habit is None:
                print(f"Habit not found: {name}")
            else:
                selected.append(habit)
    else:
        selected = habits

    if not selected:
        print("No habits to graph.")
        return 0

    width = get_graph_width_override()
    if width is None:
        width = get_terminal_width()

    display_graph(selected, get_today(), width)
    return 0


def _cmd_mark(args, store: HabitStore, habits: list[Habit]) -> int:
    if args.dates:
        print(f"Marking: {', '.join(args.dates)}")
    else:
        print("Marking today as done!")

    if not mark_habit(habits, args.name, args.dates):
        print("Habit not found.")
        return 0

    recompute_streaks(habits)
    store.save(habits)
    display_streak(find_habit(habits, args.name))
    return 0


def _cmd_unmark(args, store: HabitStore, habits: list[Habit]) -> int:
    if args.dates:
        print(f"Unmarking: {', '.join(args.dates)}")
    else:
        print("Unmarking today")

    if not unmark_habit(habits, args.name, args.dates):
        print("Habit not found.")
        return 0

    recompute_streaks(habits)
    store.save(habits)
    display_streak(find_habit(habits, args.name))
    return 0


def _cmd_add(args, store: HabitStore, habits: list[Habit]) -> int:
    if not args.name:
        print("Habit name can't be empty.", file=sys.stderr)
        return 1

    if not add_habit(habits, args.name):
        print(f"Habit '{args.name}' already exists.")
        return 0

    store.save(habits)
    print(f"Added habit: {args.name}")
    return 0


def _cmd_remove(args, store: HabitStore, habits: list[Habit]) -> int:
    if not remove_habit(habits, args.name):
        print("Habit not found.")
        return 0

    store.save(habits)
    print(f"Removed habit: {args.name}")
    return 0


COMMANDS = {
    "list": _cmd_list,
    "graph": _cmd_graph,
    "mark": _cmd_mark,
    "unmark": _cmd_unmark,
    "add": _cmd_add,
    "remove": _cmd_remove,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Validate configuration
    try:
        validate_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}", file=sys.stderr)
        return 1

    try:
        store = HabitStore()
        habits = _load_habits(store)
        return COMMANDS[args.command](args, store, habits)
    except HabitStoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except TerminalSizeError as e:
        print(str(e), file=sys.stderr)
        return 1
    except InvalidDateError as e:
        # Malformed dates are not recovered; nothing has been saved
        print(f"Invalid date: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    exit(main())

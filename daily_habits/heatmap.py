"""
Heatmap projection for habit histories.

Maps completion dates onto a GitHub-style contribution grid: one column per
week (current week rightmost), one row per weekday (Monday on top). Each
column is two terminal cells wide, so a terminal `width` cells wide holds
`width // 2` weeks.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date

from daily_habits.dates import format_date, parse_date

GRID_HEIGHT = 7
CELL_WIDTH = 2
MAX_INTENSITY = 255


@dataclass
class HeatmapCell:
    """A single plotted day on the heatmap grid."""

    x: int
    y: int
    intensity: int  # 0-255 brightness
    day: date

    def to_dict(self) -> dict:
        """Return a JSON-friendly representation."""
        return {
            "x": self.x,
            "y": self.y,
            "intensity": self.intensity,
            "date": format_date(self.day),
        }


def blend_histories(histories: list[list[str]]) -> dict[date, int]:
    """
    Blend several habit histories into one brightness per day.

    A day completed by every habit gets full brightness; a day completed by
    k of n habits gets k/n of it (truncated).

    Args:
        histories: One history (YYYY-MM-DD strings) per selected habit

    Returns:
        Mapping of date -> intensity (0-255)
    """
    if not histories:
        return {}

    counts: Counter[date] = Counter()
    for history in histories:
        # A habit counts once per day even if its history repeats a date
        counts.update({parse_date(entry) for entry in history})

    habit_count = len(histories)
    return {
        day: int(count / habit_count * MAX_INTENSITY)
        for day, count in counts.items()
    }


def grid_columns(width: int) -> int:
    """Number of week columns that fit in a terminal `width` cells wide."""
    return max(width, 0) // CELL_WIDTH


def week_bucket(day: date, today: date) -> int:
    """Weeks between `day` and the current week (0 = this week)."""
    diff_days = (today - day).days
    return (diff_days + day.isoweekday() - 1) // 7


def cell_position(day: date, today: date, width: int) -> tuple[int, int]:
    """
    Terminal (x, y) position of a day on the grid.

    x may be negative when the day falls left of the visible window.
    """
    bucket = week_bucket(day, today)
    x = CELL_WIDTH * grid_columns(width) - CELL_WIDTH * (bucket + 1)
    y = day.isoweekday() - 1
    return x, y


def project_heatmap(
    intensities: dict[date, int], today: date, width: int
) -> list[HeatmapCell]:
    """
    Project blended intensities onto grid cells.

    Days are visited newest first; the first day that lands left of the
    grid ends the projection. Days after today are never plotted.

    Args:
        intensities: Mapping of date -> intensity from blend_histories()
        today: The current local date
        width: Terminal width in character cells

    Returns:
        List of HeatmapCell, newest first
    """
    cells = []
    for day in sorted(intensities, reverse=True):
        if day > today:
            continue

        x, y = cell_position(day, today, width)
        if x < 0:
            break

        cells.append(HeatmapCell(x=x, y=y, intensity=intensities[day], day=day))

    return cells


def future_cells(today: date, width: int) -> list[tuple[int, int]]:
    """
    Cells of the current week that lie after today.

    Returns:
        (x, y) positions in the rightmost column for every weekday strictly
        after today's weekday. Empty if the grid has no columns.
    """
    if grid_columns(width) == 0:
        return []

    x = CELL_WIDTH * grid_columns(width) - CELL_WIDTH
    return [(x, y) for y in range(today.isoweekday(), GRID_HEIGHT)]


def build_heatmap(histories: list[list[str]], today: date, width: int) -> dict:
    """
    Build the complete heatmap for a set of habit histories.

    Args:
        histories: One history per selected habit
        today: The current local date
        width: Terminal width in character cells

    Returns:
        Dictionary with:
            - cells: List of HeatmapCell to draw
            - blank: (x, y) positions of future days to clear
            - columns: Number of week columns
            - habit_count: Number of blended habits
    """
    intensities = blend_histories(histories)
    return {
        "cells": project_heatmap(intensities, today, width),
        "blank": future_cells(today, width),
        "columns": grid_columns(width),
        "habit_count": len(histories),
    }

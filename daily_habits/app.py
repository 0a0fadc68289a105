"""
FastAPI web application for daily-habits.

Provides read-only REST API endpoints over the habits file.
"""

from fastapi import FastAPI, HTTPException, Query

from daily_habits.dates import InvalidDateError, format_date, get_today
from daily_habits.heatmap import build_heatmap
from daily_habits.storage import (
    Habit,
    HabitDataError,
    HabitStore,
    HabitStoreError,
    find_habit,
)
from daily_habits.streak_calculator import calculate_streak

app = FastAPI(
    title="daily-habits",
    description="A simple visual habit tracker",
    version="0.1.0",
)

DEFAULT_GRAPH_WIDTH = 104  # 52 weeks


def _load_habits() -> list[Habit]:
    """
    Load habits from the default store.

    Raises:
        HTTPException: if the habits file can't be read or parsed
    """
    try:
        return HabitStore().load()
    except HabitDataError as e:
        raise HTTPException(status_code=500, detail=f"Corrupt habits file: {e}")
    except HabitStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _habit_summary(habit: Habit) -> dict:
    """Build the JSON summary of one habit with a fresh streak."""
    try:
        streak_info = calculate_streak(habit.history)
    except InvalidDateError as e:
        raise HTTPException(
            status_code=500, detail=f"Malformed date in '{habit.name}': {e}"
        )

    return {
        "name": habit.name,
        "streak": {
            "current": streak_info["current_streak"],
            "longest": streak_info["longest_streak"],
            "active": streak_info["streak_active"],
            "last_entry": streak_info["last_entry"],
        },
        "history": habit.history,
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/habits")
def list_habits():
    """
    Get all habits with their current streaks.

    Returns:
        JSON list of habit summaries
    """
    return [_habit_summary(habit) for habit in _load_habits()]


@app.get("/api/habits/{name}")
def get_habit(name: str):
    """Get a single habit by name."""
    habit = find_habit(_load_habits(), name)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return _habit_summary(habit)


@app.get("/api/heatmap")
def get_heatmap(
    names: list[str] = Query(default=[]),
    width: int = Query(DEFAULT_GRAPH_WIDTH, ge=2, le=1000),
):
    """
    Get the blended heatmap cells for the selected habits.

    Args:
        names: Habits to blend (default: all)
        width: Grid width in character cells (2 per week)

    Returns:
        JSON with today's date, grid size, cells and blanked future days
    """
    habits = _load_habits()
    if names:
        selected = [h for h in (find_habit(habits, n) for n in names) if h is not None]
    else:
        selected = habits

    if not selected:
        raise HTTPException(status_code=404, detail="No matching habits")

    today = get_today()
    try:
        heatmap = build_heatmap([habit.history for habit in selected], today, width)
    except InvalidDateError as e:
        raise HTTPException(status_code=500, detail=f"Malformed date: {e}")

    return {
        "today": format_date(today),
        "habits": [habit.name for habit in selected],
        "columns": heatmap["columns"],
        "cells": [cell.to_dict() for cell in heatmap["cells"]],
        "blank": [{"x": x, "y": y} for x, y in heatmap["blank"]],
    }

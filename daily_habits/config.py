"""
Configuration management for daily-habits.

Loads optional overrides from environment variables. HABITS_PATH (the
location of habits.json) is read by the storage module at call time.
"""

import os
from dotenv import load_dotenv

# Load .env file from the working directory
load_dotenv()

HABITS_GRAPH_WIDTH = os.getenv("HABITS_GRAPH_WIDTH")


def get_graph_width_override() -> int | None:
    """
    Get the configured graph width, if any.

    Returns:
        The width in character cells, or None to query the terminal

    Raises:
        ValueError: If HABITS_GRAPH_WIDTH is not a positive integer
    """
    if not HABITS_GRAPH_WIDTH:
        return None

    try:
        width = int(HABITS_GRAPH_WIDTH)
    except ValueError:
        width = 0

    if width < 1:
        raise ValueError(
            f"Invalid HABITS_GRAPH_WIDTH: {HABITS_GRAPH_WIDTH!r}\n"
            "It must be a positive number of terminal columns."
        )
    return width


def validate_config():
    """Validate that the optional configuration is well-formed."""
    get_graph_width_override()

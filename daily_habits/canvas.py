"""
Cursor-addressable terminal output for the heatmap.
"""

import os
import sys
from typing import TextIO

from daily_habits.heatmap import CELL_WIDTH, GRID_HEIGHT

CSI = "\x1b["


class TerminalSizeError(Exception):
    """Raised when the terminal size cannot be determined."""

    pass


def get_terminal_width(stream: TextIO | None = None) -> int:
    """
    Query the width of the terminal attached to `stream`.

    Raises:
        TerminalSizeError: If the stream is not a terminal
    """
    if stream is None:
        stream = sys.stdout

    try:
        return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, ValueError, OSError) as e:
        raise TerminalSizeError("Couldn't get terminal size.") from e


class TerminalCanvas:
    """Writes colored cells at absolute positions using ANSI escapes."""

    def __init__(self, stream: TextIO | None = None):
        """
        Initialize the canvas.

        Args:
            stream: Output stream. Defaults to sys.stdout.
        """
        self.stream = stream if stream is not None else sys.stdout

    def clear(self) -> None:
        """Erase the screen and move the cursor home."""
        self.stream.write(f"{CSI}2J")
        self.move_to(0, 0)

    def move_to(self, x: int, y: int) -> None:
        """Move the cursor to column x, row y (0-based)."""
        self.stream.write(f"{CSI}{y + 1};{x + 1}H")

    def write_cell(self, intensity: int) -> None:
        """Write one green cell of the given brightness (0-255)."""
        self.stream.write(f"{CSI}48;2;0;{intensity};0m {CSI}0m")

    def blank_cell(self) -> None:
        """Overwrite a full grid column at the cursor with spaces."""
        self.stream.write(" " * CELL_WIDTH)

    def flush(self) -> None:
        self.stream.flush()


def render_heatmap(canvas: TerminalCanvas, heatmap: dict) -> None:
    """
    Draw a heatmap from build_heatmap() onto a canvas.

    Leaves the cursor on the line below the grid.
    """
    canvas.clear()

    for cell in heatmap["cells"]:
        canvas.move_to(cell.x, cell.y)
        canvas.write_cell(cell.intensity)

    for x, y in heatmap["blank"]:
        canvas.move_to(x, y)
        canvas.blank_cell()

    canvas.move_to(0, GRID_HEIGHT + 1)
    canvas.flush()

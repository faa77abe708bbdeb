"""
Grid parsing utilities for chargrid.

Provides:
1. Character grids: one row per line, one cell per character
2. Digit grids: character grids whose cells are converted to ints
3. Section splitting for inputs that put a grid and other data in blank-line
   separated blocks
"""

from __future__ import annotations

import logging

from grid import Grid
from grid_types import MalformedGridError, Position

__all__ = ["parse_grid", "parse_digit_grid", "split_sections", "find_start"]

logger = logging.getLogger(__name__)


def _split_lines(text: str) -> list[str]:
    """Split on newlines, dropping only a final terminator and per-line '\\r'."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_grid(text: str) -> Grid[str]:
    """
    Parse line-delimited text into a character grid.

    Format:
    - Each line becomes one row, each character one cell (any character is
      accepted; interpreting cells is up to the caller)
    - The final line may or may not end with a newline
    - No characters are trimmed apart from the line terminators

    Example:
        "ABC\\nDEF\\n" -> 2 rows x 3 columns, get(Position(1, 1)) == "E"

    Args:
        text: The raw input text

    Returns:
        Grid of single-character strings

    Raises:
        MalformedGridError: If the input is empty or the rows differ in length
    """
    lines = _split_lines(text)

    if not lines or not lines[0]:
        raise MalformedGridError(
            f"Empty grid input\n"
            f"  The first row must contain at least one character",
            row=0 if lines else None,
            expected_width=None,
            actual_width=0,
        )

    width = len(lines[0])
    cells: list[str] = []

    for row_idx, line in enumerate(lines):
        if len(line) != width:
            raise MalformedGridError(
                f"Inconsistent row lengths\n"
                f"  Expected: {width} columns (from row 0)\n"
                f"  Row {row_idx}: {len(line)} columns - \"{line}\"\n"
                f"  All rows must have the same number of characters",
                row=row_idx,
                expected_width=width,
                actual_width=len(line),
            )
        cells.extend(line)

    grid = Grid(len(lines), width, cells)
    logger.debug("parse_grid: %d rows x %d columns", grid.height, grid.width)
    return grid


def parse_digit_grid(text: str) -> Grid[int]:
    """
    Parse a grid of decimal digits into a grid of ints.

    Raises:
        MalformedGridError: As for parse_grid
        ValueError: If any cell is not a digit
    """
    grid = parse_grid(text)

    for pos, cell in grid.items():
        if not "0" <= cell <= "9":
            raise ValueError(
                f"Invalid digit cell: '{cell}'\n"
                f"  Position: column {pos.x}, row {pos.y}\n"
                f"  Digit grids may only contain the characters 0-9"
            )

    return grid.map(int)


def split_sections(text: str) -> list[str]:
    """
    Split input into blank-line separated sections.

    Each section keeps its inner line breaks, without a trailing one. Runs of
    empty lines count as a single separator. A line of spaces is a grid row,
    not a separator.
    """
    sections: list[str] = []
    current: list[str] = []

    for line in _split_lines(text):
        if line:
            current.append(line)
        elif current:
            sections.append("\n".join(current))
            current = []

    if current:
        sections.append("\n".join(current))
    return sections


def find_start(grid: Grid[str], marker: str) -> Position:
    """
    Locate the single marker cell (e.g. '@' or '^') in a parsed grid.

    Raises:
        ValueError: If the marker is missing
    """
    pos = grid.find(marker)
    if pos is None:
        raise ValueError(
            f"Marker '{marker}' not found in grid\n"
            f"  Grid: {grid.height} rows x {grid.width} columns"
        )
    return pos

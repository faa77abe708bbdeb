"""
ASCII rendering for chargrid grids.

Provides two rendering approaches:
1. Plain rendering - rows as lines of characters, nothing else
2. Framed rendering - box-drawn grids with highlighted cells, optionally laid
   out several to a row
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Collection, Mapping

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid import Grid
from grid_types import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """Options for framed rendering."""

    cell_width: int = 1
    colorize: bool = True
    border: bool = True


# =============================================================================
# Plain Rendering
# =============================================================================


def render_plain(grid: Grid) -> str:
    """Render each row as one line, each cell with str()."""
    return "\n".join("".join(str(cell) for cell in row) for row in grid.rows())


# =============================================================================
# Framed Rendering
# =============================================================================


def _cell_text(cell: object, cell_width: int) -> str:
    text = str(cell)
    if cell_width == 1:
        return text[:1] if text else "?"
    return text[:cell_width].center(cell_width)


def render_grid(
    grid: Grid,
    title: str | None = None,
    highlight: Collection[Position] = (),
    cursor: Position | None = None,
    options: RenderOptions = RenderOptions(),
    color_fn: Callable[[str], str] | None = None,
) -> list[str]:
    """
    Render a single grid as a framed character display.

    Args:
        grid: The grid to render
        title: Optional title centred in the top border
        highlight: Positions to mark (e.g. the cells of a ray)
        cursor: Optional position drawn in inverse video, over any highlight
        options: Cell width, colouring and border settings
        color_fn: Optional colouriser for the frame and plain cells

    Returns:
        List of strings representing the rendered grid lines
    """
    if color_fn is None or not options.colorize:
        color_fn = lambda s: s

    highlighted = set(highlight)
    inner_width = grid.width * options.cell_width
    lines: list[str] = []

    if options.border:
        top = "┌" + "─" * inner_width + "┐"
        label = f" {title} " if title else ""
        if label and len(label) <= inner_width:
            start = (inner_width - len(label)) // 2
            top = "┌" + "─" * start + label + "─" * (inner_width - start - len(label)) + "┐"
        lines.append(color_fn(top))

    for y, row in enumerate(grid.rows()):
        parts: list[str] = [color_fn("│")] if options.border else []

        for x, cell in enumerate(row):
            content = _cell_text(cell, options.cell_width)
            pos = Position(x, y)

            if not options.colorize:
                parts.append(content)
            elif pos == cursor:
                parts.append(chalk.bgWhite.black(content))
            elif pos in highlighted:
                parts.append(chalk.bgYellow.black(content))
            else:
                parts.append(color_fn(content))

        if options.border:
            parts.append(color_fn("│"))
        lines.append("".join(parts))

    if options.border:
        lines.append(color_fn("└" + "─" * inner_width + "┘"))

    return lines


def render_side_by_side(
    grids: Mapping[str, Grid],
    terminal_width: int = 120,
    options: RenderOptions = RenderOptions(),
) -> str:
    """
    Render several titled grids in flow layout (multiple grids per row).

    Grids are placed in the mapping's order, e.g. {"now": board, "before":
    previous_board}, and wrap onto a new row when the next one would exceed
    terminal_width.

    Returns:
        Rendered string with all grids in flow layout
    """
    colors: list[Callable[[str], str]] = [
        chalk.green,
        chalk.cyan,
        chalk.yellow,
        chalk.magenta,
        chalk.blue,
        chalk.red,
    ]

    rendered: dict[str, list[str]] = {}
    widths: dict[str, int] = {}

    for i, (name, grid) in enumerate(grids.items()):
        rendered[name] = render_grid(grid, name, options=options, color_fn=colors[i % len(colors)])
        # Visible width; the strings themselves may carry ANSI codes
        widths[name] = grid.width * options.cell_width + (2 if options.border else 0)

    output_lines: list[str] = []
    spacing = 2

    current_row: list[str] = []
    current_width = 0

    for name in rendered:
        needed = widths[name] + (spacing if current_row else 0)

        if current_row and current_width + needed > terminal_width:
            _flush_grid_row(current_row, rendered, widths, output_lines, spacing)
            current_row = []
            current_width = 0
            needed = widths[name]

        current_row.append(name)
        current_width += needed

    if current_row:
        _flush_grid_row(current_row, rendered, widths, output_lines, spacing)

    logger.debug("render_side_by_side: %d grids in %d lines", len(grids), len(output_lines))
    return "\n".join(output_lines).rstrip("\n")


def _flush_grid_row(
    row_names: list[str],
    rendered: dict[str, list[str]],
    widths: dict[str, int],
    output_lines: list[str],
    spacing: int,
) -> None:
    """Append one row of grids to output_lines, padding shorter grids."""
    max_height = max(len(rendered[name]) for name in row_names)

    for line_idx in range(max_height):
        parts = []
        for name in row_names:
            grid_lines = rendered[name]
            if line_idx < len(grid_lines):
                parts.append(grid_lines[line_idx])
            else:
                parts.append(" " * widths[name])
        output_lines.append((" " * spacing).join(parts))

    output_lines.append("")

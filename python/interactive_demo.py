"""
Interactive ray explorer for chargrid.
Display a grid, move a cursor and cast rays from it with keyboard commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import RenderOptions, render_grid, render_side_by_side
from grid import Grid, cast_ray
from grid_parser import parse_grid
from grid_types import (
    ALL_DIRECTIONS,
    EAST,
    NORTH,
    NORTH_EAST,
    NORTH_WEST,
    SOUTH,
    SOUTH_EAST,
    SOUTH_WEST,
    WEST,
    Direction,
    MalformedGridError,
    Position,
    shift,
)

DIRECTION_NAMES = {
    NORTH: "N",
    NORTH_EAST: "NE",
    EAST: "E",
    SOUTH_EAST: "SE",
    SOUTH: "S",
    SOUTH_WEST: "SW",
    WEST: "W",
    NORTH_WEST: "NW",
}


class RayExplorer:
    """Cursor-driven ray casting over a single grid."""

    def __init__(self, grid: Grid, options: RenderOptions = RenderOptions()) -> None:
        self.grid = grid
        self.options = options
        self.cursor = Position(0, 0)
        self.direction_index = ALL_DIRECTIONS.index(EAST)
        self.console = Console()
        self.status_message = "Ready"

    @property
    def direction(self) -> Direction:
        return ALL_DIRECTIONS[self.direction_index]

    def ray_positions(self) -> list[Position]:
        """Positions covered by the ray from the cursor, cursor included."""
        return [pos for pos, _cell in cast_ray(self.grid, self.cursor, self.direction)]

    def move_cursor(self, direction: Direction) -> None:
        """Step the cursor, staying put at the edge of the grid."""
        target = shift(self.cursor, direction)
        if target is None or not self.grid.in_bounds(target):
            self.status_message = f"✗ Edge reached moving {DIRECTION_NAMES[direction]}"
            return
        self.cursor = target
        self.status_message = f"✓ Cursor at ({target.x}, {target.y})"

    def turn(self, clockwise: bool = True) -> None:
        """Rotate the ray direction by 45 degrees."""
        step = 1 if clockwise else -1
        self.direction_index = (self.direction_index + step) % len(ALL_DIRECTIONS)
        self.status_message = f"Ray direction: {DIRECTION_NAMES[self.direction]}"

    def reset(self) -> None:
        self.cursor = Position(0, 0)
        self.direction_index = ALL_DIRECTIONS.index(EAST)
        self.status_message = "Cursor reset"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        ray = self.ray_positions()
        height, width = self.grid.dimensions()

        grid_lines = render_grid(
            self.grid,
            title=f"{height}x{width}",
            highlight=ray,
            cursor=self.cursor,
            options=self.options,
        )

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"({self.cursor.x}, {self.cursor.y}) = {self.grid.get(self.cursor)!r}\n")
        status.append("Ray: ", style="bold")
        status.append(
            f"{DIRECTION_NAMES[self.direction]} - "
            f"{''.join(str(self.grid.get(pos)) for pos in ray)!r} ({len(ray)} cells)\n\n"
        )

        status.append(Text.from_ansi("\n".join(grid_lines)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W/A/S/D - Move cursor\n")
        status.append("  Q/E     - Turn ray counter-clockwise/clockwise\n")
        status.append("  R       - Reset cursor\n")
        status.append("  X       - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="chargrid Ray Explorer", border_style="green", width=80)

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the explorer should stop."""
        match key.lower():
            case "x":
                self.status_message = "Quitting..."
                return False
            case "w":
                self.move_cursor(NORTH)
            case "s":
                self.move_cursor(SOUTH)
            case "a":
                self.move_cursor(WEST)
            case "d":
                self.move_cursor(EAST)
            case "q":
                self.turn(clockwise=False)
            case "e":
                self.turn(clockwise=True)
            case "r":
                self.reset()
            case _:
                self.status_message = f"Unknown key: {key!r}"
        return True

    def run(self) -> None:
        """Run the interactive key loop."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Explore rays over a character grid.")
    parser.add_argument("path", type=Path, help="grid file, one row per line")
    parser.add_argument("--plain", action="store_true", help="print the grid once and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        grid = parse_grid(args.path.read_text())
    except MalformedGridError as e:
        print(f"ERROR: {args.path}: {e}", file=sys.stderr)
        return 1

    if args.plain:
        print(render_side_by_side({args.path.name: grid}, options=RenderOptions(colorize=False)))
        return 0

    RayExplorer(grid).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Fixed-shape 2D grid with bounds-checked access and lazy ray casting.

Out-of-bounds access is not an error anywhere in this module: reads return
None and writes return False. Falling off an edge is the normal way for a
scan to end.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from grid_types import (
    CARDINAL_DIRECTIONS,
    Direction,
    MalformedGridError,
    Position,
    shift,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Grid(Generic[T]):
    """
    A rectangular, row-major grid of cells.

    The shape is fixed at construction; only cell contents may change. Cells
    should not be None, since None is how absent (out-of-bounds) reads are
    reported.
    """

    __slots__ = ("_height", "_width", "_cells")

    def __init__(self, height: int, width: int, cells: Iterable[T]) -> None:
        cell_list = list(cells)
        if height <= 0 or width <= 0:
            raise MalformedGridError(
                f"Grid must have at least one row and one column\n"
                f"  Got: {height} rows x {width} columns",
                row=None,
                expected_width=None,
                actual_width=width,
            )
        if len(cell_list) != height * width:
            raise MalformedGridError(
                f"Cell count does not match grid shape\n"
                f"  Expected: {height * width} cells ({height} rows x {width} columns)\n"
                f"  Got: {len(cell_list)} cells"
            )
        self._height = height
        self._width = width
        self._cells = cell_list

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]]) -> Grid[T]:
        """Build a grid from a list of equal-length rows."""
        if not rows:
            raise MalformedGridError("Cannot build a grid from zero rows", row=None)
        width = len(rows[0])
        cells: list[T] = []
        for row_idx, row in enumerate(rows):
            if len(row) != width:
                raise MalformedGridError(
                    f"Inconsistent row lengths\n"
                    f"  Expected: {width} columns (from row 0)\n"
                    f"  Row {row_idx}: {len(row)} columns",
                    row=row_idx,
                    expected_width=width,
                    actual_width=len(row),
                )
            cells.extend(row)
        logger.debug("from_rows: %d rows x %d columns", len(rows), width)
        return cls(len(rows), width, cells)

    @classmethod
    def filled(cls, height: int, width: int, value: T) -> Grid[T]:
        return cls(height, width, [value] * (height * width))

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    def dimensions(self) -> tuple[int, int]:
        """(height, width)"""
        return (self._height, self._width)

    def in_bounds(self, pos: Position | None) -> bool:
        return pos is not None and pos.x < self._width and pos.y < self._height

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, Position) and self.in_bounds(pos)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def get(self, pos: Position | None) -> T | None:
        """Cell at pos, or None when pos is None or outside the grid."""
        if pos is None or not self.in_bounds(pos):
            return None
        return self._cells[pos.y * self._width + pos.x]

    def set(self, pos: Position | None, value: T) -> bool:
        """Write value at pos. Returns False (and changes nothing) when out of bounds."""
        if pos is None or not self.in_bounds(pos):
            return False
        self._cells[pos.y * self._width + pos.x] = value
        return True

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield Position(x, y)

    def items(self) -> Iterator[tuple[Position, T]]:
        """(position, cell) pairs in row-major order."""
        for idx, cell in enumerate(self._cells):
            yield Position(idx % self._width, idx // self._width), cell

    def rows(self) -> list[list[T]]:
        w = self._width
        return [self._cells[r * w:(r + 1) * w] for r in range(self._height)]

    def __iter__(self) -> Iterator[T]:
        return iter(self._cells)

    def find(self, value: T) -> Position | None:
        """First position holding value, scanning row-major."""
        for pos, cell in self.items():
            if cell == value:
                return pos
        return None

    def find_all(self, value: T) -> list[Position]:
        return [pos for pos, cell in self.items() if cell == value]

    def neighbors(
        self,
        pos: Position,
        directions: Iterable[Direction] = CARDINAL_DIRECTIONS,
    ) -> list[tuple[Position, T]]:
        """In-bounds neighbours of pos, in the order of directions."""
        result: list[tuple[Position, T]] = []
        for direction in directions:
            candidate = shift(pos, direction)
            if candidate is None:
                continue
            cell = self.get(candidate)
            if cell is not None:
                result.append((candidate, cell))
        return result

    # -------------------------------------------------------------------------
    # Derived grids
    # -------------------------------------------------------------------------

    def map(self, fn: Callable[[T], U]) -> Grid[U]:
        return Grid(self._height, self._width, [fn(cell) for cell in self._cells])

    def copy(self) -> Grid[T]:
        """An independent working copy; mutating it leaves self untouched."""
        logger.debug("copy: %d rows x %d columns", self._height, self._width)
        return Grid(self._height, self._width, self._cells)

    def cast_ray(self, origin: Position | None, direction: Direction) -> Ray[T]:
        return cast_ray(self, origin, direction)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.dimensions() == other.dimensions() and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(height={self._height}, width={self._width})"


# =============================================================================
# Ray Casting
# =============================================================================


class Ray(Generic[T]):
    """
    Lazy walk from an origin in a fixed direction.

    Yields (position, cell) pairs, starting with the origin itself, and stops
    for good the first time the cursor leaves the grid. Not restartable: build
    a new Ray to scan again.

    Usage:
        for pos, cell in cast_ray(grid, Position(0, 0), EAST):
            ...
    """

    def __init__(self, grid: Grid[T], origin: Position | None, direction: Direction) -> None:
        self._grid = grid
        self._cursor = origin
        self._direction = direction
        self._exhausted = False

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def position(self) -> Position | None:
        """Cursor of the next read, or None once the ray has terminated."""
        return None if self._exhausted else self._cursor

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> Iterator[tuple[Position, T]]:
        return self

    def __next__(self) -> tuple[Position, T]:
        if self._exhausted:
            raise StopIteration
        current = self._cursor
        cell = self._grid.get(current)
        if current is None or cell is None:
            self._exhausted = True
            raise StopIteration
        self._cursor = shift(current, self._direction)
        return current, cell


def cast_ray(grid: Grid[T], origin: Position | None, direction: Direction) -> Ray[T]:
    """
    Cast a ray across grid from origin.

    The zero direction is rejected since such a ray would never leave the grid.
    An out-of-bounds origin gives an empty ray.
    """
    if direction.is_zero():
        raise ValueError(
            f"Cannot cast a ray with a zero direction\n"
            f"  Origin: {origin}"
        )
    return Ray(grid, origin, direction)

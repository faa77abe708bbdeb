"""
Shared type definitions for the chargrid core.

Coordinates follow screen convention: x is the column, y is the row, and y
grows downward (north is a negative dy).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping


class MalformedGridError(ValueError):
    """Raised when input text or rows cannot form a rectangular grid."""

    def __init__(
        self,
        message: str,
        row: int | None = None,
        expected_width: int | None = None,
        actual_width: int | None = None,
    ) -> None:
        super().__init__(message)
        self.row = row
        self.expected_width = expected_width
        self.actual_width = actual_width


# =============================================================================
# Directions
# =============================================================================


@dataclass(frozen=True)
class Direction:
    """A signed step vector."""

    dx: int
    dy: int

    def __neg__(self) -> Direction:
        return Direction(-self.dx, -self.dy)

    def __add__(self, other: Direction) -> Direction:
        if not isinstance(other, Direction):
            return NotImplemented
        return Direction(self.dx + other.dx, self.dy + other.dy)

    def __mul__(self, factor: int) -> Direction:
        if not isinstance(factor, int):
            return NotImplemented
        return Direction(self.dx * factor, self.dy * factor)

    __rmul__ = __mul__

    def is_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0

    def rotate_cw(self) -> Direction:
        """Quarter turn clockwise on screen (north -> east)."""
        return Direction(-self.dy, self.dx)

    def rotate_ccw(self) -> Direction:
        """Quarter turn counter-clockwise on screen (north -> west)."""
        return Direction(self.dy, -self.dx)


NORTH = Direction(0, -1)
NORTH_EAST = Direction(1, -1)
EAST = Direction(1, 0)
SOUTH_EAST = Direction(1, 1)
SOUTH = Direction(0, 1)
SOUTH_WEST = Direction(-1, 1)
WEST = Direction(-1, 0)
NORTH_WEST = Direction(-1, -1)

CARDINAL_DIRECTIONS: tuple[Direction, ...] = (NORTH, EAST, SOUTH, WEST)
DIAGONAL_DIRECTIONS: tuple[Direction, ...] = (NORTH_EAST, SOUTH_EAST, SOUTH_WEST, NORTH_WEST)

# Clockwise from north
ALL_DIRECTIONS: tuple[Direction, ...] = (
    NORTH,
    NORTH_EAST,
    EAST,
    SOUTH_EAST,
    SOUTH,
    SOUTH_WEST,
    WEST,
    NORTH_WEST,
)


# =============================================================================
# Positions
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A cell coordinate: x = column, y = row, both non-negative."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position components must be non-negative, got ({self.x}, {self.y})")

    def __sub__(self, other: Position) -> Direction:
        if not isinstance(other, Position):
            return NotImplemented
        return Direction(self.x - other.x, self.y - other.y)

    def to_shape(self) -> tuple[int, int]:
        """Internal row-major index: (row, col) = (y, x)."""
        return (self.y, self.x)

    @classmethod
    def from_shape(cls, shape: tuple[int, int]) -> Position:
        row, col = shape
        return cls(col, row)

    def shifted(self, direction: Direction) -> Position | None:
        return shift(self, direction)


def to_shape(pos: Position) -> tuple[int, int]:
    return pos.to_shape()


def from_shape(shape: tuple[int, int]) -> Position:
    return Position.from_shape(shape)


def shift(pos: Position | None, direction: Direction) -> Position | None:
    """
    Step one direction from pos.

    The sum is taken over unbounded ints and any negative component means the
    step left the non-negative quadrant, so None is returned instead of a
    wrapped coordinate. No upper bound is checked here; pass the result to
    Grid.get for that. A None input yields None so shifts can be chained.
    """
    if pos is None:
        return None
    x = pos.x + direction.dx
    y = pos.y + direction.dy
    if x < 0 or y < 0:
        return None
    return Position(x, y)


# =============================================================================
# Character <-> Direction mapping
# =============================================================================


class DirectionMap:
    """
    Bidirectional mapping between single characters and directions.

    Built explicitly by whoever needs it and passed along, e.g.:

        arrows = DirectionMap({"^": NORTH, ">": EAST, "v": SOUTH, "<": WEST})
        arrows.direction_for(">")  # EAST
        arrows.char_for(NORTH)     # "^"
    """

    def __init__(self, pairs: Mapping[str, Direction] | Iterable[tuple[str, Direction]]) -> None:
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        self._by_char: dict[str, Direction] = {}
        self._by_direction: dict[Direction, str] = {}

        for char, direction in items:
            if not isinstance(char, str) or len(char) != 1:
                raise ValueError(f"Direction map keys must be single characters, got {char!r}")
            if char in self._by_char:
                raise ValueError(
                    f"Duplicate character in direction map: {char!r}\n"
                    f"  Already mapped to: {self._by_char[char]}"
                )
            if direction in self._by_direction:
                raise ValueError(
                    f"Duplicate direction in direction map: {direction}\n"
                    f"  Already mapped from: {self._by_direction[direction]!r}"
                )
            self._by_char[char] = direction
            self._by_direction[direction] = char

    def direction_for(self, char: str) -> Direction | None:
        return self._by_char.get(char)

    def char_for(self, direction: Direction) -> str | None:
        return self._by_direction.get(direction)

    def parse_moves(self, text: str) -> list[Direction]:
        """Translate a move string into directions, skipping whitespace."""
        moves: list[Direction] = []
        for offset, char in enumerate(text):
            if char.isspace():
                continue
            direction = self._by_char.get(char)
            if direction is None:
                raise ValueError(
                    f"Unknown move character: {char!r}\n"
                    f"  Offset: {offset}\n"
                    f"  Known characters: {''.join(self._by_char)}"
                )
            moves.append(direction)
        return moves

    def __len__(self) -> int:
        return len(self._by_char)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Direction):
            return item in self._by_direction
        return item in self._by_char

    def __iter__(self) -> Iterator[tuple[str, Direction]]:
        return iter(self._by_char.items())

    def __repr__(self) -> str:
        return f"DirectionMap({self._by_char!r})"


def arrow_direction_map() -> DirectionMap:
    """A fresh map for the arrow characters ^ > v <."""
    return DirectionMap({"^": NORTH, ">": EAST, "v": SOUTH, "<": WEST})

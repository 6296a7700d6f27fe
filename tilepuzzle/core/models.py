"""Core domain models used by puzzle logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_COLUMNS = 3
DEFAULT_ROWS = 3


class SwapOutcome(StrEnum):
    """Result of dropping a piece on a grid cell."""

    SWAPPED = "SWAPPED"
    REJECTED = "REJECTED"


@dataclass(frozen=True, slots=True)
class Point:
    """Surface-local pixel position."""

    x: float
    y: float

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle in pixels."""

    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        """Return whether a point is inside the rectangle, edges included."""
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h


@dataclass(frozen=True, slots=True)
class CellCoord:
    """Grid cell coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class BoardConfig:
    """Geometry derived once per image load."""

    columns: int
    rows: int
    piece_width: float
    piece_height: float
    image_width: float
    image_height: float

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    def in_bounds(self, cell: CellCoord) -> bool:
        """Return whether the cell lies on the board."""
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.columns

    def cell_origin(self, cell: CellCoord) -> Point:
        """Project a cell to its top-left pixel position."""
        return Point(cell.col * self.piece_width, cell.row * self.piece_height)


@dataclass(slots=True)
class Piece:
    """One rectangular tile of the source image.

    ``home`` is the solved cell and never changes; ``cell`` is the committed
    cell on the board and changes only through shuffle and confirmed swaps.
    Pixel positions are projections of those cells.
    """

    index: int
    home: CellCoord
    cell: CellCoord
    width: float
    height: float

    @property
    def canonical_position(self) -> Point:
        return Point(self.home.col * self.width, self.home.row * self.height)

    @property
    def current_position(self) -> Point:
        return Point(self.cell.col * self.width, self.cell.row * self.height)

    @property
    def source_region(self) -> Rect:
        origin = self.canonical_position
        return Rect(origin.x, origin.y, self.width, self.height)

    @property
    def current_rect(self) -> Rect:
        origin = self.current_position
        return Rect(origin.x, origin.y, self.width, self.height)

    @property
    def in_place(self) -> bool:
        return self.cell == self.home

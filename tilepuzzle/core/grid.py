"""Piece arrangement state: shuffle, swap, and completion checks."""

from __future__ import annotations

import logging
import random

import numpy as np

from tilepuzzle.core.errors import InvalidConfigurationError
from tilepuzzle.core.models import BoardConfig, CellCoord, Piece, Point, SwapOutcome
from tilepuzzle.core.ports import ImageSource

logger = logging.getLogger(__name__)

_EMPTY = 0


class PieceGrid:
    """Permutation of pieces over grid cells.

    Committed state always satisfies the permutation invariant: every cell is
    occupied by exactly one piece. The occupancy matrix mirrors ``Piece.cell``
    and holds 1-based piece indexes.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._config: BoardConfig | None = None
        self._pieces: list[Piece] = []
        self._by_index: dict[int, Piece] = {}
        self._occupancy = np.zeros((0, 0), dtype=np.int32)

    @property
    def config(self) -> BoardConfig | None:
        return self._config

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return tuple(self._pieces)

    def initialize(self, image: ImageSource, columns: int, rows: int) -> list[Piece]:
        """Cut the image into ``columns * rows`` pieces in row-major order.

        Raises ``InvalidConfigurationError`` without touching existing state
        when the grid size or image area is invalid.
        """
        config = build_board_config(image, columns, rows)
        pieces: list[Piece] = []
        occupancy = np.zeros((rows, columns), dtype=np.int32)
        index = 0
        for row in range(rows):
            for col in range(columns):
                index += 1
                cell = CellCoord(row, col)
                pieces.append(
                    Piece(
                        index=index,
                        home=cell,
                        cell=cell,
                        width=config.piece_width,
                        height=config.piece_height,
                    )
                )
                occupancy[row, col] = index

        self._config = config
        self._pieces = pieces
        self._by_index = {piece.index: piece for piece in pieces}
        self._occupancy = occupancy
        logger.info(
            "grid_initialized columns=%d rows=%d piece_size=%.3fx%.3f",
            columns,
            rows,
            config.piece_width,
            config.piece_height,
        )
        return list(pieces)

    def shuffle(self) -> None:
        """Fisher-Yates over current cells; piece identities keep their order."""
        cells = [piece.cell for piece in self._pieces]
        for i in range(len(cells) - 1, 0, -1):
            j = self._rng.randrange(i + 1)
            cells[i], cells[j] = cells[j], cells[i]
        for piece, cell in zip(self._pieces, cells):
            self._place(piece, cell)
        logger.debug(
            "grid_shuffled arrangement=%s",
            [(piece.index, piece.cell.row, piece.cell.col) for piece in self._pieces],
        )

    def attempt_swap(self, dragged_index: int, target: CellCoord) -> SwapOutcome:
        """Exchange the dragged piece with the occupant of ``target``.

        The occupant moves to the dragged piece's committed cell, so a drop
        always yields a clean two-piece transposition.
        """
        dragged = self._by_index[dragged_index]
        occupant = self.piece_at_cell(target)
        if occupant is None or occupant is dragged:
            logger.debug("swap_rejected piece=%d target=%s", dragged_index, target)
            return SwapOutcome.REJECTED
        origin = dragged.cell
        self._place(dragged, target)
        self._place(occupant, origin)
        logger.debug(
            "swap_applied piece=%d target=%s displaced=%d",
            dragged.index,
            target,
            occupant.index,
        )
        return SwapOutcome.SWAPPED

    def is_solved(self) -> bool:
        """Return whether every piece sits on its canonical cell."""
        return all(piece.in_place for piece in self._pieces)

    def misplaced_count(self) -> int:
        return sum(1 for piece in self._pieces if not piece.in_place)

    def find_piece_at(self, point: Point) -> Piece | None:
        """Return the first piece, in list order, whose rectangle holds the point."""
        for piece in self._pieces:
            if piece.current_rect.contains(point.x, point.y):
                return piece
        return None

    def piece(self, index: int) -> Piece:
        return self._by_index[index]

    def piece_at_cell(self, cell: CellCoord) -> Piece | None:
        """Return the piece committed to ``cell``, or None off the board."""
        if self._config is None or not self._config.in_bounds(cell):
            return None
        index = int(self._occupancy[cell.row, cell.col])
        if index == _EMPTY:
            return None
        return self._by_index[index]

    def current_positions(self) -> list[Point]:
        return [piece.current_position for piece in self._pieces]

    def canonical_positions(self) -> list[Point]:
        return [piece.canonical_position for piece in self._pieces]

    def _place(self, piece: Piece, cell: CellCoord) -> None:
        piece.cell = cell
        self._occupancy[cell.row, cell.col] = piece.index


def build_board_config(image: ImageSource, columns: int, rows: int) -> BoardConfig:
    """Validate inputs and derive board geometry."""
    if (
        not isinstance(columns, int)
        or not isinstance(rows, int)
        or isinstance(columns, bool)
        or isinstance(rows, bool)
    ):
        raise InvalidConfigurationError(
            f"columns and rows must be integers, got {columns!r} and {rows!r}."
        )
    if columns < 1 or rows < 1:
        raise InvalidConfigurationError(
            f"columns and rows must be >= 1, got columns={columns} rows={rows}."
        )
    width = float(image.width)
    height = float(image.height)
    if width <= 0 or height <= 0:
        raise InvalidConfigurationError(
            f"image must have a positive area, got {width:g}x{height:g}."
        )
    return BoardConfig(
        columns=columns,
        rows=rows,
        piece_width=width / columns,
        piece_height=height / rows,
        image_width=width,
        image_height=height,
    )

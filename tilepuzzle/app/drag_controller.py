"""Pointer drag handling that turns gestures into grid swaps."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from tilepuzzle.app.events import (
    DragStarted,
    DropRejected,
    PiecesSwapped,
    PuzzleSolved,
    RedrawRequested,
)
from tilepuzzle.app.state_machine import DragState
from tilepuzzle.core.errors import PuzzleNotReadyError
from tilepuzzle.core.grid import PieceGrid
from tilepuzzle.core.models import BoardConfig, CellCoord, Point, SwapOutcome
from tilepuzzle.runtime.events import EventBus
from tilepuzzle.runtime.scheduler import Scheduler
from tilepuzzle.runtime.throttle import DEFAULT_FRAME_INTERVAL_SECONDS, LatestSampleThrottle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DragSession:
    """Piece currently held by the pointer.

    ``in_flight`` is the unsnapped drawing position; the grid keeps the
    piece's committed cell until the drop resolves.
    """

    piece_index: int
    pointer_offset: Point
    original_position: Point
    in_flight: Point


def snap_to_cell(position: Point, config: BoardConfig) -> CellCoord:
    """Round a pixel position to the nearest grid multiple; halves round up."""
    col = math.floor(position.x / config.piece_width + 0.5)
    row = math.floor(position.y / config.piece_height + 0.5)
    return CellCoord(row=row, col=col)


class DragController:
    """Owns the drag lifecycle for one puzzle instance."""

    def __init__(
        self,
        grid: PieceGrid,
        bus: EventBus,
        scheduler: Scheduler,
        *,
        frame_interval_seconds: float = DEFAULT_FRAME_INTERVAL_SECONDS,
    ) -> None:
        self._grid = grid
        self._bus = bus
        self._scheduler = scheduler
        self._state = DragState.IDLE
        self._session: DragSession | None = None
        self._started_at_seconds = scheduler.now_seconds
        self._moves: LatestSampleThrottle[Point] = LatestSampleThrottle(
            scheduler,
            self._apply_move,
            interval_seconds=frame_interval_seconds,
        )
        if grid.is_solved():
            self._complete()

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def session(self) -> DragSession | None:
        return self._session

    @property
    def elapsed_seconds(self) -> float:
        return self._scheduler.now_seconds - self._started_at_seconds

    def press(self, point: Point) -> bool:
        """Pick up the piece under the pointer, if any."""
        if self._state is not DragState.IDLE:
            return False
        piece = self._grid.find_piece_at(point)
        if piece is None:
            return False
        self._moves.reset()
        origin = piece.current_position
        self._session = DragSession(
            piece_index=piece.index,
            pointer_offset=point - origin,
            original_position=origin,
            in_flight=origin,
        )
        self._state = DragState.DRAGGING
        logger.debug("drag_started piece=%d x=%.1f y=%.1f", piece.index, point.x, point.y)
        self._bus.publish(DragStarted(piece_index=piece.index))
        return True

    def move(self, point: Point) -> bool:
        """Queue a pointer sample for the held piece."""
        if self._state is not DragState.DRAGGING:
            return False
        self._moves.submit(point)
        return True

    def release(self) -> bool:
        """Drop the held piece on the nearest cell."""
        if self._state is not DragState.DRAGGING or self._session is None:
            return False
        self._moves.flush()
        session = self._session
        config = self._grid.config
        if config is None:
            raise PuzzleNotReadyError("Cannot drop a piece on a grid without a board.")
        target = snap_to_cell(session.in_flight, config)
        origin_cell = self._grid.piece(session.piece_index).cell
        outcome = self._grid.attempt_swap(session.piece_index, target)
        self._session = None
        self._state = DragState.IDLE

        if outcome is SwapOutcome.REJECTED:
            logger.debug("drop_rejected piece=%d target=%s", session.piece_index, target)
            self._bus.publish(DropRejected(piece_index=session.piece_index))
            self._bus.publish(RedrawRequested())
            return True

        displaced = self._grid.piece_at_cell(origin_cell)
        self._bus.publish(
            PiecesSwapped(
                dragged_index=session.piece_index,
                displaced_index=displaced.index,
                target=target,
            )
        )
        self._bus.publish(RedrawRequested())
        if self._grid.is_solved():
            self._complete()
        return True

    def dispose(self) -> None:
        """Drop pending work when the owning puzzle is replaced."""
        self._moves.cancel()
        self._session = None

    def _apply_move(self, point: Point) -> None:
        session = self._session
        if session is None:
            return
        session.in_flight = point - session.pointer_offset
        self._bus.publish(RedrawRequested())

    def _complete(self) -> None:
        self._moves.cancel()
        self._session = None
        self._state = DragState.LOCKED
        elapsed = self.elapsed_seconds
        logger.info("puzzle_solved elapsed_seconds=%.2f", elapsed)
        self._bus.publish(PuzzleSolved(elapsed_seconds=elapsed))

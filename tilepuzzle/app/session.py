"""Puzzle session: one grid and drag controller per loaded puzzle."""

from __future__ import annotations

import logging
import random

from tilepuzzle.app.drag_controller import DragController
from tilepuzzle.app.events import PuzzleCreated, PuzzleSolved, RedrawRequested
from tilepuzzle.app.notifications import DEFAULT_NOTIFY_DELAY_SECONDS, CompletionNotifier
from tilepuzzle.app.ports import DrawingSurface, ImageSource, NotificationSink
from tilepuzzle.app.renderer import BoardRenderer
from tilepuzzle.app.state_machine import DragState
from tilepuzzle.core.errors import InvalidConfigurationError, PuzzleNotReadyError
from tilepuzzle.core.grid import PieceGrid
from tilepuzzle.core.models import DEFAULT_COLUMNS, DEFAULT_ROWS, Point
from tilepuzzle.runtime.events import EventBus
from tilepuzzle.runtime.scheduler import Scheduler
from tilepuzzle.runtime.throttle import DEFAULT_FRAME_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class PuzzleSession:
    """Routes host input to the active puzzle and owns its lifecycle.

    Loading an image or changing the grid size builds a fresh grid and
    controller; a rejected configuration leaves the current puzzle in place.
    """

    def __init__(
        self,
        *,
        surface: DrawingSurface | None = None,
        notification_sink: NotificationSink | None = None,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
        columns: int = DEFAULT_COLUMNS,
        rows: int = DEFAULT_ROWS,
        frame_interval_seconds: float = DEFAULT_FRAME_INTERVAL_SECONDS,
        notify_delay_seconds: float = DEFAULT_NOTIFY_DELAY_SECONDS,
    ) -> None:
        self._rng = rng or random.Random()
        self._scheduler = scheduler or Scheduler()
        self._columns = columns
        self._rows = rows
        self._frame_interval_seconds = frame_interval_seconds
        self._bus = EventBus()
        self._renderer = BoardRenderer(surface) if surface is not None else None
        self._notifier = (
            CompletionNotifier(self._scheduler, notification_sink, delay_seconds=notify_delay_seconds)
            if notification_sink is not None
            else None
        )
        self._image: ImageSource | None = None
        self._grid: PieceGrid | None = None
        self._controller: DragController | None = None

        self._bus.subscribe(RedrawRequested, lambda _event: self.redraw())
        if self._notifier is not None:
            self._bus.subscribe(PuzzleSolved, self._notifier.on_solved)

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def image(self) -> ImageSource | None:
        return self._image

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def grid(self) -> PieceGrid | None:
        return self._grid

    @property
    def controller(self) -> DragController | None:
        return self._controller

    @property
    def state(self) -> DragState | None:
        return self._controller.state if self._controller is not None else None

    @property
    def is_solved(self) -> bool:
        return self._grid is not None and self._grid.is_solved()

    def load_image(self, image: ImageSource) -> None:
        """Start a new puzzle from a freshly loaded image."""
        self._start(image, self._columns, self._rows)

    def reconfigure(self, columns: int, rows: int) -> None:
        """Re-cut the loaded image with a new grid size."""
        if self._image is None:
            raise PuzzleNotReadyError("Load an image before changing the grid size.")
        self._start(self._image, columns, rows)

    def on_pointer_down(self, x: float, y: float) -> bool:
        self._scheduler.poll()
        if self._controller is None:
            return False
        return self._controller.press(Point(x, y))

    def on_pointer_move(self, x: float, y: float) -> bool:
        self._scheduler.poll()
        if self._controller is None:
            return False
        return self._controller.move(Point(x, y))

    def on_pointer_up(self, x: float, y: float) -> bool:
        self._scheduler.poll()
        if self._controller is None:
            return False
        return self._controller.release()

    def tick(self) -> int:
        """Run due deferred work; hosts call this once per frame."""
        return self._scheduler.poll()

    def redraw(self) -> None:
        if self._renderer is None or self._grid is None or self._image is None:
            return
        session = self._controller.session if self._controller is not None else None
        self._renderer.draw(self._image, self._grid, session)

    def _start(self, image: ImageSource, columns: int, rows: int) -> None:
        grid = PieceGrid(self._rng)
        try:
            grid.initialize(image, columns, rows)
        except InvalidConfigurationError as exc:
            logger.warning("puzzle_config_rejected columns=%r rows=%r reason=%s", columns, rows, exc)
            raise
        grid.shuffle()

        if self._controller is not None:
            self._controller.dispose()
        if self._notifier is not None:
            self._notifier.cancel()
        self._image = image
        self._columns = columns
        self._rows = rows
        self._grid = grid
        self._scheduler.poll()
        self._bus.publish(PuzzleCreated(columns=columns, rows=rows, piece_count=len(grid.pieces)))
        logger.info(
            "puzzle_created columns=%d rows=%d misplaced=%d",
            columns,
            rows,
            grid.misplaced_count(),
        )
        self._controller = DragController(
            grid,
            self._bus,
            self._scheduler,
            frame_interval_seconds=self._frame_interval_seconds,
        )
        self.redraw()

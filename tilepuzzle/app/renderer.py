"""Board drawing onto a drawing surface."""

from __future__ import annotations

from tilepuzzle.app.drag_controller import DragSession
from tilepuzzle.app.ports import DrawingSurface, ImageSource
from tilepuzzle.core.grid import PieceGrid
from tilepuzzle.core.models import Rect


class BoardRenderer:
    """Redraws the whole board; the held piece is drawn last, on top."""

    def __init__(self, surface: DrawingSurface) -> None:
        self._surface = surface
        self.frames_drawn = 0

    def draw(self, image: ImageSource, grid: PieceGrid, drag: DragSession | None = None) -> None:
        config = grid.config
        if config is None:
            return
        self._surface.clear(Rect(0.0, 0.0, config.image_width, config.image_height))
        held = drag.piece_index if drag is not None else None
        for piece in grid.pieces:
            if piece.index == held:
                continue
            self._surface.blit(image, piece.source_region, piece.current_rect)
        if drag is not None:
            piece = grid.piece(drag.piece_index)
            dest = Rect(drag.in_flight.x, drag.in_flight.y, piece.width, piece.height)
            self._surface.blit(image, piece.source_region, dest)
        self.frames_drawn += 1

"""Drag gesture states."""

from enum import Enum, auto


class DragState(Enum):
    """Pointer gesture states; LOCKED is terminal for a puzzle instance."""

    IDLE = auto()
    DRAGGING = auto()
    LOCKED = auto()

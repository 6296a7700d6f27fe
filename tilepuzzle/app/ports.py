"""Collaborator contracts consumed by the puzzle app."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from tilepuzzle.core.models import Rect
from tilepuzzle.core.ports import ImageSource

NotificationSink = Callable[[str], None]


class DrawingSurface(Protocol):
    """2D surface in the same pixel space as pointer events."""

    def clear(self, rect: Rect) -> None:
        """Reset a region to the background."""

    def blit(self, image: ImageSource, source: Rect, dest: Rect) -> None:
        """Copy ``source`` of ``image`` into ``dest`` on the surface."""


__all__ = ["DrawingSurface", "ImageSource", "NotificationSink"]

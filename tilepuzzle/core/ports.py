"""Inputs the core consumes from outside collaborators."""

from __future__ import annotations

from typing import Protocol


class ImageSource(Protocol):
    """Decoded image ready to be cut into pieces."""

    @property
    def width(self) -> float:
        """Pixel width."""

    @property
    def height(self) -> float:
        """Pixel height."""

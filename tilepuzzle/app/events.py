"""Puzzle session event model."""

from __future__ import annotations

from dataclasses import dataclass

from tilepuzzle.core.models import CellCoord


@dataclass(frozen=True, slots=True)
class PuzzleCreated:
    """A fresh puzzle was cut and shuffled."""

    columns: int
    rows: int
    piece_count: int


@dataclass(frozen=True, slots=True)
class RedrawRequested:
    """Board appearance changed."""


@dataclass(frozen=True, slots=True)
class DragStarted:
    """A piece was picked up."""

    piece_index: int


@dataclass(frozen=True, slots=True)
class PiecesSwapped:
    """A drop exchanged two pieces."""

    dragged_index: int
    displaced_index: int
    target: CellCoord


@dataclass(frozen=True, slots=True)
class DropRejected:
    """A drop found no other piece; the dragged piece snapped back."""

    piece_index: int


@dataclass(frozen=True, slots=True)
class PuzzleSolved:
    """Every piece is home; input is locked."""

    elapsed_seconds: float

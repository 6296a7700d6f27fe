from __future__ import annotations

import random
from dataclasses import dataclass, field

from tilepuzzle.core.grid import PieceGrid
from tilepuzzle.core.models import CellCoord, Rect


@dataclass(frozen=True, slots=True)
class SizedImage:
    width: float
    height: float


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class RecordingSurface:
    calls: list[tuple[str, tuple]] = field(default_factory=list)

    def clear(self, rect: Rect) -> None:
        self.calls.append(("clear", (rect,)))

    def blit(self, image: object, source: Rect, dest: Rect) -> None:
        self.calls.append(("blit", (image, source, dest)))

    def blits(self) -> list[tuple[Rect, Rect]]:
        return [(args[1], args[2]) for name, args in self.calls if name == "blit"]

    def reset(self) -> None:
        self.calls.clear()


def arrange(grid: PieceGrid, cells: dict[int, CellCoord]) -> None:
    """Commit pieces to cells by swapping; ``cells`` must describe a permutation."""
    for index, cell in cells.items():
        if grid.piece(index).cell != cell:
            grid.attempt_swap(index, cell)


def make_two_by_two(width: float = 200.0, height: float = 100.0) -> PieceGrid:
    """2x2 grid with pieces 1 and 2 exchanged."""
    grid = PieceGrid()
    grid.initialize(SizedImage(width, height), 2, 2)
    grid.attempt_swap(1, CellCoord(0, 1))
    return grid


class FirstIndexRandom(random.Random):
    """Fisher-Yates always picks index 0, so piece ``i`` lands on cell ``i + 1``."""

    def randrange(self, *args, **kwargs) -> int:
        return 0

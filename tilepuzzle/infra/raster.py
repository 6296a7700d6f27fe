"""Numpy-backed image source and drawing surface, with Pillow file IO."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageColor

from tilepuzzle.core.models import Rect


class ArrayImage:
    """Decoded RGB image held as a ``(height, width, 3)`` uint8 array."""

    def __init__(self, pixels: np.ndarray) -> None:
        self._pixels = _as_rgb(pixels)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])


class ArraySurface:
    """RGB framebuffer implementing the drawing surface contract.

    Fractional rectangles map to pixels by rounding each edge half-up, so
    adjacent pieces share edges without gaps or overlap.
    """

    def __init__(self, width: int, height: int, *, background: str = "#ffffff") -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface dimensions must be > 0")
        self._background = np.array(ImageColor.getrgb(background)[:3], dtype=np.uint8)
        self._pixels = np.empty((height, width, 3), dtype=np.uint8)
        self._pixels[:, :] = self._background
        self.blit_count = 0

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def clear(self, rect: Rect) -> None:
        y0, y1 = _clip(_edge(rect.y), _edge(rect.y + rect.h), self.height)
        x0, x1 = _clip(_edge(rect.x), _edge(rect.x + rect.w), self.width)
        if y0 < y1 and x0 < x1:
            self._pixels[y0:y1, x0:x1] = self._background

    def blit(self, image: ArrayImage, source: Rect, dest: Rect) -> None:
        src = image.pixels
        sy0, sy1 = _clip(_edge(source.y), _edge(source.y + source.h), src.shape[0])
        sx0, sx1 = _clip(_edge(source.x), _edge(source.x + source.w), src.shape[1])
        dy0, dy1 = _edge(dest.y), _edge(dest.y + dest.h)
        dx0, dx1 = _edge(dest.x), _edge(dest.x + dest.w)
        if sy0 >= sy1 or sx0 >= sx1 or dy0 >= dy1 or dx0 >= dx1:
            return

        patch = src[sy0:sy1, sx0:sx1]
        dest_h, dest_w = dy1 - dy0, dx1 - dx0
        if patch.shape[:2] != (dest_h, dest_w):
            rows = np.arange(dest_h) * patch.shape[0] // dest_h
            cols = np.arange(dest_w) * patch.shape[1] // dest_w
            patch = patch[rows][:, cols]

        cy0, cy1 = _clip(dy0, dy1, self.height)
        cx0, cx1 = _clip(dx0, dx1, self.width)
        if cy0 >= cy1 or cx0 >= cx1:
            return
        self._pixels[cy0:cy1, cx0:cx1] = patch[cy0 - dy0 : cy1 - dy0, cx0 - dx0 : cx1 - dx0]
        self.blit_count += 1


def load_image(path: str | Path) -> ArrayImage:
    """Decode an image file into an ``ArrayImage``."""
    with Image.open(path) as img:
        return ArrayImage(np.asarray(img.convert("RGB")))


def save_surface(surface: ArraySurface, path: str | Path) -> Path:
    """Write the surface as an image file; format follows the suffix."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(surface.pixels).save(target)
    return target


def _as_rgb(pixels: np.ndarray) -> np.ndarray:
    array = np.asarray(pixels)
    if array.ndim == 2:
        array = np.stack([array, array, array], axis=-1)
    if array.ndim != 3 or array.shape[2] < 3:
        raise ValueError(f"expected an HxW or HxWxC image array, got shape {array.shape}")
    return np.ascontiguousarray(array[:, :, :3], dtype=np.uint8)


def _edge(value: float) -> int:
    return math.floor(value + 0.5)


def _clip(start: int, stop: int, limit: int) -> tuple[int, int]:
    return max(0, start), min(limit, stop)

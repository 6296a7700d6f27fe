"""Command-line entry point: cut an image into a shuffled puzzle board."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Sequence
from pathlib import Path

from tilepuzzle.app.session import PuzzleSession
from tilepuzzle.core.errors import InvalidConfigurationError
from tilepuzzle.core.models import Rect
from tilepuzzle.infra.config import PuzzleSettings, load_default_env_files, load_puzzle_settings
from tilepuzzle.infra.logging import setup_logging
from tilepuzzle.infra.raster import ArraySurface, load_image, save_surface
from tilepuzzle.runtime.logging import shutdown_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilepuzzle",
        description="Cut an image into a shuffled tile puzzle and render the board.",
    )
    parser.add_argument("image", type=Path, help="Source image file.")
    parser.add_argument("--columns", type=int, default=None, help="Pieces per row.")
    parser.add_argument("--rows", type=int, default=None, help="Pieces per column.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Board image to write (default: <image>_puzzle.png).",
    )
    parser.add_argument(
        "--autosolve",
        action="store_true",
        help="Drag every piece home through the pointer pipeline before writing.",
    )
    return parser


def autosolve(session: PuzzleSession) -> int:
    """Drag each misplaced piece onto its home cell; return drags performed."""
    grid = session.grid
    if grid is None:
        return 0
    drags = 0
    for piece in grid.pieces:
        if session.is_solved:
            break
        if piece.in_place:
            continue
        start = _center(piece.current_rect)
        end = _center(piece.source_region)
        session.on_pointer_down(*start)
        session.on_pointer_move(*end)
        session.on_pointer_up(*end)
        drags += 1
    return drags


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tilepuzzle CLI."""
    load_default_env_files()
    settings = load_puzzle_settings()
    args = build_parser().parse_args(argv)
    setup_logging()
    try:
        return _run(args, settings)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace, settings: PuzzleSettings) -> int:
    columns = args.columns if args.columns is not None else settings.columns
    rows = args.rows if args.rows is not None else settings.rows
    seed = args.seed if args.seed is not None else settings.seed

    try:
        image = load_image(args.image)
    except OSError:
        logger.exception("image_load_failed path=%s", args.image)
        return 1

    surface = ArraySurface(image.width, image.height, background=settings.background)
    session = PuzzleSession(
        surface=surface,
        notification_sink=print,
        rng=random.Random(seed),
        columns=columns,
        rows=rows,
        frame_interval_seconds=settings.frame_interval_seconds,
        notify_delay_seconds=settings.notify_delay_seconds,
    )
    try:
        session.load_image(image)
    except InvalidConfigurationError as exc:
        logger.error("puzzle_config_invalid reason=%s", exc)
        return 1

    if args.autosolve:
        drags = autosolve(session)
        session.scheduler.advance(settings.notify_delay_seconds)
        logger.info("autosolve_finished drags=%d solved=%s", drags, session.is_solved)

    output = args.output or args.image.with_name(f"{args.image.stem}_puzzle.png")
    try:
        written = save_surface(surface, output)
    except (OSError, ValueError):
        logger.exception("board_write_failed path=%s", output)
        return 1
    logger.info(
        "board_written path=%s columns=%d rows=%d seed=%s",
        written,
        columns,
        rows,
        seed,
    )
    return 0


def _center(rect: Rect) -> tuple[float, float]:
    return rect.x + rect.w / 2.0, rect.y + rect.h / 2.0


if __name__ == "__main__":
    sys.exit(main())

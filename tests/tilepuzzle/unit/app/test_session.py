from __future__ import annotations

import pytest

from tests.tilepuzzle.helpers import SizedImage, arrange
from tilepuzzle.app.events import PuzzleCreated
from tilepuzzle.app.state_machine import DragState
from tilepuzzle.core.errors import InvalidConfigurationError, PuzzleNotReadyError
from tilepuzzle.core.models import CellCoord


def _solve_all_but_first_pair(session) -> None:
    grid = session.grid
    arrange(
        grid,
        {
            1: CellCoord(0, 1),
            2: CellCoord(0, 0),
            **{piece.index: piece.home for piece in grid.pieces if piece.index > 2},
        },
    )


def test_session_without_image_ignores_pointer_input(session_factory) -> None:
    session, _ = session_factory()
    assert session.grid is None
    assert session.state is None
    assert not session.on_pointer_down(10, 10)
    assert not session.on_pointer_move(10, 10)
    assert not session.on_pointer_up(10, 10)
    assert not session.is_solved


def test_load_image_builds_shuffled_puzzle_and_draws(session_factory, image, recording_surface) -> None:
    session, _ = session_factory(columns=3, rows=3)
    created: list[PuzzleCreated] = []
    session.bus.subscribe(PuzzleCreated, created.append)

    session.load_image(image)

    assert session.grid is not None
    assert len(session.grid.pieces) == 9
    assert session.state is DragState.IDLE
    assert created == [PuzzleCreated(columns=3, rows=3, piece_count=9)]
    assert len(recording_surface.blits()) == 9


def test_reconfigure_requires_loaded_image(session_factory) -> None:
    session, _ = session_factory()
    with pytest.raises(PuzzleNotReadyError):
        session.reconfigure(4, 4)


def test_reconfigure_recuts_from_original_image(session_factory, image) -> None:
    session, _ = session_factory()
    session.load_image(image)
    first_grid = session.grid

    session.reconfigure(4, 2)

    assert session.grid is not first_grid
    assert session.columns == 4 and session.rows == 2
    config = session.grid.config
    assert config is not None
    assert config.piece_width == 75.0 and config.piece_height == 150.0
    assert [piece.index for piece in session.grid.pieces] == list(range(1, 9))


def test_invalid_reconfigure_keeps_previous_puzzle(session_factory, image) -> None:
    session, _ = session_factory()
    session.load_image(image)
    grid = session.grid
    cells = [piece.cell for piece in grid.pieces]

    with pytest.raises(InvalidConfigurationError):
        session.reconfigure(0, 3)

    assert session.grid is grid
    assert [piece.cell for piece in grid.pieces] == cells
    assert session.columns == 3 and session.rows == 3


def test_invalid_image_is_rejected(session_factory) -> None:
    session, _ = session_factory()
    with pytest.raises(InvalidConfigurationError):
        session.load_image(SizedImage(0, 100))
    assert session.grid is None
    assert session.image is None


def test_drag_to_completion_locks_and_notifies_after_delay(
    session_factory, image, fake_clock
) -> None:
    session, messages = session_factory(columns=3, rows=3)
    session.load_image(image)
    _solve_all_but_first_pair(session)
    assert not session.is_solved

    fake_clock.advance(12.25)
    assert session.on_pointer_down(150, 50)
    assert session.on_pointer_move(60, 40)
    assert session.on_pointer_up(60, 40)

    assert session.is_solved
    assert session.state is DragState.LOCKED
    assert messages == []

    fake_clock.advance(0.5)
    session.tick()
    assert messages == ["Puzzle complete! Time: 12.25 s"]

    assert not session.on_pointer_down(50, 50)


def test_reconfigure_after_completion_starts_fresh_puzzle(session_factory, image) -> None:
    session, _ = session_factory(columns=3, rows=3)
    session.load_image(image)
    _solve_all_but_first_pair(session)
    session.on_pointer_down(150, 50)
    session.on_pointer_move(60, 40)
    session.on_pointer_up(60, 40)
    assert session.state is DragState.LOCKED

    session.reconfigure(2, 3)

    assert session.state is DragState.IDLE
    assert not session.is_solved
    assert len(session.grid.pieces) == 6
    assert session.grid.piece(1).cell == CellCoord(0, 1)
    assert session.grid.piece(6).cell == CellCoord(0, 0)


def test_pending_notification_is_cancelled_by_reconfigure(session_factory, image, fake_clock) -> None:
    session, messages = session_factory(columns=3, rows=3)
    session.load_image(image)
    _solve_all_but_first_pair(session)
    session.on_pointer_down(150, 50)
    session.on_pointer_move(60, 40)
    session.on_pointer_up(60, 40)

    session.reconfigure(3, 3)
    fake_clock.advance(1.0)
    session.tick()

    assert messages == []
    assert session.state is DragState.IDLE


def test_redraw_during_drag_draws_held_piece_last(session_factory, image, recording_surface) -> None:
    session, _ = session_factory(columns=3, rows=3)
    session.load_image(image)
    held = session.grid.piece(9)
    assert held.cell == CellCoord(0, 0)
    recording_surface.reset()

    session.on_pointer_down(50, 50)
    session.on_pointer_move(70, 80)

    assert recording_surface.calls[0][0] == "clear"
    blits = recording_surface.blits()
    assert len(blits) == 9
    source, dest = blits[-1]
    assert source == held.source_region
    assert (dest.x, dest.y) == (20.0, 30.0)
    assert all(source != held.source_region for source, _ in blits[:-1])


def test_single_piece_puzzle_is_solved_on_load(session_factory, fake_clock) -> None:
    session, messages = session_factory(columns=1, rows=1)
    session.load_image(SizedImage(64, 48))

    assert session.is_solved
    assert session.state is DragState.LOCKED
    fake_clock.advance(0.5)
    session.tick()
    assert messages == ["Puzzle complete! Time: 0.00 s"]

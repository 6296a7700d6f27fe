from tilepuzzle.core.models import BoardConfig, CellCoord, Piece, Point, Rect


def test_point_arithmetic() -> None:
    assert Point(5, 7) - Point(2, 3) == Point(3, 4)
    assert Point(1.5, 2) + Point(0.5, 1) == Point(2.0, 3.0)


def test_rect_contains_includes_edges() -> None:
    rect = Rect(10, 20, 30, 40)
    assert rect.contains(10, 20)
    assert rect.contains(40, 60)
    assert not rect.contains(40.1, 30)
    assert not rect.contains(9.9, 30)


def test_board_config_bounds_and_origin() -> None:
    config = BoardConfig(
        columns=3,
        rows=2,
        piece_width=10.5,
        piece_height=20.0,
        image_width=31.5,
        image_height=40.0,
    )
    assert config.cell_count == 6
    assert config.in_bounds(CellCoord(1, 2))
    assert not config.in_bounds(CellCoord(2, 0))
    assert not config.in_bounds(CellCoord(0, -1))
    assert config.cell_origin(CellCoord(1, 2)) == Point(21.0, 20.0)


def test_piece_positions_follow_cells() -> None:
    piece = Piece(index=5, home=CellCoord(1, 1), cell=CellCoord(0, 2), width=10.0, height=5.0)
    assert piece.canonical_position == Point(10.0, 5.0)
    assert piece.current_position == Point(20.0, 0.0)
    assert piece.source_region == Rect(10.0, 5.0, 10.0, 5.0)
    assert piece.current_rect == Rect(20.0, 0.0, 10.0, 5.0)
    assert not piece.in_place
    piece.cell = CellCoord(1, 1)
    assert piece.in_place

from __future__ import annotations

import random

from blockfall.block import Block, BlockColor
from blockfall.game_state import GameSession
from blockfall.shape import Orientation, Shape, ShapeType


def fill_row(session: GameSession, row: int, skip: tuple[int, ...] = ()) -> list[Block]:
    blocks = []
    for column in range(session.grid.columns):
        if column in skip:
            continue
        block = Block(column, row, BlockColor.RED)
        session.grid.set(column, row, block)
        blocks.append(block)
    return blocks


def place(session: GameSession, column: int, row: int, color: BlockColor) -> Block:
    block = Block(column, row, color)
    session.grid.set(column, row, block)
    return block


def session_with(shape: Shape) -> GameSession:
    session = GameSession(rng=random.Random(0))
    session.begin_game()
    session.falling_shape = shape
    return session


def lock(session: GameSession):
    for _ in range(session.grid.rows + 1):
        result = session.tick()
        if result.locked:
            return result
    raise AssertionError("shape never locked")


def test_horizontal_line_completes_bottom_row() -> None:
    shape = Shape(ShapeType.LINE, 4, 0, BlockColor.BLUE, Orientation.NINETY)
    session = session_with(shape)
    prefilled = fill_row(session, 19, skip=(3, 4, 5, 6))
    above = place(session, 0, 18, BlockColor.YELLOW)

    session.drop_shape()
    result = lock(session)

    assert result.lines_removed == 1
    assert len(result.removed_blocks) == 10
    assert set(result.removed_blocks) == set(prefilled) | set(shape.blocks)

    assert session.grid.get(0, 19) is above
    assert (above.column, above.row, above.color) == (0, 19, BlockColor.YELLOW)
    assert session.grid.get(0, 18) is None
    assert result.fallen_blocks == [[above]]
    assert sum(1 for _ in session.grid.blocks()) == 1


def test_vertical_line_fills_gap_and_column_settles() -> None:
    fill_session = session_with(
        Shape(ShapeType.LINE, 3, 0, BlockColor.TEAL, Orientation.ZERO)
    )
    fill_row(fill_session, 19, skip=(3,))
    lower = place(fill_session, 0, 18, BlockColor.YELLOW)
    upper = place(fill_session, 0, 17, BlockColor.PURPLE)

    result = lock(fill_session)
    grid = fill_session.grid

    assert result.lines_removed == 1
    assert {block.row for block in result.removed_blocks} == {19}
    assert len(result.removed_blocks) == 10

    assert [grid.get(0, row) for row in (18, 19)] == [upper, lower]
    assert grid.get(0, 17) is None
    column_three = [grid.get(3, row) for row in range(20)]
    assert [row for row, b in enumerate(column_three) if b is not None] == [17, 18, 19]
    assert all(b.color is BlockColor.TEAL for b in column_three if b is not None)
    for column in (1, 2, 4, 5, 6, 7, 8, 9):
        assert all(grid.get(column, row) is None for row in range(20))

    assert result.fallen_blocks[0] == [lower, upper]
    assert [b.row for b in result.fallen_blocks[1]] == [19, 18, 17]


def test_non_adjacent_rows_compact_each_column() -> None:
    session = GameSession()
    fill_row(session, 19)
    fill_row(session, 17)
    resting = place(session, 2, 18, BlockColor.BLUE)
    floating = place(session, 5, 16, BlockColor.ORANGE)

    removed, fallen = session.remove_completed_lines()

    assert [line[0].row for line in removed] == [19, 17]
    assert session.grid.get(2, 19) is resting
    # No blocks remain below it in column 5, so it drops all the way.
    assert session.grid.get(5, 19) is floating
    assert fallen == [[resting], [floating]]
    assert session.grid.complete_rows() == []


def test_blocks_below_cleared_row_stay_put() -> None:
    session = GameSession()
    fill_row(session, 18)
    bottom = place(session, 1, 19, BlockColor.BLUE)
    above = place(session, 4, 17, BlockColor.RED)

    removed, fallen = session.remove_completed_lines()

    assert len(removed) == 1
    assert session.grid.get(1, 19) is bottom and bottom.row == 19
    assert session.grid.get(4, 19) is above
    assert fallen == [[above]]


def test_no_complete_rows_leaves_grid_alone() -> None:
    session = GameSession()
    blocks = fill_row(session, 19, skip=(0,))
    removed, fallen = session.remove_completed_lines()
    assert removed == [] and fallen == []
    assert list(session.grid.blocks()) == blocks


def test_four_rows_cleared_at_once() -> None:
    shape = Shape(ShapeType.LINE, 9, 0, BlockColor.TEAL, Orientation.ZERO)
    session = session_with(shape)
    for row in range(16, 20):
        fill_row(session, row, skip=(9,))
    survivor = place(session, 0, 15, BlockColor.ORANGE)

    result = lock(session)

    assert result.lines_removed == 4
    assert [line[0].row for line in result.removed_lines] == [19, 18, 17, 16]
    assert session.grid.get(0, 19) is survivor
    assert sum(1 for _ in session.grid.blocks()) == 1

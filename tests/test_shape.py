from __future__ import annotations

import random

import pytest

from blockfall.block import BlockColor
from blockfall.shape import (
    SHAPE_VARIANTS,
    Orientation,
    Shape,
    ShapeType,
    random_shape,
    random_shape_type,
)


def positions(shape: Shape) -> list[tuple[int, int]]:
    return [(block.column, block.row) for block in shape.blocks]


def expected_positions(shape: Shape, orientation: Orientation) -> list[tuple[int, int]]:
    offsets = SHAPE_VARIANTS[shape.shape_type].offsets_for(orientation)
    return [(shape.column + dc, shape.row + dr) for dc, dr in offsets]


@pytest.mark.parametrize("clockwise", [True, False])
def test_four_rotations_return_to_start(clockwise: bool) -> None:
    for start in Orientation:
        orientation = start
        for _ in range(4):
            orientation = orientation.rotate(clockwise)
        assert orientation is start


def test_rotation_wraps_and_reverses() -> None:
    assert Orientation.TWO_SEVENTY.rotate(clockwise=True) is Orientation.ZERO
    assert Orientation.ZERO.rotate(clockwise=False) is Orientation.TWO_SEVENTY
    for orientation in Orientation:
        assert orientation.rotate(True).rotate(False) is orientation
    assert [o.degrees for o in Orientation] == [0, 90, 180, 270]


def test_catalogue_has_seven_complete_variants() -> None:
    assert set(SHAPE_VARIANTS) == set(ShapeType)
    for variant in SHAPE_VARIANTS.values():
        for orientation in Orientation:
            offsets = variant.offsets_for(orientation)
            assert len(offsets) == 4
            assert len(set(offsets)) == 4
            bottom = variant.bottom_cell_indices_for(orientation)
            assert bottom and set(bottom) <= {0, 1, 2, 3}


def test_bottom_indices_are_cells_without_a_shape_cell_below() -> None:
    for variant in SHAPE_VARIANTS.values():
        for orientation in Orientation:
            offsets = variant.offsets_for(orientation)
            occupied = set(offsets)
            expected = tuple(
                i for i, (dc, dr) in enumerate(offsets) if (dc, dr + 1) not in occupied
            )
            assert variant.bottom_cell_indices_for(orientation) == expected


def test_square_uses_one_table_for_every_orientation() -> None:
    square = SHAPE_VARIANTS[ShapeType.SQUARE]
    tables = {square.offsets_for(o) for o in Orientation}
    assert tables == {((0, 0), (1, 0), (0, 1), (1, 1))}


def test_missing_orientation_yields_empty_tables() -> None:
    variant = SHAPE_VARIANTS[ShapeType.T]
    assert variant.offsets_for(7) == ()  # type: ignore[arg-type]
    assert variant.bottom_cell_indices_for(7) == ()  # type: ignore[arg-type]


@pytest.mark.parametrize("shape_type", list(ShapeType))
def test_construction_follows_offset_table(shape_type: ShapeType) -> None:
    for orientation in Orientation:
        shape = Shape(shape_type, 5, 7, BlockColor.PURPLE, orientation)
        assert len(shape.blocks) == 4
        assert positions(shape) == expected_positions(shape, orientation)
        assert all(block.color is BlockColor.PURPLE for block in shape.blocks)


@pytest.mark.parametrize("shape_type", list(ShapeType))
def test_recompute_after_rotation_matches_table(shape_type: ShapeType) -> None:
    shape = Shape(shape_type, 4, 6, BlockColor.RED)
    blocks = list(shape.blocks)
    for clockwise in (True, True, False, True, True, True):
        orientation = shape.rotate(clockwise)
        shape.recompute_blocks(orientation)
        assert positions(shape) == expected_positions(shape, orientation)
    assert all(a is b for a, b in zip(shape.blocks, blocks))


def test_rotate_does_not_move_blocks() -> None:
    shape = Shape(ShapeType.T, 4, 4, BlockColor.BLUE)
    before = positions(shape)
    assert shape.rotate() is Orientation.NINETY
    assert positions(shape) == before


def test_shift_by_moves_anchor_and_blocks_in_lock_step() -> None:
    shape = Shape(ShapeType.L, 3, 2, BlockColor.TEAL, Orientation.ONE_EIGHTY)
    before = positions(shape)
    shape.shift_by(2, 5)
    assert shape.anchor == (5, 7)
    assert positions(shape) == [(c + 2, r + 5) for c, r in before]

    shape.lower_by_one_row()
    shape.shift_left_by_one_column()
    shape.raise_by_one_row()
    shape.shift_right_by_one_column()
    assert shape.anchor == (5, 7)


def test_move_to_recomputes_from_current_orientation() -> None:
    shape = Shape(ShapeType.J, 12, 1, BlockColor.YELLOW, Orientation.NINETY)
    shape.move_to(4, 0)
    assert shape.anchor == (4, 0)
    assert positions(shape) == expected_positions(shape, Orientation.NINETY)


def test_move_to_resynchronises_after_unapplied_rotation() -> None:
    shape = Shape(ShapeType.S, 12, 1, BlockColor.RED, Orientation.ZERO)
    shape.rotate()
    shape.move_to(4, 0)
    assert positions(shape) == expected_positions(shape, Orientation.NINETY)


def test_bottom_blocks_follow_orientation() -> None:
    shape = Shape(ShapeType.T, 0, 0, BlockColor.RED, Orientation.ZERO)
    assert shape.bottom_blocks == [shape.blocks[1], shape.blocks[2], shape.blocks[3]]

    shape = Shape(ShapeType.LINE, 0, 0, BlockColor.RED, Orientation.ZERO)
    assert shape.bottom_blocks == [shape.blocks[3]]
    assert shape.bottom_blocks[0].row == 3


def test_shapes_at_same_anchor_are_equal() -> None:
    a = Shape(ShapeType.T, 4, 0, BlockColor.RED, Orientation.ZERO)
    b = Shape(ShapeType.LINE, 4, 0, BlockColor.BLUE, Orientation.TWO_SEVENTY)
    c = Shape(ShapeType.T, 5, 0, BlockColor.RED, Orientation.ZERO)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != c


def test_create_is_deterministic_with_seeded_rng() -> None:
    first = Shape.create(ShapeType.Z, 2, 3, random.Random(11))
    second = Shape.create(ShapeType.Z, 2, 3, random.Random(11))
    assert (first.color, first.orientation) == (second.color, second.orientation)
    assert positions(first) == positions(second)


def test_random_shape_covers_every_type() -> None:
    rng = random.Random(3)
    seen = {random_shape_type(rng) for _ in range(300)}
    assert seen == set(ShapeType)

    shape = random_shape(12, 1, random.Random(0))
    assert shape.anchor == (12, 1)
    assert positions(shape) == expected_positions(shape, shape.orientation)


def test_description_lists_blocks() -> None:
    shape = Shape(ShapeType.SQUARE, 0, 0, BlockColor.RED)
    assert str(shape) == "red square facing 0: red: [0, 0], red: [1, 0], red: [0, 1], red: [1, 1]"

"""Shape catalogue and the falling shape itself.

Each of the seven shape types is described by a static table: for every
orientation, the four ``(column_offset, row_offset)`` pairs relative to the
shape's anchor and the indices of the blocks that form its underside.  Only the
underside needs checking when deciding whether a shape has landed.

A :class:`Shape` never stores block positions independently of its anchor and
orientation.  Positions are either recomputed from the table
(:meth:`Shape.recompute_blocks`, :meth:`Shape.move_to`) or translated together
with the anchor (:meth:`Shape.shift_by`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple
import random

from .block import Block, BlockColor

Offsets = Tuple[Tuple[int, int], ...]  # (column_offset, row_offset)


class Orientation(int, Enum):
    """The four rotational states of a shape."""

    ZERO = 0
    NINETY = 1
    ONE_EIGHTY = 2
    TWO_SEVENTY = 3

    @property
    def degrees(self) -> int:
        return self.value * 90

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "Orientation":
        return (rng or random).choice(list(cls))

    def rotate(self, clockwise: bool = True) -> "Orientation":
        """Return the orientation one step further in the given direction."""

        step = 1 if clockwise else -1
        return Orientation((self.value + step) % len(Orientation))

    def __str__(self) -> str:
        return str(self.degrees)


class ShapeType(str, Enum):
    """Enumeration of the seven shape variants."""

    SQUARE = "square"
    LINE = "line"
    T = "t"
    L = "l"
    J = "j"
    S = "s"
    Z = "z"


@dataclass(frozen=True)
class ShapeVariant:
    """Static offset and underside tables for one shape type."""

    shape_type: ShapeType
    positions: Mapping[Orientation, Offsets]
    bottom_indices: Mapping[Orientation, Tuple[int, ...]]

    def offsets_for(self, orientation: Orientation) -> Offsets:
        """Return the four block offsets for ``orientation``.

        An orientation without a table entry yields an empty tuple.
        """

        return self.positions.get(orientation, ())

    def bottom_cell_indices_for(self, orientation: Orientation) -> Tuple[int, ...]:
        return self.bottom_indices.get(orientation, ())


def _variant(
    shape_type: ShapeType,
    tables: Tuple[Tuple[Offsets, Tuple[int, ...]], ...],
) -> ShapeVariant:
    """Build a variant from tables listed in orientation order.

    Shorter tuples repeat: one entry covers all four orientations and two
    entries alternate between the upright and sideways forms.
    """

    positions: Dict[Orientation, Offsets] = {}
    bottoms: Dict[Orientation, Tuple[int, ...]] = {}
    for orientation in Orientation:
        offsets, bottom = tables[orientation.value % len(tables)]
        positions[orientation] = offsets
        bottoms[orientation] = bottom
    return ShapeVariant(shape_type, positions, bottoms)


SHAPE_VARIANTS: Dict[ShapeType, ShapeVariant] = {
    ShapeType.SQUARE: _variant(
        ShapeType.SQUARE,
        (
            (((0, 0), (1, 0), (0, 1), (1, 1)), (2, 3)),
        ),
    ),
    ShapeType.LINE: _variant(
        ShapeType.LINE,
        (
            (((0, 0), (0, 1), (0, 2), (0, 3)), (3,)),
            (((-1, 0), (0, 0), (1, 0), (2, 0)), (0, 1, 2, 3)),
        ),
    ),
    ShapeType.T: _variant(
        ShapeType.T,
        (
            (((1, 0), (0, 1), (1, 1), (2, 1)), (1, 2, 3)),
            (((2, 1), (1, 0), (1, 1), (1, 2)), (0, 3)),
            (((1, 2), (0, 1), (1, 1), (2, 1)), (0, 1, 3)),
            (((0, 1), (1, 0), (1, 1), (1, 2)), (0, 3)),
        ),
    ),
    ShapeType.L: _variant(
        ShapeType.L,
        (
            (((0, 0), (0, 1), (0, 2), (1, 2)), (2, 3)),
            (((1, 1), (0, 1), (-1, 1), (-1, 2)), (0, 1, 3)),
            (((0, 2), (0, 1), (0, 0), (-1, 0)), (0, 3)),
            (((-1, 1), (0, 1), (1, 1), (1, 0)), (0, 1, 2)),
        ),
    ),
    ShapeType.J: _variant(
        ShapeType.J,
        (
            (((1, 0), (1, 1), (1, 2), (0, 2)), (2, 3)),
            (((2, 1), (1, 1), (0, 1), (0, 0)), (0, 1, 2)),
            (((0, 2), (0, 1), (0, 0), (1, 0)), (0, 3)),
            (((0, 0), (1, 0), (2, 0), (2, 1)), (0, 1, 3)),
        ),
    ),
    ShapeType.S: _variant(
        ShapeType.S,
        (
            (((0, 0), (0, 1), (1, 1), (1, 2)), (1, 3)),
            (((2, 0), (1, 0), (1, 1), (0, 1)), (0, 2, 3)),
        ),
    ),
    ShapeType.Z: _variant(
        ShapeType.Z,
        (
            (((1, 0), (1, 1), (0, 1), (0, 2)), (1, 3)),
            (((-1, 0), (0, 0), (0, 1), (1, 1)), (0, 2, 3)),
        ),
    ),
}


def random_shape_type(rng: Optional[random.Random] = None) -> ShapeType:
    """Return one of the seven shape types, uniformly distributed."""

    return (rng or random).choice(list(ShapeType))


class Shape:
    """An anchored, oriented arrangement of four blocks.

    Two shapes are equal when their anchors coincide, whatever their type,
    colour or orientation.  Keep this in mind before putting shapes in sets or
    using them as dictionary keys.
    """

    def __init__(
        self,
        shape_type: ShapeType,
        column: int,
        row: int,
        color: BlockColor,
        orientation: Orientation = Orientation.ZERO,
    ) -> None:
        self.shape_type = shape_type
        self.column = column
        self.row = row
        self.color = color
        self.orientation = orientation
        self.blocks: List[Block] = [
            Block(column + dc, row + dr, color)
            for dc, dr in self.variant.offsets_for(orientation)
        ]

    @classmethod
    def create(
        cls,
        shape_type: ShapeType,
        column: int,
        row: int,
        rng: Optional[random.Random] = None,
    ) -> "Shape":
        """Create a shape with a random colour and orientation."""

        color = BlockColor.random(rng)
        orientation = Orientation.random(rng)
        return cls(shape_type, column, row, color, orientation)

    @property
    def variant(self) -> ShapeVariant:
        return SHAPE_VARIANTS[self.shape_type]

    @property
    def anchor(self) -> Tuple[int, int]:
        """Return ``(column, row)`` of the anchor."""

        return (self.column, self.row)

    @property
    def bottom_blocks(self) -> List[Block]:
        """Blocks whose downward neighbour decides whether the shape landed."""

        indices = self.variant.bottom_cell_indices_for(self.orientation)
        return [self.blocks[i] for i in indices]

    def recompute_blocks(self, orientation: Orientation) -> None:
        """Reposition every block from the table for ``orientation``.

        The shape's own ``orientation`` is left untouched so callers can try a
        rotation and roll it back.
        """

        for block, (dc, dr) in zip(self.blocks, self.variant.offsets_for(orientation)):
            block.column = self.column + dc
            block.row = self.row + dr

    def rotate(self, clockwise: bool = True) -> Orientation:
        """Advance the orientation by one step and return it.

        Block positions are not updated; call :meth:`recompute_blocks` or
        :meth:`move_to` afterwards.
        """

        self.orientation = self.orientation.rotate(clockwise)
        return self.orientation

    def shift_by(self, columns: int, rows: int) -> None:
        """Translate the anchor and every block by the given offsets."""

        self.column += columns
        self.row += rows
        for block in self.blocks:
            block.column += columns
            block.row += rows

    def lower_by_one_row(self) -> None:
        self.shift_by(0, 1)

    def raise_by_one_row(self) -> None:
        self.shift_by(0, -1)

    def shift_left_by_one_column(self) -> None:
        self.shift_by(-1, 0)

    def shift_right_by_one_column(self) -> None:
        self.shift_by(1, 0)

    def move_to(self, column: int, row: int) -> None:
        """Place the anchor at ``(column, row)`` and rebuild block positions."""

        self.column = column
        self.row = row
        self.recompute_blocks(self.orientation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self.column == other.column and self.row == other.row

    def __hash__(self) -> int:
        return hash((self.column, self.row))

    def __str__(self) -> str:
        blocks = ", ".join(str(block) for block in self.blocks)
        return (
            f"{self.color.value} {self.shape_type.value} "
            f"facing {self.orientation.degrees}: {blocks}"
        )

    def __repr__(self) -> str:
        return (
            f"Shape({self.shape_type.name}, column={self.column}, row={self.row}, "
            f"color={self.color.name}, orientation={self.orientation.name})"
        )


def random_shape(
    column: int, row: int, rng: Optional[random.Random] = None
) -> Shape:
    """Return a shape of random type, colour and orientation at ``(column, row)``."""

    return Shape.create(random_shape_type(rng), column, row, rng)

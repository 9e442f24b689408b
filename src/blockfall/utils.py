"""Utility helpers shared by the game session and front-ends."""

from __future__ import annotations

from typing import List, Optional

from .grid import Grid
from .shape import Shape


def is_legal_placement(grid: Grid, shape: Shape) -> bool:
    """Return ``True`` if every block of ``shape`` sits on an empty in-bounds slot.

    Used to validate movement, rotation and spawning after the shape has been
    tentatively changed; callers undo the change when this returns ``False``.
    """

    for block in shape.blocks:
        if not grid.in_bounds(block.column, block.row):
            return False
        if grid.is_occupied(block.column, block.row):
            return False
    return True


def touches_ground(grid: Grid, shape: Shape) -> bool:
    """Return ``True`` if any bottom block rests on the floor or a settled block."""

    for block in shape.bottom_blocks:
        below = block.row + 1
        if below >= grid.rows:
            return True
        if grid.in_bounds(block.column, below) and grid.is_occupied(block.column, below):
            return True
    return False


def render_grid(grid: Grid, active: Optional[Shape] = None) -> List[List[str]]:
    """Return the grid as rows of single characters with ``active`` overlaid.

    Empty slots are ``"."``; occupied slots show the first letter of the
    block's colour, upper-cased for the falling shape.  The grid itself is not
    modified.
    """

    rows = [["."] * grid.columns for _ in range(grid.rows)]
    for block in grid.blocks():
        rows[block.row][block.column] = block.color.value[0]
    if active is not None:
        for block in active.blocks:
            if grid.in_bounds(block.column, block.row):
                rows[block.row][block.column] = block.color.value[0].upper()
    return rows


def format_grid(grid: Grid, active: Optional[Shape] = None) -> str:
    return "\n".join("".join(row) for row in render_grid(grid, active))

"""Single occupied grid positions and their colours."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional
import random


class BlockColor(str, Enum):
    """The six colours a block can have."""

    BLUE = "blue"
    ORANGE = "orange"
    PURPLE = "purple"
    RED = "red"
    TEAL = "teal"
    YELLOW = "yellow"

    @property
    def sprite_name(self) -> str:
        """Base file name of the texture used for this colour."""

        return self.value

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "BlockColor":
        return (rng or random).choice(list(cls))

    def __str__(self) -> str:
        return self.value


class Block:
    """A cell of the playfield.

    Blocks compare and hash by ``(column, row, color)``.  ``sprite`` is a slot
    for whatever handle a renderer wants to attach; the engine never reads it.
    """

    __slots__ = ("column", "row", "color", "sprite")

    def __init__(
        self, column: int, row: int, color: BlockColor, sprite: Any = None
    ) -> None:
        self.column = column
        self.row = row
        self.color = color
        self.sprite = sprite

    @property
    def sprite_name(self) -> str:
        return self.color.sprite_name

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(column, row)``."""

        return (self.column, self.row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return (
            self.column == other.column
            and self.row == other.row
            and self.color == other.color
        )

    def __hash__(self) -> int:
        return hash((self.column, self.row, self.color))

    def __str__(self) -> str:
        return f"{self.color.value}: [{self.column}, {self.row}]"

    def __repr__(self) -> str:
        return f"Block(column={self.column}, row={self.row}, color={self.color.name})"

"""Grid representation for the playfield."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .block import Block
from .config import DEFAULT_CONFIG, GameConfig


Occupancy = NDArray[np.uint8]


class Grid:
    """Fixed-size lookup table mapping ``(column, row)`` to an optional block.

    Slots are kept in a flat object array indexed ``row * columns + column``.
    The size never changes after construction.
    """

    def __init__(
        self,
        columns: int = DEFAULT_CONFIG.columns,
        rows: int = DEFAULT_CONFIG.rows,
    ) -> None:
        self.columns = columns
        self.rows = rows
        self._slots: NDArray[np.object_] = np.full(columns * rows, None, dtype=object)

    @classmethod
    def from_config(cls, config: GameConfig) -> "Grid":
        return cls(config.columns, config.rows)

    def _index(self, column: int, row: int) -> int:
        if 0 <= column < self.columns and 0 <= row < self.rows:
            return row * self.columns + column
        raise IndexError(f"Cell ({column}, {row}) out of bounds")

    def get(self, column: int, row: int) -> Optional[Block]:
        """Return the block at ``(column, row)`` or ``None``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        return self._slots[self._index(column, row)]

    def set(self, column: int, row: int, block: Optional[Block]) -> None:
        """Store ``block`` (or ``None`` to empty the slot) at ``(column, row)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        self._slots[self._index(column, row)] = block

    def __getitem__(self, key: Tuple[int, int]) -> Optional[Block]:
        column, row = key
        return self.get(column, row)

    def __setitem__(self, key: Tuple[int, int], block: Optional[Block]) -> None:
        column, row = key
        self.set(column, row, block)

    def in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def is_occupied(self, column: int, row: int) -> bool:
        return self.get(column, row) is not None

    def occupancy(self) -> Occupancy:
        """Return a ``(rows, columns)`` array with ``1`` for occupied slots."""

        mask = np.fromiter(
            (slot is not None for slot in self._slots),
            dtype=np.uint8,
            count=self._slots.size,
        )
        return mask.reshape(self.rows, self.columns)

    def complete_rows(self) -> List[int]:
        """Return the indices of rows where every column is occupied."""

        full = np.all(self.occupancy() != 0, axis=1)
        return [int(row) for row in np.flatnonzero(full)]

    def row_blocks(self, row: int) -> List[Block]:
        """Return the occupied blocks of ``row`` from left to right."""

        row_of_blocks = (self.get(column, row) for column in range(self.columns))
        return [block for block in row_of_blocks if block is not None]

    def blocks(self) -> Iterator[Block]:
        """Yield every occupied block in row-major order."""

        for block in self._slots:
            if block is not None:
                yield block

    def clear(self) -> List[List[Block]]:
        """Empty every slot and return the removed blocks grouped by row.

        Rows are listed bottom-up, which is the order an end-of-game sweep
        animates them in.
        """

        removed: List[List[Block]] = []
        for row in range(self.rows - 1, -1, -1):
            row_of_blocks = self.row_blocks(row)
            if row_of_blocks:
                removed.append(row_of_blocks)
        self._slots[:] = None
        return removed

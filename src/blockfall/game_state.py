"""High level game session: spawning, descent, locking and line clears."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional
import logging
import random

from .block import Block
from .config import DEFAULT_CONFIG, GameConfig
from .grid import Grid
from .shape import Shape, random_shape
from .utils import is_legal_placement, touches_ground


LOGGER = logging.getLogger(__name__)


class GameEvent(str, Enum):
    """Notifications sent to listeners such as a sound player."""

    BEGIN = "begin"
    SPAWN = "spawn"
    MOVE = "move"
    DROP = "drop"
    LOCK = "lock"
    LINES_CLEARED = "lines_cleared"
    GAME_OVER = "game_over"


Listener = Callable[[GameEvent, "GameSession"], None]


@dataclass
class SpawnResult:
    """Outcome of :meth:`GameSession.new_shape`.

    ``no_room`` is set when the shape could not be placed at the starting
    anchor, which ends the game.  Both shapes are ``None`` in that case.
    """

    falling_shape: Optional[Shape] = None
    next_shape: Optional[Shape] = None
    no_room: bool = False


@dataclass
class TickResult:
    """Outcome of a single descent step.

    ``removed_lines`` holds the blocks of each cleared row, bottom-up.
    ``fallen_blocks`` holds, per column, the blocks that moved down during the
    collapse; their ``row`` already reflects the new position.
    """

    moved: bool = False
    locked: bool = False
    removed_lines: List[List[Block]] = field(default_factory=list)
    fallen_blocks: List[List[Block]] = field(default_factory=list)

    @property
    def lines_removed(self) -> int:
        return len(self.removed_lines)

    @property
    def removed_blocks(self) -> List[Block]:
        return [block for line in self.removed_lines for block in line]


class GameSession:
    """Mutable state for one game.

    The session owns the grid, the falling shape and the preview shape.  It
    never schedules anything itself: the host calls :meth:`tick` once per
    descent step and :meth:`new_shape` whenever ``falling_shape`` is ``None``.
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.rng = rng or random.Random()
        self.grid = Grid.from_config(config)
        self.falling_shape: Optional[Shape] = None
        self.next_shape: Optional[Shape] = None
        self.game_over = False
        self._listeners: List[Listener] = []

    # Events -----------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                LOGGER.exception("Listener %r failed on %s", listener, event.value)

    # Lifecycle --------------------------------------------------------
    def _preview_shape(self) -> Shape:
        return random_shape(
            self.config.preview_column, self.config.preview_row, self.rng
        )

    def begin_game(self) -> None:
        """Prepare the preview shape so the first :meth:`new_shape` can run."""

        if self.next_shape is None:
            self.next_shape = self._preview_shape()
        self.game_over = False
        LOGGER.debug("Game started with preview %s", self.next_shape)
        self._notify(GameEvent.BEGIN)

    def reset_game(self) -> None:
        """Discard all state and begin a fresh game on an empty grid."""

        self.grid = Grid.from_config(self.config)
        self.falling_shape = None
        self.next_shape = None
        self.begin_game()

    def new_shape(self) -> SpawnResult:
        """Promote the preview shape to the falling shape and draw a new preview.

        A shape that is still falling is replaced without being locked.
        """

        if self.next_shape is None:
            self.next_shape = self._preview_shape()

        shape = self.next_shape
        self.next_shape = self._preview_shape()
        shape.move_to(self.config.starting_column, self.config.starting_row)
        self.falling_shape = shape

        if not is_legal_placement(self.grid, shape):
            shape.move_to(self.config.preview_column, self.config.preview_row)
            self.next_shape = shape
            self.falling_shape = None
            self.end_game()
            return SpawnResult(no_room=True)

        LOGGER.debug("Spawned %s", shape)
        self._notify(GameEvent.SPAWN)
        return SpawnResult(falling_shape=shape, next_shape=self.next_shape)

    def end_game(self) -> None:
        self.game_over = True
        LOGGER.info("Game over: no room for %s", self.next_shape)
        self._notify(GameEvent.GAME_OVER)

    # Rules ------------------------------------------------------------
    def detect_illegal_placement(self) -> bool:
        """Return ``True`` if the falling shape overlaps blocks or leaves the grid."""

        if self.falling_shape is None:
            return False
        return not is_legal_placement(self.grid, self.falling_shape)

    def detect_touch(self) -> bool:
        """Return ``True`` if the falling shape rests on the floor or on blocks."""

        if self.falling_shape is None:
            return False
        return touches_ground(self.grid, self.falling_shape)

    # Input ------------------------------------------------------------
    def _try(self, apply: Callable[[Shape], None], undo: Callable[[Shape], None]) -> bool:
        shape = self.falling_shape
        if shape is None:
            return False
        apply(shape)
        if self.detect_illegal_placement():
            undo(shape)
            return False
        self._notify(GameEvent.MOVE)
        return True

    def move_shape_left(self) -> bool:
        return self._try(Shape.shift_left_by_one_column, Shape.shift_right_by_one_column)

    def move_shape_right(self) -> bool:
        return self._try(Shape.shift_right_by_one_column, Shape.shift_left_by_one_column)

    def lower_shape(self) -> bool:
        """Move the falling shape down one row without locking it."""

        return self._try(Shape.lower_by_one_row, Shape.raise_by_one_row)

    def rotate_shape(self, clockwise: bool = True) -> bool:
        """Rotate the falling shape, keeping it in place if the result is illegal."""

        def apply(shape: Shape) -> None:
            shape.recompute_blocks(shape.rotate(clockwise))

        def undo(shape: Shape) -> None:
            shape.recompute_blocks(shape.rotate(not clockwise))

        return self._try(apply, undo)

    def drop_shape(self) -> int:
        """Hard-drop the falling shape and return the number of rows travelled.

        The shape is left resting but unlocked; the next :meth:`tick` locks it.
        """

        shape = self.falling_shape
        if shape is None:
            return 0
        rows = 0
        while True:
            shape.lower_by_one_row()
            if self.detect_illegal_placement():
                shape.raise_by_one_row()
                break
            rows += 1
        LOGGER.debug("Dropped %s by %d row(s)", shape, rows)
        self._notify(GameEvent.DROP)
        return rows

    # Descent ----------------------------------------------------------
    def tick(self) -> TickResult:
        """Advance the falling shape by one row or lock it if it has landed."""

        shape = self.falling_shape
        if shape is None:
            return TickResult()

        if not self.detect_touch():
            shape.lower_by_one_row()
            if not self.detect_illegal_placement():
                self._notify(GameEvent.MOVE)
                return TickResult(moved=True)
            shape.raise_by_one_row()

        self.settle_shape()
        removed_lines, fallen_blocks = self.remove_completed_lines()
        return TickResult(
            locked=True, removed_lines=removed_lines, fallen_blocks=fallen_blocks
        )

    def settle_shape(self) -> None:
        """Write the falling shape's blocks into the grid."""

        shape = self.falling_shape
        if shape is None:
            return
        for block in shape.blocks:
            self.grid.set(block.column, block.row, block)
        self.falling_shape = None
        LOGGER.debug("Locked %s", shape)
        self._notify(GameEvent.LOCK)

    def remove_completed_lines(self) -> tuple[List[List[Block]], List[List[Block]]]:
        """Clear complete rows and let the remaining blocks fall.

        Returns ``(removed_lines, fallen_blocks)``.  After the rows are removed
        each column is compacted on its own: every block above the lowest
        cleared row drops until it rests on the floor or on another block.
        """

        removed_lines: List[List[Block]] = []
        for row in reversed(self.grid.complete_rows()):
            line = self.grid.row_blocks(row)
            for block in line:
                self.grid.set(block.column, block.row, None)
            removed_lines.append(line)

        if not removed_lines:
            return [], []

        lowest = removed_lines[0][0].row
        fallen_blocks: List[List[Block]] = []
        for column in range(self.grid.columns):
            fallen: List[Block] = []
            for row in range(lowest - 1, -1, -1):
                block = self.grid.get(column, row)
                if block is None:
                    continue
                new_row = row
                while (
                    new_row < self.grid.rows - 1
                    and self.grid.get(column, new_row + 1) is None
                ):
                    new_row += 1
                if new_row == row:
                    continue
                self.grid.set(column, row, None)
                block.row = new_row
                self.grid.set(column, new_row, block)
                fallen.append(block)
            if fallen:
                fallen_blocks.append(fallen)

        LOGGER.info("Cleared %d line(s)", len(removed_lines))
        self._notify(GameEvent.LINES_CLEARED)
        return removed_lines, fallen_blocks

    def remove_all_blocks(self) -> List[List[Block]]:
        """Empty the grid and return its blocks grouped by row, bottom-up."""

        return self.grid.clear()

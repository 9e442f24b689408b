"""Simple pygame viewer for the blockfall engine.

Draws the grid, the falling shape and the preview shape, advancing the game by
one descent step every ``GameConfig.tick_ms`` milliseconds.  There are no
gameplay controls: shapes fall where they spawn until the game is over, after
which a fresh game starts.  Closing the window stops the loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import random
from typing import Dict, Iterable, Optional, Tuple

import pygame

from .block import Block, BlockColor
from .config import DEFAULT_CONFIG, GameConfig
from .game_state import GameEvent, GameSession
from .grid import Grid

# Size of a single board cell in pixels
CELL_SIZE = 20
# Frames per second to run the game loop at
FPS = 60
# Extra columns to the right of the board for the preview shape
PREVIEW_MARGIN = 6

COLORS: Dict[BlockColor, Tuple[int, int, int]] = {
    BlockColor.BLUE: (0, 90, 255),
    BlockColor.ORANGE: (255, 150, 0),
    BlockColor.PURPLE: (150, 60, 200),
    BlockColor.RED: (230, 30, 30),
    BlockColor.TEAL: (0, 190, 190),
    BlockColor.YELLOW: (250, 220, 0),
}
GRID_LINE = (50, 50, 50)

LOGGER = logging.getLogger(__name__)


def draw_blocks(screen: pygame.Surface, blocks: Iterable[Block]) -> None:
    """Render ``blocks`` at their grid positions."""

    for block in blocks:
        rect = pygame.Rect(
            block.column * CELL_SIZE, block.row * CELL_SIZE, CELL_SIZE, CELL_SIZE
        )
        pygame.draw.rect(screen, COLORS[block.color], rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_board(screen: pygame.Surface, grid: Grid) -> None:
    """Render the board outline and every settled block."""

    outline = pygame.Rect(0, 0, grid.columns * CELL_SIZE, grid.rows * CELL_SIZE)
    pygame.draw.rect(screen, GRID_LINE, outline, 1)
    draw_blocks(screen, grid.blocks())


def log_event(event: GameEvent, session: GameSession) -> None:
    if event is GameEvent.LINES_CLEARED:
        LOGGER.info("Lines cleared")
    elif event is GameEvent.GAME_OVER:
        LOGGER.info("Game over. Resetting.")


class GameRunner:
    """Own the pygame window and drive a :class:`GameSession`."""

    def __init__(
        self, config: GameConfig = DEFAULT_CONFIG, seed: Optional[int] = None
    ) -> None:
        self.config = config
        self.session = GameSession(config, rng=random.Random(seed))
        self.session.add_listener(log_event)
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._drop_timer = 0

    @property
    def running(self) -> bool:
        return self._running

    def step(self) -> None:
        """Advance the session by one descent step, spawning as needed."""

        session = self.session
        if session.game_over:
            session.reset_game()
        if session.falling_shape is None:
            if session.new_shape().no_room:
                return
        if session.tick().locked:
            session.new_shape()

    def draw(self) -> None:
        if self._screen is None:
            return
        self._screen.fill((0, 0, 0))
        draw_board(self._screen, self.session.grid)
        if self.session.falling_shape is not None:
            draw_blocks(self._screen, self.session.falling_shape.blocks)
        if self.session.next_shape is not None:
            draw_blocks(self._screen, self.session.next_shape.blocks)
        pygame.display.flip()

    async def _run_loop(self) -> None:
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        pygame.init()
        width = (self.config.columns + PREVIEW_MARGIN) * CELL_SIZE
        height = self.config.rows * CELL_SIZE
        self._screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("blockfall")
        self._clock = pygame.time.Clock()

        self.session.begin_game()
        LOGGER.info("Game started")

        self._drop_timer = 0
        self._running = True
        while self._running:
            dt = self._clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False

            self._drop_timer += dt
            if self._drop_timer >= self.config.tick_ms:
                self._drop_timer = 0
                self.step()

            self.draw()
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        asyncio.run(self._run_loop())

    def stop(self) -> None:
        self._running = False


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    GameRunner().start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()

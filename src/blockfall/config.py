"""Board dimensions and fixed anchor positions for a game session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Static configuration shared by the grid and the game session.

    ``starting_column``/``starting_row`` is the anchor a shape is moved to when
    it starts falling.  ``preview_column``/``preview_row`` is where the next
    shape waits; it sits outside the playfield on purpose so renderers can show
    it beside the board.
    """

    columns: int = 10
    rows: int = 20
    starting_column: int = 4
    starting_row: int = 0
    preview_column: int = 12
    preview_row: int = 1
    # Milliseconds between descent steps, only consumed by front-ends.
    tick_ms: int = 600

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError(
                f"Board dimensions must be positive, got {self.columns}x{self.rows}"
            )
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")


DEFAULT_CONFIG = GameConfig()

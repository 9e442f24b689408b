"""Rules engine for a falling-block puzzle game."""

from .block import Block, BlockColor
from .config import DEFAULT_CONFIG, GameConfig
from .grid import Grid
from .shape import (
    SHAPE_VARIANTS,
    Orientation,
    Shape,
    ShapeType,
    ShapeVariant,
    random_shape,
    random_shape_type,
)
from .game_state import GameEvent, GameSession, SpawnResult, TickResult
from .utils import format_grid, is_legal_placement, render_grid, touches_ground

__all__ = [
    "Block",
    "BlockColor",
    "GameConfig",
    "DEFAULT_CONFIG",
    "Grid",
    "Orientation",
    "Shape",
    "ShapeType",
    "ShapeVariant",
    "SHAPE_VARIANTS",
    "random_shape",
    "random_shape_type",
    "GameEvent",
    "GameSession",
    "SpawnResult",
    "TickResult",
    "format_grid",
    "is_legal_placement",
    "render_grid",
    "touches_ground",
]

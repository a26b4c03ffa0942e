"""Game module for Block Puzzle.

Exports the core game engine and supporting pieces:
- Shape, Color, ShapeGenerator: shape catalog and random batch drawing
- can_place, apply_placement, clear_completed_lines: board operations
- ScoringRules, compute_turn_score: placement and streak scoring
- is_game_over: exhaustive no-move detection
- BlockPuzzleGame: turn loop and session state
"""

from .shapes import (
    COLOR_PALETTE,
    SHAPE_CATALOG,
    Color,
    Shape,
    ShapeGenerator,
    catalog_index,
    generate_batch,
)
from .grid import (
    GRID_SIZE,
    LineClearResult,
    PlacementPreview,
    apply_placement,
    can_place,
    clear_completed_lines,
    new_board,
    preview_placement,
    valid_placements,
)
from .rules import ScoringRules, TurnScore, compute_turn_score
from .game_over import has_valid_placement, is_game_over
from .core import BlockPuzzleGame, GameConfig, GameStatus, PlacementOutcome

__all__ = [
    "COLOR_PALETTE",
    "SHAPE_CATALOG",
    "Color",
    "Shape",
    "ShapeGenerator",
    "catalog_index",
    "generate_batch",
    "GRID_SIZE",
    "LineClearResult",
    "PlacementPreview",
    "apply_placement",
    "can_place",
    "clear_completed_lines",
    "new_board",
    "preview_placement",
    "valid_placements",
    "ScoringRules",
    "TurnScore",
    "compute_turn_score",
    "has_valid_placement",
    "is_game_over",
    "BlockPuzzleGame",
    "GameConfig",
    "GameStatus",
    "PlacementOutcome",
]

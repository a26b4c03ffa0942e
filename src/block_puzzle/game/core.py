from __future__ import annotations

"""
Block Puzzle game session.
Players place pieces from a batch of 3 onto an 8x8 grid and clear complete
rows and columns for points. Consecutive clearing turns build a streak.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

import numpy as np

from .game_over import is_game_over
from .grid import (
    GRID_SIZE,
    PlacementPreview,
    apply_placement,
    can_place,
    clear_completed_lines,
    filled_ratio,
    new_board,
    preview_placement,
    valid_placements,
)
from .rules import ScoringRules
from .shapes import Coordinate, Shape, ShapeGenerator
from ..storage.high_score import HighScoreStore, MemoryHighScoreStore


@dataclass
class GameConfig:
    """Configuration for block puzzle game"""
    grid_size: int = GRID_SIZE
    pieces_per_set: int = 3
    random_seed: Optional[int] = None


class GameStatus(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PlacementOutcome:
    placed: bool
    points: int = 0
    lines_cleared: int = 0
    cleared_positions: FrozenSet[Coordinate] = field(default_factory=frozenset)
    streak: int = 0
    game_over: bool = False
    new_high_score: bool = False


class BlockPuzzleGame:
    """Main game engine for block puzzle"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        high_score_store: Optional[HighScoreStore] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.generator = ShapeGenerator(rng or random.Random())
        if self.config.random_seed is not None:
            self.generator.seed(self.config.random_seed)
        self.high_score_store = high_score_store or MemoryHighScoreStore()
        self.high_score = self.high_score_store.load_high_score() or 0

        self.grid = new_board(self.config.grid_size)
        self.current_pieces: List[Shape] = []
        self.score = 0
        self.streak = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.status = GameStatus.PLAYING

        self.reset()

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.generator.seed(seed)
        self.grid = new_board(self.config.grid_size)
        self.current_pieces = []
        self.score = 0
        self.streak = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.status = GameStatus.PLAYING
        self.generate_new_piece_set()
        self._check_game_over()

    def generate_new_piece_set(self) -> None:
        """Replace the whole batch at once."""
        self.current_pieces = self.generator.generate_batch(self.config.pieces_per_set)

    def _piece(self, piece_idx: int) -> Optional[Shape]:
        if 0 <= piece_idx < len(self.current_pieces):
            return self.current_pieces[piece_idx]
        return None

    def can_place_piece(self, piece_idx: int, row: int, col: int) -> bool:
        piece = self._piece(piece_idx)
        return piece is not None and can_place(self.grid, piece, row, col)

    def preview(self, piece_idx: int, row: int, col: int) -> Optional[PlacementPreview]:
        piece = self._piece(piece_idx)
        if piece is None:
            return None
        return preview_placement(self.grid, piece, row, col)

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (piece_idx, row, col) valid actions"""
        actions: List[Tuple[int, int, int]] = []
        for piece_idx, piece in enumerate(self.current_pieces):
            for row, col in valid_placements(self.grid, piece):
                actions.append((piece_idx, row, col))
        return actions

    def place_piece(self, piece_idx: int, row: int, col: int) -> PlacementOutcome:
        if self.game_over:
            return PlacementOutcome(placed=False, streak=self.streak, game_over=True)
        piece = self._piece(piece_idx)
        if piece is None or not can_place(self.grid, piece, row, col):
            return PlacementOutcome(placed=False, streak=self.streak)

        placed = apply_placement(self.grid, piece, row, col)
        cleared = clear_completed_lines(placed)
        turn = self.rules.compute_turn_score(piece.block_count, cleared.cleared_lines, self.streak)

        self.grid = cleared.board
        self.score += turn.points
        self.streak = turn.new_streak
        self.total_pieces_placed += 1
        self.total_lines_cleared += cleared.cleared_lines
        self.step_count += 1

        self.current_pieces.pop(piece_idx)
        if len(self.current_pieces) == 0:
            self.generate_new_piece_set()
        new_high = self._check_game_over()

        return PlacementOutcome(
            placed=True,
            points=turn.points,
            lines_cleared=cleared.cleared_lines,
            cleared_positions=cleared.cleared_positions,
            streak=self.streak,
            game_over=self.game_over,
            new_high_score=new_high,
        )

    def _check_game_over(self) -> bool:
        """Move to GAME_OVER if nothing fits; return True if a new high score was recorded."""
        if self.game_over or not is_game_over(self.grid, self.current_pieces):
            return False
        self.status = GameStatus.GAME_OVER
        if self.score > self.high_score:
            self.high_score = self.score
            self.high_score_store.save_high_score(self.score)
            return True
        return False

    def clear_high_score(self) -> None:
        self.high_score_store.clear_high_score()
        self.high_score = 0

    def simulate_placement(self, piece_idx: int, row: int, col: int) -> Tuple[bool, int, int]:
        """Score a placement without changing the game state."""
        piece = self._piece(piece_idx)
        if piece is None or not can_place(self.grid, piece, row, col):
            return False, 0, 0
        cleared = clear_completed_lines(apply_placement(self.grid, piece, row, col))
        turn = self.rules.compute_turn_score(piece.block_count, cleared.cleared_lines, self.streak)
        return True, turn.points, cleared.cleared_lines

    def get_state(self) -> dict:
        return {
            "grid": self.grid.copy(),
            "current_pieces": [piece.name for piece in self.current_pieces],
            "pieces_remaining": len(self.current_pieces),
            "score": self.score,
            "streak": self.streak,
            "high_score": self.high_score,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "step_count": self.step_count,
            "status": self.status.value,
            "game_over": self.game_over,
            "filled_ratio": filled_ratio(self.grid),
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "steps_taken": self.step_count,
            "final_fill_ratio": filled_ratio(self.grid),
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
            "avg_lines_per_piece": self.total_lines_cleared / max(1, self.total_pieces_placed),
        }


def print_grid(grid: np.ndarray) -> None:
    for row in grid:
        print("".join(["█" if cell else "·" for cell in row]))


def print_piece(shape: Shape) -> None:
    cells = set(shape.blocks)
    for r in range(shape.height):
        print("".join(["█" if (r, c) in cells else "·" for c in range(shape.width)]))


def run_game_demo(seed: Optional[int] = 0) -> None:  # pragma: no cover
    game = BlockPuzzleGame(GameConfig(random_seed=seed))
    print("=== Block Puzzle Game Demo ===")
    print(f"Initial pieces: {[p.name for p in game.current_pieces]}")
    piece = game.current_pieces[0]
    print("\nPiece 0 shape:")
    print_piece(piece)
    outcome = game.place_piece(0, 0, 0)
    if outcome.placed:
        print(f"\nPlaced piece! Score gained: {outcome.points}, Lines cleared: {outcome.lines_cleared}")
        print("Grid after placement:")
        print_grid(game.grid)
        print(f"Remaining pieces: {[p.name for p in game.current_pieces]}")
        print(f"Total score: {game.score}")
    else:
        print("Could not place piece at (0,0)")
    print(f"\nTotal valid actions available: {len(game.get_valid_actions())}")


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()

"""Block Puzzle: an 8x8 place-and-clear puzzle with a Gymnasium interface."""

from .game import BlockPuzzleGame, GameConfig, GameStatus

__all__ = ["BlockPuzzleGame", "GameConfig", "GameStatus"]

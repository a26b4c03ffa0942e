"""High-score persistence for Block Puzzle."""

from .high_score import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
    default_high_score_path,
)

__all__ = [
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "default_high_score_path",
]

from __future__ import annotations

from typing import Sequence

import numpy as np

from .grid import can_place
from .shapes import Shape


def has_valid_placement(board: np.ndarray, shape: Shape) -> bool:
    h, w = board.shape
    for r in range(h):
        for c in range(w):
            if can_place(board, shape, r, c):
                return True
    return False


def is_game_over(board: np.ndarray, pieces: Sequence[Shape]) -> bool:
    """True when no piece in `pieces` fits at any anchor of `board`.

    An empty piece set is not game over: the batch is replenished before
    the board is judged.
    """
    if not pieces:
        return False
    return not any(has_valid_placement(board, piece) for piece in pieces)

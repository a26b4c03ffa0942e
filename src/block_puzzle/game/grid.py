from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

import numpy as np

from .shapes import Coordinate, Shape


GRID_SIZE = 8
EMPTY = 0


@dataclass(frozen=True)
class LineClearResult:
    board: np.ndarray
    cleared_lines: int
    cleared_positions: FrozenSet[Coordinate]
    rows: Tuple[int, ...] = ()
    cols: Tuple[int, ...] = ()


@dataclass(frozen=True)
class PlacementPreview:
    """Read-only hover projection of a shape over the board.

    `cells` lists only the in-bounds target cells; `valid` is the verdict of
    `can_place` for the whole placement.
    """
    cells: Tuple[Coordinate, ...]
    valid: bool


def new_board(size: int = GRID_SIZE) -> np.ndarray:
    return np.zeros((size, size), dtype=np.int8)


def is_inside(board: np.ndarray, row: int, col: int) -> bool:
    h, w = board.shape
    return 0 <= row < h and 0 <= col < w


def can_place(board: np.ndarray, shape: Shape, row: int, col: int) -> bool:
    """True when every cell of `shape` anchored at (row, col) is in bounds and empty."""
    for r, c in shape.cells_at(row, col):
        if not is_inside(board, r, c):
            return False
        if board[r, c] != EMPTY:
            return False
    return True


def apply_placement(board: np.ndarray, shape: Shape, row: int, col: int) -> np.ndarray:
    """Return a new board with `shape` stamped at (row, col).

    An illegal placement is a no-op: the input board itself is returned.
    """
    if not can_place(board, shape, row, col):
        return board
    new = board.copy()
    for r, c in shape.cells_at(row, col):
        new[r, c] = int(shape.color)
    return new


def full_lines(board: np.ndarray) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    filled = board != EMPTY
    rows = tuple(int(i) for i in np.where(np.all(filled, axis=1))[0])
    cols = tuple(int(i) for i in np.where(np.all(filled, axis=0))[0])
    return rows, cols


def clear_completed_lines(board: np.ndarray) -> LineClearResult:
    """Clear every complete row and column in a single evaluation.

    Rows and columns are counted independently; a cell shared by a complete
    row and a complete column is reported once.
    """
    rows, cols = full_lines(board)
    h, w = board.shape
    positions = set()
    for r in rows:
        positions.update((r, c) for c in range(w))
    for c in cols:
        positions.update((r, c) for r in range(h))

    new = board.copy()
    if rows:
        new[list(rows), :] = EMPTY
    if cols:
        new[:, list(cols)] = EMPTY
    return LineClearResult(
        board=new,
        cleared_lines=len(rows) + len(cols),
        cleared_positions=frozenset(positions),
        rows=rows,
        cols=cols,
    )


def valid_placements(board: np.ndarray, shape: Shape) -> List[Coordinate]:
    """All (row, col) anchors where `shape` fits."""
    h, w = board.shape
    return [(r, c) for r in range(h) for c in range(w) if can_place(board, shape, r, c)]


def preview_placement(board: np.ndarray, shape: Shape, row: int, col: int) -> PlacementPreview:
    cells = tuple((r, c) for r, c in shape.cells_at(row, col) if is_inside(board, r, c))
    return PlacementPreview(cells=cells, valid=can_place(board, shape, row, col))


def filled_ratio(board: np.ndarray) -> float:
    return float(np.count_nonzero(board)) / float(board.size)

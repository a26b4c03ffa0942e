from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple


Coordinate = Tuple[int, int]


class Color(IntEnum):
    """Cell colour tags. 0 is reserved for empty board cells."""
    RED = 1
    BLUE = 2
    GREEN = 3
    YELLOW = 4
    PURPLE = 5
    ORANGE = 6
    CYAN = 7


COLOR_PALETTE: Tuple[Color, ...] = tuple(Color)

EMPTY_RGB = (30, 30, 36)
COLOR_RGB: Dict[int, Tuple[int, int, int]] = {
    Color.RED: (239, 68, 68),
    Color.BLUE: (59, 130, 246),
    Color.GREEN: (34, 197, 94),
    Color.YELLOW: (250, 204, 21),
    Color.PURPLE: (168, 85, 247),
    Color.ORANGE: (249, 115, 22),
    Color.CYAN: (34, 211, 238),
}


def normalize(blocks: Sequence[Coordinate]) -> Tuple[Coordinate, ...]:
    """Shift offsets so the minimum row and column become 0."""
    min_r = min(r for r, _ in blocks)
    min_c = min(c for _, c in blocks)
    return tuple(sorted((r - min_r, c - min_c) for r, c in blocks))


@dataclass(frozen=True)
class Shape:
    name: str
    blocks: Tuple[Coordinate, ...]
    color: Color = Color.RED

    def __post_init__(self) -> None:
        if not self.blocks:
            raise ValueError(f"shape {self.name!r} has no blocks")
        if min(r for r, _ in self.blocks) != 0 or min(c for _, c in self.blocks) != 0:
            raise ValueError(f"shape {self.name!r} offsets are not normalized: {self.blocks}")

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def height(self) -> int:
        return 1 + max(r for r, _ in self.blocks)

    @property
    def width(self) -> int:
        return 1 + max(c for _, c in self.blocks)

    def cells_at(self, row: int, col: int) -> List[Coordinate]:
        return [(row + dr, col + dc) for dr, dc in self.blocks]


def _line(length: int, vertical: bool = False) -> Tuple[Coordinate, ...]:
    if vertical:
        return tuple((i, 0) for i in range(length))
    return tuple((0, i) for i in range(length))


def _square(side: int) -> Tuple[Coordinate, ...]:
    return tuple((r, c) for r in range(side) for c in range(side))


# Fixed orientations only; there is no rotation in play.
SHAPE_CATALOG: Dict[str, Tuple[Coordinate, ...]] = {
    "dot": ((0, 0),),
    "line2_h": _line(2),
    "line3_h": _line(3),
    "line4_h": _line(4),
    "line5_h": _line(5),
    "line2_v": _line(2, vertical=True),
    "line3_v": _line(3, vertical=True),
    "line4_v": _line(4, vertical=True),
    "line5_v": _line(5, vertical=True),
    "square2": _square(2),
    "square3": _square(3),
    "corner_tl": ((0, 0), (0, 1), (1, 0)),
    "corner_tr": ((0, 0), (0, 1), (1, 1)),
    "corner_bl": ((0, 0), (1, 0), (1, 1)),
    "corner_br": ((0, 1), (1, 0), (1, 1)),
    "l_0": ((0, 0), (1, 0), (2, 0), (2, 1)),
    "l_90": ((0, 0), (0, 1), (0, 2), (1, 0)),
    "l_180": ((0, 0), (0, 1), (1, 1), (2, 1)),
    "l_270": ((0, 2), (1, 0), (1, 1), (1, 2)),
    "j_0": ((0, 1), (1, 1), (2, 0), (2, 1)),
    "j_90": ((0, 0), (1, 0), (1, 1), (1, 2)),
    "j_180": ((0, 0), (0, 1), (1, 0), (2, 0)),
    "j_270": ((0, 0), (0, 1), (0, 2), (1, 2)),
    "t_down": ((0, 0), (0, 1), (0, 2), (1, 1)),
    "t_up": ((0, 1), (1, 0), (1, 1), (1, 2)),
    "s": ((0, 1), (0, 2), (1, 0), (1, 1)),
    "z": ((0, 0), (0, 1), (1, 1), (1, 2)),
}

_CATALOG_INDEX: Dict[str, int] = {name: i for i, name in enumerate(SHAPE_CATALOG)}


def catalog_index(shape: Shape) -> int:
    """Position of the shape's template in SHAPE_CATALOG."""
    return _CATALOG_INDEX[shape.name]


class ShapeGenerator:
    """Draws batches of coloured shapes from a fixed catalog.

    Shapes and colours are drawn independently, with replacement. No check is
    made that a drawn piece fits anywhere on the current board.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: Optional[Dict[str, Tuple[Coordinate, ...]]] = None,
        palette: Sequence[Color] = COLOR_PALETTE,
    ) -> None:
        self.rng = rng or random.Random()
        self._templates = [(name, normalize(blocks)) for name, blocks in (catalog or SHAPE_CATALOG).items()]
        self._palette = tuple(palette)
        if not self._templates or not self._palette:
            raise ValueError("catalog and palette must be non-empty")

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def random_shape(self) -> Shape:
        name, blocks = self.rng.choice(self._templates)
        color = self.rng.choice(self._palette)
        return Shape(name=name, blocks=blocks, color=color)

    def generate_batch(self, count: int) -> List[Shape]:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self.random_shape() for _ in range(count)]


def generate_batch(count: int, rng: Optional[random.Random] = None) -> List[Shape]:
    return ShapeGenerator(rng).generate_batch(count)

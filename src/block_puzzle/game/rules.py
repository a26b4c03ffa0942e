from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TurnScore:
    points: int
    new_streak: int
    placement_points: int
    line_points: int
    streak_bonus: int


@dataclass
class ScoringRules:
    points_per_block: int = 10
    line_clear_points: int = 100
    streak_bonus_per_level: int = 10

    def placement_points(self, block_count: int) -> int:
        return block_count * self.points_per_block

    def compute_turn_score(self, block_count: int, cleared_lines: int, previous_streak: int) -> TurnScore:
        """Score one placement.

        Every line cleared this turn earns the same streak-adjusted amount:
        a streak of 3 clearing 2 lines scores 2 * (100 + 20).
        """
        if block_count < 0 or cleared_lines < 0 or previous_streak < 0:
            raise ValueError(
                f"negative input: block_count={block_count}, "
                f"cleared_lines={cleared_lines}, previous_streak={previous_streak}"
            )
        placement = self.placement_points(block_count)
        if cleared_lines == 0:
            return TurnScore(points=placement, new_streak=0, placement_points=placement,
                             line_points=0, streak_bonus=0)
        new_streak = previous_streak + 1
        bonus = (new_streak - 1) * self.streak_bonus_per_level
        line_points = cleared_lines * (self.line_clear_points + bonus)
        return TurnScore(
            points=placement + line_points,
            new_streak=new_streak,
            placement_points=placement,
            line_points=line_points,
            streak_bonus=bonus,
        )


def compute_turn_score(
    block_count: int,
    cleared_count: int,
    previous_streak: int,
    rules: Optional[ScoringRules] = None,
) -> Tuple[int, int]:
    """Return (points awarded, new streak) for one placement."""
    turn = (rules or ScoringRules()).compute_turn_score(block_count, cleared_count, previous_streak)
    return turn.points, turn.new_streak

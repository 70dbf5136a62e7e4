"""Scoring, growth, speed, and collision rules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tick_snake.grid import Cell
    from tick_snake.snake import Snake


@dataclass(frozen=True)
class RulesConfig:
    """Tunable scoring and difficulty policy.

    Defaults follow the classic arcade tuning: ten points per move, a
    thousand per food, one tick faster every ten thousand points.
    """

    move_points: int = 10
    food_bonus: int = 1000
    speed_step: int = 10_000
    min_growth: int = 1
    initial_growth: int = 0

    def __post_init__(self) -> None:
        if self.move_points < 0 or self.food_bonus < 0:
            raise ValueError("Point awards must be non-negative.")
        if self.speed_step < 1:
            raise ValueError("speed_step must be at least 1.")
        if self.min_growth < 0 or self.initial_growth < 0:
            raise ValueError("Growth amounts must be non-negative.")


def move_interval(score: int, base_interval: int, rules: RulesConfig) -> int:
    """Ticks that must elapse between moves at the given score.

    Never below one tick; shrinks by one every ``rules.speed_step`` points.
    """
    return max(1, base_interval - score // rules.speed_step)


def growth_for(score: int, rules: RulesConfig) -> int:
    """Segments owed for a food eaten when the score reached *score*.

    Grows with the order of magnitude of the score.
    """
    if score <= 0:
        return rules.min_growth
    return max(rules.min_growth, int(math.log10(score)))


def hits_self(snake: Snake) -> bool:
    """Check the post-move head against the rest of the chain."""
    return snake.self_collision()


def eats(snake: Snake, food: Cell | None) -> bool:
    return food is not None and snake.head == food

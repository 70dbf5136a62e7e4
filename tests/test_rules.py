"""Tests for scoring, growth, and speed rules."""

import pytest

from tick_snake.grid import Grid
from tick_snake.rules import RulesConfig, eats, growth_for, hits_self, move_interval
from tick_snake.snake import Direction, Snake


class TestRulesConfig:
    def test_defaults(self):
        rules = RulesConfig()
        assert rules.move_points == 10
        assert rules.food_bonus == 1000
        assert rules.speed_step == 10_000
        assert rules.min_growth == 1
        assert rules.initial_growth == 0

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            RulesConfig(food_bonus=-1)
        with pytest.raises(ValueError):
            RulesConfig(speed_step=0)
        with pytest.raises(ValueError):
            RulesConfig(min_growth=-1)


class TestMoveInterval:
    def test_base_interval_at_zero_score(self):
        assert move_interval(0, 12, RulesConfig()) == 12

    def test_speeds_up_with_score(self):
        rules = RulesConfig()
        assert move_interval(9_999, 12, rules) == 12
        assert move_interval(10_000, 12, rules) == 11
        assert move_interval(55_000, 12, rules) == 7

    def test_never_below_one(self):
        assert move_interval(10**9, 12, RulesConfig()) == 1
        assert move_interval(0, 1, RulesConfig()) == 1

    def test_non_increasing(self):
        rules = RulesConfig(speed_step=100)
        values = [move_interval(s, 20, rules) for s in range(0, 5000, 37)]
        assert all(a >= b for a, b in zip(values, values[1:]))


class TestGrowth:
    def test_order_of_magnitude(self):
        rules = RulesConfig()
        assert growth_for(1010, rules) == 3
        assert growth_for(12_345, rules) == 4
        assert growth_for(100_000, rules) == 5

    def test_minimum(self):
        rules = RulesConfig(min_growth=2)
        assert growth_for(0, rules) == 2
        assert growth_for(5, rules) == 2

    def test_non_decreasing(self):
        rules = RulesConfig()
        values = [growth_for(s, rules) for s in range(0, 200_000, 997)]
        assert all(a <= b for a, b in zip(values, values[1:]))
        assert all(v >= 0 for v in values)


class TestCollisionPredicates:
    def test_eats(self):
        snake = Snake(Grid(10, 10), (5, 5))
        assert eats(snake, (5, 5))
        assert not eats(snake, (6, 5))
        assert not eats(snake, None)

    def test_hits_self(self):
        snake = Snake(Grid(10, 10), (5, 5), Direction.RIGHT, length=5)
        for d in (Direction.DOWN, Direction.LEFT):
            snake.move(d)
            assert not hits_self(snake)
        snake.move(Direction.UP)
        assert hits_self(snake)

"""Tests for the Snake module."""

import pytest

from tick_snake.grid import Grid
from tick_snake.snake import Direction, Snake


@pytest.fixture()
def grid():
    return Grid(width=10, height=10)


class TestDirection:
    def test_consecutive_values_are_quarter_turns(self):
        assert [d.name for d in Direction] == ["RIGHT", "DOWN", "LEFT", "UP"]

    def test_deltas(self):
        assert Direction.RIGHT.delta == (1, 0)
        assert Direction.DOWN.delta == (0, 1)
        assert Direction.LEFT.delta == (-1, 0)
        assert Direction.UP.delta == (0, -1)

    def test_opposite(self):
        assert Direction.RIGHT.opposite() == Direction.LEFT
        assert Direction.UP.opposite() == Direction.DOWN

    def test_parse(self):
        assert Direction.parse("up") == Direction.UP
        assert Direction.parse(" Left ") == Direction.LEFT
        assert Direction.parse(5) == Direction.DOWN
        assert Direction.parse(Direction.RIGHT) == Direction.RIGHT

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.parse("sideways")


class TestSnakeInit:
    def test_default_creation(self, grid):
        snake = Snake(grid, (5, 5))
        assert snake.head == (5, 5)
        assert len(snake) == 3
        assert snake.direction == Direction.RIGHT
        assert snake.pending_growth == 0

    def test_body_extends_opposite_to_direction(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=3)
        assert snake.cells() == ((5, 5), (4, 5), (3, 5))

    def test_body_extends_down_when_facing_up(self, grid):
        snake = Snake(grid, (5, 5), Direction.UP, length=3)
        assert snake.cells() == ((5, 5), (5, 6), (5, 7))

    def test_body_wraps_at_edge(self, grid):
        snake = Snake(grid, (0, 0), Direction.RIGHT, length=3)
        assert snake.cells() == ((0, 0), (9, 0), (8, 0))

    def test_minimum_length(self, grid):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(grid, (0, 0), length=0)


class TestSnakeMovement:
    def test_next_head_does_not_move(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT)
        assert snake.next_head() == (6, 5)
        assert snake.next_head(Direction.UP) == (5, 4)
        assert snake.head == (5, 5)

    def test_move_shifts_every_cell_to_predecessor(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=4)
        before = snake.cells()
        vacated = snake.move(Direction.DOWN)
        after = snake.cells()
        assert after[0] == (5, 6)
        assert after[1:] == before[:-1]
        assert vacated == before[-1]
        assert snake.direction == Direction.DOWN

    def test_move_wraps_each_edge(self):
        grid = Grid(width=50, height=40)
        snake = Snake(grid, (0, 0), Direction.UP, length=1)
        snake.move(Direction.LEFT)
        assert snake.head == (49, 0)
        snake.move(Direction.UP)
        assert snake.head == (49, 39)
        snake.move(Direction.RIGHT)
        assert snake.head == (0, 39)
        snake.move(Direction.DOWN)
        assert snake.head == (0, 0)

    def test_pending_growth_appends_at_old_tail(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=2)
        snake.schedule_growth(2)
        old_tail = snake.tail
        assert snake.move() is None
        assert len(snake) == 3
        assert snake.tail == old_tail
        assert snake.move() is None
        assert len(snake) == 4
        assert snake.pending_growth == 0
        assert snake.move() is not None
        assert len(snake) == 4

    def test_negative_growth_rejected(self, grid):
        snake = Snake(grid, (5, 5))
        with pytest.raises(ValueError, match="non-negative"):
            snake.schedule_growth(-1)


class TestSnakeCollision:
    def test_occupies(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=3)
        assert snake.occupies((5, 5))
        assert snake.occupies((4, 5))
        assert not snake.occupies((0, 0))

    def test_collides_at_excludes_head_by_default(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=3)
        assert not snake.collides_at((5, 5))
        assert snake.collides_at((5, 5), include_head=True)
        assert snake.collides_at((3, 5))

    def test_self_collision(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=1)
        assert not snake.self_collision()
        snake.body.append((5, 5))
        assert snake.self_collision()

    def test_turning_into_own_body(self, grid):
        snake = Snake(grid, (5, 5), Direction.RIGHT, length=5)
        snake.move(Direction.DOWN)
        snake.move(Direction.LEFT)
        assert not snake.self_collision()
        snake.move(Direction.UP)
        assert snake.self_collision()

    def test_moving_into_vacating_tail_is_safe(self):
        grid = Grid(width=4, height=1)
        snake = Snake(grid, (3, 0), Direction.RIGHT, length=4)
        snake.move()
        assert snake.head == (0, 0)
        assert not snake.self_collision()


class TestSnakeCells:
    def test_cells_is_a_copy(self, grid):
        snake = Snake(grid, (5, 5))
        cells = snake.cells()
        snake.move()
        assert cells[0] == (5, 5)

"""Tick-driven game session composing grid, snake, food, and rules."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from tick_snake import rules
from tick_snake.config import SessionConfig
from tick_snake.food import BoardFullError, FoodSpawner
from tick_snake.grid import Cell, CellType, Grid
from tick_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    """Lifecycle states of a session. Everything but RUNNING is terminal."""

    RUNNING = "running"
    LOST = "lost"
    ENDED = "ended"
    WON = "won"


class TickOutcome(str, enum.Enum):
    """What a single :meth:`GameSession.tick` call did."""

    WAITING = "waiting"
    MOVED = "moved"
    ATE = "ate"
    LOST = "lost"
    WON = "won"
    IDLE = "idle"


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of a session for renderers."""

    grid_width: int
    grid_height: int
    cells: tuple[Cell, ...]
    food: Cell | None
    score: int
    state: SessionState
    tick: int
    direction: Direction
    pending_growth: int
    move_interval: int

    @property
    def head(self) -> Cell:
        return self.cells[0]

    @property
    def length(self) -> int:
        return len(self.cells)

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary."""
        return {
            "grid": {"width": self.grid_width, "height": self.grid_height},
            "cells": [list(c) for c in self.cells],
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "state": self.state.value,
            "tick": self.tick,
            "direction": self.direction.name.lower(),
            "length": self.length,
            "pending_growth": self.pending_growth,
            "move_interval": self.move_interval,
        }

    def to_array(self) -> np.ndarray:
        """Render into a ``(height, width)`` array of :class:`CellType`."""
        arr = np.full(
            (self.grid_height, self.grid_width), CellType.EMPTY, dtype=np.int8,
        )
        for x, y in self.cells:
            arr[y, x] = CellType.SNAKE
        hx, hy = self.head
        arr[hy, hx] = CellType.HEAD
        if self.food is not None:
            fx, fy = self.food
            arr[fy, fx] = CellType.FOOD
        return arr


class GameSession:
    """Single-snake, tick-driven game session.

    The session owns the grid, snake, food, and score. An external driver
    calls :meth:`tick` once per frame; the snake only moves once enough
    ticks have elapsed for the current speed. Directions requested between
    moves are buffered and applied at the start of the next move.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else SessionConfig()
        self.rules = self.config.rules
        self.grid = Grid(self.config.grid_width, self.config.grid_height)
        self.snake = Snake(
            self.grid,
            self.grid.center(),
            self.config.direction,
            length=self.config.initial_length,
        )
        self.snake.schedule_growth(self.rules.initial_growth)
        self.spawner = FoodSpawner(
            self.grid,
            rng=rng if rng is not None else np.random.default_rng(self.config.seed),
            max_attempts=self.config.spawn_attempts,
        )

        self._state = SessionState.RUNNING
        self._score = 0
        self._tick = 0
        self._since_move = 0
        self._pending_direction: Direction | None = None
        self._food: Cell | None = None
        self._spawn_food()

        logger.info(
            "Session started on %dx%d grid (length=%d, interval=%d).",
            self.grid.width, self.grid.height,
            len(self.snake), self.config.base_interval,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state is not SessionState.RUNNING

    @property
    def score(self) -> int:
        return self._score

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def food(self) -> Cell | None:
        return self._food

    @property
    def move_interval(self) -> int:
        """Ticks between moves at the current score."""
        return rules.move_interval(
            self._score, self.config.base_interval, self.rules,
        )

    def request_direction(self, direction: Direction | str | int) -> bool:
        """Buffer a direction for the next move.

        Returns ``False`` if the request was rejected: the session is
        over, or the request reverses the last move of a snake longer
        than one cell. A later accepted request replaces an earlier one.
        """
        direction = Direction.parse(direction)
        if self.is_terminal:
            return False
        if len(self.snake) > 1 and direction == self.snake.direction.opposite():
            return False
        self._pending_direction = direction
        return True

    def request_end(self) -> None:
        """End a running session at the player's request."""
        if self.is_terminal:
            return
        self._finish(SessionState.ENDED)

    def place_food(self, cell: Cell) -> None:
        """Replace the current food with one at *cell*."""
        x, y = cell
        if not self.grid.contains(x, y):
            raise ValueError(f"Cell {cell} is outside the grid.")
        if self.snake.occupies((x, y)):
            raise ValueError(f"Cell {cell} is occupied by the snake.")
        self._food = (x, y)

    def tick(self) -> TickOutcome:
        """Advance the session by one tick."""
        self._tick += 1
        if self.is_terminal:
            return TickOutcome.IDLE

        self._since_move += 1
        if self._since_move < self.move_interval:
            return TickOutcome.WAITING
        self._since_move = 0
        return self._advance()

    def snapshot(self) -> Snapshot:
        """Return an immutable copy of the renderable state."""
        return Snapshot(
            grid_width=self.grid.width,
            grid_height=self.grid.height,
            cells=self.snake.cells(),
            food=self._food,
            score=self._score,
            state=self._state,
            tick=self._tick,
            direction=self.snake.direction,
            pending_growth=self.snake.pending_growth,
            move_interval=self.move_interval,
        )

    def _advance(self) -> TickOutcome:
        direction = self._pending_direction
        self._pending_direction = None
        self.snake.move(direction)

        if rules.hits_self(self.snake):
            self._finish(SessionState.LOST)
            return TickOutcome.LOST

        self._score += self.rules.move_points
        if not rules.eats(self.snake, self._food):
            return TickOutcome.MOVED

        self._score += self.rules.food_bonus
        growth = rules.growth_for(self._score, self.rules)
        self.snake.schedule_growth(growth)
        logger.debug(
            "Food eaten at tick %d; score=%d, growth=%d.",
            self._tick, self._score, growth,
        )
        if not self._spawn_food():
            return TickOutcome.WON
        return TickOutcome.ATE

    def _spawn_food(self) -> bool:
        """Respawn food, ending the session as won when the board is full."""
        try:
            self._food = self.spawner.respawn(self.snake)
        except BoardFullError as exc:
            logger.warning("Board full: %s", exc)
            self._food = None
            self._finish(SessionState.WON)
            return False
        return True

    def _finish(self, state: SessionState) -> None:
        self._state = state
        self._pending_direction = None
        logger.info(
            "Session %s at tick %d with score %d (length=%d).",
            state.value, self._tick, self._score, len(self.snake),
        )

"""Food spawning logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tick_snake.grid import Cell, Grid
    from tick_snake.snake import Snake

logger = logging.getLogger(__name__)

DEFAULT_SPAWN_ATTEMPTS = 1000


class BoardFullError(RuntimeError):
    """Raised when no free cell is left for the next food item."""


class FoodSpawner:
    """Picks unoccupied cells for food.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Candidates are drawn uniformly at random; once *max_attempts* draws
    have all landed on the body, the free cells are enumerated from the
    grid occupancy mask instead, so the search always terminates.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = DEFAULT_SPAWN_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def respawn(self, body: Snake) -> Cell:
        """Return a random cell the snake does not occupy.

        Raises :class:`BoardFullError` when the body covers the grid.
        """
        for _ in range(self.max_attempts):
            x = int(self.rng.integers(self.grid.width))
            y = int(self.rng.integers(self.grid.height))
            if not body.occupies((x, y)):
                logger.debug("Food spawned at (%d, %d).", x, y)
                return x, y

        free = self.grid.free_cells(body.cells())
        if not free:
            raise BoardFullError(
                f"No free cell on a {self.grid.width}x{self.grid.height} grid."
            )
        cell = free[int(self.rng.integers(len(free)))]
        logger.debug(
            "Food spawned at %s after %d rejected draws.",
            cell, self.max_attempts,
        )
        return cell

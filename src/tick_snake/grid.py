"""Grid model for the wrap-around playfield."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

Cell = tuple[int, int]


class CellType(enum.IntEnum):
    """Integer codes used when a grid is rendered into an array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2
    HEAD = 3


def wrap(coord: int, extent: int) -> int:
    """Map any integer coordinate into ``[0, extent)``.

    Negative inputs wrap to the far edge, so ``wrap(-1, 50) == 49``.
    """
    if extent <= 0:
        raise ValueError("Extent must be positive.")
    return coord % extent


@dataclass(frozen=True)
class Grid:
    """Immutable toroidal grid measured in cells.

    Coordinates are ``(x, y)`` with ``x`` in ``[0, width)`` and ``y`` in
    ``[0, height)``. Arrays produced from the grid are indexed ``[y, x]``
    to stay consistent with NumPy row-major layout.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Grid dimensions must be positive.")

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def wrap(self, x: int, y: int) -> Cell:
        """Wrap coordinates around the grid edges."""
        return wrap(x, self.width), wrap(y, self.height)

    def center(self) -> Cell:
        return self.width // 2, self.height // 2

    def occupancy(self, cells: Iterable[Cell]) -> np.ndarray:
        """Return a ``(height, width)`` boolean mask of the given cells."""
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in cells:
            mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Return all cells not in *occupied*, in row-major order."""
        ys, xs = np.nonzero(~self.occupancy(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

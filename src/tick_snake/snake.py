"""Snake body chain and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from tick_snake.grid import Cell, Grid


class Direction(enum.IntEnum):
    """Cardinal directions encoded so consecutive values are 90° turns.

    The y axis grows downward, as on screen.
    """

    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    @property
    def delta(self) -> Cell:
        """Unit ``(dx, dy)`` step for this direction."""
        return _DELTAS[self]

    def opposite(self) -> Direction:
        return Direction((self.value + 2) % 4)

    @classmethod
    def parse(cls, value: Direction | str | int) -> Direction:
        """Coerce a name (case-insensitive) or an integer mod 4."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown direction {value!r}.") from None
        if isinstance(value, int):
            return cls(value % 4)
        raise ValueError(f"Unknown direction {value!r}.")


_DELTAS: dict[Direction, Cell] = {
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
}


class Snake:
    """A snake represented as an ordered deque of ``(x, y)`` cells.

    The head is ``body[0]``; the tail is ``body[-1]``. Movement pushes the
    new head on the front and pops the old tail, which shifts every cell
    onto its predecessor's pre-move position in one step. Owed growth
    keeps the old tail in place instead of popping it.
    """

    def __init__(
        self,
        grid: Grid,
        head: Cell,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        self.grid = grid
        self.direction = direction
        self.pending_growth = 0
        dx, dy = direction.delta
        hx, hy = head
        self.body: deque[Cell] = deque(
            grid.wrap(hx - dx * i, hy - dy * i) for i in range(length)
        )

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def cells(self) -> tuple[Cell, ...]:
        """Return an immutable copy of the chain, head first."""
        return tuple(self.body)

    def next_head(self, direction: Direction | None = None) -> Cell:
        """Compute the wrapped head the next move would produce."""
        dx, dy = (direction if direction is not None else self.direction).delta
        x, y = self.head
        return self.grid.wrap(x + dx, y + dy)

    def move(self, direction: Direction | None = None) -> Cell | None:
        """Move the snake one cell forward.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        if direction is not None:
            self.direction = direction
        self.body.appendleft(self.next_head())
        if self.pending_growth > 0:
            self.pending_growth -= 1
            return None
        return self.body.pop()

    def schedule_growth(self, segments: int = 1) -> None:
        """Queue growth for the next *segments* moves."""
        if segments < 0:
            raise ValueError("Growth must be non-negative.")
        self.pending_growth += segments

    def occupies(self, cell: Cell) -> bool:
        """Check whether any cell of the chain equals *cell*."""
        return cell in self.body

    def collides_at(self, cell: Cell, *, include_head: bool = False) -> bool:
        """Check *cell* against the body behind the head.

        With ``include_head`` the head is tested too, which is the same as
        :meth:`occupies`.
        """
        if include_head:
            return self.occupies(cell)
        return any(seg == cell for i, seg in enumerate(self.body) if i > 0)

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        return self.collides_at(self.head)

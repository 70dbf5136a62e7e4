"""Tick Snake: a tick-driven snake simulation core."""

from tick_snake.config import SessionConfig
from tick_snake.food import BoardFullError, FoodSpawner
from tick_snake.grid import CellType, Grid, wrap
from tick_snake.rules import RulesConfig
from tick_snake.session import GameSession, SessionState, Snapshot, TickOutcome
from tick_snake.snake import Direction, Snake

__all__ = [
    "BoardFullError",
    "CellType",
    "Direction",
    "FoodSpawner",
    "GameSession",
    "Grid",
    "RulesConfig",
    "SessionConfig",
    "SessionState",
    "Snake",
    "Snapshot",
    "TickOutcome",
    "wrap",
]

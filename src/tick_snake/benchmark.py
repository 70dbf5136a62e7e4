"""Headless play and tick-throughput benchmarking."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from tick_snake.config import SessionConfig
from tick_snake.session import GameSession, Snapshot, TickOutcome
from tick_snake.snake import Direction

logger = logging.getLogger(__name__)


def run_headless(
    config: SessionConfig,
    *,
    max_ticks: int = 10_000,
    turn_prob: float = 0.1,
    rng: np.random.Generator | None = None,
) -> Snapshot:
    """Play one session with a random pilot until it ends or *max_ticks*.

    Before every tick the pilot requests a random turn with probability
    *turn_prob*. Sessions still running at the tick limit are ended.
    """
    if max_ticks < 1:
        raise ValueError("max_ticks must be at least 1.")
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    session = GameSession(config, rng=rng)

    while not session.is_terminal and session.tick_count < max_ticks:
        if rng.random() < turn_prob:
            session.request_direction(Direction(int(rng.integers(4))))
        outcome = session.tick()
        if outcome is TickOutcome.ATE:
            logger.debug("Pilot ate at tick %d.", session.tick_count)

    if not session.is_terminal:
        session.request_end()
    return session.snapshot()


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    best_score: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, "
            f"{self.total_ticks} ticks in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s, "
            f"best score {self.best_score}"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    grid_width: int = 20,
    grid_height: int = 20,
    base_interval: int = 1,
    max_ticks: int = 2_000,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw simulation throughput.

    Runs *num_games* random-pilot sessions and reports games/second and
    ticks/second.
    """
    rng = np.random.default_rng(seed)
    config = SessionConfig(
        grid_width=grid_width,
        grid_height=grid_height,
        base_interval=base_interval,
    )

    total_ticks = 0
    best_score = 0
    start = time.perf_counter()

    for _ in range(num_games):
        snap = run_headless(config, max_ticks=max_ticks, rng=rng)
        total_ticks += snap.tick
        best_score = max(best_score, snap.score)

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        best_score=best_score,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result

"""Session configuration."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from tick_snake.food import DEFAULT_SPAWN_ATTEMPTS
from tick_snake.rules import RulesConfig
from tick_snake.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Construction parameters for a :class:`~tick_snake.session.GameSession`.

    Supports JSON serialization so a game can be replayed from a seed.
    Invalid values raise ``ValueError`` at construction.
    """

    # Playfield
    grid_width: int = 50
    grid_height: int = 50

    # Snake
    initial_length: int = 3
    initial_direction: str = "right"

    # Speed gating
    base_interval: int = 12

    # Food
    seed: int | None = None
    spawn_attempts: int = DEFAULT_SPAWN_ATTEMPTS

    # Scoring
    rules: RulesConfig = field(default_factory=RulesConfig)

    def __post_init__(self) -> None:
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError("Grid dimensions must be positive.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.base_interval < 1:
            raise ValueError("base_interval must be at least 1.")
        if self.spawn_attempts < 1:
            raise ValueError("spawn_attempts must be at least 1.")
        direction = Direction.parse(self.initial_direction)
        extent = (
            self.grid_width
            if direction in (Direction.LEFT, Direction.RIGHT)
            else self.grid_height
        )
        if self.initial_length > extent:
            raise ValueError(
                f"initial_length {self.initial_length} does not fit in "
                f"{extent} cells facing {direction.name.lower()}."
            )

    @property
    def direction(self) -> Direction:
        return Direction.parse(self.initial_direction)

    def replace(self, **overrides) -> SessionConfig:
        """Return a copy with the given fields overridden."""
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> SessionConfig:
        """Build a config from a plain dict. Unknown keys raise ValueError."""
        if not isinstance(raw, dict):
            raise ValueError("Config must be a JSON object.")
        raw = dict(raw)
        rules_data = dict(raw.pop("rules", {}))
        _reject_unknown(cls, raw)
        _reject_unknown(RulesConfig, rules_data)
        raw["rules"] = RulesConfig(**rules_data)
        return cls(**raw)

    @classmethod
    def load(cls, path: str | Path) -> SessionConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))


def _reject_unknown(cls: type, data: dict) -> None:
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}.")

"""Configuration layer: constants and typed config dataclasses."""

from territory_war.config.constants import (
    BASE_SPEED,
    FLUSH_THRESHOLD,
    GRID_COLS,
    GRID_ROWS,
    HIGHSCORE_DELAY,
    MAX_MATCH_WORK_UNITS,
    MAX_SPEED_MULTIPLIER,
    MIN_SPEED_MULTIPLIER,
    POWERUP_DURATION,
    POWERUP_SPAWN_INTERVAL,
    TRAIL_LENGTH,
)
from territory_war.config.types import (
    GameConfig,
    MatchConfig,
    MatchResult,
    clamp_speed_multiplier,
)

__all__ = [
    "BASE_SPEED",
    "FLUSH_THRESHOLD",
    "GRID_COLS",
    "GRID_ROWS",
    "GameConfig",
    "HIGHSCORE_DELAY",
    "MAX_MATCH_WORK_UNITS",
    "MAX_SPEED_MULTIPLIER",
    "MIN_SPEED_MULTIPLIER",
    "MatchConfig",
    "MatchResult",
    "POWERUP_DURATION",
    "POWERUP_SPAWN_INTERVAL",
    "TRAIL_LENGTH",
    "clamp_speed_multiplier",
]

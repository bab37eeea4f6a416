"""Configuration dataclasses for the simulation core and headless runs.

All frozen dataclasses that parameterise a game, a recorded match, and the
result container of a match live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from territory_war.config.constants import (
    BALL_RADIUS_FRACTION,
    BASE_SPEED,
    CLONE_SCALE,
    GIANT_SCALE,
    GRID_COLS,
    GRID_ROWS,
    HIGHSCORE_DELAY,
    MAGNET_SPEED_X,
    MAGNET_SPEED_Y,
    MAX_ACTIVE_POWERUPS,
    MAX_SPEED_MULTIPLIER,
    MIN_SPEED_MULTIPLIER,
    PICKUP_MARGIN,
    POWERUP_DURATION,
    POWERUP_SPAWN_INTERVAL,
    SPAWN_INSET,
    SPEED_BOOST,
    TRAIL_LENGTH,
)

__all__ = [
    "GameConfig",
    "MatchConfig",
    "MatchResult",
    "clamp_speed_multiplier",
]


def clamp_speed_multiplier(value: float) -> float:
    """Clamp an externally supplied speed multiplier into the supported range."""
    return min(max(float(value), MIN_SPEED_MULTIPLIER), MAX_SPEED_MULTIPLIER)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MatchResult:
    """Top-level result for one recorded match."""

    match_id: str
    frames: int
    left_count: int
    right_count: int
    left_high_score: int
    right_high_score: int
    n_balls: int
    n_powerups_spawned: int

    @property
    def leader(self) -> str | None:
        """Name of the team holding more tiles, or None on a tie."""
        if self.left_count == self.right_count:
            return None
        return "left" if self.left_count > self.right_count else "right"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameConfig:
    """Rule parameters of one simulation."""

    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    trail_length: int = TRAIL_LENGTH
    base_speed: float = BASE_SPEED
    powerup_duration: int = POWERUP_DURATION
    """Frames a timed effect (giant, speed, freeze) lasts."""
    powerup_spawn_interval: int = POWERUP_SPAWN_INTERVAL
    max_active_powerups: int = MAX_ACTIVE_POWERUPS
    highscore_delay: int = HIGHSCORE_DELAY
    """High scores stay at the even split until the frame index exceeds this."""
    pickup_margin: float = PICKUP_MARGIN
    spawn_inset: float = SPAWN_INSET
    giant_scale: float = GIANT_SCALE
    speed_boost: float = SPEED_BOOST
    clone_scale: float = CLONE_SCALE
    ball_radius_fraction: float = BALL_RADIUS_FRACTION
    magnet_speed_x: float = MAGNET_SPEED_X
    magnet_speed_y: float = MAGNET_SPEED_Y

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 2:
            raise ValueError("grid must have rows >= 1 and cols >= 2")
        if self.trail_length < 0:
            raise ValueError("trail_length must be >= 0")
        if self.base_speed <= 0.0:
            raise ValueError("base_speed must be > 0")
        if self.powerup_duration < 1:
            raise ValueError("powerup_duration must be >= 1")
        if self.powerup_spawn_interval < 1:
            raise ValueError("powerup_spawn_interval must be >= 1")
        if self.max_active_powerups < 0:
            raise ValueError("max_active_powerups must be >= 0")
        if self.highscore_delay < 0:
            raise ValueError("highscore_delay must be >= 0")
        if self.pickup_margin < 0.0:
            raise ValueError("pickup_margin must be >= 0")
        if self.spawn_inset < 0.0:
            raise ValueError("spawn_inset must be >= 0")
        if self.giant_scale < 1.0:
            raise ValueError("giant_scale must be >= 1.0")
        if self.speed_boost < 1.0:
            raise ValueError("speed_boost must be >= 1.0")
        if not 0.0 < self.clone_scale <= 1.0:
            raise ValueError("clone_scale must be in (0.0, 1.0]")
        if not 0.0 < self.ball_radius_fraction <= 0.5:
            raise ValueError("ball_radius_fraction must be in (0.0, 0.5]")

    @property
    def clone_lifetime(self) -> int:
        """Frames a split clone lives: twice the power-up duration."""
        return self.powerup_duration * 2

    @property
    def total_tiles(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True)
class MatchConfig:
    """Settings for one headless, recorded match."""

    frames: int = 1_800
    width: float = 1_200.0
    height: float = 720.0
    speed_multiplier: float = 1.0
    sim_seed: int = 0
    record_balls: bool = True
    """Also write one ball-log row per live ball per frame."""
    game: GameConfig = field(default_factory=GameConfig)

    def __post_init__(self) -> None:
        if self.frames < 1:
            raise ValueError("frames must be >= 1")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("world dimensions must be > 0")
        if not MIN_SPEED_MULTIPLIER <= self.speed_multiplier <= MAX_SPEED_MULTIPLIER:
            raise ValueError(
                f"speed_multiplier must be in [{MIN_SPEED_MULTIPLIER}, {MAX_SPEED_MULTIPLIER}]"
            )

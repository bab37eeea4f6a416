"""Domain layer: tile grid, balls, power-ups, and frame snapshots."""

from territory_war.domain.ball import Ball
from territory_war.domain.grid import Team, TileGrid, cell_at
from territory_war.domain.powerups import POWERUP_TYPES, PowerUp, PowerUpRegistry, PowerUpType
from territory_war.domain.snapshot import BallView, FrameSnapshot, PowerUpView

__all__ = [
    "Ball",
    "BallView",
    "FrameSnapshot",
    "POWERUP_TYPES",
    "PowerUp",
    "PowerUpRegistry",
    "PowerUpType",
    "PowerUpView",
    "Team",
    "TileGrid",
    "cell_at",
]

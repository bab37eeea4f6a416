"""Read-only views of simulation state published once per frame.

Renderers and run recorders only ever see these frozen objects; the live
``Ball``/``PowerUp``/``TileGrid`` instances stay owned by the frame step.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from territory_war.domain.ball import Ball, Point
from territory_war.domain.grid import Team
from territory_war.domain.powerups import PowerUp, PowerUpType


@dataclass(frozen=True)
class BallView:
    """Immutable snapshot of a single ball at the end of a frame."""

    ball_id: int
    x: float
    y: float
    radius: float
    team: Team
    is_clone: bool
    frozen: bool
    giant: bool
    speed: bool
    trail: tuple[Point, ...]

    @classmethod
    def of(cls, ball: Ball) -> BallView:
        return cls(
            ball_id=ball.ball_id,
            x=ball.x,
            y=ball.y,
            radius=ball.radius,
            team=ball.team,
            is_clone=ball.is_clone,
            frozen=ball.frozen > 0,
            giant=ball.giant > 0,
            speed=ball.speed > 0,
            trail=tuple(ball.trail),
        )


@dataclass(frozen=True)
class PowerUpView:
    powerup_id: int
    x: float
    y: float
    kind: PowerUpType

    @classmethod
    def of(cls, powerup: PowerUp) -> PowerUpView:
        return cls(powerup_id=powerup.powerup_id, x=powerup.x, y=powerup.y, kind=powerup.kind)


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a renderer needs to draw one frame."""

    frame_index: int
    width: float
    height: float
    tiles: np.ndarray
    """Read-only ``(rows, cols)`` array of ``Team`` values."""
    tiles_changed: bool
    balls: tuple[BallView, ...]
    powerups: tuple[PowerUpView, ...]
    counts: dict[Team, int]
    high_scores: dict[Team, int]
    at_high_score: dict[Team, bool]
    """Per team: count at or above its high score (always False before the delay)."""

    @property
    def total_tiles(self) -> int:
        return int(self.tiles.size)

    def balls_of(self, team: Team) -> tuple[BallView, ...]:
        return tuple(ball for ball in self.balls if ball.team is team)

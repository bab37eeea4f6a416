"""Power-up kinds, instances, and the registry of active power-ups."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from random import Random

from territory_war.domain.ball import Ball


class PowerUpType(Enum):
    """Effect applied to the ball (or team) that picks the power-up up."""

    SPLIT = "split"
    GIANT = "giant"
    SPEED = "speed"
    FREEZE = "freeze"
    MAGNET = "magnet"


POWERUP_TYPES: tuple[PowerUpType, ...] = tuple(PowerUpType)


@dataclass(frozen=True)
class PowerUp:
    """A power-up lying on the field."""

    powerup_id: int
    x: float
    y: float
    kind: PowerUpType
    spawn_frame: int


@dataclass
class PowerUpRegistry:
    """Currently active power-ups, in spawn order."""

    spawn_interval: int
    max_active: int
    inset: float
    pickup_margin: float
    active: list[PowerUp] = field(default_factory=list)
    next_id: int = 0
    spawned_total: int = 0

    def __len__(self) -> int:
        return len(self.active)

    def try_spawn(
        self, frame_index: int, width: float, height: float, rng: Random
    ) -> PowerUp | None:
        """Spawn one power-up on interval frames while below the active cap."""
        if frame_index % self.spawn_interval != 0:
            return None
        if len(self.active) >= self.max_active:
            return None
        x = rng.uniform(self.inset, max(self.inset, width - self.inset))
        y = rng.uniform(self.inset, max(self.inset, height - self.inset))
        kind = rng.choice(POWERUP_TYPES)
        powerup = PowerUp(
            powerup_id=self.next_id, x=x, y=y, kind=kind, spawn_frame=frame_index
        )
        self.next_id += 1
        self.spawned_total += 1
        self.active.append(powerup)
        return powerup

    def pickup_check(self, ball: Ball) -> list[PowerUp]:
        """Remove and return every power-up the ball overlaps, in registry order.

        Non-finite distances never count as a pickup.
        """
        reach = ball.radius + self.pickup_margin
        picked: list[PowerUp] = []
        remaining: list[PowerUp] = []
        for powerup in self.active:
            dist = math.hypot(ball.x - powerup.x, ball.y - powerup.y)
            if math.isfinite(dist) and dist < reach:
                picked.append(powerup)
            else:
                remaining.append(powerup)
        if picked:
            self.active = remaining
        return picked

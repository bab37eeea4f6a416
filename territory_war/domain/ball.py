"""Per-ball kinematics, effect timers, and trail history."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field

from territory_war.config.constants import TRAIL_LENGTH
from territory_war.domain.grid import Team

Point = tuple[float, float]


@dataclass
class Ball:
    """A circular agent. Mutated in place by the frame step."""

    ball_id: int
    x: float
    y: float
    vx: float
    vy: float
    team: Team
    radius: float
    base_radius: float
    trail: deque[Point] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))
    frozen: int = 0
    giant: int = 0
    speed: int = 0
    is_clone: bool = False
    clone_expires: int = 0
    frozen_on_frame: int = -1
    """Frame index of the last freeze hit; that frame skips the freeze decay."""

    @property
    def speed_magnitude(self) -> float:
        return math.hypot(self.vx, self.vy)

    def record_trail(self) -> None:
        """Append the current position; a bounded trail evicts its oldest entry."""
        self.trail.append((self.x, self.y))

    def tick_clone(self) -> bool:
        """Count down clone lifetime. Return True when the clone expires now."""
        if not self.is_clone or self.clone_expires <= 0:
            return False
        self.clone_expires -= 1
        return self.clone_expires <= 0

    def decay_timers(self, frame_index: int, giant_scale: float) -> None:
        """Decrement each active effect timer once.

        The radius tracks the giant timer: enlarged while it runs, back to
        ``base_radius`` on the frame it reaches zero.
        """
        if self.frozen > 0 and self.frozen_on_frame != frame_index:
            self.frozen -= 1
        if self.giant > 0:
            self.giant -= 1
            self.radius = self.base_radius * giant_scale if self.giant > 0 else self.base_radius
        if self.speed > 0:
            self.speed -= 1

    def reflect(self, width: float, height: float) -> None:
        """Clamp inside the world and point velocity back inward, per axis."""
        if self.x - self.radius < 0:
            self.x = self.radius
            self.vx = abs(self.vx)
        if self.x + self.radius > width:
            self.x = width - self.radius
            self.vx = -abs(self.vx)
        if self.y - self.radius < 0:
            self.y = self.radius
            self.vy = abs(self.vy)
        if self.y + self.radius > height:
            self.y = height - self.radius
            self.vy = -abs(self.vy)


def new_trail(capacity: int) -> deque[Point]:
    return deque(maxlen=capacity)

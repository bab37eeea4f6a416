"""Frame-step engine: owns all mutable simulation state.

One call to :func:`step` advances exactly one frame. Per ball, the update
order is load-bearing: clone expiry, timer decay, trail, frozen
short-circuit, integration, boundary reflection, power-up pickups, tile
conversion, then heading randomization on a center-cell capture.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from random import Random

import numpy as np

from territory_war.config.types import GameConfig, clamp_speed_multiplier
from territory_war.domain.ball import Ball, new_trail
from territory_war.domain.grid import Team, TileGrid, cell_at
from territory_war.domain.powerups import PowerUp, PowerUpRegistry, PowerUpType
from territory_war.domain.snapshot import BallView, FrameSnapshot, PowerUpView
from territory_war.simulation.scoring import ScoreTracker

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Grid, balls, power-ups, and scores, plus frame and id counters."""

    config: GameConfig
    width: float
    height: float
    grid: TileGrid
    balls: list[Ball]
    powerups: PowerUpRegistry
    scores: ScoreTracker
    rng: Random
    frame_index: int = 0
    next_ball_id: int = 0
    published_tiles: np.ndarray | None = None

    @property
    def tile_width(self) -> float:
        return self.width / self.config.cols

    @property
    def tile_height(self) -> float:
        return self.height / self.config.rows

    def allocate_ball_id(self) -> int:
        ball_id = self.next_ball_id
        self.next_ball_id += 1
        return ball_id


def _check_dimensions(width: float, height: float) -> None:
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        raise ValueError("world dimensions must be finite and > 0")


def initialize(
    world_width: float,
    world_height: float,
    config: GameConfig | None = None,
    sim_seed: int = 0,
) -> SimulationState:
    """Build the starting grid split and one permanent ball per team."""
    _check_dimensions(world_width, world_height)
    cfg = config or GameConfig()
    rng = Random(sim_seed)
    state = SimulationState(
        config=cfg,
        width=float(world_width),
        height=float(world_height),
        grid=TileGrid.create(cfg.rows, cfg.cols),
        balls=[],
        powerups=PowerUpRegistry(
            spawn_interval=cfg.powerup_spawn_interval,
            max_active=cfg.max_active_powerups,
            inset=cfg.spawn_inset,
            pickup_margin=cfg.pickup_margin,
        ),
        scores=ScoreTracker(total_tiles=cfg.total_tiles, delay=cfg.highscore_delay),
        rng=rng,
    )
    base_radius = min(state.tile_width, state.tile_height) * cfg.ball_radius_fraction
    for team, x_fraction, direction in ((Team.LEFT, 0.25, 1.0), (Team.RIGHT, 0.75, -1.0)):
        state.balls.append(
            _new_ball(
                state,
                x=cfg.cols * x_fraction * state.tile_width,
                y=(cfg.rows / 2) * state.tile_height,
                vx=direction * cfg.base_speed,
                vy=(rng.random() - 0.5) * 2,
                team=team,
                base_radius=base_radius,
            )
        )
    state.scores.update(state.grid, state.frame_index)
    logger.debug("initialized %sx%s world, seed=%d", world_width, world_height, sim_seed)
    return state


def _new_ball(
    state: SimulationState,
    *,
    x: float,
    y: float,
    vx: float,
    vy: float,
    team: Team,
    base_radius: float,
    clone_lifetime: int = 0,
) -> Ball:
    return Ball(
        ball_id=state.allocate_ball_id(),
        x=x,
        y=y,
        vx=vx,
        vy=vy,
        team=team,
        radius=base_radius,
        base_radius=base_radius,
        is_clone=clone_lifetime > 0,
        clone_expires=clone_lifetime,
        trail=new_trail(state.config.trail_length),
    )


def resize(state: SimulationState, world_width: float, world_height: float) -> None:
    """Adopt new world dimensions; tile pitch follows, grid and balls are kept.

    Every ball, frozen or not, is clamped into the new bounds immediately.
    """
    _check_dimensions(world_width, world_height)
    state.width = float(world_width)
    state.height = float(world_height)
    for ball in state.balls:
        ball.reflect(state.width, state.height)
    logger.debug("resized world to %sx%s", world_width, world_height)


def step(state: SimulationState, global_speed_multiplier: float = 1.0) -> FrameSnapshot:
    """Advance one frame and publish a read-only snapshot."""
    speed_multiplier = clamp_speed_multiplier(global_speed_multiplier)
    state.frame_index += 1
    frame = state.frame_index

    spawned = state.powerups.try_spawn(frame, state.width, state.height, state.rng)
    if spawned is not None:
        logger.debug(
            "frame %d: spawned %s power-up at (%.1f, %.1f)",
            frame,
            spawned.kind.value,
            spawned.x,
            spawned.y,
        )

    tiles_changed = False
    next_balls: list[Ball] = []
    clones: list[Ball] = []
    for ball in state.balls:
        if ball.tick_clone():
            logger.debug("frame %d: clone %d expired", frame, ball.ball_id)
            continue

        ball.decay_timers(frame, state.config.giant_scale)
        ball.record_trail()
        if ball.frozen > 0:
            next_balls.append(ball)
            continue

        boost = state.config.speed_boost if ball.speed > 0 else 1.0
        effective = boost * speed_multiplier
        ball.x += ball.vx * effective
        ball.y += ball.vy * effective
        ball.reflect(state.width, state.height)

        new_clones: list[Ball] = []
        for powerup in state.powerups.pickup_check(ball):
            clone = _apply_powerup(state, ball, powerup, pending=clones)
            if clone is not None:
                new_clones.append(clone)
                clones.append(clone)

        changed, center_captured = _convert_tiles(state, ball)
        tiles_changed = tiles_changed or changed
        if center_captured:
            _randomize_heading(ball, state.rng)

        next_balls.append(ball)
        next_balls.extend(new_clones)

    state.balls = next_balls
    state.scores.update(state.grid, frame)
    if tiles_changed or state.published_tiles is None:
        state.published_tiles = state.grid.to_array()
    return _snapshot(state, tiles_changed)


def _apply_powerup(
    state: SimulationState, ball: Ball, powerup: PowerUp, pending: list[Ball]
) -> Ball | None:
    """Apply one pickup effect. Return the new clone for a split, else None."""
    cfg = state.config
    frame = state.frame_index
    logger.debug(
        "frame %d: ball %d (%s) picked up %s",
        frame,
        ball.ball_id,
        ball.team.label,
        powerup.kind.value,
    )
    if powerup.kind is PowerUpType.SPLIT:
        clone = _new_ball(
            state,
            x=ball.x,
            y=ball.y,
            vx=-ball.vy,
            vy=ball.vx,
            team=ball.team,
            base_radius=ball.base_radius * cfg.clone_scale,
            clone_lifetime=cfg.clone_lifetime,
        )
        logger.debug("frame %d: ball %d split off clone %d", frame, ball.ball_id, clone.ball_id)
        return clone
    if powerup.kind is PowerUpType.GIANT:
        ball.giant = cfg.powerup_duration
        ball.radius = ball.base_radius * cfg.giant_scale
    elif powerup.kind is PowerUpType.SPEED:
        ball.speed = cfg.powerup_duration
    elif powerup.kind is PowerUpType.FREEZE:
        enemy = ball.team.opponent
        for other in (*state.balls, *pending):
            if other.team is enemy:
                other.frozen = cfg.powerup_duration
                other.frozen_on_frame = frame
    elif powerup.kind is PowerUpType.MAGNET:
        target_x = state.width * (0.75 if ball.team is Team.LEFT else 0.25)
        dx = target_x - ball.x
        dy = state.height / 2 - ball.y
        dist = math.hypot(dx, dy)
        if dist > 0:
            ball.vx = dx / dist * cfg.base_speed * cfg.magnet_speed_x
            ball.vy = dy / dist * cfg.base_speed * cfg.magnet_speed_y
    return None


def _convert_tiles(state: SimulationState, ball: Ball) -> tuple[bool, bool]:
    """Paint the cell under the ball (3x3 block while giant).

    Returns ``(any_changed, center_changed)``.
    """
    cell = cell_at(ball.x, ball.y, state.tile_width, state.tile_height)
    if cell is None:
        return False, False
    row, col = cell
    reach = 1 if ball.giant > 0 else 0
    any_changed = False
    center_changed = False
    for dr in range(-reach, reach + 1):
        for dc in range(-reach, reach + 1):
            r, c = row + dr, col + dc
            if not state.grid.in_bounds(r, c):
                continue
            if state.grid.convert(r, c, ball.team):
                any_changed = True
                if dr == 0 and dc == 0:
                    center_changed = True
    return any_changed, center_changed


def _randomize_heading(ball: Ball, rng: Random) -> None:
    """Point the ball in a uniformly random direction, keeping its speed."""
    angle = rng.random() * math.tau
    magnitude = ball.speed_magnitude
    ball.vx = math.cos(angle) * magnitude
    ball.vy = math.sin(angle) * magnitude


def _snapshot(state: SimulationState, tiles_changed: bool) -> FrameSnapshot:
    frame = state.frame_index
    scores = state.scores
    tiles = state.published_tiles if state.published_tiles is not None else state.grid.to_array()
    return FrameSnapshot(
        frame_index=frame,
        width=state.width,
        height=state.height,
        tiles=tiles,
        tiles_changed=tiles_changed,
        balls=tuple(BallView.of(ball) for ball in state.balls),
        powerups=tuple(PowerUpView.of(p) for p in state.powerups.active),
        counts=dict(scores.counts),
        high_scores=dict(scores.high_scores),
        at_high_score={team: scores.at_high_score(team, frame) for team in Team},
    )


def snapshot(state: SimulationState) -> FrameSnapshot:
    """Publish the current state without advancing (e.g. before the first tick)."""
    if state.published_tiles is None:
        state.published_tiles = state.grid.to_array()
    return _snapshot(state, tiles_changed=False)


class Simulation:
    """Stateful facade for a fixed-rate scheduler and a speed control.

    The speed multiplier is written by an outside actor between ticks and
    read once at the start of each tick.
    """

    def __init__(
        self,
        width: float,
        height: float,
        config: GameConfig | None = None,
        sim_seed: int = 0,
        speed_multiplier: float = 1.0,
    ) -> None:
        self.state = initialize(width, height, config=config, sim_seed=sim_seed)
        self._speed_multiplier = clamp_speed_multiplier(speed_multiplier)
        self.snapshot = snapshot(self.state)

    @property
    def speed_multiplier(self) -> float:
        return self._speed_multiplier

    @speed_multiplier.setter
    def speed_multiplier(self, value: float) -> None:
        self._speed_multiplier = clamp_speed_multiplier(value)

    @property
    def frame_index(self) -> int:
        return self.state.frame_index

    def tick(self) -> FrameSnapshot:
        self.snapshot = step(self.state, self._speed_multiplier)
        return self.snapshot

    def run(self, frames: int) -> FrameSnapshot:
        """Advance ``frames`` ticks and return the last snapshot."""
        if frames < 0:
            raise ValueError("frames must be >= 0")
        for _ in range(frames):
            self.tick()
        return self.snapshot

    def resize(self, width: float, height: float) -> None:
        resize(self.state, width, height)

"""Matplotlib-based rendering of frame snapshots and recorded score logs."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.parquet as pq
from matplotlib.colors import BoundaryNorm, ListedColormap
from matplotlib.patches import Circle, Rectangle

from territory_war.config.constants import PICKUP_MARGIN
from territory_war.domain.grid import Team
from territory_war.domain.powerups import PowerUpType
from territory_war.domain.snapshot import BallView, FrameSnapshot
from territory_war.io.paths import resolve_within_base as _resolve_within_base
from territory_war.viz.theme import (
    DEFAULT_PALETTE,
    FROZEN_COLOR,
    POWERUP_COLORS,
    RAINBOW_COLORS,
    Palette,
)

_SCORE_BAR_WIDTH = 160.0
_SCORE_BAR_HEIGHT = 6.0
_SCORE_BAR_TOP = 20.0


def _resolve_output(output_path: Path, base_dir: Path | None) -> Path:
    if base_dir is None:
        return Path(output_path).resolve()
    return _resolve_within_base(Path(output_path), Path(base_dir).resolve())


# ---------------------------------------------------------------------------
# Frame drawing helpers
# ---------------------------------------------------------------------------


def _tile_cmap(palette: Palette) -> tuple[ListedColormap, BoundaryNorm]:
    """Two-color colormap indexed by ``Team`` value."""
    cmap = ListedColormap([palette.left.tile, palette.right.tile])
    norm = BoundaryNorm([-0.5, 0.5, 1.5], cmap.N)
    return cmap, norm


def _ball_fill(ball: BallView, palette: Palette, rainbow: bool, frame_index: int) -> str:
    if ball.frozen:
        return FROZEN_COLOR
    if rainbow:
        return RAINBOW_COLORS[(frame_index // 5) % len(RAINBOW_COLORS)]
    return palette.colors(ball.team).ball


def _draw_ball(
    ax: plt.Axes, ball: BallView, palette: Palette, at_high: bool, frame_index: int
) -> None:
    rainbow = at_high and not ball.is_clone
    trail_color = palette.colors(ball.team).trail
    n = len(ball.trail)
    for i, (tx, ty) in enumerate(ball.trail):
        alpha = (i / n) * 0.5
        size = ball.radius * (0.3 + (i / n) * 0.7)
        color = trail_color
        if rainbow:
            color = RAINBOW_COLORS[(frame_index // 3 + i) % len(RAINBOW_COLORS)]
        ax.add_patch(Circle((tx, ty), size, color=color, alpha=alpha, linewidth=0))

    for active, color, pad, width in (
        (ball.frozen, FROZEN_COLOR, 6.0, 3.0),
        (ball.giant, POWERUP_COLORS[PowerUpType.GIANT], 4.0, 2.0),
        (ball.speed, POWERUP_COLORS[PowerUpType.SPEED], 4.0, 2.0),
    ):
        if active:
            ax.add_patch(
                Circle(
                    (ball.x, ball.y),
                    ball.radius + pad,
                    fill=False,
                    edgecolor=color,
                    linewidth=width,
                )
            )

    if rainbow and not ball.frozen:
        glow = RAINBOW_COLORS[(frame_index // 4) % len(RAINBOW_COLORS)]
        ax.add_patch(Circle((ball.x, ball.y), ball.radius + 8, color=glow, alpha=0.2, linewidth=0))

    ax.add_patch(
        Circle(
            (ball.x, ball.y),
            ball.radius,
            color=_ball_fill(ball, palette, rainbow, frame_index),
            alpha=0.7 if ball.is_clone else 1.0,
            linewidth=0,
        )
    )


def _draw_score_bar(ax: plt.Axes, snapshot: FrameSnapshot, palette: Palette) -> None:
    """Left share of the bar in the left tile color, with high-score ticks."""
    total = snapshot.total_tiles
    bar_x = snapshot.width / 2 - _SCORE_BAR_WIDTH / 2
    y = _SCORE_BAR_TOP
    ax.add_patch(
        Rectangle(
            (bar_x - 10, y - 10),
            _SCORE_BAR_WIDTH + 20,
            _SCORE_BAR_HEIGHT + 20,
            color="black",
            alpha=0.5,
        )
    )
    left_width = snapshot.counts[Team.LEFT] / total * _SCORE_BAR_WIDTH
    ax.add_patch(
        Rectangle((bar_x, y), _SCORE_BAR_WIDTH, _SCORE_BAR_HEIGHT, color=palette.right.tile)
    )
    ax.add_patch(Rectangle((bar_x, y), left_width, _SCORE_BAR_HEIGHT, color=palette.left.tile))
    left_high_x = bar_x + snapshot.high_scores[Team.LEFT] / total * _SCORE_BAR_WIDTH
    right_high_x = bar_x + (total - snapshot.high_scores[Team.RIGHT]) / total * _SCORE_BAR_WIDTH
    for x, color in ((left_high_x, palette.left.ball), (right_high_x, palette.right.ball)):
        ax.plot([x, x], [y - 3, y + _SCORE_BAR_HEIGHT + 3], color=color, alpha=0.8, linewidth=2)


def _draw_frame(ax: plt.Axes, snapshot: FrameSnapshot, palette: Palette) -> None:
    """Shared renderer: tiles, power-ups, balls, and score bar on *ax*."""
    cmap, norm = _tile_cmap(palette)
    ax.imshow(
        np.asarray(snapshot.tiles),
        cmap=cmap,
        norm=norm,
        origin="upper",
        extent=(0, snapshot.width, snapshot.height, 0),
        interpolation="nearest",
    )
    for powerup in snapshot.powerups:
        color = POWERUP_COLORS[powerup.kind]
        ax.add_patch(Circle((powerup.x, powerup.y), PICKUP_MARGIN + 4, color=color, alpha=0.2))
        ax.add_patch(Circle((powerup.x, powerup.y), PICKUP_MARGIN, color=color))
    for ball in snapshot.balls:
        _draw_ball(ax, ball, palette, snapshot.at_high_score[ball.team], snapshot.frame_index)
    _draw_score_bar(ax, snapshot, palette)
    ax.set_xlim(0, snapshot.width)
    ax.set_ylim(snapshot.height, 0)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_facecolor(palette.background)


# ---------------------------------------------------------------------------
# Public renderers
# ---------------------------------------------------------------------------


def render_frame(
    snapshot: FrameSnapshot,
    output_path: Path,
    palette: Palette = DEFAULT_PALETTE,
    base_dir: Path | None = None,
    dpi: int = 100,
) -> Path:
    """Render one frame to an image file sized after the world dimensions."""
    output_path = _resolve_output(output_path, base_dir)
    fig, ax = plt.subplots(figsize=(snapshot.width / dpi, snapshot.height / dpi))
    fig.patch.set_facecolor(palette.background)
    _draw_frame(ax, snapshot, palette)
    fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path


def render_filmstrip(
    snapshots: Sequence[FrameSnapshot],
    output_path: Path,
    n_frames: int = 6,
    palette: Palette = DEFAULT_PALETTE,
    base_dir: Path | None = None,
) -> Path:
    """Render an evenly spaced horizontal filmstrip with frame labels."""
    if not snapshots:
        raise ValueError("snapshots must not be empty")
    if n_frames < 1:
        raise ValueError("n_frames must be >= 1")
    output_path = _resolve_output(output_path, base_dir)

    actual_n = max(1, min(n_frames, len(snapshots)))
    indices = [int(i * (len(snapshots) - 1) / max(1, actual_n - 1)) for i in range(actual_n)]
    aspect = snapshots[0].height / snapshots[0].width
    fig, axes = plt.subplots(1, actual_n, figsize=(3 * actual_n, 3 * aspect + 0.5), squeeze=False)
    fig.patch.set_facecolor(palette.background)
    for col_idx, index in enumerate(indices):
        ax = axes[0, col_idx]
        snap = snapshots[index]
        _draw_frame(ax, snap, palette)
        ax.set_title(
            f"Frame {snap.frame_index}  {snap.counts[Team.LEFT]}:{snap.counts[Team.RIGHT]}",
            fontsize=9,
            color="white",
        )
    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path


def render_score_timeseries(
    frame_log_path: Path,
    output_path: Path,
    match_id: str | None = None,
    palette: Palette = DEFAULT_PALETTE,
    base_dir: Path | None = None,
) -> Path:
    """Plot per-team tile counts (solid) and high scores (dashed) over frames."""
    if base_dir is None:
        frame_log_path = Path(frame_log_path).resolve()
    else:
        frame_log_path = _resolve_within_base(Path(frame_log_path), Path(base_dir).resolve())
    output_path = _resolve_output(output_path, base_dir)

    filters = [("match_id", "=", match_id)] if match_id is not None else None
    rows = pq.read_table(frame_log_path, filters=filters).to_pylist()
    if not rows:
        raise ValueError(f"No frame rows found for match_id={match_id}")
    if match_id is None:
        match_id = str(rows[0]["match_id"])
        rows = [row for row in rows if row["match_id"] == match_id]

    frames = [int(row["frame"]) for row in rows]
    fig, ax = plt.subplots(figsize=(8, 4))
    for team in Team:
        color = palette.colors(team).ball
        label = team.label
        counts = [row[f"{label}_count"] for row in rows]
        ax.plot(frames, counts, color=color, label=f"{label} tiles")
        ax.plot(
            frames,
            [row[f"{label}_high_score"] for row in rows],
            color=color,
            linestyle="--",
            alpha=0.7,
            label=f"{label} high score",
        )
    ax.set_facecolor("#333333")
    ax.set_xlabel("Frame")
    ax.set_ylabel("Tiles owned")
    ax.set_title(f"Match {match_id}")
    ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path

"""Headless match runner: seeded batches of recorded matches."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

import pyarrow.parquet as pq

from territory_war.config.constants import FLUSH_THRESHOLD, MAX_MATCH_WORK_UNITS
from territory_war.config.types import MatchConfig, MatchResult
from territory_war.domain.grid import Team
from territory_war.domain.snapshot import FrameSnapshot
from territory_war.io import paths
from territory_war.io.schemas import (
    BALL_LOG_SCHEMA,
    FRAME_LOG_SCHEMA,
    MATCH_PAYLOAD_SCHEMA_VERSION,
)
from territory_war.simulation.engine import initialize, snapshot, step
from territory_war.simulation.persistence import empty_columns, flush_columns

logger = logging.getLogger(__name__)


def deterministic_match_id(sim_seed: int, frames: int) -> str:
    """Build reproducible match ID stable across runs for identical settings."""
    return f"seed{sim_seed}_f{frames}"


def _append_frame_row(columns: dict[str, list[object]], match_id: str, snap: FrameSnapshot) -> None:
    columns["match_id"].append(match_id)
    columns["frame"].append(snap.frame_index)
    columns["left_count"].append(snap.counts[Team.LEFT])
    columns["right_count"].append(snap.counts[Team.RIGHT])
    columns["left_high_score"].append(snap.high_scores[Team.LEFT])
    columns["right_high_score"].append(snap.high_scores[Team.RIGHT])
    columns["left_at_high_score"].append(snap.at_high_score[Team.LEFT])
    columns["right_at_high_score"].append(snap.at_high_score[Team.RIGHT])
    columns["n_balls"].append(len(snap.balls))
    columns["n_clones"].append(sum(1 for ball in snap.balls if ball.is_clone))
    columns["n_powerups"].append(len(snap.powerups))
    columns["tiles_changed"].append(snap.tiles_changed)


def _append_ball_rows(columns: dict[str, list[object]], match_id: str, snap: FrameSnapshot) -> None:
    for ball in snap.balls:
        columns["match_id"].append(match_id)
        columns["frame"].append(snap.frame_index)
        columns["ball_id"].append(ball.ball_id)
        columns["team"].append(ball.team.label)
        columns["x"].append(ball.x)
        columns["y"].append(ball.y)
        columns["radius"].append(ball.radius)
        columns["is_clone"].append(ball.is_clone)
        columns["frozen"].append(ball.frozen)
        columns["giant"].append(ball.giant)
        columns["speed"].append(ball.speed)


def run_batch(
    n_matches: int,
    out_dir: Path,
    config: MatchConfig | None = None,
    base_sim_seed: int | None = None,
) -> list[MatchResult]:
    """Run consecutive-seed matches and persist JSON/Parquet outputs.

    Seeds start at ``base_sim_seed`` (default ``config.sim_seed``). All
    matches stream into the same frame and ball logs.
    """
    if n_matches < 1:
        raise ValueError("n_matches must be >= 1")
    match_config = config or MatchConfig()
    if n_matches * match_config.frames > MAX_MATCH_WORK_UNITS:
        raise ValueError("batch workload exceeds safety threshold; reduce n_matches/frames")
    first_seed = match_config.sim_seed if base_sim_seed is None else base_sim_seed

    out_dir = Path(out_dir)
    paths.logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    paths.matches_dir(out_dir).mkdir(parents=True, exist_ok=True)
    frame_log_path = paths.frame_log_path(out_dir)
    ball_log_path = paths.ball_log_path(out_dir)

    frame_writer: pq.ParquetWriter | None = None
    ball_writer: pq.ParquetWriter | None = None
    results: list[MatchResult] = []

    try:
        for i in range(n_matches):
            cfg = replace(match_config, sim_seed=first_seed + i)
            match_id = deterministic_match_id(cfg.sim_seed, cfg.frames)
            logger.info("match %s: starting %d frames", match_id, cfg.frames)

            state = initialize(cfg.width, cfg.height, config=cfg.game, sim_seed=cfg.sim_seed)
            frame_columns = empty_columns(FRAME_LOG_SCHEMA)
            ball_columns = empty_columns(BALL_LOG_SCHEMA)
            snap = snapshot(state)

            for _ in range(cfg.frames):
                snap = step(state, cfg.speed_multiplier)
                _append_frame_row(frame_columns, match_id, snap)
                if cfg.record_balls:
                    _append_ball_rows(ball_columns, match_id, snap)
                if len(ball_columns["match_id"]) >= FLUSH_THRESHOLD:
                    ball_writer = flush_columns(
                        ball_columns, ball_log_path, BALL_LOG_SCHEMA, ball_writer
                    )
                if len(frame_columns["match_id"]) >= FLUSH_THRESHOLD:
                    frame_writer = flush_columns(
                        frame_columns, frame_log_path, FRAME_LOG_SCHEMA, frame_writer
                    )

            frame_writer = flush_columns(
                frame_columns, frame_log_path, FRAME_LOG_SCHEMA, frame_writer
            )
            ball_writer = flush_columns(ball_columns, ball_log_path, BALL_LOG_SCHEMA, ball_writer)

            result = MatchResult(
                match_id=match_id,
                frames=cfg.frames,
                left_count=snap.counts[Team.LEFT],
                right_count=snap.counts[Team.RIGHT],
                left_high_score=snap.high_scores[Team.LEFT],
                right_high_score=snap.high_scores[Team.RIGHT],
                n_balls=len(snap.balls),
                n_powerups_spawned=state.powerups.spawned_total,
            )
            payload = {
                "match_id": match_id,
                "final": {
                    "counts": {team.label: snap.counts[team] for team in Team},
                    "high_scores": {team.label: snap.high_scores[team] for team in Team},
                    "n_balls": result.n_balls,
                    "n_powerups_spawned": result.n_powerups_spawned,
                    "leader": result.leader,
                },
                "tiles": snap.tiles.tolist(),
                "metadata": {
                    "sim_seed": cfg.sim_seed,
                    "frames": cfg.frames,
                    "width": cfg.width,
                    "height": cfg.height,
                    "speed_multiplier": cfg.speed_multiplier,
                    "rows": cfg.game.rows,
                    "cols": cfg.game.cols,
                    "record_balls": cfg.record_balls,
                    "schema_version": MATCH_PAYLOAD_SCHEMA_VERSION,
                },
            }
            paths.match_payload_path(out_dir, match_id).write_text(
                json.dumps(payload, ensure_ascii=False, indent=2)
            )
            logger.info(
                "match %s: finished left=%d right=%d balls=%d",
                match_id,
                result.left_count,
                result.right_count,
                result.n_balls,
            )
            results.append(result)
    finally:
        if frame_writer is not None:
            frame_writer.close()
        if ball_writer is not None:
            ball_writer.close()

    return results


def run_match(config: MatchConfig, out_dir: Path) -> MatchResult:
    """Run and record a single match seeded by ``config.sim_seed``."""
    return run_batch(1, out_dir, config=config)[0]

"""Tests for territory_war.simulation.runner recorded matches."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from territory_war.config.types import MatchConfig
from territory_war.io.paths import ball_log_path, frame_log_path, match_payload_path
from territory_war.io.schemas import BALL_LOG_SCHEMA, FRAME_LOG_SCHEMA
from territory_war.simulation.runner import deterministic_match_id, run_batch, run_match


def test_deterministic_match_id() -> None:
    assert deterministic_match_id(3, 1800) == "seed3_f1800"


class TestRunMatch:
    def test_writes_frame_log(self, tmp_path: Path) -> None:
        result = run_match(MatchConfig(frames=50, sim_seed=4), tmp_path)
        table = pq.read_table(frame_log_path(tmp_path))
        assert table.schema.names == FRAME_LOG_SCHEMA.names
        rows = table.to_pylist()
        assert len(rows) == 50
        assert [row["frame"] for row in rows] == list(range(1, 51))
        assert all(row["left_count"] + row["right_count"] == 240 for row in rows)
        assert all(row["match_id"] == result.match_id for row in rows)
        assert rows[-1]["left_count"] == result.left_count

    def test_writes_ball_log(self, tmp_path: Path) -> None:
        run_match(MatchConfig(frames=50), tmp_path)
        table = pq.read_table(ball_log_path(tmp_path))
        assert table.schema.names == BALL_LOG_SCHEMA.names
        frame_rows = pq.read_table(frame_log_path(tmp_path)).to_pylist()
        assert table.num_rows == sum(row["n_balls"] for row in frame_rows)
        assert set(table.column("team").to_pylist()) == {"left", "right"}

    def test_skip_ball_log(self, tmp_path: Path) -> None:
        run_match(MatchConfig(frames=20, record_balls=False), tmp_path)
        assert frame_log_path(tmp_path).exists()
        assert not ball_log_path(tmp_path).exists()

    def test_writes_match_payload(self, tmp_path: Path) -> None:
        result = run_match(MatchConfig(frames=30, sim_seed=2), tmp_path)
        assert result.match_id == "seed2_f30"
        payload = json.loads(match_payload_path(tmp_path, result.match_id).read_text())
        assert payload["match_id"] == "seed2_f30"
        final = payload["final"]
        assert final["counts"] == {"left": result.left_count, "right": result.right_count}
        assert final["high_scores"] == {"left": 120, "right": 120}
        assert final["n_balls"] == result.n_balls
        assert final["leader"] == result.leader
        assert len(payload["tiles"]) == 12
        assert all(len(row) == 20 for row in payload["tiles"])
        assert payload["metadata"]["sim_seed"] == 2
        assert payload["metadata"]["schema_version"] == 1

    def test_same_seed_reproduces_result(self, tmp_path: Path) -> None:
        config = MatchConfig(frames=400, sim_seed=9)
        first = run_match(config, tmp_path / "a")
        second = run_match(config, tmp_path / "b")
        assert first == second


class TestRunBatch:
    def test_consecutive_seeds(self, tmp_path: Path) -> None:
        results = run_batch(3, tmp_path, config=MatchConfig(frames=10), base_sim_seed=5)
        assert [r.match_id for r in results] == ["seed5_f10", "seed6_f10", "seed7_f10"]
        frame_rows = pq.read_table(frame_log_path(tmp_path)).to_pylist()
        assert len(frame_rows) == 30
        assert {row["match_id"] for row in frame_rows} == {r.match_id for r in results}
        for result in results:
            assert match_payload_path(tmp_path, result.match_id).exists()

    def test_seeds_default_to_config_seed(self, tmp_path: Path) -> None:
        results = run_batch(2, tmp_path, config=MatchConfig(frames=10, sim_seed=40))
        assert [r.match_id for r in results] == ["seed40_f10", "seed41_f10"]

    def test_rejects_zero_matches(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="n_matches"):
            run_batch(0, tmp_path)

    def test_rejects_excessive_workload(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="safety threshold"):
            run_batch(100_000, tmp_path, config=MatchConfig(frames=1_800))
        assert not frame_log_path(tmp_path).exists()

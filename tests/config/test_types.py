"""Tests for territory_war.config.types validation."""

from __future__ import annotations

import pytest

from territory_war.config.types import (
    GameConfig,
    MatchConfig,
    MatchResult,
    clamp_speed_multiplier,
)


class TestGameConfig:
    def test_defaults_are_valid(self) -> None:
        config = GameConfig()
        assert config.total_tiles == 240
        assert config.clone_lifetime == 360

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"rows": 0}, "rows >= 1"),
            ({"cols": 1}, "cols >= 2"),
            ({"base_speed": 0.0}, "base_speed"),
            ({"powerup_duration": 0}, "powerup_duration"),
            ({"powerup_spawn_interval": 0}, "powerup_spawn_interval"),
            ({"giant_scale": 0.5}, "giant_scale"),
            ({"clone_scale": 1.5}, "clone_scale"),
            ({"ball_radius_fraction": 0.0}, "ball_radius_fraction"),
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict[str, object], message: str) -> None:
        with pytest.raises(ValueError, match=message):
            GameConfig(**kwargs)  # type: ignore[arg-type]


class TestMatchConfig:
    def test_rejects_zero_frames(self) -> None:
        with pytest.raises(ValueError, match="frames"):
            MatchConfig(frames=0)

    def test_rejects_non_positive_world(self) -> None:
        with pytest.raises(ValueError, match="world dimensions"):
            MatchConfig(width=0)

    def test_rejects_out_of_range_speed(self) -> None:
        with pytest.raises(ValueError, match="speed_multiplier"):
            MatchConfig(speed_multiplier=5.0)


class TestClampSpeedMultiplier:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(0.1, 0.5), (0.5, 0.5), (1.7, 1.7), (3.0, 3.0), (10.0, 3.0)],
    )
    def test_clamps_into_range(self, raw: float, expected: float) -> None:
        assert clamp_speed_multiplier(raw) == expected


def test_match_result_leader() -> None:
    base = dict(
        match_id="m",
        frames=1,
        left_high_score=120,
        right_high_score=120,
        n_balls=2,
        n_powerups_spawned=0,
    )
    assert MatchResult(left_count=130, right_count=110, **base).leader == "left"
    assert MatchResult(left_count=100, right_count=140, **base).leader == "right"
    assert MatchResult(left_count=120, right_count=120, **base).leader is None

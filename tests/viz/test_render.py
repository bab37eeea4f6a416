"""Tests for territory_war.viz renderers and palettes."""

from __future__ import annotations

from pathlib import Path
from random import Random

import pytest

from territory_war.config.types import MatchConfig
from territory_war.domain.grid import Team
from territory_war.io.paths import frame_log_path
from territory_war.simulation.engine import Simulation
from territory_war.simulation.runner import run_match
from territory_war.viz.render import render_filmstrip, render_frame, render_score_timeseries
from territory_war.viz.theme import (
    DEFAULT_PALETTE,
    REGISTERED_PALETTES,
    get_palette,
    random_palette,
)


class TestPalettes:
    def test_six_palettes_registered(self) -> None:
        assert len(REGISTERED_PALETTES) == 6
        assert DEFAULT_PALETTE.name == "white_forest"

    def test_get_palette_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="palette must be one of"):
            get_palette("neon")

    def test_random_palette_is_seeded(self) -> None:
        assert random_palette(Random(3)) == random_palette(Random(3))

    def test_colors_per_team(self) -> None:
        palette = get_palette("coral_teal")
        assert palette.colors(Team.LEFT) == palette.left
        assert palette.colors(Team.RIGHT) == palette.right


class TestRenderFrame:
    def test_writes_png(self, tmp_path: Path) -> None:
        snap = Simulation(600.0, 360.0, sim_seed=1).run(30)
        out = render_frame(snap, tmp_path / "frame.png")
        assert out.exists()
        assert out.stat().st_size > 0

    def test_initial_snapshot_renders(self, tmp_path: Path) -> None:
        sim = Simulation(600.0, 360.0)
        out = render_frame(sim.snapshot, tmp_path / "start.png", palette=get_palette("pink_mint"))
        assert out.exists()

    def test_rejects_output_outside_base_dir(self, tmp_path: Path) -> None:
        snap = Simulation(600.0, 360.0).run(1)
        with pytest.raises(ValueError, match="escapes base_dir"):
            render_frame(snap, Path("../outside.png"), base_dir=tmp_path / "base")


class TestRenderFilmstrip:
    def test_writes_png(self, tmp_path: Path) -> None:
        sim = Simulation(600.0, 360.0, sim_seed=2)
        snaps = [sim.tick() for _ in range(12)]
        out = render_filmstrip(snaps, tmp_path / "strip.png", n_frames=4)
        assert out.exists()

    def test_rejects_empty(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            render_filmstrip([], tmp_path / "strip.png")

    def test_rejects_zero_frames(self, tmp_path: Path) -> None:
        snaps = [Simulation(600.0, 360.0).tick()]
        with pytest.raises(ValueError, match="n_frames"):
            render_filmstrip(snaps, tmp_path / "strip.png", n_frames=0)


class TestRenderScoreTimeseries:
    def test_writes_png(self, tmp_path: Path) -> None:
        result = run_match(MatchConfig(frames=40, record_balls=False), tmp_path)
        out = render_score_timeseries(
            frame_log_path(tmp_path), tmp_path / "scores.png", match_id=result.match_id
        )
        assert out.exists()

    def test_unknown_match_id(self, tmp_path: Path) -> None:
        run_match(MatchConfig(frames=5, record_balls=False), tmp_path)
        with pytest.raises(ValueError, match="No frame rows"):
            render_score_timeseries(
                frame_log_path(tmp_path), tmp_path / "scores.png", match_id="missing"
            )

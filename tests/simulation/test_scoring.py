"""Tests for territory_war.simulation.scoring module."""

from __future__ import annotations

from territory_war.domain.grid import Team, TileGrid
from territory_war.simulation.scoring import ScoreTracker


def _grid_with_left_count(left: int) -> TileGrid:
    grid = TileGrid.create(12, 20)
    cells = grid.cells.reshape(-1)
    cells[:left] = int(Team.LEFT)
    cells[left:] = int(Team.RIGHT)
    return grid


class TestScoreTracker:
    def test_starts_at_even_split(self) -> None:
        tracker = ScoreTracker(total_tiles=240, delay=600)
        assert tracker.counts == {Team.LEFT: 120, Team.RIGHT: 120}
        assert tracker.high_scores == {Team.LEFT: 120, Team.RIGHT: 120}

    def test_high_scores_frozen_until_delay_passes(self) -> None:
        tracker = ScoreTracker(total_tiles=240, delay=600)
        counts = tracker.update(_grid_with_left_count(150), 600)
        assert counts == {Team.LEFT: 150, Team.RIGHT: 90}
        assert tracker.high_scores == {Team.LEFT: 120, Team.RIGHT: 120}
        assert not tracker.at_high_score(Team.LEFT, 600)

    def test_high_scores_track_after_delay(self) -> None:
        tracker = ScoreTracker(total_tiles=240, delay=600)
        tracker.update(_grid_with_left_count(130), 601)
        assert tracker.high_scores == {Team.LEFT: 130, Team.RIGHT: 120}
        assert tracker.at_high_score(Team.LEFT, 601)
        assert not tracker.at_high_score(Team.RIGHT, 601)

    def test_high_scores_never_decrease(self) -> None:
        tracker = ScoreTracker(total_tiles=240, delay=600)
        tracker.update(_grid_with_left_count(130), 601)
        tracker.update(_grid_with_left_count(100), 602)
        assert tracker.high_scores == {Team.LEFT: 130, Team.RIGHT: 140}
        assert not tracker.at_high_score(Team.LEFT, 602)
        assert tracker.at_high_score(Team.RIGHT, 602)

    def test_tracking_threshold(self) -> None:
        tracker = ScoreTracker(total_tiles=240, delay=600)
        assert not tracker.tracking(600)
        assert tracker.tracking(601)

"""Per-team tile counts and high-water marks."""

from __future__ import annotations

from dataclasses import dataclass, field

from territory_war.domain.grid import Team, TileGrid


@dataclass
class ScoreTracker:
    """Tile counts recomputed every frame, plus per-team high scores.

    High scores hold at the initial even split until the frame index exceeds
    ``delay``; afterwards each is raised to the running count whenever the
    count is higher, so they never decrease.
    """

    total_tiles: int
    delay: int
    counts: dict[Team, int] = field(default_factory=dict)
    high_scores: dict[Team, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        even_split = self.total_tiles // 2
        if not self.counts:
            self.counts = {Team.LEFT: even_split, Team.RIGHT: self.total_tiles - even_split}
        if not self.high_scores:
            self.high_scores = {Team.LEFT: even_split, Team.RIGHT: even_split}

    def tracking(self, frame_index: int) -> bool:
        return frame_index > self.delay

    def update(self, grid: TileGrid, frame_index: int) -> dict[Team, int]:
        self.counts = grid.count_by_team()
        if self.tracking(frame_index):
            for team, count in self.counts.items():
                if count > self.high_scores[team]:
                    self.high_scores[team] = count
        return dict(self.counts)

    def at_high_score(self, team: Team, frame_index: int) -> bool:
        return self.tracking(frame_index) and self.counts[team] >= self.high_scores[team]

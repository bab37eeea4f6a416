"""Two-team territory-capture simulation core."""

from territory_war.config.types import GameConfig, MatchConfig
from territory_war.domain.grid import Team
from territory_war.domain.snapshot import FrameSnapshot
from territory_war.simulation.engine import Simulation, initialize, resize, step

__all__ = [
    "FrameSnapshot",
    "GameConfig",
    "MatchConfig",
    "Simulation",
    "Team",
    "initialize",
    "resize",
    "step",
]

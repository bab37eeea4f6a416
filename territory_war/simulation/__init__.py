"""Simulation engine: frame step, scoring, and recorded headless runs."""

from territory_war.simulation.engine import (
    Simulation,
    SimulationState,
    initialize,
    resize,
    snapshot,
    step,
)
from territory_war.simulation.runner import run_batch, run_match
from territory_war.simulation.scoring import ScoreTracker

__all__ = [
    "ScoreTracker",
    "Simulation",
    "SimulationState",
    "initialize",
    "resize",
    "run_batch",
    "run_match",
    "snapshot",
    "step",
]

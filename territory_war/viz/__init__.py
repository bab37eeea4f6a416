"""Visualization layer: palettes and matplotlib renderers."""

from territory_war.viz.render import render_filmstrip, render_frame, render_score_timeseries
from territory_war.viz.theme import (
    DEFAULT_PALETTE,
    POWERUP_COLORS,
    REGISTERED_PALETTES,
    Palette,
    TeamColors,
    get_palette,
    random_palette,
)

__all__ = [
    "DEFAULT_PALETTE",
    "POWERUP_COLORS",
    "REGISTERED_PALETTES",
    "Palette",
    "TeamColors",
    "get_palette",
    "random_palette",
    "render_filmstrip",
    "render_frame",
    "render_score_timeseries",
]

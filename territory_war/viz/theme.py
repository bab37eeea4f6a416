"""Color palettes for frame renderers.

Palettes are frozen dataclasses that group a team's tile, ball, and trail
colors. One palette is picked per session, either by name or at random.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from territory_war.domain.grid import Team
from territory_war.domain.powerups import PowerUpType


@dataclass(frozen=True)
class TeamColors:
    tile: str
    ball: str
    trail: str


@dataclass(frozen=True)
class Palette:
    """A light/dark pair of team colors plus the background."""

    name: str
    left: TeamColors
    right: TeamColors
    background: str = "#0a0a0a"

    def colors(self, team: Team) -> TeamColors:
        return self.left if team is Team.LEFT else self.right


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

WHITE_FOREST = Palette(
    name="white_forest",
    left=TeamColors(tile="#e8e8e8", ball="#ffffff", trail="#ffffff"),
    right=TeamColors(tile="#1a3d2e", ball="#3d8b6a", trail="#3d8b6a"),
)

CORAL_TEAL = Palette(
    name="coral_teal",
    left=TeamColors(tile="#4a1f1f", ball="#e87070", trail="#e87070"),
    right=TeamColors(tile="#1a3d3d", ball="#4ecdc4", trail="#4ecdc4"),
)

PURPLE_GOLD = Palette(
    name="purple_gold",
    left=TeamColors(tile="#2d1f4a", ball="#9b7beb", trail="#9b7beb"),
    right=TeamColors(tile="#3d3520", ball="#f0c850", trail="#f0c850"),
)

BLUE_ORANGE = Palette(
    name="blue_orange",
    left=TeamColors(tile="#1a2d4a", ball="#5b9bd5", trail="#5b9bd5"),
    right=TeamColors(tile="#4a2d1a", ball="#e8914f", trail="#e8914f"),
)

PINK_MINT = Palette(
    name="pink_mint",
    left=TeamColors(tile="#3d1f35", ball="#e880b0", trail="#e880b0"),
    right=TeamColors(tile="#1f3d2d", ball="#70e8a0", trail="#70e8a0"),
)

CRIMSON_SLATE = Palette(
    name="crimson_slate",
    left=TeamColors(tile="#4a1a1a", ball="#dc3545", trail="#dc3545"),
    right=TeamColors(tile="#2a2d35", ball="#8895a7", trail="#8895a7"),
)

REGISTERED_PALETTES: dict[str, Palette] = {
    p.name: p
    for p in (WHITE_FOREST, CORAL_TEAL, PURPLE_GOLD, BLUE_ORANGE, PINK_MINT, CRIMSON_SLATE)
}

DEFAULT_PALETTE = WHITE_FOREST

POWERUP_COLORS: dict[PowerUpType, str] = {
    PowerUpType.SPLIT: "#f59e0b",
    PowerUpType.GIANT: "#ec4899",
    PowerUpType.SPEED: "#3b82f6",
    PowerUpType.FREEZE: "#06b6d4",
    PowerUpType.MAGNET: "#8b5cf6",
}

FROZEN_COLOR = POWERUP_COLORS[PowerUpType.FREEZE]

RAINBOW_COLORS: tuple[str, ...] = (
    "#ff0000",
    "#ff7f00",
    "#ffff00",
    "#00ff00",
    "#0000ff",
    "#4b0082",
    "#9400d3",
)
"""Cycled on a team's permanent balls while the team sits at its high score."""


def get_palette(name: str) -> Palette:
    """Look up a palette by name; raise ValueError listing valid names."""
    try:
        return REGISTERED_PALETTES[name]
    except KeyError as exc:
        valid = ", ".join(sorted(REGISTERED_PALETTES))
        raise ValueError(f"palette must be one of {valid}") from exc


def random_palette(rng: Random) -> Palette:
    return rng.choice(list(REGISTERED_PALETTES.values()))

"""Centralized game constants for the territory simulation.

All magic numbers that the simulation core, runner, and renderers share are
defined here. Consuming modules should import from this module (or read the
matching field of ``GameConfig``) rather than defining inline literals.
"""

from __future__ import annotations

GRID_COLS = 20
"""Number of tile columns."""

GRID_ROWS = 12
"""Number of tile rows."""

TRAIL_LENGTH = 12
"""Maximum number of past positions kept per ball."""

BASE_SPEED = 4.0
"""Horizontal speed of the starting balls, in pixels per frame."""

POWERUP_DURATION = 180
"""Duration of timed power-up effects in frames (~3 seconds at 60 fps)."""

POWERUP_SPAWN_INTERVAL = 300
"""A power-up spawn is attempted every N frames (~5 seconds)."""

MAX_ACTIVE_POWERUPS = 3
"""No spawn happens while this many power-ups are on the field."""

HIGHSCORE_DELAY = 600
"""Frames (~10 seconds) before high scores start tracking."""

PICKUP_MARGIN = 14.0
"""Power-up radius added to the ball radius for pickup distance checks."""

SPAWN_INSET = 30.0
"""Power-ups spawn at least this many pixels from every edge."""

GIANT_SCALE = 2.5
"""Radius multiplier while the giant effect is active."""

SPEED_BOOST = 2.5
"""Velocity multiplier while the speed effect is active."""

CLONE_SCALE = 0.7
"""Clone radius relative to the parent's base radius."""

BALL_RADIUS_FRACTION = 0.4
"""Base radius as a fraction of the smaller tile dimension."""

MAGNET_SPEED_X = 1.5
"""Horizontal magnet velocity in units of ``BASE_SPEED``."""

MAGNET_SPEED_Y = 0.5
"""Vertical magnet velocity in units of ``BASE_SPEED``."""

MIN_SPEED_MULTIPLIER = 0.5
"""Lower bound of the global speed control."""

MAX_SPEED_MULTIPLIER = 3.0
"""Upper bound of the global speed control."""

FLUSH_THRESHOLD = 8_192
"""Flush run-log rows to Parquet once this in-memory row count is reached."""

MAX_MATCH_WORK_UNITS = 50_000_000
"""Safety cap on total frames across all matches of a batch."""

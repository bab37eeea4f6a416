"""Parquet schema definitions for recorded match logs.

All Arrow schemas used for persisting frame and ball logs are centralised
here so that the runner and the renderers work against the same column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

MATCH_PAYLOAD_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Run-log schemas
# ---------------------------------------------------------------------------

FRAME_LOG_SCHEMA = pa.schema(
    [
        ("match_id", pa.string()),
        ("frame", pa.int64()),
        ("left_count", pa.int64()),
        ("right_count", pa.int64()),
        ("left_high_score", pa.int64()),
        ("right_high_score", pa.int64()),
        ("left_at_high_score", pa.bool_()),
        ("right_at_high_score", pa.bool_()),
        ("n_balls", pa.int64()),
        ("n_clones", pa.int64()),
        ("n_powerups", pa.int64()),
        ("tiles_changed", pa.bool_()),
    ]
)

BALL_LOG_SCHEMA = pa.schema(
    [
        ("match_id", pa.string()),
        ("frame", pa.int64()),
        ("ball_id", pa.int64()),
        ("team", pa.string()),
        ("x", pa.float64()),
        ("y", pa.float64()),
        ("radius", pa.float64()),
        ("is_clone", pa.bool_()),
        ("frozen", pa.bool_()),
        ("giant", pa.bool_()),
        ("speed", pa.bool_()),
    ]
)

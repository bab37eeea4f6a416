"""Path construction helpers for match output directories.

Centralises the directory/file naming conventions used by the runner, the
CLI, and the renderers.
"""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def matches_dir(out_dir: Path) -> Path:
    """Return path to the per-match JSON payload directory."""
    return out_dir / "matches"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def frame_log_path(out_dir: Path) -> Path:
    """Return path to the per-frame score log Parquet file."""
    return logs_dir(out_dir) / "frame_log.parquet"


def ball_log_path(out_dir: Path) -> Path:
    """Return path to the per-ball position log Parquet file."""
    return logs_dir(out_dir) / "ball_log.parquet"


def match_payload_path(out_dir: Path, match_id: str) -> Path:
    return matches_dir(out_dir) / f"{match_id}.json"

"""Tests for territory_war.io.paths helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from territory_war.io.paths import (
    ball_log_path,
    frame_log_path,
    match_payload_path,
    resolve_within_base,
)


def test_layout(tmp_path: Path) -> None:
    assert frame_log_path(tmp_path) == tmp_path / "logs" / "frame_log.parquet"
    assert ball_log_path(tmp_path) == tmp_path / "logs" / "ball_log.parquet"
    assert match_payload_path(tmp_path, "seed0_f10") == tmp_path / "matches" / "seed0_f10.json"


def test_resolve_within_base_accepts_relative(tmp_path: Path) -> None:
    assert resolve_within_base(Path("a/b.png"), tmp_path) == (tmp_path / "a" / "b.png").resolve()


def test_resolve_within_base_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="escapes base_dir"):
        resolve_within_base(Path("../../etc/passwd"), tmp_path)

"""CLI entrypoint for headless matches and frame rendering.

This module owns CLI argument parsing and mode dispatch. All domain logic
lives in the extracted modules:

- ``territory_war.config``            – configuration dataclasses
- ``territory_war.simulation.engine`` – frame step
- ``territory_war.simulation.runner`` – recorded ``run_batch`` matches
- ``territory_war.viz``               – matplotlib renderers
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import fields
from pathlib import Path
from random import Random
from typing import Callable, TypeVar

from territory_war.config.types import GameConfig, MatchConfig
from territory_war.domain.snapshot import FrameSnapshot
from territory_war.simulation.engine import Simulation
from territory_war.simulation.runner import run_batch
from territory_war.viz.render import render_filmstrip, render_frame, render_score_timeseries
from territory_war.viz.theme import (
    DEFAULT_PALETTE,
    REGISTERED_PALETTES,
    Palette,
    get_palette,
    random_palette,
)

RANDOM_PALETTE = "random"
"""Palette argument value that picks a palette from the simulation seed."""

# ---------------------------------------------------------------------------
# Config resolution: CLI flag > JSON config file > built-in default
# ---------------------------------------------------------------------------

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})

T = TypeVar("T")


def _coerce_bool(raw: object, key: str) -> bool:
    """JSON booleans or an on/off word; integers are not booleans here."""
    if isinstance(raw, bool):
        return raw
    word = raw.strip().lower() if isinstance(raw, str) else None
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Integers, integral floats and numeric strings; booleans are rejected."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer value, got {raw!r}") from None


def _coerce_float(raw: object, key: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{key} must be a number")
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def _coerce_text(raw: object, key: str) -> str:
    if not isinstance(raw, (str, Path)):
        raise ValueError(f"{key} must be a string")
    return str(raw)


_COERCERS_BY_TYPE: dict[str, Callable[[object, str], object]] = {
    "bool": _coerce_bool,
    "int": _coerce_int,
    "float": _coerce_float,
}
"""Coercer per ``GameConfig`` field annotation."""


def _setting(
    cli_val: object,
    key: str,
    file_cfg: dict[str, object],
    default: object,
    coerce: Callable[[object, str], T],
) -> T:
    raw = cli_val if cli_val is not None else file_cfg.get(key, default)
    return coerce(raw, key)


def _load_file_config(parser: argparse.ArgumentParser, path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    try:
        loaded = json.loads(Path(path).read_text())
    except FileNotFoundError:
        parser.error(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        parser.error(f"Config file is not valid JSON: {path}: {exc}")
    if not isinstance(loaded, dict):
        parser.error(f"Config file must contain a JSON object: {path}")
    return loaded


def _game_config_from_file(file_cfg: dict[str, object]) -> GameConfig:
    """Build GameConfig from the optional ``game`` object of a config file.

    Each value is coerced by its field's annotation, so ``"6"`` is accepted
    for ``rows`` and ``"six"`` raises ValueError.
    """
    raw = file_cfg.get("game", {})
    if not isinstance(raw, dict):
        raise ValueError("game must be a JSON object")
    game_fields = {f.name: f for f in fields(GameConfig)}
    unknown = sorted(set(raw) - set(game_fields))
    if unknown:
        raise ValueError(f"unknown game settings: {', '.join(unknown)}")
    values: dict[str, object] = {}
    for key, value in raw.items():
        annotation = game_fields[key].type
        coerce = _COERCERS_BY_TYPE[getattr(annotation, "__name__", annotation)]
        values[key] = coerce(value, f"game.{key}")
    return GameConfig(**values)


def _match_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> MatchConfig:
    return MatchConfig(
        frames=_setting(args.frames, "frames", file_cfg, 1_800, _coerce_int),
        width=_setting(args.width, "width", file_cfg, 1_200.0, _coerce_float),
        height=_setting(args.height, "height", file_cfg, 720.0, _coerce_float),
        speed_multiplier=_setting(args.speed, "speed_multiplier", file_cfg, 1.0, _coerce_float),
        sim_seed=_setting(args.sim_seed, "sim_seed", file_cfg, 0, _coerce_int),
        record_balls=_setting(
            getattr(args, "record_balls", None), "record_balls", file_cfg, True, _coerce_bool
        ),
        game=_game_config_from_file(file_cfg),
    )


def _resolve_palette(name: str, sim_seed: int) -> Palette:
    if name == RANDOM_PALETTE:
        return random_palette(Random(sim_seed))
    return get_palette(name)


def _add_match_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    p.add_argument("--frames", type=int, default=None)
    p.add_argument("--width", type=float, default=None)
    p.add_argument("--height", type=float, default=None)
    p.add_argument("--speed", type=float, default=None, help="Global speed multiplier (0.5-3.0)")
    p.add_argument("--sim-seed", type=int, default=None)


def _build_run_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("run", help="Run and record headless matches")
    p.set_defaults(func=_handle_run)
    _add_match_arguments(p)
    p.add_argument("--n-matches", type=int, default=None)
    p.add_argument("--out-dir", type=Path, default=None)
    p.add_argument("--record-balls", action=argparse.BooleanOptionalAction, default=None)


def _build_render_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("render", help="Simulate and render frames to an image")
    p.set_defaults(func=_handle_render)
    _add_match_arguments(p)
    p.add_argument(
        "--palette",
        type=str,
        choices=sorted(REGISTERED_PALETTES) + [RANDOM_PALETTE],
        default=None,
    )
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--n-frames", type=int, default=1, help="Filmstrip panels (1 = last frame)")


def _build_scores_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("scores", help="Plot tile counts from a recorded frame log")
    p.set_defaults(func=_handle_scores)
    p.add_argument("--frame-log", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--match-id", type=str, default=None)
    p.add_argument("--palette", type=str, choices=sorted(REGISTERED_PALETTES), default=None)


def _handle_run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    file_cfg = _load_file_config(parser, args.config)
    config = _match_config(args, file_cfg)
    n_matches = _setting(args.n_matches, "n_matches", file_cfg, 1, _coerce_int)
    out_dir = Path(_setting(args.out_dir, "out_dir", file_cfg, "data", _coerce_text))
    results = run_batch(n_matches, out_dir, config=config)
    summary = {
        "total_matches": len(results),
        "frames": config.frames,
        "left_leads": sum(1 for r in results if r.leader == "left"),
        "right_leads": sum(1 for r in results if r.leader == "right"),
        "ties": sum(1 for r in results if r.leader is None),
        "out_dir": str(out_dir),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


def _filmstrip_frames(frames: int, n_frames: int) -> set[int]:
    """Evenly spaced 1-based frame indices ending at the last frame."""
    actual_n = max(1, min(n_frames, frames))
    if actual_n == 1:
        return {frames}
    return {1 + int(i * (frames - 1) / (actual_n - 1)) for i in range(actual_n)}


def _handle_render(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.n_frames < 1:
        parser.error("--n-frames must be >= 1")
    file_cfg = _load_file_config(parser, args.config)
    config = _match_config(args, file_cfg)
    palette = _resolve_palette(
        _setting(args.palette, "palette", file_cfg, RANDOM_PALETTE, _coerce_text), config.sim_seed
    )
    simulation = Simulation(
        config.width,
        config.height,
        config=config.game,
        sim_seed=config.sim_seed,
        speed_multiplier=config.speed_multiplier,
    )
    keep = _filmstrip_frames(config.frames, args.n_frames)
    kept: list[FrameSnapshot] = []
    for _ in range(config.frames):
        snap = simulation.tick()
        if snap.frame_index in keep:
            kept.append(snap)
    if len(kept) == 1:
        output = render_frame(kept[0], args.output, palette=palette)
    else:
        output = render_filmstrip(kept, args.output, n_frames=len(kept), palette=palette)
    print(json.dumps({"output": str(output), "frames": config.frames}, indent=2))


def _handle_scores(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    palette = get_palette(args.palette) if args.palette is not None else DEFAULT_PALETTE
    output = render_score_timeseries(
        args.frame_log, args.output, match_id=args.match_id, palette=palette
    )
    print(json.dumps({"output": str(output)}, indent=2))


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Two-team territory-capture simulation")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    sub = parser.add_subparsers(dest="command")
    _build_run_parser(sub)
    _build_render_parser(sub)
    _build_scores_parser(sub)
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json`` for reproducible runs. CLI
    arguments override config-file values; config-file values override
    built-in defaults. Rule overrides go in the file's ``game`` object.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        raise SystemExit(2)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args, parser)


if __name__ == "__main__":
    main()

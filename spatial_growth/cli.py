"""CLI entrypoint for running spatial growth simulations.

This module owns CLI argument parsing and config assembly only; the models
live in ``spatial_growth.domain`` and the run loop in
``spatial_growth.simulation.engine``.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from spatial_growth.config.constants import (
    CONTINUOUS_DOMAIN_SIZE,
    CONTINUOUS_MAX_POPULATION,
    CONTINUOUS_REPRO_DISTANCE,
    CONTINUOUS_STEP_SIZE,
    CONTINUOUS_STEPS,
    CROWDING_ALPHA,
    CROWDING_RADIUS,
    DEFAULT_SEED,
    GRID_SIZE,
    GROWTH_RATE,
    HOLE_RADIUS,
    INITIAL_POPULATION,
    NUM_HOLES,
    NUM_STEPS,
    SEAM_GRID_SIZE,
    SEAM_POSITION,
    SEAM_STEPS,
    STICKY_PAUSE,
    TRAP_WAIT,
)
from spatial_growth.config.types import (
    ConfigurationError,
    ContinuousConfig,
    GridConfig,
    MovementRule,
    ObstacleLayout,
    ReproductionGate,
    SeamConfig,
    SimulationConfig,
)
from spatial_growth.simulation.engine import run_batch

logger = logging.getLogger(__name__)

VARIANTS = ("grid", "seam", "continuous")

# ---------------------------------------------------------------------------
# Value coercion (CLI > config file > built-in default)
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    """Accept strings and paths only; variant names and directories are never numeric."""
    if isinstance(raw, (str, Path)):
        return str(raw)
    raise ValueError(f"{key} must be a string value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object]
) -> int | None:
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_int(raw, key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _parse_movement_rule(raw: str) -> MovementRule:
    try:
        return MovementRule(raw)
    except ValueError as exc:
        valid = ", ".join(rule.value for rule in MovementRule)
        raise ValueError(f"movement-rule must be one of {valid}") from exc


def _parse_reproduction_gate(raw: str) -> ReproductionGate:
    try:
        return ReproductionGate(raw)
    except ValueError as exc:
        valid = ", ".join(gate.value for gate in ReproductionGate)
        raise ValueError(f"reproduction-gate must be one of {valid}") from exc


def _obstacle_layout(
    args: argparse.Namespace, file_cfg: dict[str, object]
) -> ObstacleLayout | None:
    num_blocks = _get_int(args.num_blocks, "num_blocks", file_cfg, 0)
    if num_blocks == 0:
        return None
    block_size = _get_int(args.block_size, "block_size", file_cfg, 1)
    return ObstacleLayout(block_size=block_size, num_blocks=num_blocks)


# ---------------------------------------------------------------------------
# Config assembly
# ---------------------------------------------------------------------------


def _grid_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> GridConfig:
    return GridConfig(
        grid_size=_get_int(args.grid_size, "grid_size", file_cfg, GRID_SIZE),
        initial_population=_get_int(
            args.initial_population, "initial_population", file_cfg, INITIAL_POPULATION
        ),
        steps=_get_int(args.steps, "steps", file_cfg, NUM_STEPS),
        growth_rate=_get_float(args.growth_rate, "growth_rate", file_cfg, GROWTH_RATE),
        crowding_radius=_get_int(
            args.crowding_radius, "crowding_radius", file_cfg, CROWDING_RADIUS
        ),
        crowding_alpha=_get_float(
            args.crowding_alpha, "crowding_alpha", file_cfg, CROWDING_ALPHA
        ),
        movement_rule=_parse_movement_rule(
            _get_str(args.movement_rule, "movement_rule", file_cfg, MovementRule.FREE.value)
        ),
        reproduction_gate=_parse_reproduction_gate(
            _get_str(
                args.reproduction_gate,
                "reproduction_gate",
                file_cfg,
                ReproductionGate.ASEXUAL.value,
            )
        ),
        trap_wait=_get_int(args.trap_wait, "trap_wait", file_cfg, TRAP_WAIT),
        pause_time=_get_int(args.pause_time, "pause_time", file_cfg, STICKY_PAUSE),
        obstacles=_obstacle_layout(args, file_cfg),
        carrying_capacity=_get_optional_int(
            args.carrying_capacity, "carrying_capacity", file_cfg
        ),
    )


def _seam_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> SeamConfig:
    return SeamConfig(
        grid_size=_get_int(args.grid_size, "grid_size", file_cfg, SEAM_GRID_SIZE),
        initial_population=_get_int(
            args.initial_population, "initial_population", file_cfg, INITIAL_POPULATION
        ),
        steps=_get_int(args.steps, "steps", file_cfg, SEAM_STEPS),
        seam=_get_int(args.seam, "seam", file_cfg, SEAM_POSITION),
        jump_radius=_get_int(args.jump_radius, "jump_radius", file_cfg, 1),
        max_population=_get_optional_int(args.max_population, "max_population", file_cfg),
        obstacles=_obstacle_layout(args, file_cfg),
    )


def _continuous_config(
    args: argparse.Namespace, file_cfg: dict[str, object]
) -> ContinuousConfig:
    max_population = _get_optional_int(args.max_population, "max_population", file_cfg)
    return ContinuousConfig(
        domain_size=_get_float(
            args.domain_size, "domain_size", file_cfg, CONTINUOUS_DOMAIN_SIZE
        ),
        initial_population=_get_int(
            args.initial_population, "initial_population", file_cfg, INITIAL_POPULATION
        ),
        steps=_get_int(args.steps, "steps", file_cfg, CONTINUOUS_STEPS),
        step_size=_get_float(args.step_size, "step_size", file_cfg, CONTINUOUS_STEP_SIZE),
        repro_distance=_get_float(
            args.repro_distance, "repro_distance", file_cfg, CONTINUOUS_REPRO_DISTANCE
        ),
        max_population=CONTINUOUS_MAX_POPULATION if max_population is None else max_population,
        num_holes=_get_int(args.num_holes, "num_holes", file_cfg, NUM_HOLES),
        hole_radius=_get_float(args.hole_radius, "hole_radius", file_cfg, HOLE_RADIUS),
    )


def build_config(
    variant: str, args: argparse.Namespace, file_cfg: dict[str, object]
) -> SimulationConfig:
    """Assemble the config for ``variant`` from CLI args and file values."""
    if variant == "grid":
        return _grid_config(args, file_cfg)
    if variant == "seam":
        return _seam_config(args, file_cfg)
    if variant == "continuous":
        return _continuous_config(args, file_cfg)
    raise ValueError(f"variant must be one of {', '.join(VARIANTS)}")


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run spatial population growth simulations")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--variant", type=str, choices=VARIANTS, default=None)
    parser.add_argument("--n-runs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--initial-population", type=int, default=None)
    parser.add_argument("--grid-size", type=int, default=None)
    parser.add_argument("--growth-rate", type=float, default=None)
    parser.add_argument("--crowding-radius", type=int, default=None)
    parser.add_argument("--crowding-alpha", type=float, default=None)
    parser.add_argument(
        "--movement-rule",
        type=str,
        choices=[rule.value for rule in MovementRule],
        default=None,
    )
    parser.add_argument(
        "--reproduction-gate",
        type=str,
        choices=[gate.value for gate in ReproductionGate],
        default=None,
    )
    parser.add_argument("--trap-wait", type=int, default=None)
    parser.add_argument("--pause-time", type=int, default=None)
    parser.add_argument("--carrying-capacity", type=int, default=None)
    parser.add_argument("--num-blocks", type=int, default=None)
    parser.add_argument("--block-size", type=int, default=None)
    parser.add_argument("--seam", type=int, default=None)
    parser.add_argument("--jump-radius", type=int, default=None)
    parser.add_argument("--max-population", type=int, default=None)
    parser.add_argument("--domain-size", type=float, default=None)
    parser.add_argument("--step-size", type=float, default=None)
    parser.add_argument("--repro-distance", type=float, default=None)
    parser.add_argument("--num-holes", type=int, default=None)
    parser.add_argument("--hole-radius", type=float, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json`` for reproducible parameter sets.
    CLI arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        variant = _get_str(args.variant, "variant", file_cfg, "grid")
        config = build_config(variant, args, file_cfg)
        n_runs = _get_int(args.n_runs, "n_runs", file_cfg, 1)
        if n_runs < 1:
            raise ValueError("n_runs must be >= 1")
        seed = _get_int(args.seed, "seed", file_cfg, DEFAULT_SEED)
        out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("running %d %s simulation(s) into %s", n_runs, variant, out_dir)
    try:
        summaries = run_batch(config, n_runs=n_runs, out_dir=out_dir, base_seed=seed)
    except ConfigurationError as exc:
        parser.error(str(exc))

    final_populations = [int(s["final_population"]) for s in summaries]
    summary = {
        "variant": variant,
        "runs": len(summaries),
        "out_dir": str(out_dir),
        "final_populations": final_populations,
        "mean_final_population": sum(final_populations) / len(final_populations),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()

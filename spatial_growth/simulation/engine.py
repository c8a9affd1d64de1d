"""Simulation driver: seeded runs, matched-start comparisons and batch persistence."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Sequence
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from random import Random

import pyarrow as pa
import pyarrow.parquet as pq

from spatial_growth.config.constants import DEFAULT_SEED, FLUSH_THRESHOLD
from spatial_growth.config.types import (
    ConfigurationError,
    ContinuousConfig,
    GridConfig,
    SeamConfig,
    SimulationConfig,
    SimulationResult,
)
from spatial_growth.domain.continuous_world import ContinuousWorld
from spatial_growth.domain.obstacles import resolve_blocked_cells
from spatial_growth.domain.occupancy import Cell
from spatial_growth.domain.seam_world import SeamWorld
from spatial_growth.domain.stepper import GridWorld
from spatial_growth.io.paths import (
    agent_snapshots_path,
    logs_dir,
    population_history_path,
    run_payload_path,
    run_summary_path,
    runs_dir,
)
from spatial_growth.io.schemas import (
    POPULATION_HISTORY_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    RUN_SUMMARY_SCHEMA,
    SNAPSHOT_SCHEMA,
)
from spatial_growth.simulation.persistence import flush_columns

logger = logging.getLogger(__name__)

World = GridWorld | SeamWorld | ContinuousWorld
Positions = tuple[tuple[float, float], ...]


def variant_name(config: SimulationConfig) -> str:
    """Short variant label used in run IDs and summaries."""
    if isinstance(config, GridConfig):
        return "grid"
    if isinstance(config, SeamConfig):
        return "seam"
    if isinstance(config, ContinuousConfig):
        return "continuous"
    raise TypeError(f"unsupported config type: {type(config).__name__}")


def create_world(config: SimulationConfig, rng: Random) -> World:
    """Initialize the world model that matches ``config``."""
    if isinstance(config, GridConfig):
        return GridWorld.create(config, rng)
    if isinstance(config, SeamConfig):
        return SeamWorld.create(config, rng)
    if isinstance(config, ContinuousConfig):
        return ContinuousWorld.create(config, rng)
    raise TypeError(f"unsupported config type: {type(config).__name__}")


def world_capacity(world: World) -> int:
    """Carrying capacity or hard ceiling of ``world``."""
    if isinstance(world, GridWorld):
        return world.carrying_capacity
    if isinstance(world, SeamWorld):
        return world.max_population
    return world.config.max_population


def _deterministic_run_id(variant: str, seed: int) -> str:
    """Build reproducible run ID stable across runs for identical seeds."""
    return f"{variant}_s{seed}"


def iter_steps(world: World, steps: int, rng: Random) -> Iterator[tuple[int, Positions]]:
    """Advance ``world`` ``steps`` times, yielding the positions after each step."""
    for step_index in range(steps):
        world.step(rng)
        yield step_index, world.positions()


def _build_result(
    world: World,
    run_id: str,
    seed: int,
    initial_population: int,
    history: list[int],
    snapshots: list[Positions],
) -> SimulationResult:
    if isinstance(world, ContinuousWorld):
        return SimulationResult(
            run_id=run_id,
            seed=seed,
            initial_population=initial_population,
            history=tuple(history),
            snapshots=tuple(snapshots),
            holes=world.holes,
        )
    return SimulationResult(
        run_id=run_id,
        seed=seed,
        initial_population=initial_population,
        history=tuple(history),
        snapshots=tuple(snapshots),
        blocked_cells=world.blocked_cells,
    )


def run_simulation(config: SimulationConfig, seed: int = DEFAULT_SEED) -> SimulationResult:
    """Run one seeded simulation and collect its history and snapshots in memory."""
    rng = Random(seed)
    world = create_world(config, rng)
    initial_population = len(world.population)
    history: list[int] = []
    snapshots: list[Positions] = []
    for _, positions in iter_steps(world, config.steps, rng):
        history.append(len(positions))
        snapshots.append(positions)
    run_id = _deterministic_run_id(variant_name(config), seed)
    logger.info(
        "run %s finished: population %d -> %d after %d steps",
        run_id,
        initial_population,
        history[-1],
        config.steps,
    )
    return _build_result(world, run_id, seed, initial_population, history, snapshots)


# ---------------------------------------------------------------------------
# Matched-start comparison
# ---------------------------------------------------------------------------


def matched_positions(
    n_agents: int, grid_size: int, blocked: frozenset[Cell], rng: Random
) -> list[Cell]:
    """Draw ``n_agents`` distinct cells of ``[1, grid_size]^2`` outside ``blocked``."""
    available = [
        (x, y)
        for x in range(1, grid_size + 1)
        for y in range(1, grid_size + 1)
        if (x, y) not in blocked
    ]
    if len(available) < n_agents:
        raise ConfigurationError("not enough cells unblocked in every configuration")
    rng.shuffle(available)
    return available[:n_agents]


def run_matched_comparison(
    configs: Sequence[GridConfig], seed: int = DEFAULT_SEED
) -> list[SimulationResult]:
    """Run several grid configurations from identical initial positions, in lockstep.

    Every world shares one ``Random``; within a step the worlds advance in
    the order given.
    """
    if not configs:
        raise ConfigurationError("configs must not be empty")
    if len({c.initial_population for c in configs}) != 1:
        raise ConfigurationError("matched configs must share initial_population")
    if len({c.steps for c in configs}) != 1:
        raise ConfigurationError("matched configs must share steps")

    rng = Random(seed)
    blocked_sets = [
        resolve_blocked_cells(c.grid_size, c.obstacles, c.blocked_cells, rng) for c in configs
    ]
    positions = matched_positions(
        configs[0].initial_population,
        min(c.grid_size for c in configs),
        frozenset().union(*blocked_sets),
        rng,
    )
    worlds = [
        GridWorld.from_positions(c, positions, blocked)
        for c, blocked in zip(configs, blocked_sets, strict=True)
    ]
    histories: list[list[int]] = [[] for _ in worlds]
    snapshots: list[list[Positions]] = [[] for _ in worlds]
    for _ in range(configs[0].steps):
        for world, history, snaps in zip(worlds, histories, snapshots, strict=True):
            world.step(rng)
            current = world.positions()
            history.append(len(current))
            snaps.append(current)

    results = []
    for index, world in enumerate(worlds):
        run_id = f"{_deterministic_run_id('grid', seed)}_m{index}"
        logger.info("matched run %s finished at population %d", run_id, histories[index][-1])
        results.append(
            _build_result(
                world, run_id, seed, len(positions), histories[index], snapshots[index]
            )
        )
    return results


# ---------------------------------------------------------------------------
# Batch runs with Parquet persistence
# ---------------------------------------------------------------------------


def _to_jsonable(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (frozenset, set)):
        return [_to_jsonable(v) for v in sorted(value)]
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def _run_payload(
    run_id: str,
    config: SimulationConfig,
    world: World,
    seed: int,
    history: list[int],
) -> dict[str, object]:
    payload: dict[str, object] = {
        "run_id": run_id,
        "variant": variant_name(config),
        "seed": seed,
        "config": _to_jsonable(asdict(config)),
        "history": history,
        "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
    }
    if isinstance(world, ContinuousWorld):
        payload["holes"] = [[h.x, h.y, h.radius] for h in world.holes]
    else:
        payload["blocked_cells"] = _to_jsonable(world.blocked_cells)
    return payload


def run_batch(
    config: SimulationConfig,
    n_runs: int,
    out_dir: Path,
    base_seed: int = 0,
) -> list[dict[str, object]]:
    """Run ``n_runs`` seeded simulations and persist JSON/Parquet outputs.

    Seeds are ``base_seed, base_seed + 1, ...``. Snapshot rows are streamed to
    ``logs/agent_snapshots.parquet`` in row groups of roughly
    ``FLUSH_THRESHOLD`` rows.
    """
    if n_runs < 1:
        raise ValueError("n_runs must be >= 1")

    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    variant = variant_name(config)

    snapshot_writer: pq.ParquetWriter | None = None
    history_writer: pq.ParquetWriter | None = None
    summaries: list[dict[str, object]] = []

    try:
        for i in range(n_runs):
            seed = base_seed + i
            run_id = _deterministic_run_id(variant, seed)
            rng = Random(seed)
            world = create_world(config, rng)
            initial_population = len(world.population)
            logger.info("run %s started with %d agents", run_id, initial_population)

            snapshot_columns: dict[str, list[int | str | float]] = {
                "run_id": [],
                "step": [],
                "agent_index": [],
                "x": [],
                "y": [],
            }
            history_columns: dict[str, list[int | str | float]] = {
                "run_id": [],
                "step": [],
                "population": [],
            }
            history: list[int] = []

            for step_index, positions in iter_steps(world, config.steps, rng):
                history.append(len(positions))
                history_columns["run_id"].append(run_id)
                history_columns["step"].append(step_index)
                history_columns["population"].append(len(positions))
                for agent_index, (x, y) in enumerate(positions):
                    snapshot_columns["run_id"].append(run_id)
                    snapshot_columns["step"].append(step_index)
                    snapshot_columns["agent_index"].append(agent_index)
                    snapshot_columns["x"].append(float(x))
                    snapshot_columns["y"].append(float(y))
                if len(snapshot_columns["run_id"]) >= FLUSH_THRESHOLD:
                    logger.debug(
                        "flushing %d snapshot rows for %s",
                        len(snapshot_columns["run_id"]),
                        run_id,
                    )
                    snapshot_writer = flush_columns(
                        snapshot_columns,
                        agent_snapshots_path(out_dir),
                        snapshot_writer,
                        SNAPSHOT_SCHEMA,
                    )

            snapshot_writer = flush_columns(
                snapshot_columns, agent_snapshots_path(out_dir), snapshot_writer, SNAPSHOT_SCHEMA
            )
            history_writer = flush_columns(
                history_columns,
                population_history_path(out_dir),
                history_writer,
                POPULATION_HISTORY_SCHEMA,
            )

            run_payload_path(out_dir, run_id).write_text(
                json.dumps(
                    _run_payload(run_id, config, world, seed, history),
                    ensure_ascii=False,
                    indent=2,
                )
            )
            summary: dict[str, object] = {
                "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
                "run_id": run_id,
                "variant": variant,
                "seed": seed,
                "steps": config.steps,
                "initial_population": initial_population,
                "final_population": history[-1],
                "peak_population": max(history),
                "capacity": world_capacity(world),
                "n_blocked_cells": 0
                if isinstance(world, ContinuousWorld)
                else len(world.blocked_cells),
                "n_holes": len(world.holes) if isinstance(world, ContinuousWorld) else 0,
            }
            summaries.append(summary)
            logger.info(
                "run %s finished: population %d -> %d",
                run_id,
                initial_population,
                history[-1],
            )
    finally:
        if snapshot_writer is not None:
            snapshot_writer.close()
        if history_writer is not None:
            history_writer.close()

    pq.write_table(
        pa.Table.from_pylist(summaries, schema=RUN_SUMMARY_SCHEMA), run_summary_path(out_dir)
    )
    return summaries

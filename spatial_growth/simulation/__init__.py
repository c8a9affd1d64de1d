"""Simulation engine: seeded runs, matched comparisons and Parquet persistence."""

from spatial_growth.simulation.engine import (
    create_world,
    iter_steps,
    run_batch,
    run_matched_comparison,
    run_simulation,
    variant_name,
)
from spatial_growth.simulation.persistence import flush_columns

__all__ = [
    "create_world",
    "flush_columns",
    "iter_steps",
    "run_batch",
    "run_matched_comparison",
    "run_simulation",
    "variant_name",
]

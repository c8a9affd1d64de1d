"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def runs_dir(out_dir: Path) -> Path:
    """Return path to the per-run JSON payload subdirectory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def agent_snapshots_path(out_dir: Path) -> Path:
    """Return path to the per-step agent position Parquet file."""
    return logs_dir(out_dir) / "agent_snapshots.parquet"


def population_history_path(out_dir: Path) -> Path:
    """Return path to the population history Parquet file."""
    return logs_dir(out_dir) / "population_history.parquet"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the one-row-per-run summary Parquet file."""
    return logs_dir(out_dir) / "run_summary.parquet"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    """Return path to one run's JSON metadata payload."""
    return runs_dir(out_dir) / f"{run_id}.json"

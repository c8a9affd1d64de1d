"""Parquet schema definitions for simulation artifacts.

Every module that writes or reads run logs works against the column
contracts defined here.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

# Positions are stored as float64 so grid and continuous runs share one schema.
SNAPSHOT_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("agent_index", pa.int64()),
        ("x", pa.float64()),
        ("y", pa.float64()),
    ]
)

POPULATION_HISTORY_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("population", pa.int64()),
    ]
)

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("variant", pa.string()),
        ("seed", pa.int64()),
        ("steps", pa.int64()),
        ("initial_population", pa.int64()),
        ("final_population", pa.int64()),
        ("peak_population", pa.int64()),
        ("capacity", pa.int64()),
        ("n_blocked_cells", pa.int64()),
        ("n_holes", pa.int64()),
    ]
)

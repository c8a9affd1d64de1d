"""Parquet persistence helpers for snapshot and history streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def flush_columns(
    columns: dict[str, list[int | str | float]],
    path: Path,
    writer: pq.ParquetWriter | None,
    schema: pa.Schema,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers.

    Works for any column layout matching ``schema``; snapshot and history
    streams share it. The writer is opened lazily on the first non-empty
    flush and returned so the caller can keep appending row groups to the
    same file.
    """
    if not any(columns.values()):
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer

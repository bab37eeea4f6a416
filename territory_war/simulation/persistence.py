"""Parquet persistence helpers for frame and ball log streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def flush_columns(
    columns: dict[str, list[object]],
    path: Path,
    schema: pa.Schema,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers.

    The writer is opened lazily on the first non-empty flush and returned so
    callers can keep streaming into the same file.
    """
    if not columns["match_id"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def empty_columns(schema: pa.Schema) -> dict[str, list[object]]:
    return {name: [] for name in schema.names}

"""Arrow table helpers for joins and null checks.

Joins keep the left table's row order, which Arrow's hash join does
not guarantee on its own.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pyarrow as pa
import pyarrow.compute as pc

from core.errors import ArchiveContentError, RequiredValueMissingError

_ROW_ORDER_COLUMN = "__row_order"


def ordered_left_join(left: pa.Table, right: pa.Table, key: str) -> pa.Table:
    """Left-join two tables on a key, keeping the left row order.

    Args:
        left: Table whose rows and order are retained.
        right: Lookup table; its non-key columns are appended.
        key: Join column present in both tables.

    Returns:
        Joined table with null values where the right side has no match.

    Raises:
        ArchiveContentError: If the key is not unique in the right table.
    """
    distinct_keys = pc.count_distinct(right.column(key), mode="all").as_py()
    if distinct_keys != right.num_rows:
        raise ArchiveContentError(
            f"Join key '{key}' is not unique in the lookup table: "
            f"{right.num_rows - distinct_keys} duplicate rows. "
            "Each movie must appear once in movies.csv and links.csv."
        )
    row_order = pa.array(np.arange(left.num_rows, dtype=np.int64))
    indexed = left.append_column(_ROW_ORDER_COLUMN, row_order)
    joined = indexed.join(right, keys=key, join_type="left outer")
    return joined.sort_by(_ROW_ORDER_COLUMN).drop_columns([_ROW_ORDER_COLUMN])


def tighten_nullability(table: pa.Table) -> pa.Table:
    """Mark columns without null values as non-nullable.

    Columns that do contain nulls keep a nullable field; no error is raised.
    """
    fields = [
        field.with_nullable(table.column(field.name).null_count > 0)
        for field in table.schema
    ]
    schema = pa.schema(fields, metadata=table.schema.metadata)
    return pa.Table.from_arrays(table.columns, schema=schema)


def require_non_null(table: pa.Table, columns: Iterable[str], stage: str) -> pa.Table:
    """Require the given columns to be free of nulls.

    Args:
        table: Table to check.
        columns: Column names that must not hold nulls.
        stage: Name of the derivation step, for error context.

    Returns:
        Table whose checked fields are non-nullable.

    Raises:
        RequiredValueMissingError: If any checked column holds nulls.
    """
    required = set(columns)
    offenders = {
        name: table.column(name).null_count
        for name in table.column_names
        if name in required and table.column(name).null_count > 0
    }
    if offenders:
        details = ", ".join(f"{name} ({count} nulls)" for name, count in offenders.items())
        raise RequiredValueMissingError(
            f"Required values missing while building {stage}: {details}. "
            "The source archive has rows without a matching movie entry."
        )
    fields = [
        field.with_nullable(False) if field.name in required else field
        for field in table.schema
    ]
    schema = pa.schema(fields, metadata=table.schema.metadata)
    return pa.Table.from_arrays(table.columns, schema=schema)

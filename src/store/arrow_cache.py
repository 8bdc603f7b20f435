"""Arrow IPC file persistence helpers.

This module writes tables as Arrow IPC files with embedded schema
metadata and reads them back for the resolver.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import pyarrow as pa

from core.constants import ARROW_COMPRESSION, TEMPORARY_SUFFIX
from core.errors import DatasetStoreError


def write_arrow_table(
    path: Path,
    table: pa.Table,
    metadata: Mapping[str, str],
    compression: str | None = ARROW_COMPRESSION,
) -> Path:
    """Write a table to an Arrow IPC file.

    Args:
        path: Destination file; replaced atomically when complete.
        table: Table to persist.
        metadata: String key/value pairs stored in the schema metadata.
        compression: IPC buffer compression codec, or ``None``.

    Returns:
        The destination path.

    Raises:
        OSError: If the file cannot be written or renamed.
    """
    table = table.replace_schema_metadata(dict(metadata))
    partial_path = path.with_name(path.name + TEMPORARY_SUFFIX)
    options = pa.ipc.IpcWriteOptions(compression=compression)
    try:
        with pa.OSFile(str(partial_path), "wb") as sink:
            with pa.ipc.new_file(sink, table.schema, options=options) as writer:
                writer.write_table(table)
        os.replace(partial_path, path)
    finally:
        partial_path.unlink(missing_ok=True)
    return path


def read_arrow_table(path: Path) -> pa.Table:
    """Read an Arrow IPC file into a table.

    Args:
        path: Cached Arrow file.

    Returns:
        Loaded table including schema metadata.

    Raises:
        DatasetStoreError: If the file is not a valid Arrow IPC file.
    """
    try:
        with pa.memory_map(str(path), "r") as source:
            return pa.ipc.open_file(source).read_all()
    except pa.ArrowInvalid as error:
        raise DatasetStoreError(
            f"Failed to read cached dataset at {path}: {error}. "
            "Clear the cache and fetch the dataset again."
        ) from error


def read_arrow_metadata(path: Path) -> dict[str, str]:
    """Return the decoded schema metadata of an Arrow IPC file.

    Raises:
        DatasetStoreError: If the file is not a valid Arrow IPC file.
    """
    try:
        with pa.memory_map(str(path), "r") as source:
            raw_metadata = pa.ipc.open_file(source).schema.metadata or {}
    except pa.ArrowInvalid as error:
        raise DatasetStoreError(
            f"Failed to read metadata of cached dataset at {path}: {error}."
        ) from error
    return {key.decode("utf-8"): value.decode("utf-8") for key, value in raw_metadata.items()}

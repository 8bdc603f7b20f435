"""Unit tests for Arrow IPC persistence."""

from __future__ import annotations

import pyarrow as pa
import pytest

from core.errors import DatasetStoreError
from store.arrow_cache import read_arrow_metadata, read_arrow_table, write_arrow_table


def test_write_arrow_table_persists_rows_and_metadata(tmp_path) -> None:
    """Written files should reload with rows and metadata intact."""
    table = pa.table({"Subject": pa.array([308, 309], pa.int32()), "days": [0.0, 1.0]})
    path = tmp_path / "sleepstudy.arrow"

    write_arrow_table(path, table, {"url": "https://example.org/sleepstudy"})
    loaded = read_arrow_table(path)

    assert loaded.column("Subject").to_pylist() == [308, 309]
    assert read_arrow_metadata(path) == {"url": "https://example.org/sleepstudy"}
    assert [item.name for item in tmp_path.iterdir()] == ["sleepstudy.arrow"]


def test_write_arrow_table_without_compression(tmp_path) -> None:
    """Uncompressed files should be readable as well."""
    path = tmp_path / "plain.arrow"

    write_arrow_table(path, pa.table({"x": [1, 2, 3]}), {}, compression=None)

    assert read_arrow_table(path).num_rows == 3


def test_read_arrow_table_raises_for_corrupt_file(tmp_path) -> None:
    """Non-Arrow content should raise a store error."""
    path = tmp_path / "broken.arrow"
    path.write_text("not arrow", encoding="utf-8")

    with pytest.raises(DatasetStoreError):
        read_arrow_table(path)

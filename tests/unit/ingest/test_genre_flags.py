"""Unit tests for genre flag expansion."""

from __future__ import annotations

import pyarrow as pa

from core.constants import GENRE_LABELS
from ingest.genre_flags import GENRE_COLUMNS, expand_genre_columns, genre_column_name


def _expand(genres: list[str | None]) -> pa.Table:
    table = pa.table({"movieId": [1] * len(genres), "genres": pa.array(genres, pa.string())})
    return expand_genre_columns(table)


def test_expand_sets_listed_genres_only() -> None:
    """Listed genres should be true and every other flag false."""
    row = _expand(["Action|Comedy"]).to_pylist()[0]

    assert row["Action"] is True and row["Comedy"] is True
    assert not any(row[name] for name in GENRE_COLUMNS if name not in ("Action", "Comedy"))


def test_expand_null_genres_gives_all_false() -> None:
    """Null genre text should yield false for every genre column."""
    row = _expand([None]).to_pylist()[0]

    assert [row[name] for name in GENRE_COLUMNS] == [False] * len(GENRE_LABELS)


def test_expand_replaces_hyphens_in_column_names() -> None:
    """Hyphenated labels should map to underscore column names."""
    table = _expand(["Film-Noir|Sci-Fi"])

    assert table.column("Film_Noir").to_pylist() == [True]
    assert table.column("Sci_Fi").to_pylist() == [True]
    assert genre_column_name("Sci-Fi") == "Sci_Fi"


def test_expand_is_case_sensitive() -> None:
    """Lower-case genre text should not match capitalised labels."""
    table = _expand(["action|comedy"])

    assert table.column("Action").to_pylist() == [False]


def test_expand_drops_text_column_and_appends_flags() -> None:
    """The text column should be replaced by nineteen non-nullable flags."""
    table = _expand(["Drama", None])

    assert "genres" not in table.column_names
    assert table.column_names == ["movieId", *GENRE_COLUMNS]
    assert all(not table.schema.field(name).nullable for name in GENRE_COLUMNS)
    assert len(GENRE_COLUMNS) == 19

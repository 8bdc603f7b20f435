"""Genre flag expansion for MovieLens movies.

This module turns the pipe-separated ``genres`` text column into one
boolean column per known genre label.
"""

from __future__ import annotations

import pyarrow as pa
import pyarrow.compute as pc

from core.constants import GENRE_LABELS, GENRES_COLUMN


def genre_column_name(label: str) -> str:
    """Return a valid column identifier for a genre label."""
    return label.replace("-", "_")


GENRE_COLUMNS = tuple(genre_column_name(label) for label in GENRE_LABELS)


def expand_genre_columns(table: pa.Table, column: str = GENRES_COLUMN) -> pa.Table:
    """Replace a genre text column with boolean genre flags.

    Each flag is a case-sensitive substring test of its label against the
    genre text. Null genre text yields ``False`` for every flag.

    Args:
        table: Table holding the genre text column.
        column: Name of the genre text column.

    Returns:
        Table with the text column dropped and one non-nullable boolean
        column appended per genre label.
    """
    genre_text = table.column(column)
    for label, name in zip(GENRE_LABELS, GENRE_COLUMNS):
        flags = pc.fill_null(pc.match_substring(genre_text, label), False)
        table = table.append_column(pa.field(name, pa.bool_(), nullable=False), flags)
    return table.drop_columns([column])

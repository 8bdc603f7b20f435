"""MovieLens archive member extraction.

This module locates archive members by file-name suffix and parses
the CSV tables with fixed column types.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping
import zipfile

import pyarrow as pa
from pyarrow import csv as pa_csv

from core.constants import (
    LINKS_MEMBER_SUFFIX,
    MOVIES_MEMBER_SUFFIX,
    RATINGS_MEMBER_SUFFIX,
    README_MEMBER_SUFFIX,
)
from core.errors import ArchiveContentError
from core.types import MovieLensTables

RATINGS_COLUMN_TYPES = MappingProxyType(
    {
        "userId": pa.int32(),
        "movieId": pa.int32(),
        "rating": pa.float32(),
        "timestamp": pa.int32(),
    }
)
MOVIES_COLUMN_TYPES = MappingProxyType(
    {
        "movieId": pa.int32(),
        "title": pa.string(),
        "genres": pa.string(),
    }
)
LINKS_COLUMN_TYPES = MappingProxyType(
    {
        "movieId": pa.int32(),
        "imdbId": pa.int32(),
        "tmdbId": pa.int32(),
    }
)
REQUIRED_MEMBER_SUFFIXES = (
    RATINGS_MEMBER_SUFFIX,
    MOVIES_MEMBER_SUFFIX,
    LINKS_MEMBER_SUFFIX,
    README_MEMBER_SUFFIX,
)


def find_member(archive: zipfile.ZipFile, suffix: str) -> zipfile.ZipInfo:
    """Return the single archive member whose name ends with a suffix.

    Args:
        archive: Open zip archive.
        suffix: File-name suffix such as ``ratings.csv``.

    Returns:
        Matching member info.

    Raises:
        ArchiveContentError: If zero or several members match.
    """
    matches = [info for info in archive.infolist() if info.filename.endswith(suffix)]
    if not matches:
        raise ArchiveContentError(
            f"Archive {archive.filename} has no member ending with '{suffix}'. "
            "Check that the archive URL points at a MovieLens release."
        )
    if len(matches) > 1:
        names = ", ".join(info.filename for info in matches)
        raise ArchiveContentError(
            f"Archive {archive.filename} has {len(matches)} members ending with "
            f"'{suffix}' ({names}); expected exactly one."
        )
    return matches[0]


def validate_archive(archive: zipfile.ZipFile) -> None:
    """Fail fast unless every required member is present exactly once."""
    for suffix in REQUIRED_MEMBER_SUFFIXES:
        find_member(archive, suffix)


def read_member_bytes(archive: zipfile.ZipFile, suffix: str) -> bytes:
    """Read raw bytes of the member matching a suffix."""
    return archive.read(find_member(archive, suffix))


def read_csv_member(
    archive: zipfile.ZipFile,
    suffix: str,
    column_types: Mapping[str, pa.DataType],
) -> pa.Table:
    """Parse a CSV member into an Arrow table.

    Args:
        archive: Open zip archive.
        suffix: File-name suffix of the CSV member.
        column_types: Ordered column names and Arrow types to read.

    Returns:
        Parsed table restricted to the given columns.

    Raises:
        ArchiveContentError: If the member is missing, ambiguous, or
            lacks one of the expected columns.
    """
    member = find_member(archive, suffix)
    convert_options = pa_csv.ConvertOptions(
        column_types=dict(column_types),
        include_columns=list(column_types),
    )
    with archive.open(member) as handle:
        try:
            return pa_csv.read_csv(handle, convert_options=convert_options)
        except (pa.ArrowInvalid, KeyError) as error:
            raise ArchiveContentError(
                f"Failed to parse {member.filename}: {error}. "
                f"Expected columns: {', '.join(column_types)}."
            ) from error


def extract_movielens_tables(archive: zipfile.ZipFile) -> MovieLensTables:
    """Extract the ratings, movies, and links tables from the archive."""
    return MovieLensTables(
        ratings=read_csv_member(archive, RATINGS_MEMBER_SUFFIX, RATINGS_COLUMN_TYPES),
        movies=read_csv_member(archive, MOVIES_MEMBER_SUFFIX, MOVIES_COLUMN_TYPES),
        links=read_csv_member(archive, LINKS_MEMBER_SUFFIX, LINKS_COLUMN_TYPES),
    )

"""Public SDK surface for the course datasets.

This module provides a stable import path for lesson scripts. Each
function builds a client from the given config, or from the
environment when omitted, so no state is shared between calls.
"""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa

from core.config import CourseDataConfig
from core.constants import GENRE_LABELS, MOVIELENS_LATEST_URL
from core.errors import (
    ArchiveContentError,
    CourseDataError,
    ReadmeMissingError,
    RequiredValueMissingError,
    UnknownDatasetError,
)
from core.types import ReadmeDocument
from ingest.osf_registry import registered_names
from store.bundled_catalog import StatsmodelsCatalog
from store.dataset_sdk import CourseDataClient


def resolve(name: str, config: CourseDataConfig | None = None) -> pa.Table:
    """Return the table for a bundled, cached, or registered dataset."""
    return CourseDataClient(config).dataset(name)


def bulk_import(config: CourseDataConfig | None = None) -> list[Path]:
    """Import the MovieLens archive into the cache.

    Writes the ``ratings``, ``movies`` and ``ratings_genre`` tables plus
    the archive README. Only the ratings and movies paths are returned.
    """
    return CourseDataClient(config).import_movielens()


def clear_cache(config: CourseDataConfig | None = None) -> None:
    """Delete every cached dataset file."""
    CourseDataClient(config).clear_cache()


def readme_text(config: CourseDataConfig | None = None) -> ReadmeDocument:
    """Return the parsed MovieLens README."""
    return CourseDataClient(config).movielens_readme()


def bundled_datasets() -> tuple[str, ...]:
    """Return names of the datasets shipped with statsmodels."""
    return StatsmodelsCatalog().names()


def registered_datasets() -> tuple[str, ...]:
    """Return names downloadable from the remote registry."""
    return registered_names()


def cached_datasets(config: CourseDataConfig | None = None) -> tuple[str, ...]:
    """Return names of datasets with a file in the cache directory."""
    return CourseDataClient(config).cache.cached_names()


__all__ = [
    "ArchiveContentError",
    "CourseDataClient",
    "CourseDataConfig",
    "CourseDataError",
    "GENRE_LABELS",
    "MOVIELENS_LATEST_URL",
    "ReadmeDocument",
    "ReadmeMissingError",
    "RequiredValueMissingError",
    "UnknownDatasetError",
    "bulk_import",
    "bundled_datasets",
    "cached_datasets",
    "clear_cache",
    "readme_text",
    "registered_datasets",
    "resolve",
]

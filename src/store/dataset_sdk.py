"""Python SDK for course dataset operations.

This module exposes high-level APIs for resolving datasets, importing
MovieLens, and inspecting or clearing the dataset cache.
"""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa

from core.config import CourseDataConfig
from core.errors import UnknownDatasetError
from core.types import DatasetListing, ReadmeDocument
from ingest.movielens_pipeline import import_movielens
from ingest.osf_registry import registered_names
from store.arrow_cache import read_arrow_metadata
from store.bundled_catalog import BundledCatalog, StatsmodelsCatalog
from store.dataset_cache import DatasetCache
from store.dataset_resolver import DatasetResolver
from store.readme import load_readme


class CourseDataClient:
    """Primary SDK entry point for lesson scripts."""

    def __init__(
        self,
        config: CourseDataConfig | None = None,
        catalog: BundledCatalog | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            catalog: Optional bundled dataset catalog; statsmodels when omitted.
        """
        self._config = config or CourseDataConfig.from_env()
        self._catalog = catalog or StatsmodelsCatalog()
        self._cache = DatasetCache(self._config)
        self._resolver = DatasetResolver(self._cache, self._catalog, self._config)

    @property
    def config(self) -> CourseDataConfig:
        """Return runtime configuration."""
        return self._config

    @property
    def cache(self) -> DatasetCache:
        """Return the dataset cache."""
        return self._cache

    def dataset(self, name: str) -> pa.Table:
        """Resolve a dataset name to a table.

        Args:
            name: Bundled, cached, or registered dataset name.

        Returns:
            Dataset table.

        Raises:
            UnknownDatasetError: If no such dataset is known.
        """
        return self._resolver.resolve(name)

    def import_movielens(self) -> list[Path]:
        """Download MovieLens and write the derived tables to the cache.

        Returns:
            Paths of the ratings and movies artifacts.
        """
        return import_movielens(self._cache, self._config)

    def clear_cache(self) -> None:
        """Delete every cached file."""
        self._cache.clear()

    def movielens_readme(self) -> ReadmeDocument:
        """Return the parsed README from the MovieLens import.

        Raises:
            ReadmeMissingError: If the import has not run yet.
        """
        return load_readme(self._cache)

    def dataset_metadata(self, name: str) -> dict[str, str]:
        """Return schema metadata of a cached dataset.

        Raises:
            UnknownDatasetError: If the dataset is not cached.
        """
        if not self._cache.contains(name):
            raise UnknownDatasetError(
                f"'{name}' is not cached under {self._cache.data_dir}. "
                "Fetch the dataset before reading its metadata."
            )
        return read_arrow_metadata(self._cache.path_for(name))

    def list_datasets(self) -> DatasetListing:
        """List bundled, registered, and cached dataset names."""
        return DatasetListing(
            bundled=self._catalog.names(),
            registered=registered_names(),
            cached=self._cache.cached_names(),
        )


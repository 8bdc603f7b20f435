"""Dataset name resolution.

A name resolves to a bundled dataset when the modeling library ships
it; otherwise to a cached Arrow file, downloading it from the remote
registry on first use.
"""

from __future__ import annotations

import pyarrow as pa

from core.config import CourseDataConfig
from core.errors import UnknownDatasetError
from core.logging_config import get_logger
from ingest.osf_registry import fetch_registered_dataset
from store.arrow_cache import read_arrow_table
from store.bundled_catalog import BundledCatalog
from store.dataset_cache import DatasetCache, validate_dataset_name

_LOGGER = get_logger(__name__)


class DatasetResolver:
    """Resolve dataset names to in-memory tables."""

    def __init__(
        self,
        cache: DatasetCache,
        catalog: BundledCatalog,
        config: CourseDataConfig,
    ) -> None:
        self._cache = cache
        self._catalog = catalog
        self._config = config

    def resolve(self, name: str) -> pa.Table:
        """Return the table for a dataset name.

        Args:
            name: Bundled, cached, or registered dataset name.

        Returns:
            Dataset table.

        Raises:
            UnknownDatasetError: If the name is not bundled, cached, or registered.
            DatasetStoreError: If the cached file is unreadable.
            requests.RequestException: If a registry download fails.
        """
        dataset_name = validate_dataset_name(name)
        if dataset_name in self._catalog.names():
            _LOGGER.debug("bundled_dataset_resolved", dataset_name=dataset_name)
            return self._catalog.load(dataset_name)
        cache_path = self._cache.path_for(dataset_name)
        if cache_path.is_file():
            _LOGGER.debug("cached_dataset_resolved", dataset_name=dataset_name)
            return read_arrow_table(cache_path)
        if not fetch_registered_dataset(dataset_name, cache_path, self._config):
            raise UnknownDatasetError(
                f"'{dataset_name}' is not a dataset: it is not bundled with "
                f"statsmodels, not cached under {self._cache.data_dir}, and not "
                "in the remote registry."
            )
        _LOGGER.info("registry_dataset_cached", dataset_name=dataset_name, path=str(cache_path))
        return read_arrow_table(cache_path)

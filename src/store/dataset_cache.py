"""Application-scoped dataset cache directory.

This module maps dataset names to cached Arrow files. The directory is
created lazily by writers; lookups never create it.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from core.config import CourseDataConfig
from core.constants import ARROW_SUFFIX, README_FILE_NAME
from core.errors import UnknownDatasetError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def validate_dataset_name(name: str) -> str:
    """Validate a dataset name for use as a cache file stem.

    Args:
        name: Candidate dataset name.

    Returns:
        The unchanged name.

    Raises:
        UnknownDatasetError: If the name is empty or not a plain file stem.
    """
    if not isinstance(name, str) or not name:
        raise UnknownDatasetError(
            f"Invalid dataset name {name!r}: expected a non-empty string."
        )
    if "/" in name or "\\" in name or name.startswith("."):
        raise UnknownDatasetError(
            f"Invalid dataset name '{name}': names cannot contain path "
            "separators or start with '.'."
        )
    return name


class DatasetCache:
    """Cached Arrow files under the configured cache root."""

    def __init__(self, config: CourseDataConfig) -> None:
        self._config = config

    @property
    def data_dir(self) -> Path:
        """Directory holding cached files; may not exist yet."""
        return self._config.data_dir

    @property
    def readme_path(self) -> Path:
        """Location of the imported MovieLens README."""
        return self.data_dir / README_FILE_NAME

    def ensure_data_dir(self) -> Path:
        """Create the cache directory if needed and return it."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    def path_for(self, name: str) -> Path:
        """Return the cache file path for a dataset name."""
        return self.data_dir / f"{validate_dataset_name(name)}{ARROW_SUFFIX}"

    def contains(self, name: str) -> bool:
        """Return whether a cached file exists for a dataset name."""
        return self.path_for(name).is_file()

    def cached_names(self) -> tuple[str, ...]:
        """Return names of all cached datasets in sorted order."""
        if not self.data_dir.is_dir():
            return ()
        return tuple(sorted(path.stem for path in self.data_dir.glob(f"*{ARROW_SUFFIX}")))

    def clear(self) -> None:
        """Delete the cache directory: every cached file, the README, and partial writes.

        Other files under the cache root are left alone.
        """
        if self.data_dir.exists():
            shutil.rmtree(self.data_dir)
        _LOGGER.info("cache_cleared", data_dir=str(self.data_dir))

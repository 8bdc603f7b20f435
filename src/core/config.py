"""Runtime configuration model for the course data provider.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DATA_DIR_NAME,
    DEFAULT_CACHE_ROOT,
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    MOVIELENS_LATEST_URL,
)
from core.errors import DatasetConfigError


@dataclass(frozen=True)
class CourseDataConfig:
    """Validated runtime configuration.

    Attributes:
        cache_root: Application-scoped root for downloaded and derived data.
        movielens_url: Location of the MovieLens bulk archive.
        download_timeout: Socket timeout in seconds for HTTP downloads.
    """

    cache_root: Path
    movielens_url: str
    download_timeout: float

    @property
    def data_dir(self) -> Path:
        """Directory holding cached Arrow files and the README."""
        return self.cache_root / DATA_DIR_NAME

    @classmethod
    def from_env(cls) -> "CourseDataConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            DatasetConfigError: If environment values are invalid.
        """
        cache_root_value = os.getenv("ECON2024_CACHE_ROOT", str(DEFAULT_CACHE_ROOT))
        movielens_url = os.getenv("ECON2024_MOVIELENS_URL", MOVIELENS_LATEST_URL)
        timeout_value = os.getenv(
            "ECON2024_DOWNLOAD_TIMEOUT", str(DEFAULT_DOWNLOAD_TIMEOUT_SECONDS)
        )
        return cls(
            cache_root=Path(cache_root_value).expanduser().resolve(),
            movielens_url=movielens_url,
            download_timeout=_parse_download_timeout(timeout_value),
        )


def _parse_download_timeout(raw_value: str) -> float:
    """Parse the download timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        DatasetConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise DatasetConfigError(
            "Invalid ECON2024_DOWNLOAD_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set ECON2024_DOWNLOAD_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise DatasetConfigError(
            "Invalid ECON2024_DOWNLOAD_TIMEOUT value: "
            f"expected a positive number, got '{raw_value}'."
        )
    return timeout

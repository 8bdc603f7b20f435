"""HTTP download helpers.

This module streams remote objects to local files. Partial downloads
land in a sibling file and are renamed into place only on success.
"""

from __future__ import annotations

import os
from pathlib import Path

import requests

from core.constants import DOWNLOAD_CHUNK_SIZE, TEMPORARY_SUFFIX
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def download_to_path(url: str, destination: Path, timeout: float) -> Path:
    """Download a remote object to a local file.

    Args:
        url: HTTPS location of the object.
        destination: Final file path; parent directories are created.
        timeout: Socket timeout in seconds.

    Returns:
        The destination path.

    Raises:
        requests.RequestException: On connection failures or non-2xx status.
        OSError: If the destination cannot be written.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial_path = destination.with_name(destination.name + TEMPORARY_SUFFIX)
    _LOGGER.info("download_started", url=url, destination=str(destination))
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with partial_path.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    handle.write(chunk)
        os.replace(partial_path, destination)
    finally:
        partial_path.unlink(missing_ok=True)
    _LOGGER.info(
        "download_completed",
        url=url,
        destination=str(destination),
        size_bytes=destination.stat().st_size,
    )
    return destination

"""Remote registry of course datasets hosted on OSF.

This module maps short dataset names to OSF storage objects and
downloads them into the cache on request.
"""

from __future__ import annotations

from pathlib import Path

from core.config import CourseDataConfig
from core.constants import OSF_DOWNLOAD_URL_TEMPLATE, OSF_OBJECT_IDS
from core.errors import UnknownDatasetError
from ingest.remote_fetch import download_to_path


def registered_names() -> tuple[str, ...]:
    """Return registry dataset names in sorted order."""
    return tuple(sorted(OSF_OBJECT_IDS))


def is_registered(name: str) -> bool:
    """Return whether a dataset name has a registry entry."""
    return name in OSF_OBJECT_IDS


def osf_download_url(name: str) -> str:
    """Build the download URL for a registered dataset.

    Args:
        name: Registry dataset name.

    Returns:
        OSF download URL.

    Raises:
        UnknownDatasetError: If the name has no registry entry.
    """
    object_id = OSF_OBJECT_IDS.get(name)
    if object_id is None:
        raise UnknownDatasetError(
            f"'{name}' is not in the remote dataset registry. "
            f"Registered names: {', '.join(registered_names())}."
        )
    return OSF_DOWNLOAD_URL_TEMPLATE.format(object_id=object_id)


def fetch_registered_dataset(name: str, destination: Path, config: CourseDataConfig) -> bool:
    """Download a registered dataset to a cache path.

    Args:
        name: Dataset name.
        destination: Cache file to create.
        config: Runtime configuration with download timeout.

    Returns:
        ``True`` when the name was registered and downloaded, ``False``
        when the name is unknown to the registry.
    """
    if not is_registered(name):
        return False
    download_to_path(osf_download_url(name), destination, config.download_timeout)
    return True

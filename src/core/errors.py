"""Course data exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Network and filesystem failures are not wrapped and reach callers as-is.
"""

from __future__ import annotations


class CourseDataError(Exception):
    """Base exception for all course data failures."""


class DatasetConfigError(CourseDataError):
    """Raised for invalid runtime configuration."""


class UnknownDatasetError(CourseDataError):
    """Raised when a name is not bundled, cached, or registered."""


class ArchiveContentError(CourseDataError):
    """Raised when an archive member is missing or ambiguous."""


class RequiredValueMissingError(CourseDataError):
    """Raised when a required column still holds null values."""


class DatasetStoreError(CourseDataError):
    """Raised for cache directory and cached file failures."""


class ReadmeMissingError(DatasetStoreError):
    """Raised when the MovieLens README has not been imported yet."""

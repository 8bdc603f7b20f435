"""Shared typed models.

This module defines immutable data models used by the ingest, store,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass

import pyarrow as pa


@dataclass(frozen=True)
class MovieLensTables:
    """Raw tables extracted from the MovieLens archive.

    Attributes:
        ratings: One row per (user, movie) rating.
        movies: Movie titles and pipe-separated genre strings.
        links: External IMDb and TMDb identifiers per movie.
    """

    ratings: pa.Table
    movies: pa.Table
    links: pa.Table


@dataclass(frozen=True)
class ReadmeSection:
    """One headed section of a README document.

    Attributes:
        heading: Heading text without markup.
        level: Heading depth, 1 for top-level.
        body: Section text up to the next heading.
    """

    heading: str
    level: int
    body: str


@dataclass(frozen=True)
class ReadmeDocument:
    """Structured view of a plain-text README.

    Attributes:
        title: First heading, or the first non-blank line when unheaded.
        sections: Ordered headed sections.
        raw_text: Unmodified README contents.
    """

    title: str
    sections: tuple[ReadmeSection, ...]
    raw_text: str

    def section(self, heading: str) -> ReadmeSection | None:
        """Return the first section with a matching heading, if any."""
        for item in self.sections:
            if item.heading.lower() == heading.lower():
                return item
        return None


@dataclass(frozen=True)
class DatasetListing:
    """Names known to the provider, grouped by how they resolve.

    Attributes:
        bundled: Names served by the modeling library.
        registered: Names downloadable from the remote registry.
        cached: Names with an Arrow file in the cache directory.
    """

    bundled: tuple[str, ...]
    registered: tuple[str, ...]
    cached: tuple[str, ...]

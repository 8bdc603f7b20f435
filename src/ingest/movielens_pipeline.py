"""MovieLens bulk import orchestration.

This module downloads the MovieLens archive, derives the enriched
movies and ratings tables, and persists them as cached Arrow files.
"""

from __future__ import annotations

import tempfile
import zipfile
from pathlib import Path

import pyarrow as pa
import pyarrow.compute as pc

from core.config import CourseDataConfig
from core.constants import (
    METADATA_URL_KEY,
    MOVIE_ID_COLUMN,
    MOVIES_ARTIFACT_NAME,
    RATING_COUNT_COLUMN,
    RATINGS_ARTIFACT_NAME,
    RATINGS_GENRE_ARTIFACT_NAME,
    README_MEMBER_SUFFIX,
)
from core.logging_config import get_logger
from ingest.genre_flags import GENRE_COLUMNS, expand_genre_columns
from ingest.movielens_archive import (
    extract_movielens_tables,
    read_member_bytes,
    validate_archive,
)
from ingest.remote_fetch import download_to_path
from ingest.table_ops import ordered_left_join, require_non_null, tighten_nullability
from store.arrow_cache import write_arrow_table
from store.dataset_cache import DatasetCache

_LOGGER = get_logger(__name__)

_RATINGS_GENRE_DROPPED_COLUMNS = (RATING_COUNT_COLUMN, "imdbId", "tmdbId")


class MovieLensImporter:
    """Runner for the MovieLens archive import."""

    def __init__(self, cache: DatasetCache, config: CourseDataConfig) -> None:
        self._cache = cache
        self._config = config
        self._metadata = {METADATA_URL_KEY: config.movielens_url}

    def run(self) -> list[Path]:
        """Download the archive and import it into the cache.

        Returns:
            Paths of the ratings and movies artifacts. The README and the
            ``ratings_genre`` artifact are written but not listed.
        """
        _LOGGER.info("movielens_download_started", url=self._config.movielens_url)
        with tempfile.TemporaryDirectory() as temp_dir:
            archive_path = download_to_path(
                self._config.movielens_url,
                Path(temp_dir) / "movielens.zip",
                self._config.download_timeout,
            )
            with zipfile.ZipFile(archive_path) as archive:
                return self.import_archive(archive)

    def import_archive(self, archive: zipfile.ZipFile) -> list[Path]:
        """Derive and persist all artifacts from an open archive."""
        validate_archive(archive)
        self._cache.ensure_data_dir()
        written: list[Path] = []

        tables = extract_movielens_tables(archive)
        written.append(self._save(RATINGS_ARTIFACT_NAME, tables.ratings))
        _LOGGER.info("movielens_ratings_saved", row_count=tables.ratings.num_rows)

        movies = build_movies_table(tables.ratings, tables.movies, tables.links)
        written.append(self._save(MOVIES_ARTIFACT_NAME, movies))
        _LOGGER.info("movielens_movies_saved", row_count=movies.num_rows)

        self._cache.readme_path.write_bytes(read_member_bytes(archive, README_MEMBER_SUFFIX))
        _LOGGER.info("movielens_readme_saved", path=str(self._cache.readme_path))

        ratings_genre = build_ratings_genre_table(tables.ratings, movies)
        self._save(RATINGS_GENRE_ARTIFACT_NAME, ratings_genre)
        _LOGGER.info("movielens_ratings_genre_saved", row_count=ratings_genre.num_rows)
        return written

    def _save(self, name: str, table: pa.Table) -> Path:
        return write_arrow_table(self._cache.path_for(name), table, self._metadata)


def import_movielens(cache: DatasetCache, config: CourseDataConfig) -> list[Path]:
    """Run the MovieLens import.

    Args:
        cache: Target dataset cache.
        config: Runtime configuration with the archive URL.

    Returns:
        Paths of the ratings and movies artifacts.

    Raises:
        ArchiveContentError: If a required archive member is missing or ambiguous.
        RequiredValueMissingError: If a derived table fails its null checks.
        requests.RequestException: If the download fails.
    """
    return MovieLensImporter(cache, config).run()


def build_movies_table(ratings: pa.Table, movies: pa.Table, links: pa.Table) -> pa.Table:
    """Build the per-movie table for movies that have ratings.

    Rows are ordered by ascending rating count, ties by movie id. Titles,
    genre flags, and external ids are joined on; unmatched values stay null.
    """
    grouped = ratings.group_by(MOVIE_ID_COLUMN).aggregate([(MOVIE_ID_COLUMN, "count")])
    counts = pa.table(
        {
            MOVIE_ID_COLUMN: grouped.column(MOVIE_ID_COLUMN),
            RATING_COUNT_COLUMN: pc.cast(grouped.column(f"{MOVIE_ID_COLUMN}_count"), pa.int32()),
        }
    )
    counts = counts.sort_by([(RATING_COUNT_COLUMN, "ascending"), (MOVIE_ID_COLUMN, "ascending")])
    joined = ordered_left_join(counts, movies, MOVIE_ID_COLUMN)
    joined = ordered_left_join(joined, links, MOVIE_ID_COLUMN)
    return expand_genre_columns(tighten_nullability(joined))


def build_ratings_genre_table(ratings: pa.Table, movies: pa.Table) -> pa.Table:
    """Join ratings with movie titles and genre flags.

    Raises:
        RequiredValueMissingError: If a rating has no matching movie row.
    """
    joined = ordered_left_join(ratings.drop_columns(["timestamp"]), movies, MOVIE_ID_COLUMN)
    joined = require_non_null(joined, GENRE_COLUMNS, stage=RATINGS_GENRE_ARTIFACT_NAME)
    joined = joined.drop_columns(list(_RATINGS_GENRE_DROPPED_COLUMNS))
    return require_non_null(joined, joined.column_names, stage=RATINGS_GENRE_ARTIFACT_NAME)

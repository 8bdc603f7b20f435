"""Unit tests for the MovieLens bulk import."""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path

import pyarrow as pa
import pytest

from core.config import CourseDataConfig
from core.errors import ArchiveContentError, RequiredValueMissingError
from ingest.genre_flags import GENRE_COLUMNS
from ingest.movielens_pipeline import MovieLensImporter, import_movielens
from store.arrow_cache import read_arrow_metadata, read_arrow_table
from store.dataset_cache import DatasetCache
from tests.fixture_paths import build_movielens_archive, fixture_path

_ARCHIVE_URL = "https://example.org/ml-latest.zip"


def _config(tmp_path: Path) -> CourseDataConfig:
    return CourseDataConfig(
        cache_root=tmp_path / "cache",
        movielens_url=_ARCHIVE_URL,
        download_timeout=5.0,
    )


def _import_fixture(tmp_path: Path, overrides=None) -> tuple[DatasetCache, list[Path]]:
    config = _config(tmp_path)
    cache = DatasetCache(config)
    archive_path = build_movielens_archive(tmp_path / "ml.zip", overrides)
    with zipfile.ZipFile(archive_path) as archive:
        written = MovieLensImporter(cache, config).import_archive(archive)
    return cache, written


def test_import_returns_ratings_and_movies_paths_only(tmp_path) -> None:
    """Only the ratings and movies artifacts should be listed."""
    cache, written = _import_fixture(tmp_path)

    assert written == [cache.path_for("ratings"), cache.path_for("movies")]
    assert cache.path_for("ratings_genre").is_file()
    assert cache.cached_names() == ("movies", "ratings", "ratings_genre")


def test_import_copies_readme_unmodified(tmp_path) -> None:
    """README bytes should be copied verbatim into the cache directory."""
    cache, _ = _import_fixture(tmp_path)

    assert cache.readme_path.read_bytes() == fixture_path("movielens/README.txt").read_bytes()


def test_movies_are_rated_movies_sorted_by_count(tmp_path) -> None:
    """Movies should be the rated ones, ordered by ascending rating count."""
    cache, _ = _import_fixture(tmp_path)

    movies = read_arrow_table(cache.path_for("movies"))

    assert movies.column("movieId").to_pylist() == [2, 3, 1]
    assert movies.column("nrtngs").to_pylist() == [1, 2, 3]
    assert movies.schema.field("nrtngs").type == pa.int32()


def test_movies_keep_null_links_and_expand_genres(tmp_path) -> None:
    """Missing external ids should stay null and genres become flags."""
    cache, _ = _import_fixture(tmp_path)

    movies = read_arrow_table(cache.path_for("movies"))
    rows = {row["movieId"]: row for row in movies.to_pylist()}

    assert rows[2]["tmdbId"] is None and movies.schema.field("tmdbId").nullable
    assert movies.schema.field("title").nullable is False
    assert rows[3]["Action"] and rows[3]["Sci_Fi"] and not rows[3]["Comedy"]
    assert not any(rows[2][name] for name in GENRE_COLUMNS)
    assert "genres" not in movies.column_names


def test_ratings_genre_drops_helper_columns_and_keeps_order(tmp_path) -> None:
    """Enriched ratings should keep rating order and drop helper columns."""
    cache, _ = _import_fixture(tmp_path)

    ratings = read_arrow_table(cache.path_for("ratings"))
    enriched = read_arrow_table(cache.path_for("ratings_genre"))

    assert enriched.column("movieId").to_pylist() == ratings.column("movieId").to_pylist()
    assert enriched.column_names[:4] == ["userId", "movieId", "rating", "title"]
    for dropped in ("timestamp", "nrtngs", "imdbId", "tmdbId"):
        assert dropped not in enriched.column_names
    assert all(not field.nullable for field in enriched.schema)
    assert all(enriched.column(name).null_count == 0 for name in enriched.column_names)


def test_artifacts_embed_source_url(tmp_path) -> None:
    """Every artifact should carry the archive URL in its metadata."""
    cache, _ = _import_fixture(tmp_path)

    for name in ("ratings", "movies", "ratings_genre"):
        assert read_arrow_metadata(cache.path_for(name)) == {"url": _ARCHIVE_URL}


def test_rating_without_movie_entry_fails_required_check(tmp_path) -> None:
    """Ratings for movies missing from movies.csv should fail loudly."""
    ratings = fixture_path("movielens/ratings.csv").read_text(encoding="utf-8")

    with pytest.raises(RequiredValueMissingError):
        _import_fixture(tmp_path, {"ml-latest/ratings.csv": ratings + "4,99,1.0,964983100\n"})


def test_duplicate_movie_entry_fails_join(tmp_path) -> None:
    """A movie listed twice in movies.csv should not duplicate rating rows."""
    movies = fixture_path("movielens/movies.csv").read_text(encoding="utf-8")

    with pytest.raises(ArchiveContentError, match="not unique"):
        _import_fixture(tmp_path, {"ml-latest/movies.csv": movies + "1,Toy Story again,Comedy\n"})


def test_ambiguous_member_fails_before_writing(tmp_path) -> None:
    """Archive validation should run before any artifact is written."""
    with pytest.raises(ArchiveContentError):
        _import_fixture(tmp_path, {"ml-latest/extra/README.txt": "duplicate"})

    assert not (tmp_path / "cache" / "data").exists()


def test_repeated_import_produces_identical_tables(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Importing the same archive twice should give identical tables."""
    archive_path = build_movielens_archive(tmp_path / "source.zip")
    downloads: list[str] = []

    def _fake_download(url: str, destination: Path, timeout: float) -> Path:
        downloads.append(url)
        shutil.copyfile(archive_path, destination)
        return destination

    monkeypatch.setattr("ingest.movielens_pipeline.download_to_path", _fake_download)
    config = _config(tmp_path)
    cache = DatasetCache(config)

    import_movielens(cache, config)
    first = {name: read_arrow_table(cache.path_for(name)) for name in cache.cached_names()}
    cache.clear()
    import_movielens(cache, config)
    second = {name: read_arrow_table(cache.path_for(name)) for name in cache.cached_names()}

    assert downloads == [_ARCHIVE_URL, _ARCHIVE_URL]
    assert first.keys() == second.keys()
    assert all(first[name].equals(second[name], check_metadata=True) for name in first)

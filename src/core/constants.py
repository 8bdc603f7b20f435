"""Core constants used across course data modules.

This module centralizes remote locations, cache layout names, and
the fixed lookup tables used by the dataset provider.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

DEFAULT_CACHE_ROOT = Path("~/.cache/econ2024")
DATA_DIR_NAME = "data"
ARROW_SUFFIX = ".arrow"
TEMPORARY_SUFFIX = ".partial"
README_FILE_NAME = "README.txt"
METADATA_URL_KEY = "url"
ARROW_COMPRESSION = "lz4"
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 60.0
DOWNLOAD_CHUNK_SIZE = 1 << 20

MOVIELENS_LATEST_URL = "https://files.grouplens.org/datasets/movielens/ml-latest.zip"
RATINGS_MEMBER_SUFFIX = "ratings.csv"
MOVIES_MEMBER_SUFFIX = "movies.csv"
LINKS_MEMBER_SUFFIX = "links.csv"
README_MEMBER_SUFFIX = "README.txt"
RATINGS_ARTIFACT_NAME = "ratings"
MOVIES_ARTIFACT_NAME = "movies"
RATINGS_GENRE_ARTIFACT_NAME = "ratings_genre"
MOVIE_ID_COLUMN = "movieId"
RATING_COUNT_COLUMN = "nrtngs"
GENRES_COLUMN = "genres"

OSF_DOWNLOAD_URL_TEMPLATE = "https://osf.io/{object_id}/download"
OSF_OBJECT_IDS = MappingProxyType(
    {
        "box": "tkxnh",
        "elstongrizzle": "5vrbw",
        "oxboys": "cz6g3",
        "sizespeed": "kazgm",
        "ELP_ldt_item": "c6gxd",
        "ELP_ldt_subj": "rqenu",
        "ELP_ldt_trial": "3evhy",
        "movies": "kvdch",
        "ratings": "v73ym",
    }
)

GENRE_LABELS = (
    "Action",
    "Adventure",
    "Animation",
    "Children",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Fantasy",
    "Film-Noir",
    "Horror",
    "IMAX",
    "Musical",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Thriller",
    "War",
    "Western",
)

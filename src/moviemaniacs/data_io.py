from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from .catalog import Catalog
from .schemas import MovieRow, RatingRow

logger = logging.getLogger(__name__)


def _norm_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [c.strip().lower().replace(" ", "_") for c in df.columns]
    return df


def _pick(df: pd.DataFrame, names: list[str]) -> str | None:
    for n in names:
        if n in df.columns:
            return n
    return None


def _read_csv(path: str) -> pd.DataFrame:
    # everything as text; pydantic does the typing per row
    return _norm_cols(pd.read_csv(path, encoding="utf-8", dtype=str, keep_default_na=False))


def load_movies_csv(path: str) -> pd.DataFrame:
    df = _read_csv(path)
    id_col = _pick(df, ["movieid", "movie_id", "id"])
    title_col = _pick(df, ["title"])
    genres_col = _pick(df, ["genres", "genre", "tags"])
    if not id_col or not title_col:
        raise ValueError("Could not find required columns in movies CSV")
    out = pd.DataFrame({"movie_id": df[id_col].str.strip(), "title": df[title_col]})
    out["genres"] = df[genres_col] if genres_col else ""
    return out.reset_index(drop=True)


def load_ratings_csv(path: str) -> pd.DataFrame:
    df = _read_csv(path)
    user_col = _pick(df, ["userid", "user_id", "user"])
    movie_col = _pick(df, ["movieid", "movie_id", "item_id"])
    rating_col = _pick(df, ["rating", "score"])
    if not user_col or not movie_col or not rating_col:
        raise ValueError("Could not find required columns in ratings CSV")
    out = pd.DataFrame(
        {
            "user_id": df[user_col].str.strip(),
            "movie_id": df[movie_col].str.strip(),
            "rating": df[rating_col].str.strip(),
        }
    )
    return out.reset_index(drop=True)


@dataclass
class IngestResult:
    catalog: Catalog
    warnings: list[str]


def build_catalog(movies: pd.DataFrame, ratings: pd.DataFrame) -> IngestResult:
    catalog = Catalog()
    warnings = []
    for rec in movies.to_dict("records"):
        row = MovieRow(**rec)
        catalog.insert_movie(row.movie_id, row.title, row.genres)

    unknown: set[int] = set()
    skipped = 0
    for rec in ratings.to_dict("records"):
        row = RatingRow(**rec)
        if row.movie_id not in catalog:
            unknown.add(row.movie_id)
            skipped += 1
            continue
        catalog.record_rating(row.user_id, row.movie_id, row.rating)

    if skipped:
        msg = f"Skipped {skipped} ratings for {len(unknown)} movie ids not in the catalog"
        logger.warning(msg)
        warnings.append(msg)
    logger.info(
        "Loaded %d movies and %d users", len(catalog), catalog.ratings.num_users
    )
    return IngestResult(catalog=catalog, warnings=warnings)


def ingest_sources(movies_csv: str, ratings_csv: str) -> IngestResult:
    movies = load_movies_csv(movies_csv)
    ratings = load_ratings_csv(ratings_csv)
    return build_catalog(movies, ratings)

"""Timing helpers behind the ``benchmark`` and ``search`` CLI commands."""

from __future__ import annotations

import logging
import random
import sys
import time

from .catalog import Catalog
from .entities import Movie
from .pipeline import RecommendationPipeline
from .schemas import BenchmarkReport

logger = logging.getLogger(__name__)


def random_movie_ids(catalog: Catalog, count: int, seed: int | None = None) -> list[int]:
    """Sample ``count`` catalog ids with replacement.

    Uses its own generator, so the global ``random`` state is left alone.
    """
    ids = catalog.movie_ids()
    if not ids or count <= 0:
        return []
    return random.Random(seed).choices(ids, k=count)


def rating_memory_mb(catalog: Catalog) -> float:
    total = sum(sys.getsizeof(m.raters) for m in catalog.movies())
    total += sum(sys.getsizeof(u.ratings) for u in catalog.ratings.users())
    return total / (1024 * 1024)


def analyze_performance(
    pipeline: RecommendationPipeline, num_tests: int = 100, seed: int | None = None
) -> BenchmarkReport:
    if num_tests <= 0:
        raise ValueError("num_tests must be positive")
    catalog = pipeline.catalog
    movie_ids = random_movie_ids(catalog, num_tests, seed)

    total = 0.0
    for movie_id in movie_ids:
        start = time.perf_counter()
        pipeline.collaborative_recommend(movie_id, 5)
        total += time.perf_counter() - start
    avg_ms = total * 1000 / len(movie_ids) if movie_ids else 0.0
    logger.info("Average recommendation time: %.2f ms", avg_ms)

    return BenchmarkReport(
        num_tests=len(movie_ids),
        avg_ms=avg_ms,
        total_movie_ratings=sum(len(m.raters) for m in catalog.movies()),
        total_user_ratings=catalog.ratings.num_ratings,
        approx_memory_mb=rating_memory_mb(catalog),
    )


def time_search(catalog: Catalog, movie_id: int) -> tuple[Movie | None, float]:
    """Look up ``movie_id`` in the index; returns the movie and microseconds taken."""
    start = time.perf_counter()
    movie = catalog.index.search(movie_id)
    return movie, (time.perf_counter() - start) * 1e6

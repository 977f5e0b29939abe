"""Recommendation pipeline.

Scores come from the scorer registered under each method name, are cut down
to the top ``n`` by :class:`Ranker` (ties go to the lower movie id) and are
resolved back to :class:`Movie` records through the catalog index.
"""

from __future__ import annotations

import logging
import time

from .catalog import Catalog
from .entities import Movie
from .ranker import Ranker
from .recommender_base import scorer_for
from .recommender_cf import COLLABORATIVE, LIKE_THRESHOLD, NEIGHBORHOOD_SIZE
from .recommender_content import CONTENT
from .similarity import MIN_COMMON_RATINGS

logger = logging.getLogger(__name__)


class RecommendationPipeline:
    def __init__(
        self,
        catalog: Catalog,
        neighborhood_size: int = NEIGHBORHOOD_SIZE,
        like_threshold: float = LIKE_THRESHOLD,
        min_common: int = MIN_COMMON_RATINGS,
        ranker: Ranker | None = None,
    ):
        self.catalog = catalog
        self.ranker = ranker or Ranker()
        self.params = {
            "neighborhood_size": neighborhood_size,
            "like_threshold": like_threshold,
            "min_common": min_common,
        }

    def recommend(self, movie_id: int, method: str, n: int = 5) -> list[tuple[Movie, float]]:
        algo = scorer_for(method)(self.catalog, **self.params)
        start = time.perf_counter()
        scores = algo.score(movie_id)
        top = self.ranker.top_n(scores, topk=n, exclude={movie_id})
        recs = self.ranker.resolve(top, self.catalog)
        logger.debug(
            "%s recommendations for %s took %.1f ms",
            method,
            movie_id,
            (time.perf_counter() - start) * 1000,
        )
        return recs

    def collaborative_recommend(self, movie_id: int, n: int = 5) -> list[tuple[Movie, float]]:
        return self.recommend(movie_id, COLLABORATIVE, n)

    def content_recommend(self, movie_id: int, n: int = 5) -> list[tuple[Movie, float]]:
        return self.recommend(movie_id, CONTENT, n)

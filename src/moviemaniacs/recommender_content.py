from __future__ import annotations

from .recommender_base import RecommenderAlgo, recommendation_method
from .similarity import genre_overlap

CONTENT = "content"


@recommendation_method(CONTENT)
class ContentRecommender(RecommenderAlgo):
    def score(self, movie_id: int) -> dict[int, float]:
        target = self.catalog.get(movie_id)
        if target is None:
            return {}
        # full scan, every other movie gets a score (possibly 0.0)
        return {
            m.id: genre_overlap(target.genres, m.genres)
            for m in self.catalog.movies()
            if m.id != movie_id
        }

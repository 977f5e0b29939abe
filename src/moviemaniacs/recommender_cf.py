from __future__ import annotations

from .catalog import Catalog
from .recommender_base import RecommenderAlgo, recommendation_method
from .similarity import MIN_COMMON_RATINGS, SimilarityEngine

NEIGHBORHOOD_SIZE = 20
LIKE_THRESHOLD = 3.5

COLLABORATIVE = "collaborative"


@recommendation_method(COLLABORATIVE)
class CollaborativeRecommender(RecommenderAlgo):
    """Similarity-weighted average of what positively correlated raters liked."""

    def __init__(
        self,
        catalog: Catalog,
        neighborhood_size: int = NEIGHBORHOOD_SIZE,
        like_threshold: float = LIKE_THRESHOLD,
        min_common: int = MIN_COMMON_RATINGS,
    ):
        super().__init__(
            catalog,
            neighborhood_size=neighborhood_size,
            like_threshold=like_threshold,
            min_common=min_common,
        )
        self.neighborhood_size = neighborhood_size
        self.like_threshold = like_threshold
        self.engine = SimilarityEngine(catalog, min_common=min_common)

    def score(self, movie_id: int) -> dict[int, float]:
        neighbors = self.engine.neighbors_of(movie_id, self.neighborhood_size)
        store = self.catalog.ratings
        acc: dict[int, list[float]] = {}  # movie id -> [weighted sum, similarity sum]
        for user_id, sim in neighbors:
            if sim <= 0:
                continue
            for rec_id, rating in store.ratings_of(user_id).items():
                if rec_id == movie_id or rating < self.like_threshold:
                    continue
                entry = acc.setdefault(rec_id, [0.0, 0.0])
                entry[0] += sim * rating
                entry[1] += sim
        return {cid: w / s for cid, (w, s) in acc.items() if s > 0}

from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np

from .catalog import Catalog

MIN_COMMON_RATINGS = 5


def pearson_correlation(
    a: Mapping[int, float], b: Mapping[int, float], min_common: int = MIN_COMMON_RATINGS
) -> float:
    """Pearson correlation of two sparse vectors over their shared keys.

    Returns 0.0 when fewer than ``min_common`` keys are shared or when either
    side has zero variance over the shared keys.
    """
    common = sorted(a.keys() & b.keys())
    n = len(common)
    if n < min_common:
        return 0.0
    x = np.fromiter((a[k] for k in common), dtype=float, count=n)
    y = np.fromiter((b[k] for k in common), dtype=float, count=n)
    # x.mean() of a constant non-dyadic vector is inexact, so test flatness directly
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0
    dx = x - x.mean()
    dy = y - y.mean()
    r = float(np.sum(dx * dy)) / np.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
    return float(np.clip(r, -1.0, 1.0))


def genre_overlap(a: Sequence[str], b: Sequence[str]) -> float:
    """Number of matching tag pairs; repeated tags each count."""
    score = 0.0
    for g1 in a:
        for g2 in b:
            if g1 == g2:
                score += 1.0
    return score


class SimilarityEngine:
    def __init__(self, catalog: Catalog, min_common: int = MIN_COMMON_RATINGS):
        self.catalog = catalog
        self.min_common = min_common

    def neighbors_of(self, movie_id: int, k: int) -> list[tuple[int, float]]:
        """Raters of ``movie_id`` ranked by similarity, best first.

        Each rater's full rating vector (keyed by movie id) is correlated with
        the movie's rater vector (keyed by user id); the two key spaces are
        intersected as plain integers. Equal similarities keep rater order.
        """
        if self.catalog.get(movie_id) is None:
            return []
        store = self.catalog.ratings
        target = store.raters_of(movie_id)
        sims = [
            (
                user_id,
                pearson_correlation(store.ratings_of(user_id), target, self.min_common),
            )
            for user_id in target
        ]
        sims.sort(key=lambda x: x[1], reverse=True)
        return sims[:k]

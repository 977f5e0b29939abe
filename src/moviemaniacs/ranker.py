from __future__ import annotations

import heapq

from .catalog import Catalog
from .entities import Movie, ScoredCandidate


class Ranker:
    """Bounded top-k selection over ``movie_id -> score`` maps.

    Higher scores come first; equal scores are ordered by ascending movie id.
    """

    def top_n(
        self, scores: dict[int, float], topk: int = 5, exclude: set[int] | None = None
    ) -> list[ScoredCandidate]:
        if topk <= 0:
            return []
        exclude = exclude or set()
        items = ((cid, s) for cid, s in scores.items() if cid not in exclude)
        best = heapq.nlargest(topk, items, key=lambda x: (x[1], -x[0]))
        return [ScoredCandidate(movie_id=cid, score=float(s)) for cid, s in best]

    def resolve(
        self, candidates: list[ScoredCandidate], catalog: Catalog
    ) -> list[tuple[Movie, float]]:
        out = []
        for cand in candidates:
            movie = catalog.get(cand.movie_id)
            if movie is None:
                continue
            out.append((movie, cand.score))
        return out

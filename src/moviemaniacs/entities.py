from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Movie:
    id: int
    title: str = ""
    genres: list[str] = field(default_factory=list)
    raters: dict[int, float] = field(default_factory=dict)  # user id -> rating


@dataclass
class Rater:
    id: int
    ratings: dict[int, float] = field(default_factory=dict)  # movie id -> rating


@dataclass(frozen=True)
class ScoredCandidate:
    movie_id: int
    score: float

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .entities import Rater

RATING_MIN = 0.5
RATING_MAX = 5.0

_EMPTY: Mapping[int, float] = MappingProxyType({})


def check_rating(rating: float) -> float:
    value = float(rating)
    if not (RATING_MIN <= value <= RATING_MAX):
        raise ValueError(f"Rating must be {RATING_MIN}–{RATING_MAX}, got {rating!r}")
    return value


class RatingStore:
    """Sparse ratings kept in two directions: movie -> user and user -> movie.

    Both sides are written together by :meth:`record_rating`, so they always
    describe the same set of facts. A repeated ``(user, movie)`` pair
    overwrites the earlier rating.
    """

    def __init__(self):
        self._by_movie: dict[int, dict[int, float]] = {}
        self._users: dict[int, Rater] = {}

    def attach_item(self, movie_id: int, raters: dict[int, float]) -> None:
        """Use ``raters`` (normally ``Movie.raters``) as the movie-side map."""
        self._by_movie[movie_id] = raters

    def record_rating(self, user_id: int, movie_id: int, rating: float) -> None:
        value = check_rating(rating)
        user = self._users.get(user_id)
        if user is None:
            user = self._users[user_id] = Rater(user_id)
        self._by_movie.setdefault(movie_id, {})[user_id] = value
        user.ratings[movie_id] = value

    def forget_item(self, movie_id: int) -> None:
        raters = self._by_movie.pop(movie_id, None) or {}
        for user_id in list(raters):
            user = self._users.get(user_id)
            if user is not None:
                user.ratings.pop(movie_id, None)
        raters.clear()

    def ratings_of(self, user_id: int) -> Mapping[int, float]:
        user = self._users.get(user_id)
        return user.ratings if user is not None else _EMPTY

    def raters_of(self, movie_id: int) -> Mapping[int, float]:
        return self._by_movie.get(movie_id, _EMPTY)

    def rater(self, user_id: int) -> Rater | None:
        return self._users.get(user_id)

    def users(self) -> Iterator[Rater]:
        return iter(self._users.values())

    @property
    def num_users(self) -> int:
        return len(self._users)

    @property
    def num_ratings(self) -> int:
        return sum(len(u.ratings) for u in self._users.values())

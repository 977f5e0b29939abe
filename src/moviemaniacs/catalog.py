from __future__ import annotations

from collections.abc import Iterator

from .entities import Movie
from .ratings import RatingStore
from .rbtree import OrderedCatalogIndex
from .titles import TitleResolver


class Catalog:
    """Owns the movie index, the rating store and the title table.

    Built once by ingestion and then passed to the query side.
    """

    def __init__(self):
        self.index = OrderedCatalogIndex()
        self.ratings = RatingStore()
        self.titles = TitleResolver()

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, movie_id: int) -> bool:
        return movie_id in self.index

    def insert_movie(self, movie_id: int, title: str, genres: list[str] | None = None) -> Movie:
        movie = Movie(id=movie_id, title=title, genres=list(genres or []))
        self.index.insert(movie)
        self.ratings.attach_item(movie_id, movie.raters)
        self.titles.add(movie_id, title)
        return movie

    def record_rating(self, user_id: int, movie_id: int, rating: float) -> None:
        if movie_id not in self.index:
            raise KeyError(f"Movie id {movie_id} not in catalog")
        self.ratings.record_rating(user_id, movie_id, rating)

    def remove_movie(self, movie_id: int) -> bool:
        if not self.index.remove(movie_id):
            return False
        self.ratings.forget_item(movie_id)
        self.titles.remove(movie_id)
        return True

    def get(self, movie_id: int) -> Movie | None:
        return self.index.search(movie_id)

    def movies(self) -> Iterator[Movie]:
        return self.index.in_order()

    def movie_ids(self) -> list[int]:
        return [m.id for m in self.index.in_order()]

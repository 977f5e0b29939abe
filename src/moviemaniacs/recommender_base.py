from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from .catalog import Catalog


class RecommenderAlgo(ABC):
    method: str = ""

    def __init__(self, catalog: Catalog, **params):
        self.catalog = catalog
        self.params = params

    @abstractmethod
    def score(self, movie_id: int) -> dict[int, float]:
        """Candidate movie id -> score for a query movie."""


# method name -> scoring class, filled in as the recommender modules import
_METHODS: dict[str, type[RecommenderAlgo]] = {}


def recommendation_method(name: str) -> Callable[[type[RecommenderAlgo]], type[RecommenderAlgo]]:
    """Class decorator exposing a scorer under ``name``."""

    def wrap(algo: type[RecommenderAlgo]) -> type[RecommenderAlgo]:
        if _METHODS.get(name, algo) is not algo:
            raise ValueError(f"Method '{name}' is already bound to {_METHODS[name].__name__}")
        algo.method = name
        _METHODS[name] = algo
        return algo

    return wrap


def scorer_for(method: str) -> type[RecommenderAlgo]:
    try:
        return _METHODS[method]
    except KeyError:
        known = ", ".join(method_names())
        raise KeyError(f"Unknown recommendation method '{method}' (known: {known})") from None


def method_names() -> list[str]:
    return sorted(_METHODS)

"""Title lookup with fuzzy "did you mean" suggestions."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

SUGGESTION_THRESHOLD = 0.5
MAX_SUGGESTIONS = 5


def string_similarity(a: str, b: str) -> float:
    """Case-insensitive ``1 - distance / max(len(a), len(b))``.

    Two empty strings are identical and score 1.0.
    """
    a, b = a.lower(), b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


class TitleResolver:
    def __init__(self):
        # every id carrying a title, oldest first; the newest one resolves
        self._title_to_ids: dict[str, list[int]] = {}
        self._id_to_title: dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._title_to_ids)

    def add(self, movie_id: int, title: str) -> None:
        if movie_id in self._id_to_title:
            self.remove(movie_id)
        self._title_to_ids.setdefault(title, []).append(movie_id)
        self._id_to_title[movie_id] = title

    def remove(self, movie_id: int) -> None:
        title = self._id_to_title.pop(movie_id, None)
        if title is None:
            return
        ids = self._title_to_ids[title]
        ids.remove(movie_id)
        if not ids:
            del self._title_to_ids[title]

    def resolve(self, title: str) -> int | None:
        ids = self._title_to_ids.get(title)
        return ids[-1] if ids else None

    def title_of(self, movie_id: int) -> str | None:
        return self._id_to_title.get(movie_id)

    def suggest(
        self,
        query: str,
        limit: int = MAX_SUGGESTIONS,
        threshold: float = SUGGESTION_THRESHOLD,
    ) -> list[str]:
        scored = []
        for title in self._title_to_ids:
            sim = string_similarity(query, title)
            if sim > threshold:
                scored.append((title, sim))
        # stable sort: equal scores keep insertion order
        scored.sort(key=lambda x: x[1], reverse=True)
        return [title for title, _ in scored[:limit]]

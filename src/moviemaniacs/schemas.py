from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .ratings import RATING_MAX, RATING_MIN

GENRE_DELIMITER = "|"


class MovieRow(BaseModel):
    movie_id: int
    title: str
    genres: list[str] = Field(default_factory=list)

    @field_validator("genres", mode="before")
    @classmethod
    def _split_genres(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            if not v.strip():
                return []
            return [g for g in v.split(GENRE_DELIMITER) if g]
        return v


class RatingRow(BaseModel):
    user_id: int
    movie_id: int
    rating: float = Field(..., ge=RATING_MIN, le=RATING_MAX)


class Recommendation(BaseModel):
    movie_id: int
    title: str
    genres: list[str] = Field(default_factory=list)
    score: float
    method: str


class TitleRecommendations(BaseModel):
    query: str
    movie_id: int | None = None
    collaborative: list[Recommendation] = Field(default_factory=list)
    content: list[Recommendation] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.movie_id is not None


class BenchmarkReport(BaseModel):
    num_tests: int
    avg_ms: float
    total_movie_ratings: int
    total_user_ratings: int
    approx_memory_mb: float

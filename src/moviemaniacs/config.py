from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


@dataclass
class AppConfig:
    movies_csv_path: str
    ratings_csv_path: str
    num_recommendations: int = 5
    neighborhood_size: int = 20
    like_threshold: float = 3.5
    min_common_ratings: int = 5
    random_seed: int = 42
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, path: str) -> AppConfig:
        p = Path(path)
        with p.open("rb") as f:
            cfg = tomllib.load(f)

        # Support both 'data' and 'paths' sections
        data_section = cfg.get("data", {}) or cfg.get("paths", {})
        recommendation_section = cfg.get("recommendation", {})
        logging_section = cfg.get("logging", {})

        # Environment variables win over the file (no implicit .env loading)
        movies = os.getenv("MOVIES_CSV_PATH") or data_section.get(
            "movies_csv_path", "data/movies.csv"
        )
        ratings = os.getenv("RATINGS_CSV_PATH") or data_section.get(
            "ratings_csv_path", "data/ratings.csv"
        )
        seed = int(os.getenv("RANDOM_SEED") or recommendation_section.get("random_seed", 42))
        level = os.getenv("LOG_LEVEL") or logging_section.get("level", "INFO")

        return cls(
            movies_csv_path=movies,
            ratings_csv_path=ratings,
            num_recommendations=int(recommendation_section.get("num_recommendations", 5)),
            neighborhood_size=int(recommendation_section.get("neighborhood_size", 20)),
            like_threshold=float(recommendation_section.get("like_threshold", 3.5)),
            min_common_ratings=int(recommendation_section.get("min_common_ratings", 5)),
            random_seed=seed,
            log_level=str(level).upper(),
        )

from .benchmark import analyze_performance, time_search
from .catalog import Catalog
from .config import AppConfig
from .data_io import ingest_sources
from .entities import Movie
from .pipeline import COLLABORATIVE, CONTENT, RecommendationPipeline
from .schemas import BenchmarkReport, Recommendation, TitleRecommendations


def _to_schema(recs: list[tuple[Movie, float]], method: str) -> list[Recommendation]:
    return [
        Recommendation(
            movie_id=movie.id, title=movie.title, genres=movie.genres, score=score, method=method
        )
        for movie, score in recs
    ]


class Recommender:
    def __init__(self, config: AppConfig, catalog: Catalog):
        self.config = config
        self.catalog = catalog
        self.pipeline = RecommendationPipeline(
            catalog,
            neighborhood_size=config.neighborhood_size,
            like_threshold=config.like_threshold,
            min_common=config.min_common_ratings,
        )

    @classmethod
    def from_config(cls, config_path: str) -> "Recommender":
        config = AppConfig.from_file(config_path)
        catalog = ingest_sources(config.movies_csv_path, config.ratings_csv_path).catalog
        return cls(config=config, catalog=catalog)

    @classmethod
    def from_files(cls, movies_csv: str, ratings_csv: str) -> "Recommender":
        config = AppConfig(movies_csv_path=movies_csv, ratings_csv_path=ratings_csv)
        catalog = ingest_sources(movies_csv, ratings_csv).catalog
        return cls(config=config, catalog=catalog)

    def recommend(self, title: str, topk: int | None = None) -> TitleRecommendations:
        if topk is None:
            topk = self.config.num_recommendations
        movie_id = self.catalog.titles.resolve(title)
        if movie_id is None:
            return TitleRecommendations(query=title, suggestions=self.suggest(title))
        cf = self.pipeline.collaborative_recommend(movie_id, topk)
        cb = self.pipeline.content_recommend(movie_id, topk)
        return TitleRecommendations(
            query=title,
            movie_id=movie_id,
            collaborative=_to_schema(cf, COLLABORATIVE),
            content=_to_schema(cb, CONTENT),
        )

    def suggest(self, query: str) -> list[str]:
        return self.catalog.titles.suggest(query)

    def search(self, movie_id: int) -> tuple[Movie | None, float]:
        return time_search(self.catalog, movie_id)

    def benchmark(self, num_tests: int = 100) -> BenchmarkReport:
        return analyze_performance(self.pipeline, num_tests=num_tests, seed=self.config.random_seed)


__all__ = ["AppConfig", "Catalog", "Recommender", "RecommendationPipeline"]

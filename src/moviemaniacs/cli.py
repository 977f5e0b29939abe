from __future__ import annotations

from pathlib import Path

import pandas as pd
import typer

from . import Recommender
from .config import AppConfig
from .data_io import ingest_sources
from .logger import configure_logging
from .schemas import Recommendation, TitleRecommendations

app = typer.Typer(help="MovieManiacs Recommendation System")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to the config value or INFO)"
    ),
):
    """Movie recommendations from collaborative and genre-based filtering."""
    ctx.obj = {"log_level": log_level}


def _validate_paths(movies: str, ratings: str) -> None:
    """Ensure movies and ratings files exist and are readable."""
    for name, path in {"movies": movies, "ratings": ratings}.items():
        file_path = Path(path)
        if not file_path.is_file():
            typer.echo(f"❌ {name} file not found: {path}", err=True)
            raise typer.Exit(1)
        try:
            with file_path.open("r"):
                pass
        except OSError as exc:  # pragma: no cover - defensive
            typer.echo(f"❌ cannot read {name} file: {exc}", err=True)
            raise typer.Exit(1) from exc


def _load(
    ctx: typer.Context, config: str | None, movies: str | None, ratings: str | None
) -> Recommender:
    if config:
        cfg = AppConfig.from_file(config)
    else:
        if not movies or not ratings:
            typer.echo("❌ Provide --config or both --movies-file and --ratings-file", err=True)
            raise typer.Exit(1)
        cfg = AppConfig(movies_csv_path=movies, ratings_csv_path=ratings)

    level = (ctx.obj or {}).get("log_level") or cfg.log_level
    try:
        configure_logging(level)
    except ValueError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(1) from exc

    _validate_paths(cfg.movies_csv_path, cfg.ratings_csv_path)
    try:
        res = ingest_sources(cfg.movies_csv_path, cfg.ratings_csv_path)
    except ValueError as exc:
        typer.echo(f"❌ Failed to load data: {exc}", err=True)
        raise typer.Exit(1) from exc
    for warning in res.warnings:
        typer.echo(f"⚠️ {warning}", err=True)
    return Recommender(config=cfg, catalog=res.catalog)


_MOVIES_OPT = typer.Option(None, "--movies-file", help="Path to movies CSV file")
_RATINGS_OPT = typer.Option(None, "--ratings-file", help="Path to ratings CSV file")
_CONFIG_OPT = typer.Option(None, help="Path to config TOML file")


def _echo_recs(header: str, recs: list[Recommendation], label: str) -> None:
    typer.echo(f"\n{header}")
    typer.echo("-" * 77)
    if not recs:
        typer.echo("(none)")
    for rec in recs:
        typer.echo(f"{rec.title} ({label}: {rec.score:.2f})")


def _echo_result(result: TitleRecommendations) -> None:
    if not result.found:
        typer.echo(f"❌ Movie not found: {result.query}")
        if result.suggestions:
            typer.echo("Did you mean:")
            for title in result.suggestions:
                typer.echo(f"  {title}")
        return
    _echo_recs(
        f'🎬 Collaborative Filtering Recommendations for "{result.query}":',
        result.collaborative,
        "Score",
    )
    _echo_recs(
        f'🎬 Content-Based Recommendations for "{result.query}":',
        result.content,
        "Genre-Overlap Score",
    )


@app.command()
def recommend(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Exact movie title, e.g. 'Toy Story (1995)'"),
    topk: int | None = typer.Option(None, help="Number of recommendations per method"),
    movies: str | None = _MOVIES_OPT,
    ratings: str | None = _RATINGS_OPT,
    config: str | None = _CONFIG_OPT,
    export_csv: str | None = typer.Option(None, help="Export recommendations to CSV file"),
):
    """Recommend movies similar to TITLE."""
    rec = _load(ctx, config, movies, ratings)
    result = rec.recommend(title, topk=topk)
    _echo_result(result)
    if export_csv and result.found:
        n = export_recommendations_csv(result, export_csv)
        typer.echo(f"💾 Exported {n} recommendations to {export_csv}")


@app.command()
def suggest(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Approximate movie title"),
    movies: str | None = _MOVIES_OPT,
    ratings: str | None = _RATINGS_OPT,
    config: str | None = _CONFIG_OPT,
):
    """Suggest catalog titles close to QUERY."""
    rec = _load(ctx, config, movies, ratings)
    titles = rec.suggest(query)
    if not titles:
        typer.echo("❌ No similar titles found")
        return
    typer.echo("Did you mean:")
    for title in titles:
        typer.echo(f"  {title}")


def _echo_search(rec: Recommender, movie_id: int) -> None:
    movie, micros = rec.search(movie_id)
    if movie is None:
        typer.echo("Movie not found.")
    else:
        typer.echo(f"Movie found: {movie.title}")
    typer.echo(f"Search took {micros:.1f} μs")


@app.command()
def search(
    ctx: typer.Context,
    movie_id: int = typer.Argument(..., help="Movie id to look up in the index"),
    movies: str | None = _MOVIES_OPT,
    ratings: str | None = _RATINGS_OPT,
    config: str | None = _CONFIG_OPT,
):
    """Time a red-black tree lookup for MOVIE_ID."""
    rec = _load(ctx, config, movies, ratings)
    _echo_search(rec, movie_id)


def _echo_benchmark(rec: Recommender, num_tests: int) -> None:
    report = rec.benchmark(num_tests)
    typer.echo(f"Average recommendation time: {report.avg_ms:.2f} ms")
    typer.echo("Memory usage statistics:")
    typer.echo(f"Total movie ratings: {report.total_movie_ratings}")
    typer.echo(f"Total user ratings: {report.total_user_ratings}")
    typer.echo(f"Approximate memory for ratings: {report.approx_memory_mb:.2f} MB")


@app.command()
def benchmark(
    ctx: typer.Context,
    num_tests: int = typer.Option(100, help="Number of random recommendation queries"),
    movies: str | None = _MOVIES_OPT,
    ratings: str | None = _RATINGS_OPT,
    config: str | None = _CONFIG_OPT,
):
    """Run the recommendation performance benchmark."""
    rec = _load(ctx, config, movies, ratings)
    _echo_benchmark(rec, num_tests)


MENU = """
====== MovieManiacs Recommendation System ======
1. Get recommendations by movie title
2. Run performance benchmark
3. Test Red-Black Tree operations
4. Exit"""


@app.command()
def interactive(
    ctx: typer.Context,
    movies: str | None = _MOVIES_OPT,
    ratings: str | None = _RATINGS_OPT,
    config: str | None = _CONFIG_OPT,
):
    """Menu-driven session over a loaded catalog."""
    rec = _load(ctx, config, movies, ratings)
    while True:
        typer.echo(MENU)
        choice = typer.prompt("Enter your choice", type=int)
        if choice == 1:
            title = typer.prompt("Enter a movie title")
            _echo_result(rec.recommend(title))
        elif choice == 2:
            _echo_benchmark(rec, 100)
        elif choice == 3:
            movie_id = typer.prompt("Enter a movie ID to search", type=int)
            _echo_search(rec, movie_id)
        elif choice == 4:
            typer.echo("Thank you for using MovieManiacs, goodbye!")
            break
        else:
            typer.echo("Invalid choice. Please try again.")


def export_recommendations_csv(result: TitleRecommendations, filename: str) -> int:
    """Write both recommendation lists to ``filename``; returns the row count."""
    rows = []
    for recs in (result.collaborative, result.content):
        for rank, rec in enumerate(recs, 1):
            rows.append(
                {
                    "method": rec.method,
                    "rank": rank,
                    "movie_id": rec.movie_id,
                    "title": rec.title,
                    "genres": "|".join(rec.genres),
                    "score": rec.score,
                }
            )
    df = pd.DataFrame(rows, columns=["method", "rank", "movie_id", "title", "genres", "score"])
    df.to_csv(filename, index=False)
    return len(df)


if __name__ == "__main__":
    app()

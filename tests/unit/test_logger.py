import logging

import pytest

from moviemaniacs.logger import configure_logging


def test_configure_logging_sets_root_level():
    assert configure_logging("warning") == logging.WARNING
    assert logging.getLogger().level == logging.WARNING
    assert configure_logging(logging.DEBUG) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_raises():
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_ingestion_warns_about_unknown_movies(tmp_path, caplog):
    from moviemaniacs.data_io import ingest_sources

    movies = tmp_path / "m.csv"
    ratings = tmp_path / "r.csv"
    movies.write_text("movieId,title,genres\n1,A,Comedy\n")
    ratings.write_text("userId,movieId,rating\n1,1,4.0\n1,2,3.0\n2,3,5.0\n")
    with caplog.at_level(logging.WARNING, logger="moviemaniacs.data_io"):
        res = ingest_sources(str(movies), str(ratings))
    assert res.warnings == ["Skipped 2 ratings for 2 movie ids not in the catalog"]
    assert "Skipped 2 ratings" in caplog.text
    assert res.catalog.ratings.num_ratings == 1

import shutil
from pathlib import Path

import pytest

from moviemaniacs.data_io import ingest_sources
from moviemaniacs.pipeline import RecommendationPipeline


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures" / "data"


@pytest.fixture
def tmp_data_dir(tmp_path, fixtures_dir):
    dst = tmp_path / "data"
    dst.mkdir(parents=True, exist_ok=True)
    for name in ("movies_sample.csv", "ratings_sample.csv"):
        shutil.copy2(fixtures_dir / name, dst / name)
    return dst


@pytest.fixture
def sample_movies_path(tmp_data_dir) -> Path:
    return tmp_data_dir / "movies_sample.csv"


@pytest.fixture
def sample_ratings_path(tmp_data_dir) -> Path:
    return tmp_data_dir / "ratings_sample.csv"


@pytest.fixture
def sample_catalog(fixtures_dir):
    res = ingest_sources(
        str(fixtures_dir / "movies_sample.csv"), str(fixtures_dir / "ratings_sample.csv")
    )
    return res.catalog


@pytest.fixture
def sample_pipeline(sample_catalog):
    return RecommendationPipeline(sample_catalog)

"""End-to-end behaviour of the recommendation pipeline."""

import pytest

from moviemaniacs.catalog import Catalog
from moviemaniacs.pipeline import RecommendationPipeline
from moviemaniacs.recommender_base import method_names, recommendation_method, scorer_for
from moviemaniacs.recommender_content import ContentRecommender


@pytest.fixture
def tiny_catalog():
    catalog = Catalog()
    catalog.insert_movie(1, "A", ["Comedy"])
    catalog.insert_movie(2, "B", ["Comedy", "Drama"])
    catalog.insert_movie(3, "C", ["Drama"])
    return catalog


class TestContentRecommendations:
    def test_score_descending(self, tiny_catalog):
        recs = RecommendationPipeline(tiny_catalog).content_recommend(1, 2)
        assert [(m.id, s) for m, s in recs] == [(2, 1.0), (3, 0.0)]

    def test_excludes_query_movie(self, tiny_catalog):
        recs = RecommendationPipeline(tiny_catalog).content_recommend(2, 10)
        assert 2 not in [m.id for m, _ in recs]
        assert len(recs) == 2

    def test_unknown_movie_gives_empty_list(self, tiny_catalog):
        assert RecommendationPipeline(tiny_catalog).content_recommend(42, 5) == []

    def test_ties_broken_by_lower_id(self, sample_pipeline):
        recs = sample_pipeline.content_recommend(1, 4)
        assert [(m.id, s) for m, s in recs] == [(2, 3.0), (3, 1.0), (4, 1.0), (5, 1.0)]


class TestCollaborativeRecommendations:
    def test_outlier_recommendations_excluded(self, sample_pipeline):
        recs = sample_pipeline.collaborative_recommend(1, 10)
        ids = [m.id for m, _ in recs]
        assert ids[0] == 100
        assert 200 not in ids
        assert 1 not in ids
        assert set(ids) == {100, 2, 3, 4}

    def test_scores_are_weighted_averages_of_liked_ratings(self, sample_pipeline):
        recs = dict((m.id, s) for m, s in sample_pipeline.collaborative_recommend(1, 10))
        assert 4.0 < recs[100] < 5.0
        assert recs[3] == pytest.approx(4.0)
        assert recs[4] == pytest.approx(3.5)
        scores = [s for s in recs.values()]
        assert all(3.5 <= s <= 5.0 for s in scores)

    def test_idempotent(self, sample_pipeline):
        first = sample_pipeline.collaborative_recommend(1, 5)
        second = sample_pipeline.collaborative_recommend(1, 5)
        assert [(m.id, s) for m, s in first] == [(m.id, s) for m, s in second]

    def test_no_correlated_neighbours(self, tiny_catalog):
        tiny_catalog.record_rating(1, 1, 5.0)
        tiny_catalog.record_rating(1, 2, 5.0)
        assert RecommendationPipeline(tiny_catalog).collaborative_recommend(1, 5) == []

    def test_flat_rater_is_not_a_neighbour(self):
        catalog = Catalog()
        for movie_id in range(1, 9):
            catalog.insert_movie(movie_id, f"M{movie_id}", ["Drama"])
        for movie_id in range(1, 8):
            catalog.record_rating(1, movie_id, 0.7)
        catalog.record_rating(1, 8, 5.0)
        for user_id in range(2, 8):
            catalog.record_rating(user_id, 1, 0.5)
        assert RecommendationPipeline(catalog).collaborative_recommend(1, 5) == []

    def test_unknown_movie_gives_empty_list(self, sample_pipeline):
        assert sample_pipeline.collaborative_recommend(999, 5) == []

    def test_like_threshold_is_configurable(self, sample_catalog):
        strict = RecommendationPipeline(sample_catalog, like_threshold=4.5)
        ids = [m.id for m, _ in strict.collaborative_recommend(1, 10)]
        assert ids == [100, 2]


def test_method_dispatch(sample_pipeline):
    assert method_names() == ["collaborative", "content"]
    recs = sample_pipeline.recommend(1, "content", 1)
    assert [m.id for m, _ in recs] == [2]
    with pytest.raises(KeyError):
        sample_pipeline.recommend(1, "popularity", 1)


def test_methods_bound_once_at_import(sample_catalog):
    before = {name: scorer_for(name) for name in method_names()}
    RecommendationPipeline(sample_catalog)
    RecommendationPipeline(sample_catalog, like_threshold=4.0)
    assert {name: scorer_for(name) for name in method_names()} == before
    assert scorer_for("content") is ContentRecommender
    assert ContentRecommender.method == "content"


def test_method_name_cannot_be_rebound():
    with pytest.raises(ValueError):

        @recommendation_method("content")
        class Other(ContentRecommender):
            pass

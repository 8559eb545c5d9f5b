import numpy as np
import pytest

from algos.content_based import ContentBasedRecommender, cosine_similarity
from catalog import Catalog, Item
from user_profile import UserProfile


@pytest.mark.parametrize("vector", [[1, 0, 1], [3, 1, 0, 2], [0.5]])
def test_cosine_of_vector_with_itself_is_one(vector):
    assert cosine_similarity(np.array(vector), np.array(vector)) == pytest.approx(1.0)


def test_cosine_with_zero_vector_is_zero():
    assert cosine_similarity(np.array([1, 2, 3]), np.zeros(3)) == 0.0
    assert cosine_similarity(np.zeros(3), np.zeros(3)) == 0.0


def test_cosine_of_orthogonal_vectors():
    assert cosine_similarity(np.array([1, 0]), np.array([0, 1])) == pytest.approx(0.0)


def test_cosine_length_mismatch():
    with pytest.raises(ValueError):
        cosine_similarity(np.array([1, 0]), np.array([1, 0, 0]))


def test_user_vector_is_sum_of_liked_items(catalog):
    recommender = ContentBasedRecommender(catalog)
    profile = UserProfile(liked_item_ids=[1, 3])
    vector = recommender.user_preference_vector(profile)

    tags = catalog.tag_universe()
    assert vector[tags.index("sci-fi")] == 2
    assert vector[tags.index("mystery")] == 1
    assert vector[tags.index("romance")] == 0


def test_user_vector_skips_unknown_ids(small_catalog):
    recommender = ContentBasedRecommender(small_catalog)
    profile = UserProfile(liked_item_ids=[1, 404])
    assert recommender.user_preference_vector(profile).tolist() == [1, 1, 0, 0]


def test_no_likes_means_no_recommendations(catalog, profile):
    assert ContentBasedRecommender(catalog).recommend(profile) == []


def test_only_unknown_likes_means_no_recommendations(catalog):
    profile = UserProfile(liked_item_ids=[404])
    assert ContentBasedRecommender(catalog).recommend(profile) == []


def test_small_catalog_scenario(small_catalog):
    profile = UserProfile(liked_item_ids=[1])
    results = ContentBasedRecommender(small_catalog).recommend(profile)

    assert [rec.item.id for rec in results] == [2, 3]
    assert results[0].score == pytest.approx(0.5)
    assert results[0].matching_tags == ("sci-fi",)
    assert results[1].score == 0.0
    assert results[1].matching_tags == ()


def test_recommendations_exclude_liked_and_are_ranked(catalog):
    profile = UserProfile(liked_item_ids=[1, 7])
    results = ContentBasedRecommender(catalog).recommend(profile)

    assert 0 < len(results) <= 5
    ids = [rec.item.id for rec in results]
    assert 1 not in ids and 7 not in ids
    scores = [rec.score for rec in results]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= s <= 1.0 for s in scores)
    # Inception shares every tag of The Matrix
    assert ids[0] == 3


def test_ties_keep_catalog_order():
    catalog = Catalog([
        Item(id=1, title="seed", type="movie", description="", tags=("a",)),
        Item(id=2, title="first", type="movie", description="", tags=("a", "b")),
        Item(id=3, title="second", type="book", description="", tags=("a", "c")),
        Item(id=4, title="third", type="book", description="", tags=("a", "d")),
    ])
    results = ContentBasedRecommender(catalog).recommend(UserProfile(liked_item_ids=[1]))
    assert [rec.item.id for rec in results] == [2, 3, 4]


def test_top_n_truncation(catalog):
    profile = UserProfile(liked_item_ids=[2])
    assert len(ContentBasedRecommender(catalog, top_n=3).recommend(profile)) == 3
    assert len(ContentBasedRecommender(catalog).recommend(profile)) == 5


def test_matching_tags_only_user_affinities(catalog):
    profile = UserProfile(liked_item_ids=[4])
    results = ContentBasedRecommender(catalog).recommend(profile)
    by_id = {rec.item.id: rec for rec in results}
    assert by_id[9].matching_tags == ("drama", "romance")

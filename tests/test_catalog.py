import numpy as np
import pytest

from catalog import Catalog, ExampleRatingPanel, Item
from data_manager import DataManager
from exceptions import CatalogError, ItemNotFoundError


def test_tag_universe_keeps_first_seen_order(small_catalog):
    assert small_catalog.tag_universe() == ("sci-fi", "action", "drama", "romance")


def test_static_catalog_tag_universe(catalog):
    tags = catalog.tag_universe()
    assert tags[:3] == ("sci-fi", "action", "thriller")
    assert len(tags) == len(set(tags))
    assert "music" in tags


def test_item_vectors_share_length_and_are_binary(catalog):
    width = len(catalog.tag_universe())
    for item in catalog.all_items():
        vector = catalog.item_to_vector(item)
        assert vector.shape == (width,)
        assert set(np.unique(vector)) <= {0, 1}
        assert vector.sum() == len(set(item.tags))


def test_item_vector_positions(small_catalog):
    item = small_catalog.item_by_id(2)
    assert small_catalog.item_to_vector(item).tolist() == [1, 0, 1, 0]


def test_item_by_id_returns_none_for_unknown(catalog):
    assert catalog.item_by_id(999) is None
    assert catalog.item_by_id(1).title == "The Matrix"


def test_get_item_raises_for_unknown(catalog):
    with pytest.raises(ItemNotFoundError) as exc_info:
        catalog.get_item(42)
    assert exc_info.value.item_id == 42
    assert isinstance(exc_info.value, KeyError)


@pytest.mark.parametrize("items", [
    [Item(id=1, title="a", type="movie", description="", tags=("x",)),
     Item(id=1, title="b", type="book", description="", tags=("y",))],
    [Item(id=0, title="a", type="movie", description="", tags=("x",))],
    [Item(id=1, title="a", type="movie", description="", tags=())],
    [Item(id=1, title="a", type="podcast", description="", tags=("x",))],
])
def test_malformed_catalog_rejected(items):
    with pytest.raises(CatalogError):
        Catalog(items)


def test_filter_items_by_type_and_tag(catalog):
    books = catalog.filter_items(item_type="book")
    assert [item.id for item in books] == [2, 4, 6, 8, 10]

    sci_fi_movies = catalog.filter_items(tag="sci-fi", item_type="movie")
    assert [item.id for item in sci_fi_movies] == [1, 3, 5]

    assert len(catalog.filter_items(tag="all", item_type="all")) == len(catalog)
    assert catalog.filter_items(tag="western") == []


def test_items_frame(catalog):
    df = catalog.items_frame()
    assert list(df["id"]) == list(range(1, 11))
    assert df.loc[df["id"] == 9, "tags"].iloc[0] == ["romance", "drama", "comedy", "music"]


def test_panel_explicit_item_mapping():
    panel = ExampleRatingPanel([10, 20, 30], [[1, 0, 5]])
    assert panel.item_ids == [10, 20, 30]
    assert panel.position_of(30) == 2
    assert panel.position_of(1) is None
    rater = panel.raters()[0]
    assert rater.rater_index == 0
    assert rater.ratings == (1, 0, 5)


@pytest.mark.parametrize("item_ids,ratings", [
    ([1, 2], [[1, 2, 3]]),
    ([1, 2], [[1, 6]]),
    ([1, 2], [[-1, 2]]),
    ([1, 1], [[1, 2]]),
])
def test_malformed_panel_rejected(item_ids, ratings):
    with pytest.raises(CatalogError):
        ExampleRatingPanel(item_ids, ratings)


def test_panel_must_match_catalog(small_catalog):
    manager = DataManager(panel_item_ids=[1, 2, 99], panel_ratings=[[1, 2, 3]])
    with pytest.raises(CatalogError):
        manager.build_rating_panel(small_catalog)


def test_static_panel_shape(panel):
    assert len(panel) == 5
    assert panel.matrix().shape == (5, 10)
    assert panel.raters()[0].ratings == (5, 4, 0, 2, 5, 0, 4, 0, 3, 0)


def test_static_catalog_matches_source_records(catalog):
    item = catalog.get_item(9)
    assert item.title == "hum aapke hai kon"
    assert item.description == "romance movie"
    assert item.tags == ("romance", "drama", "comedy", "music")

import pytest

from catalog import Catalog, ExampleRatingPanel, Item
from data_manager import DataManager
from recommendation_config import RecommendationConfig
from user_profile import UserProfile


@pytest.fixture
def config(tmp_path):
    config = RecommendationConfig(
        config_path=tmp_path / "config" / "recommendation_config.json",
        overrides={
            "data_dir": str(tmp_path / "data"),
            "profile_store": "file",
        },
    )
    config.save_config(config.get_config_dict())
    return config


@pytest.fixture
def catalog():
    catalog, _ = DataManager().load_data()
    return catalog


@pytest.fixture
def panel():
    _, panel = DataManager().load_data()
    return panel


@pytest.fixture
def small_catalog():
    return Catalog([
        Item(id=1, title="Item1", type="movie", description="", tags=("sci-fi", "action")),
        Item(id=2, title="Item2", type="book", description="", tags=("sci-fi", "drama")),
        Item(id=3, title="Item3", type="movie", description="", tags=("romance",)),
    ])


@pytest.fixture
def small_panel():
    return ExampleRatingPanel([1, 2, 3], [[5, 0, 3], [4, 0, 2]])


@pytest.fixture
def profile():
    return UserProfile()

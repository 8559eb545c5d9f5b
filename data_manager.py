from recommendation_config import RecommendationConfig
from catalog import Catalog, ExampleRatingPanel, Item
import structlog
import time
from typing import List, Dict, Any, Optional

logger = structlog.get_logger()

CATALOG_ITEMS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "The Matrix",
        "type": "movie",
        "description": "A computer hacker learns from mysterious rebels about the true nature of his reality.",
        "tags": ["sci-fi", "action", "thriller"],
        "display_glyph": "🎬"
    },
    {
        "id": 2,
        "title": "The Lord of the Rings",
        "type": "book",
        "description": "A meek Hobbit and eight companions set out to destroy the One Ring.",
        "tags": ["fantasy", "adventure", "drama"],
        "display_glyph": "📚"
    },
    {
        "id": 3,
        "title": "Inception",
        "type": "movie",
        "description": "A thief who steals corporate secrets through dream-sharing technology.",
        "tags": ["sci-fi", "action", "thriller", "mystery"],
        "display_glyph": "🎬"
    },
    {
        "id": 4,
        "title": "Pride and Prejudice",
        "type": "book",
        "description": "Story about the turbulent relationship between Elizabeth Bennet and Mr. Darcy.",
        "tags": ["romance", "drama", "classic"],
        "display_glyph": "📚"
    },
    {
        "id": 5,
        "title": "Interstellar",
        "type": "movie",
        "description": "A team of explorers travel through a wormhole in space to ensure humanity's survival.",
        "tags": ["sci-fi", "drama", "adventure"],
        "display_glyph": "🎬"
    },
    {
        "id": 6,
        "title": "Harry Potter and the Sorcerer's Stone",
        "type": "book",
        "description": "A young boy discovers he is a wizard and attends a magical school.",
        "tags": ["fantasy", "adventure", "mystery"],
        "display_glyph": "📚"
    },
    {
        "id": 7,
        "title": "The Dark Knight",
        "type": "movie",
        "description": "Batman faces the Joker, a criminal mastermind who seeks to undermine order in Gotham.",
        "tags": ["action", "crime", "drama", "thriller"],
        "display_glyph": "🎬"
    },
    {
        "id": 8,
        "title": "The Hitchhiker's Guide to the Galaxy",
        "type": "book",
        "description": "Miserable Earthling Arthur Dent is rescued by his friend Ford Prefect.",
        "tags": ["sci-fi", "comedy", "adventure"],
        "display_glyph": "📚"
    },
    {
        "id": 9,
        "title": "hum aapke hai kon",
        "type": "movie",
        "description": "romance movie",
        "tags": ["romance", "drama", "comedy", "music"],
        "display_glyph": "🎬"
    },
    {
        "id": 10,
        "title": "The Da Vinci Code",
        "type": "book",
        "description": "A murder in the Louvre Museum leads to a battle between secret societies.",
        "tags": ["mystery", "thriller", "adventure"],
        "display_glyph": "📚"
    }
]

# Column order of the example panel; each row below lines up with these item ids
PANEL_ITEM_IDS: List[int] = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]

EXAMPLE_RATINGS_MATRIX: List[List[int]] = [
    [5, 4, 0, 2, 5, 0, 4, 0, 3, 0],
    [0, 5, 4, 0, 3, 5, 0, 4, 0, 2],
    [3, 0, 5, 4, 0, 3, 5, 0, 4, 0],
    [0, 4, 0, 5, 4, 0, 3, 5, 0, 4],
    [4, 0, 3, 0, 5, 4, 0, 3, 5, 0]
]


class DataManager:
    """Builds the static catalog and the example rating panel"""
    def __init__(self, config: Optional[RecommendationConfig] = None,
                 items: Optional[List[Dict[str, Any]]] = None,
                 panel_item_ids: Optional[List[int]] = None,
                 panel_ratings: Optional[List[List[int]]] = None) -> None:
        self.config = config
        self.items = CATALOG_ITEMS if items is None else items
        self.panel_item_ids = PANEL_ITEM_IDS if panel_item_ids is None else panel_item_ids
        self.panel_ratings = EXAMPLE_RATINGS_MATRIX if panel_ratings is None else panel_ratings

    def build_catalog(self) -> Catalog:
        """Convert raw item records into an immutable Catalog."""
        start_time = time.perf_counter()
        items = [
            Item(
                id=int(record["id"]),
                title=record["title"],
                type=record["type"],
                description=record.get("description", ""),
                tags=tuple(record.get("tags", [])),
                display_glyph=record.get("display_glyph", "")
            )
            for record in self.items
        ]
        catalog = Catalog(items)
        logger.debug(f"Catalog built in {time.perf_counter() - start_time:.4f} seconds.")
        return catalog

    def build_rating_panel(self, catalog: Optional[Catalog] = None) -> ExampleRatingPanel:
        """Build the reference panel, checking its columns against the catalog when given."""
        panel = ExampleRatingPanel(self.panel_item_ids, self.panel_ratings)
        if catalog is not None:
            panel.validate_against(catalog)
        return panel

    def load_data(self):
        catalog = self.build_catalog()
        panel = self.build_rating_panel(catalog)
        return catalog, panel

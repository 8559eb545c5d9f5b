from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
import structlog
from exceptions import CatalogError, ItemNotFoundError

logger = structlog.get_logger()

ITEM_TYPES = ("movie", "book")
MAX_STARS = 5


@dataclass(frozen=True)
class Item:
    id: int
    title: str
    type: str
    description: str
    tags: Tuple[str, ...]
    display_glyph: str = ""


@dataclass(frozen=True)
class ReferenceRater:
    rater_index: int
    ratings: Tuple[int, ...]


class Catalog:
    """
    Immutable set of items plus the tag universe derived from them.

    The tag universe keeps first-seen order across the items and fixes the axis
    positions of every tag vector built from this catalog.
    """

    def __init__(self, items: Sequence[Item]) -> None:
        self._validate_items(items)
        self._items: Tuple[Item, ...] = tuple(items)
        self._by_id: Dict[int, Item] = {item.id: item for item in self._items}

        tags: List[str] = []
        seen = set()
        for item in self._items:
            for tag in item.tags:
                if tag not in seen:
                    seen.add(tag)
                    tags.append(tag)
        self._tag_universe: Tuple[str, ...] = tuple(tags)
        self._tag_index: Dict[str, int] = {tag: idx for idx, tag in enumerate(self._tag_universe)}

        logger.info(f"Catalog built with {len(self._items)} items and {len(self._tag_universe)} tags")

    @staticmethod
    def _validate_items(items: Sequence[Item]) -> None:
        """Reject duplicate ids, non-positive ids, unknown types and empty tag sets."""
        seen_ids = set()
        for item in items:
            if not isinstance(item.id, int) or item.id <= 0:
                raise CatalogError(f"Item id must be a positive integer, got {item.id!r}")
            if item.id in seen_ids:
                raise CatalogError(f"Duplicate item id: {item.id}")
            if item.type not in ITEM_TYPES:
                raise CatalogError(f"Item {item.id} has unknown type {item.type!r}")
            if not item.tags:
                raise CatalogError(f"Item {item.id} has no tags")
            seen_ids.add(item.id)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id) -> bool:
        return item_id in self._by_id

    def all_items(self) -> Tuple[Item, ...]:
        return self._items

    def item_by_id(self, item_id: int) -> Optional[Item]:
        return self._by_id.get(item_id)

    def get_item(self, item_id: int) -> Item:
        """Strict lookup for callers that need exactly one item."""
        item = self._by_id.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def tag_universe(self) -> Tuple[str, ...]:
        return self._tag_universe

    def item_to_vector(self, item: Item) -> np.ndarray:
        """Binary tag-membership vector of an item over the tag universe."""
        vector = np.zeros(len(self._tag_universe), dtype=np.int64)
        for tag in item.tags:
            idx = self._tag_index.get(tag)
            if idx is not None:
                vector[idx] = 1
        return vector

    def items_frame(self) -> pd.DataFrame:
        """Tabular view of the catalog, one row per item in catalog order."""
        return pd.DataFrame(
            [
                {
                    "id": item.id,
                    "title": item.title,
                    "type": item.type,
                    "description": item.description,
                    "tags": list(item.tags),
                    "display_glyph": item.display_glyph,
                }
                for item in self._items
            ],
            columns=["id", "title", "type", "description", "tags", "display_glyph"],
        )

    def filter_items(self, tag: Optional[str] = None, item_type: Optional[str] = None) -> List[Item]:
        """Items matching a tag and/or type; None or 'all' disables a filter."""
        df = self.items_frame()
        if item_type not in (None, "all"):
            df = df[df["type"] == item_type]
        if tag not in (None, "all") and not df.empty:
            df = df[df["tags"].apply(lambda tags: tag in tags).astype(bool)]
        return [self._by_id[item_id] for item_id in df["id"].tolist()]


class ExampleRatingPanel:
    """
    Fixed panel of reference raters.

    Ratings are held in a DataFrame whose columns are item ids, so the
    item-id to position mapping is explicit instead of relying on id adjacency.
    A 0 entry means the rater has not rated that item.
    """

    def __init__(self, item_ids: Sequence[int], ratings: Sequence[Sequence[int]]) -> None:
        item_ids = list(item_ids)
        if len(set(item_ids)) != len(item_ids):
            raise CatalogError("Panel item ids must be unique")

        matrix = np.asarray(ratings, dtype=np.int64)
        if matrix.size == 0:
            matrix = matrix.reshape(0, len(item_ids))
        if matrix.ndim != 2 or matrix.shape[1] != len(item_ids):
            raise CatalogError(
                f"Panel rows must have {len(item_ids)} ratings, got shape {matrix.shape}"
            )
        if ((matrix < 0) | (matrix > MAX_STARS)).any():
            raise CatalogError(f"Panel ratings must be between 0 and {MAX_STARS}")

        self.ratings_df = pd.DataFrame(matrix, columns=item_ids)
        self.ratings_df.index.name = "rater_index"
        self._positions: Dict[int, int] = {item_id: idx for idx, item_id in enumerate(item_ids)}

        logger.info(f"Rating panel loaded with {matrix.shape[0]} raters over {len(item_ids)} items")

    @property
    def item_ids(self) -> List[int]:
        return [int(item_id) for item_id in self.ratings_df.columns]

    def __len__(self) -> int:
        return len(self.ratings_df)

    def position_of(self, item_id: int) -> Optional[int]:
        return self._positions.get(item_id)

    def matrix(self) -> np.ndarray:
        """Raters x items rating matrix."""
        return self.ratings_df.to_numpy()

    def raters(self) -> List[ReferenceRater]:
        return [
            ReferenceRater(rater_index=int(idx), ratings=tuple(int(r) for r in row))
            for idx, row in zip(self.ratings_df.index, self.matrix())
        ]

    def validate_against(self, catalog: Catalog) -> None:
        """Every panel column must name a catalog item."""
        unknown = [item_id for item_id in self.item_ids if item_id not in catalog]
        if unknown:
            raise CatalogError(f"Panel references items missing from catalog: {unknown}")

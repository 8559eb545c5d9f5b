class RecommenderError(Exception):
    """Base class for errors raised by the recommendation engine."""
    pass


class InvalidRatingError(RecommenderError, ValueError):
    """Raised when a star rating falls outside the 0-5 range."""

    def __init__(self, item_id, rating):
        self.item_id = item_id
        self.rating = rating
        super().__init__(f"Rating for item {item_id} must be between 0 and 5, got {rating!r}")


class ItemNotFoundError(RecommenderError, KeyError):
    """Raised when an explicit single-item lookup misses the catalog."""

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found in catalog")

    def __str__(self) -> str:
        return self.args[0]


class CatalogError(RecommenderError, ValueError):
    """Raised when the static catalog or rating panel data is malformed."""
    pass

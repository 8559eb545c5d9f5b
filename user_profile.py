import threading
from typing import Dict, List, Any, Optional
import structlog
from exceptions import InvalidRatingError

logger = structlog.get_logger()

MIN_RATING = 1
MAX_RATING = 5


class UserProfile:
    """
    Likes and star ratings of the single local user.

    Rating an item also likes it. Un-liking leaves any rating in place and
    clearing a rating (0) leaves the like in place. When a store is attached,
    the whole profile is saved after every mutation.
    """

    def __init__(self, liked_item_ids: Optional[List[int]] = None,
                 ratings: Optional[Dict[int, int]] = None, store=None) -> None:
        self._liked: Dict[int, None] = dict.fromkeys(liked_item_ids or [])
        self._ratings: Dict[int, int] = {}
        for item_id, rating in (ratings or {}).items():
            self._check_rating(item_id, rating)
            if rating:
                self._ratings[item_id] = int(rating)
        self.store = store
        self._lock = threading.RLock()

    @staticmethod
    def _check_rating(item_id, rating) -> None:
        if isinstance(rating, bool) or not isinstance(rating, int) or not 0 <= rating <= MAX_RATING:
            raise InvalidRatingError(item_id, rating)

    @property
    def liked_item_ids(self) -> List[int]:
        """Liked ids in the order they were liked."""
        with self._lock:
            return list(self._liked)

    @property
    def ratings(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._ratings)

    def is_liked(self, item_id: int) -> bool:
        with self._lock:
            return item_id in self._liked

    def rating_for(self, item_id: int) -> int:
        """Star rating for an item, 0 when unrated."""
        with self._lock:
            return self._ratings.get(item_id, 0)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._liked and not self._ratings

    def toggle_like(self, item_id: int) -> bool:
        """Flip the like status of an item and return the new status."""
        with self._lock:
            if item_id in self._liked:
                del self._liked[item_id]
                liked = False
            else:
                self._liked[item_id] = None
                liked = True
            logger.debug("Like toggled", item_id=item_id, liked=liked)
            self._persist()
        return liked

    def set_rating(self, item_id: int, rating: int) -> None:
        """Set a 1-5 star rating, or remove it with 0."""
        self._check_rating(item_id, rating)
        with self._lock:
            if rating == 0:
                self._ratings.pop(item_id, None)
            else:
                self._ratings[item_id] = rating
                self._liked.setdefault(item_id, None)
            logger.debug("Rating updated", item_id=item_id, rating=rating)
            self._persist()

    def reset(self) -> None:
        """Clear all likes and ratings."""
        with self._lock:
            self._liked.clear()
            self._ratings.clear()
            logger.info("User profile reset")
            self._persist()

    def _persist(self) -> None:
        if self.store is None:
            return
        if not self.store.save(self):
            logger.warning("User profile could not be persisted")

    def to_dict(self) -> Dict[str, Any]:
        """Serializable document of the profile."""
        with self._lock:
            return {
                "likedItems": list(self._liked),
                "ratings": {str(item_id): rating for item_id, rating in self._ratings.items()}
            }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], store=None) -> "UserProfile":
        """Rebuild a profile from its document form; raises ValueError on malformed data."""
        if not isinstance(data, dict):
            raise ValueError("profile document must be an object")
        liked = data.get("likedItems", [])
        ratings = data.get("ratings", {})
        if not isinstance(liked, list) or not isinstance(ratings, dict):
            raise ValueError("profile document has wrong field types")
        try:
            liked_ids = [int(item_id) for item_id in liked]
            parsed_ratings = {int(item_id): rating for item_id, rating in ratings.items()}
        except (TypeError, ValueError) as e:
            raise ValueError(f"profile document has non-integer item ids: {e}") from e
        return cls(liked_item_ids=liked_ids, ratings=parsed_ratings, store=store)

    def __repr__(self) -> str:
        return f"UserProfile(liked={self.liked_item_ids!r}, ratings={self.ratings!r})"

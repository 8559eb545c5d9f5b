import time
from dataclasses import dataclass, field
from typing import List, Tuple
import numpy as np
import structlog
from sklearn.metrics.pairwise import cosine_similarity as pairwise_cosine
from catalog import Catalog, Item
from user_profile import UserProfile

logger = structlog.get_logger()


@dataclass(frozen=True)
class ContentRecommendation:
    item: Item
    score: float
    matching_tags: Tuple[str, ...] = field(default_factory=tuple)


def cosine_similarity(vec_a: np.ndarray, vec_b: np.ndarray) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0 when either vector has zero magnitude rather than an undefined value.
    """
    vec_a = np.asarray(vec_a, dtype=float).reshape(1, -1)
    vec_b = np.asarray(vec_b, dtype=float).reshape(1, -1)
    if vec_a.shape != vec_b.shape:
        raise ValueError(f"Vectors have different lengths: {vec_a.shape[1]} vs {vec_b.shape[1]}")

    if not np.any(vec_a) or not np.any(vec_b):
        return 0.0

    return float(pairwise_cosine(vec_a, vec_b)[0, 0])


class ContentBasedRecommender:
    """
    Content-based filtering over binary tag vectors.

    The user is represented by the element-wise sum of the tag vectors of the
    items they liked, and every unliked item is ranked by its cosine similarity
    to that vector.
    """

    def __init__(self, catalog: Catalog, top_n: int = 5):
        if top_n <= 0:
            logger.warning(f"Invalid top_n value: {top_n}, using default of 5")
            top_n = 5
        self.catalog = catalog
        self.top_n = top_n
        logger.info("Content-based Recommender initialized", top_n=top_n)

    def user_preference_vector(self, profile: UserProfile) -> np.ndarray:
        """Sum of the tag vectors of every liked item that resolves in the catalog"""
        user_vector = np.zeros(len(self.catalog.tag_universe()), dtype=np.int64)

        for item_id in profile.liked_item_ids:
            item = self.catalog.item_by_id(item_id)
            if item is None:
                logger.debug(f"Liked item {item_id} not in catalog, skipping")
                continue
            user_vector += self.catalog.item_to_vector(item)

        return user_vector

    def matching_tags(self, user_vector: np.ndarray, item_vector: np.ndarray) -> Tuple[str, ...]:
        """Tags present in both the user vector and the item vector, in tag-universe order"""
        tags = self.catalog.tag_universe()
        shared = np.flatnonzero((user_vector > 0) & (item_vector > 0))
        return tuple(tags[idx] for idx in shared)

    def recommend(self, profile: UserProfile) -> List[ContentRecommendation]:
        """Top items by tag similarity; empty when the user has liked nothing"""
        start_time = time.perf_counter()
        user_vector = self.user_preference_vector(profile)

        if not np.any(user_vector):
            logger.debug("No liked items, no content-based recommendations")
            return []

        scored = []
        for item in self.catalog.all_items():
            if profile.is_liked(item.id):
                continue

            item_vector = self.catalog.item_to_vector(item)
            score = min(1.0, max(0.0, cosine_similarity(user_vector, item_vector)))
            scored.append(ContentRecommendation(
                item=item,
                score=score,
                matching_tags=self.matching_tags(user_vector, item_vector)
            ))

        # sorted() is stable, so equal scores keep catalog order
        recommendations = sorted(scored, key=lambda rec: rec.score, reverse=True)[:self.top_n]

        logger.debug(f"Content-based recommendations computed in {time.perf_counter() - start_time:.4f} seconds",
                     candidates=len(scored), returned=len(recommendations))
        return recommendations

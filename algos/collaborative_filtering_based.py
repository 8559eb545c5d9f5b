import numpy as np
import time
from scipy import stats
from dataclasses import dataclass
from typing import List, Tuple
import structlog
from catalog import Catalog, ExampleRatingPanel, Item
from user_profile import UserProfile

logger = structlog.get_logger()


@dataclass(frozen=True)
class CollaborativeRecommendation:
    item: Item
    predicted_rating: float


def pearson_correlation(ratings_a, ratings_b, min_common_items: int = 2) -> float:
    """
    Pearson correlation over the positions both series have rated (non-zero).

    Parameters:
    -----------
    ratings_a, ratings_b : sequence of int
        Rating series aligned to the same item ordering, 0 meaning unrated
    min_common_items : int, default=2
        Fewer co-rated items than this yields 0

    Returns:
    --------
    float in [-1, 1]; 0 when there is not enough overlap or either series is flat
    """
    a = np.asarray(ratings_a, dtype=float)
    b = np.asarray(ratings_b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Rating series have different lengths: {a.shape[0]} vs {b.shape[0]}")

    common = (a > 0) & (b > 0)
    if common.sum() < max(2, min_common_items):
        return 0.0

    a_common = a[common]
    b_common = b[common]

    # Flat ratings make the correlation undefined
    if np.all(a_common == a_common[0]) or np.all(b_common == b_common[0]):
        return 0.0

    correlation = stats.pearsonr(a_common, b_common)[0]
    return float(np.clip(correlation, -1.0, 1.0))


class UserBasedCFRecommender:
    """
    User-based Collaborative Filtering against a fixed panel of reference raters.

    Predictions for unrated items are correlation-weighted averages of the
    ratings given by positively correlated raters.
    """

    def __init__(self, catalog: Catalog, panel: ExampleRatingPanel,
                 top_n: int = 5, min_common_items: int = 2):
        """
        Initialize the recommender system.

        Parameters:
        -----------
        catalog : Catalog
            Items that may be recommended
        panel : ExampleRatingPanel
            Reference raters; its item ids define the rating vector layout
        top_n : int, default=5
            Maximum number of recommendations returned
        min_common_items : int, default=2
            Minimum co-rated items for a correlation to count
        """
        if top_n <= 0:
            logger.warning(f"Invalid top_n value: {top_n}, using default of 5")
            top_n = 5
        self.catalog = catalog
        self.panel = panel
        self.top_n = top_n
        self.min_common_items = min_common_items
        logger.info("Collaborative Recommender initialized",
                    raters=len(panel), top_n=top_n, min_common_items=min_common_items)

    def user_rating_vector(self, profile: UserProfile) -> np.ndarray:
        """Current user's ratings laid out in the panel's item order, 0 for unrated"""
        vector = np.zeros(len(self.panel.item_ids), dtype=np.int64)
        for item_id, rating in profile.ratings.items():
            position = self.panel.position_of(item_id)
            if position is None:
                logger.debug(f"Rated item {item_id} not in rating panel, skipping")
                continue
            vector[position] = rating
        return vector

    def rater_similarities(self, user_vector: np.ndarray) -> List[Tuple[int, float]]:
        """Positively correlated raters as (rater_index, correlation), strongest first"""
        similarities = []
        for rater in self.panel.raters():
            correlation = pearson_correlation(user_vector, rater.ratings, self.min_common_items)
            logger.debug("Rater correlation", rater_index=rater.rater_index, correlation=correlation)
            if correlation > 0:
                similarities.append((rater.rater_index, correlation))

        similarities.sort(key=lambda x: x[1], reverse=True)
        return similarities

    def recommend(self, profile: UserProfile) -> List[CollaborativeRecommendation]:
        """Top predicted ratings for items the user has not rated"""
        start_time = time.perf_counter()
        user_vector = self.user_rating_vector(profile)

        if not np.any(user_vector):
            logger.debug("No ratings, no collaborative recommendations")
            return []

        similar_raters = self.rater_similarities(user_vector)
        if not similar_raters:
            logger.info("No positively correlated raters found")
            return []

        matrix = self.panel.matrix()
        predictions = []

        for item in self.catalog.all_items():
            if profile.rating_for(item.id) > 0:
                continue

            position = self.panel.position_of(item.id)
            if position is None:
                continue

            weighted_sum = 0.0
            similarity_sum = 0.0
            for rater_index, correlation in similar_raters:
                rating = matrix[rater_index, position]
                if rating > 0:
                    weighted_sum += correlation * rating
                    similarity_sum += abs(correlation)

            # Nobody similar rated this item, so there is nothing to predict from
            if similarity_sum > 0:
                predictions.append(CollaborativeRecommendation(
                    item=item,
                    predicted_rating=weighted_sum / similarity_sum
                ))

        recommendations = sorted(predictions, key=lambda rec: rec.predicted_rating, reverse=True)[:self.top_n]

        logger.debug(f"Collaborative recommendations computed in {time.perf_counter() - start_time:.4f} seconds",
                     similar_raters=len(similar_raters), returned=len(recommendations))
        return recommendations

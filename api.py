from typing import Dict, List, Optional, Tuple, Any
import structlog
from algos.collaborative_filtering_based import CollaborativeRecommendation, UserBasedCFRecommender
from algos.content_based import ContentBasedRecommender, ContentRecommendation
from catalog import Item
from data_manager import DataManager
from profile_store import ProfileStore
from recommendation_config import RecommendationConfig
from user_profile import UserProfile

logger = structlog.get_logger()

class RecommendationService:

    """Wires the catalog, the user profile and both recommenders together"""
    def __init__(self, config: RecommendationConfig,
                 data_manager: Optional[DataManager] = None,
                 store: Optional[ProfileStore] = None) -> None:
        self.config = config
        self.data_manager = data_manager or DataManager(config=config)
        self.catalog, self.panel = self.data_manager.load_data()
        self.store = store or ProfileStore(config)
        self.profile: UserProfile = self.store.load_or_create()

        top_n = config.get('top_n', 5)
        self.cb_recommender = ContentBasedRecommender(self.catalog, top_n=top_n)
        self.cf_recommender = UserBasedCFRecommender(
            self.catalog, self.panel,
            top_n=top_n,
            min_common_items=config.get('min_common_items', 2)
        )

    def toggle_like(self, item_id: int) -> bool:
        if item_id not in self.catalog:
            logger.warning(f"Liking item {item_id} which is not in the catalog")
        return self.profile.toggle_like(item_id)

    def set_rating(self, item_id: int, rating: int) -> None:
        if item_id not in self.catalog:
            logger.warning(f"Rating item {item_id} which is not in the catalog")
        self.profile.set_rating(item_id, rating)

    def reset(self) -> None:
        self.profile.reset()

    def liked_items(self) -> List[Tuple[Item, int]]:
        """Liked items in like order with their rating (0 when unrated)"""
        liked = []
        for item_id in self.profile.liked_item_ids:
            item = self.catalog.item_by_id(item_id)
            if item is not None:
                liked.append((item, self.profile.rating_for(item_id)))
        return liked

    def content_recommendations(self) -> List[ContentRecommendation]:
        return self.cb_recommender.recommend(self.profile)

    def collaborative_recommendations(self) -> List[CollaborativeRecommendation]:
        return self.cf_recommender.recommend(self.profile)

    def recommendations(self) -> Dict[str, List[Any]]:
        """Both recommendation lists, recomputed from the current profile"""
        return {
            "content": self.content_recommendations(),
            "collaborative": self.collaborative_recommendations()
        }

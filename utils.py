import logging
import math
import structlog
from typing import Iterable

from catalog import Item

TYPE_LABELS = {
    "movie": "🎬 Movie",
    "book": "📚 Book",
}

NO_CONTENT_MESSAGE = "Like some items to get content-based recommendations."
NO_COLLABORATIVE_MESSAGE = "Rate some items to get collaborative recommendations."
NO_LIKES_MESSAGE = "No items liked yet. Like an item to add it here."


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog for console output at the given level.
    """
    log_level = logging.getLevelName(str(level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )


def type_label(item: Item) -> str:
    return TYPE_LABELS.get(item.type, item.type)


def score_percent(score: float) -> int:
    """Similarity score as a whole percentage"""
    return int(math.floor(score * 100 + 0.5))


def explanation_text(matching_tags: Iterable[str]) -> str:
    tags = list(matching_tags)
    if tags:
        return f"Matches your interest in: {', '.join(tags)}"
    return "Based on your overall preferences"


def format_predicted_rating(predicted_rating: float) -> str:
    return f"{predicted_rating:.1f} ★"


def format_stars(rating: int) -> str:
    """Star label for a liked item; 0 means unrated"""
    if rating <= 0:
        return "No rating"
    return f"{rating} ★"

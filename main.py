import argparse
from pathlib import Path
from typing import List, Optional
import structlog

from api import RecommendationService
from exceptions import RecommenderError
from recommendation_config import CONFIG_PATH, RecommendationConfig
from utils import (
    NO_COLLABORATIVE_MESSAGE,
    NO_CONTENT_MESSAGE,
    NO_LIKES_MESSAGE,
    configure_logging,
    explanation_text,
    format_predicted_rating,
    format_stars,
    score_percent,
    type_label,
)

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Movie and book recommendation demo")
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="Path to the JSON config file")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("show", help="Show liked items and both recommendation lists")

    like = subparsers.add_parser("like", help="Toggle the like status of an item")
    like.add_argument("item_id", type=int)

    rate = subparsers.add_parser("rate", help="Rate an item from 1 to 5 stars, 0 removes the rating")
    rate.add_argument("item_id", type=int)
    rate.add_argument("stars", type=int)

    subparsers.add_parser("reset", help="Clear all likes and ratings")

    browse = subparsers.add_parser("browse", help="List catalog items")
    browse.add_argument("--tag", default="all")
    browse.add_argument("--type", dest="item_type", default="all", choices=["all", "movie", "book"])

    return parser


def print_browse(service: RecommendationService, tag: str, item_type: str) -> None:
    for item in service.catalog.filter_items(tag=tag, item_type=item_type):
        liked = "♥" if service.profile.is_liked(item.id) else " "
        stars = format_stars(service.profile.rating_for(item.id))
        print(f"{liked} [{item.id:>2}] {item.display_glyph} {item.title} ({type_label(item)}) - {stars}")
        print(f"       {', '.join(item.tags)}")


def print_overview(service: RecommendationService) -> None:
    print("Liked items:")
    liked = service.liked_items()
    if not liked:
        print(f"  {NO_LIKES_MESSAGE}")
    for item, rating in liked:
        print(f"  {item.title} ({type_label(item)}) {format_stars(rating)}")

    print("\nContent-based recommendations:")
    content = service.content_recommendations()
    if not content:
        print(f"  {NO_CONTENT_MESSAGE}")
    for rank, rec in enumerate(content, start=1):
        print(f"  {rank}. {rec.item.title} ({type_label(rec.item)}) {score_percent(rec.score)}%")
        print(f"     {explanation_text(rec.matching_tags)}")

    print("\nCollaborative recommendations:")
    collaborative = service.collaborative_recommendations()
    if not collaborative:
        print(f"  {NO_COLLABORATIVE_MESSAGE}")
    for rank, rec in enumerate(collaborative, start=1):
        print(f"  {rank}. {rec.item.title} ({type_label(rec.item)}) {format_predicted_rating(rec.predicted_rating)}")
        print("     Predicted rating based on similar users")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = RecommendationConfig(config_path=args.config)
    configure_logging(config.log_level)
    service = RecommendationService(config=config)

    try:
        if args.command == "like":
            service.toggle_like(args.item_id)
        elif args.command == "rate":
            service.set_rating(args.item_id, args.stars)
        elif args.command == "reset":
            service.reset()
        elif args.command == "browse":
            print_browse(service, args.tag, args.item_type)
            return 0
    except RecommenderError as e:
        logger.error(str(e))
        return 1

    print_overview(service)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Business logic for RateTheDogs."""

from .achievements import check_achievements, evaluate_achievements
from .dogs import (
    create_dog,
    ensure_rateable,
    get_dog,
    get_next_dog,
    get_unseen_dogs,
    rate_dog,
    skip_dog,
)
from .leaderboard import parse_pagination, top_breeds, top_dogs
from .stats import (
    get_achievements_summary,
    get_milestone_progress,
    get_personality,
    get_rating_distribution,
    get_recent_ratings,
    get_top_breeds,
    get_user_stats,
)

__all__ = [
    "check_achievements",
    "evaluate_achievements",
    "create_dog",
    "ensure_rateable",
    "get_dog",
    "get_next_dog",
    "get_unseen_dogs",
    "rate_dog",
    "skip_dog",
    "parse_pagination",
    "top_breeds",
    "top_dogs",
    "get_achievements_summary",
    "get_milestone_progress",
    "get_personality",
    "get_rating_distribution",
    "get_recent_ratings",
    "get_top_breeds",
    "get_user_stats",
]

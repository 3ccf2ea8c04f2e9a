"""
Domain constants for RateTheDogs.
Rating bounds, upload limits and the gamification catalogs (achievements,
milestones, rater personalities).
"""

from typing import Any, Dict, List


# Rating system
RATING_MIN = 0.5
RATING_MAX = 5.0
RATING_INCREMENT = 0.5
RATING_VALUES = [0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0]

# Dog status values
DOG_STATUS_PENDING = "pending"
DOG_STATUS_APPROVED = "approved"
DOG_STATUS_REJECTED = "rejected"
DOG_STATUSES = (DOG_STATUS_PENDING, DOG_STATUS_APPROVED, DOG_STATUS_REJECTED)

# Image sources
IMAGE_SOURCE_DOG_CEO = "dog_ceo"
IMAGE_SOURCE_USER_UPLOAD = "user_upload"
IMAGE_SOURCES = (IMAGE_SOURCE_DOG_CEO, IMAGE_SOURCE_USER_UPLOAD)

# File upload constraints
UPLOAD_MAX_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
UPLOAD_ALLOWED_TYPES = ("image/jpeg", "image/png", "image/webp")

# Pagination defaults
PAGINATION_DEFAULT_LIMIT = 20
PAGINATION_MAX_LIMIT = 100

# Largest value a signed 64-bit INTEGER column holds
MAX_DB_INTEGER = 2**63 - 1

# Prefetch bounds
PREFETCH_DEFAULT_COUNT = 10
PREFETCH_MAX_COUNT = 20

# Special breed slugs (set during seed)
MIXED_BREED_SLUG = "mixed-breed"
UNKNOWN_BREED_SLUG = "unknown"

# Stats thresholds
PERSONALITY_MIN_RATINGS = 10
TOP_DOG_MIN_RATINGS = 100
BREED_EXPLORER_MIN_BREEDS = 10
STREAK_MASTER_MIN_DAYS = 7
ALL_STAR_MIN_HIGH_RATINGS = 20
ALL_STAR_HIGH_RATING = 4.0
TOUGH_CROWD_BELOW = 2.0
EARLY_BIRD_RATINGS = 5
EARLY_BIRD_WINDOW_MINUTES = 30


ACHIEVEMENTS: List[Dict[str, str]] = [
    {
        "id": "perfect_score",
        "name": "Perfect Score",
        "icon": "⭐",
        "description": "Found the perfect pup!",
        "criteria": "Give a 5.0 rating",
    },
    {
        "id": "breed_explorer",
        "name": "Breed Explorer",
        "icon": "🗺️",
        "description": "A true connoisseur of canine diversity",
        "criteria": "Rate dogs from 10+ different breeds",
    },
    {
        "id": "variety_pack",
        "name": "Variety Pack",
        "icon": "🎨",
        "description": "Every score has its place",
        "criteria": "Use every rating value from 0.5 to 5.0",
    },
    {
        "id": "early_bird",
        "name": "Early Bird",
        "icon": "🌅",
        "description": "Speedy sniffer!",
        "criteria": "Rate 5 dogs within 30 minutes",
    },
    {
        "id": "streak_master",
        "name": "Streak Master",
        "icon": "🔥",
        "description": "A week of woofs!",
        "criteria": "Rate 7 days in a row",
    },
    {
        "id": "all_star_rater",
        "name": "All-Star Rater",
        "icon": "🌟",
        "description": "Generous with the good boys",
        "criteria": "Give 20 ratings of 4.0 or higher",
    },
    {
        "id": "tough_crowd",
        "name": "Tough Crowd",
        "icon": "🧐",
        "description": "High standards, honest scores",
        "criteria": "Give a rating below 2.0",
    },
]


MILESTONES: List[Dict[str, Any]] = [
    {"count": 1, "icon": "🐾", "name": "First Rating", "message": "Your first pup!"},
    {"count": 10, "icon": "🐕", "name": "Getting Started", "message": "Ten tails wagged"},
    {"count": 50, "icon": "🏅", "name": "Dedicated Rater", "message": "Fifty fluffs and counting"},
    {"count": 100, "icon": "🏆", "name": "Century Club", "message": "A hundred happy hounds"},
    {"count": 250, "icon": "💎", "name": "Dog Devotee", "message": "A true friend of dogs"},
    {"count": 500, "icon": "👑", "name": "Legendary Rater", "message": "You're a legend!"},
]


# Ordered: the first matching range wins. Puppy Trainee is the locked default.
PERSONALITIES: List[Dict[str, Any]] = [
    {
        "id": "puppy_trainee",
        "name": "Puppy Trainee",
        "icon": "🐾",
        "tagline": "Still learning the ropes",
        "color": "gray",
    },
    {
        "id": "treat_dispenser",
        "name": "Treat Dispenser",
        "icon": "🦴",
        "tagline": "Every pup deserves a treat!",
        "color": "pink",
        "min_avg": 4.2,
    },
    {
        "id": "belly_rub_expert",
        "name": "Belly Rub Expert",
        "icon": "🐕",
        "tagline": "Knows exactly where to scratch",
        "color": "blue",
        "min_avg": 3.5,
        "max_avg": 4.2,
    },
    {
        "id": "bark_inspector",
        "name": "Bark Inspector",
        "icon": "🔍",
        "tagline": "Investigating all the good boys",
        "color": "purple",
        "min_avg": 2.5,
        "max_avg": 3.5,
    },
    {
        "id": "picky_pup_parent",
        "name": "Picky Pup Parent",
        "icon": "👑",
        "tagline": "Only the finest floofs allowed",
        "color": "amber",
        "min_avg": 0.0,
        "max_avg": 2.5,
    },
]

TOP_DOG_PERSONALITY: Dict[str, str] = {
    "id": "top_dog",
    "name": "Top Dog",
    "icon": "🏆",
    "tagline": "Over 100 dogs rated!",
}

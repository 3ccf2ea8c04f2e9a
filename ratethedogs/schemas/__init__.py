"""Data schemas for RateTheDogs."""

from .dog import (
    CreateDogRequest,
    DogDetails,
    DogStatus,
    ImageSource,
    PendingDog,
    PrefetchResult,
    UploadUrlRequest,
)
from .rating import RateRequest, RateResult, is_valid_rating
from .breed import BreedSummary, BreedLeaderboardEntry, DogLeaderboardEntry, LeaderboardPage
from .stats import (
    Achievement,
    AchievementsSummary,
    MilestoneProgress,
    Personality,
    RatingDistribution,
    RecentRating,
    TopBreed,
    TopBreeds,
    UserStats,
)

__all__ = [
    "CreateDogRequest",
    "DogDetails",
    "DogStatus",
    "ImageSource",
    "PendingDog",
    "PrefetchResult",
    "UploadUrlRequest",
    "RateRequest",
    "RateResult",
    "is_valid_rating",
    "BreedSummary",
    "BreedLeaderboardEntry",
    "DogLeaderboardEntry",
    "LeaderboardPage",
    "Achievement",
    "AchievementsSummary",
    "MilestoneProgress",
    "Personality",
    "RatingDistribution",
    "RecentRating",
    "TopBreed",
    "TopBreeds",
    "UserStats",
]

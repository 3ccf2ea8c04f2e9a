"""
Personal statistics schemas: rater personality, milestones, achievements,
rating distribution and top breeds.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class Personality(BaseModel):
    """Rater personality derived from the user's average rating."""

    id: str
    name: str
    icon: str
    tagline: str
    color: Optional[str] = None
    is_unlocked: bool = False
    ratings_needed: int = Field(default=0, ge=0, description="Ratings left until unlocked")
    is_top_dog: bool = False


class UserStats(BaseModel):
    """Summary returned by GET /api/me/stats."""

    ratings_count: int = 0
    skips_count: int = 0
    avg_rating_given: Optional[float] = None
    first_rating_at: Optional[datetime] = None
    last_rating_at: Optional[datetime] = None
    global_avg_rating: Optional[float] = None
    rating_diff_from_global: Optional[float] = None
    personality: Personality


class TopBreed(BaseModel):
    """Breed the user rated highest on average."""

    id: int
    name: str
    slug: str
    avg_rating: float
    rating_count: int
    image_url: Optional[str] = None


class TopBreeds(BaseModel):
    items: List[TopBreed] = Field(default_factory=list)
    total_breeds_rated: int = 0


class RatingDistribution(BaseModel):
    """Count of ratings per value, keyed by the value as printed ("0.5" .. "5")."""

    distribution: Dict[str, int]
    mode_rating: Optional[float] = None
    total_ratings: int = 0


class RecentRating(BaseModel):
    dog_id: int
    dog_name: Optional[str] = None
    breed_name: str
    breed_slug: str
    image_url: str
    value: float
    rated_at: datetime


class MilestoneProgress(BaseModel):
    current: int
    next_milestone: Optional[int] = None
    next_milestone_name: Optional[str] = None
    progress_percent: int = Field(..., ge=0, le=100)
    completed_milestones: List[int] = Field(default_factory=list)


class Achievement(BaseModel):
    id: str
    name: str
    icon: str
    description: str
    criteria: str
    is_unlocked: bool = False
    unlocked_at: Optional[datetime] = None


class AchievementsSummary(BaseModel):
    """Everything shown on the achievements page."""

    milestones: MilestoneProgress
    achievements: List[Achievement]
    unlocked_count: int
    total_achievements: int

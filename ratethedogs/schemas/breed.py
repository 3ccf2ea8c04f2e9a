"""
Breed schemas and leaderboard entries.
"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field


class BreedSummary(BaseModel):
    """Breed as listed by the breeds endpoints."""

    id: int
    name: str
    slug: str


class BreedLeaderboardEntry(BreedSummary):
    """Breed ranked by its average rating."""

    avg_rating: Optional[float] = None
    dog_count: int = 0
    rating_count: int = 0
    rank: int = Field(..., ge=1)


class DogLeaderboardEntry(BaseModel):
    """Dog ranked by its average rating."""

    id: int
    name: Optional[str] = None
    breed_name: str
    breed_slug: str
    avg_rating: Optional[float] = None
    rating_count: int = 0
    image_url: str
    rank: int = Field(..., ge=1)


class LeaderboardPage(BaseModel):
    """One page of a leaderboard."""

    items: List[Union[DogLeaderboardEntry, BreedLeaderboardEntry]] = Field(default_factory=list)
    limit: int
    offset: int


__all__ = [
    "BreedSummary",
    "BreedLeaderboardEntry",
    "DogLeaderboardEntry",
    "LeaderboardPage",
]

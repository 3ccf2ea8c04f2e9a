"""
Leaderboard queries: top rated dogs and breeds.
"""

from typing import List
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..config import settings
from ..constants import (
    DOG_STATUS_APPROVED,
    MAX_DB_INTEGER,
    PAGINATION_DEFAULT_LIMIT,
    PAGINATION_MAX_LIMIT,
)
from ..db.models import Breed, Dog, Rating
from ..schemas.breed import BreedLeaderboardEntry, DogLeaderboardEntry
from ..utils.helpers import parse_int, round_rating
from ..utils.images import get_image_url


def parse_pagination(raw_limit, raw_offset):
    """
    Normalize leaderboard paging parameters.

    Unparsable or non-positive limits fall back to the default; limits are
    capped at 100. Unparsable, negative or out of range offsets become 0.
    """
    limit = parse_int(raw_limit, PAGINATION_DEFAULT_LIMIT)
    if limit < 1:
        limit = PAGINATION_DEFAULT_LIMIT
    limit = min(limit, PAGINATION_MAX_LIMIT)

    offset = parse_int(raw_offset, 0)
    if offset < 0 or offset > MAX_DB_INTEGER:
        offset = 0
    return limit, offset


def top_dogs(db: Session, limit: int, offset: int) -> List[DogLeaderboardEntry]:
    """
    Approved dogs ordered by average rating, then rating count.

    Args:
        db: Database session
        limit: Page size
        offset: Rows to skip

    Returns:
        Ranked entries, rank = offset + position + 1
    """
    avg_col = func.avg(Rating.value)
    count_col = func.count(Rating.id)

    rows = db.execute(
        select(
            Dog,
            Breed.name.label("breed_name"),
            Breed.slug.label("breed_slug"),
            avg_col.label("avg_rating"),
            count_col.label("rating_count"),
        )
        .join(Breed, Dog.breed_id == Breed.id)
        .join(Rating, Rating.dog_id == Dog.id)
        .where(Dog.status == DOG_STATUS_APPROVED)
        .group_by(Dog.id, Breed.name, Breed.slug)
        .having(count_col >= settings.leaderboard_min_ratings)
        .order_by(desc(avg_col), desc(count_col), Dog.id)
        .limit(limit)
        .offset(offset)
    ).all()

    return [
        DogLeaderboardEntry(
            id=row.Dog.id,
            name=row.Dog.name,
            breed_name=row.breed_name,
            breed_slug=row.breed_slug,
            avg_rating=round_rating(row.avg_rating),
            rating_count=row.rating_count,
            image_url=get_image_url(row.Dog.image_url, row.Dog.image_key, row.Dog.image_source),
            rank=offset + index + 1,
        )
        for index, row in enumerate(rows)
    ]


def top_breeds(db: Session, limit: int, offset: int) -> List[BreedLeaderboardEntry]:
    """Breeds ordered by the average rating of their approved dogs."""
    avg_col = func.avg(Rating.value)
    count_col = func.count(Rating.id)

    rows = db.execute(
        select(
            Breed.id,
            Breed.name,
            Breed.slug,
            avg_col.label("avg_rating"),
            func.count(func.distinct(Dog.id)).label("dog_count"),
            count_col.label("rating_count"),
        )
        .join(Dog, (Dog.breed_id == Breed.id) & (Dog.status == DOG_STATUS_APPROVED))
        .join(Rating, Rating.dog_id == Dog.id)
        .group_by(Breed.id, Breed.name, Breed.slug)
        .having(count_col >= settings.leaderboard_min_ratings)
        .order_by(desc(avg_col), desc(count_col), Breed.id)
        .limit(limit)
        .offset(offset)
    ).all()

    return [
        BreedLeaderboardEntry(
            id=row.id,
            name=row.name,
            slug=row.slug,
            avg_rating=round_rating(row.avg_rating),
            dog_count=row.dog_count,
            rating_count=row.rating_count,
            rank=offset + index + 1,
        )
        for index, row in enumerate(rows)
    ]

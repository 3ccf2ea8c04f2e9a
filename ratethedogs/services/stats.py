"""
Personal statistics service.
Aggregates an anonymous user's ratings into summary stats, rater personality,
milestone progress, rating distribution, top breeds and recent activity.
"""

from typing import Dict, List, Optional
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..constants import (
    MILESTONES,
    PERSONALITIES,
    PERSONALITY_MIN_RATINGS,
    RATING_VALUES,
    TOP_DOG_MIN_RATINGS,
)
from ..db.models import Breed, Dog, Rating, Skip
from ..schemas.stats import (
    AchievementsSummary,
    MilestoneProgress,
    Personality,
    RatingDistribution,
    RecentRating,
    TopBreed,
    TopBreeds,
    UserStats,
)
from ..utils.helpers import as_utc, format_rating_key, round_rating
from ..utils.images import get_image_url
from .achievements import check_achievements


def _personality_from(entry: Dict, **kwargs) -> Personality:
    return Personality(
        id=entry["id"],
        name=entry["name"],
        icon=entry["icon"],
        tagline=entry["tagline"],
        color=entry.get("color"),
        **kwargs,
    )


def get_personality(ratings_count: int, avg_rating: Optional[float]) -> Personality:
    """
    Determine the rater personality for a rating history.

    Personalities unlock at 10 ratings. Until then (or without an average)
    the user is a Puppy Trainee. Ranges include their minimum and exclude
    their maximum; Treat Dispenser has no maximum.

    Args:
        ratings_count: Number of ratings given
        avg_rating: Average rating given

    Returns:
        Personality with unlock state and Top Dog flag
    """
    if ratings_count < PERSONALITY_MIN_RATINGS or avg_rating is None:
        return _personality_from(
            PERSONALITIES[0],
            is_unlocked=False,
            ratings_needed=max(PERSONALITY_MIN_RATINGS - ratings_count, 0),
            is_top_dog=False,
        )

    is_top_dog = ratings_count >= TOP_DOG_MIN_RATINGS
    for entry in PERSONALITIES[1:]:
        min_avg = entry.get("min_avg", 0.0)
        max_avg = entry.get("max_avg")
        if avg_rating >= min_avg and (max_avg is None or avg_rating < max_avg):
            return _personality_from(entry, is_unlocked=True, is_top_dog=is_top_dog)

    return _personality_from(PERSONALITIES[-1], is_unlocked=True, is_top_dog=is_top_dog)


def get_milestone_progress(ratings_count: int) -> MilestoneProgress:
    """
    Progress toward the next rating-count milestone.

    Args:
        ratings_count: Number of ratings given

    Returns:
        MilestoneProgress (100% with no next milestone once all are reached)
    """
    completed = [m["count"] for m in MILESTONES if ratings_count >= m["count"]]
    upcoming = next((m for m in MILESTONES if ratings_count < m["count"]), None)

    if upcoming is None:
        return MilestoneProgress(
            current=ratings_count,
            next_milestone=None,
            next_milestone_name=None,
            progress_percent=100,
            completed_milestones=completed,
        )

    return MilestoneProgress(
        current=ratings_count,
        next_milestone=upcoming["count"],
        next_milestone_name=upcoming["name"],
        progress_percent=min(round(ratings_count / upcoming["count"] * 100), 100),
        completed_milestones=completed,
    )


def get_user_stats(db: Session, anon_id: str) -> UserStats:
    """Summary statistics for one anonymous user."""
    row = db.execute(
        select(
            func.count(Rating.id).label("count"),
            func.avg(Rating.value).label("avg"),
            func.min(Rating.created_at).label("first"),
            func.max(Rating.created_at).label("last"),
        ).where(Rating.anon_id == anon_id)
    ).one()

    skips_count = db.scalar(
        select(func.count(Skip.id)).where(Skip.anon_id == anon_id)
    ) or 0
    global_avg = db.scalar(select(func.avg(Rating.value)))

    ratings_count = row.count or 0
    avg_given = round_rating(row.avg)
    global_avg = round_rating(global_avg)

    diff = None
    if avg_given is not None and global_avg is not None:
        diff = round(avg_given - global_avg, 2)

    return UserStats(
        ratings_count=ratings_count,
        skips_count=skips_count,
        avg_rating_given=avg_given,
        first_rating_at=as_utc(row.first),
        last_rating_at=as_utc(row.last),
        global_avg_rating=global_avg,
        rating_diff_from_global=diff,
        personality=get_personality(ratings_count, row.avg),
    )


def get_top_breeds(db: Session, anon_id: str, limit: int = 5) -> TopBreeds:
    """
    Breeds the user rated highest on average.

    Args:
        db: Database session
        anon_id: Anonymous user ID
        limit: Maximum number of breeds to return

    Returns:
        Top breeds (with the user's best-rated dog image) and the total
        number of distinct breeds rated
    """
    avg_col = func.avg(Rating.value).label("avg_rating")
    count_col = func.count(Rating.id).label("rating_count")

    rows = db.execute(
        select(Breed.id, Breed.name, Breed.slug, avg_col, count_col)
        .select_from(Rating)
        .join(Dog, Rating.dog_id == Dog.id)
        .join(Breed, Dog.breed_id == Breed.id)
        .where(Rating.anon_id == anon_id)
        .group_by(Breed.id, Breed.name, Breed.slug)
        .order_by(desc(avg_col), desc(count_col), Breed.name)
        .limit(limit)
    ).all()

    total_breeds = db.scalar(
        select(func.count(func.distinct(Dog.breed_id)))
        .select_from(Rating)
        .join(Dog, Rating.dog_id == Dog.id)
        .where(Rating.anon_id == anon_id)
    ) or 0

    items = []
    for row in rows:
        best_dog = db.execute(
            select(Dog.image_url, Dog.image_key, Dog.image_source)
            .join(Rating, Rating.dog_id == Dog.id)
            .where(Rating.anon_id == anon_id, Dog.breed_id == row.id)
            .order_by(desc(Rating.value), desc(Rating.created_at))
            .limit(1)
        ).first()

        items.append(TopBreed(
            id=row.id,
            name=row.name,
            slug=row.slug,
            avg_rating=round_rating(row.avg_rating),
            rating_count=row.rating_count,
            image_url=get_image_url(*best_dog) if best_dog else None,
        ))

    return TopBreeds(items=items, total_breeds_rated=total_breeds)


def get_rating_distribution(db: Session, anon_id: str) -> RatingDistribution:
    """
    Count of the user's ratings per value.

    Every value from 0.5 to 5.0 is present (zero if unused). The mode is the
    most used value, with ties going to the higher value.
    """
    rows = db.execute(
        select(Rating.value, func.count(Rating.id))
        .where(Rating.anon_id == anon_id)
        .group_by(Rating.value)
    ).all()
    counts = {float(value): n for value, n in rows}

    distribution = {format_rating_key(v): counts.get(v, 0) for v in RATING_VALUES}
    total = sum(counts.values())

    mode_rating = None
    best = 0
    for value in reversed(RATING_VALUES):
        if counts.get(value, 0) > best:
            best = counts[value]
            mode_rating = value

    return RatingDistribution(
        distribution=distribution,
        mode_rating=mode_rating,
        total_ratings=total,
    )


def get_recent_ratings(db: Session, anon_id: str, limit: int = 10) -> List[RecentRating]:
    """Latest ratings with dog and breed info, newest first."""
    rows = db.execute(
        select(Rating, Dog, Breed)
        .join(Dog, Rating.dog_id == Dog.id)
        .join(Breed, Dog.breed_id == Breed.id)
        .where(Rating.anon_id == anon_id)
        .order_by(desc(Rating.created_at), desc(Rating.id))
        .limit(limit)
    ).all()

    return [
        RecentRating(
            dog_id=dog.id,
            dog_name=dog.name,
            breed_name=breed.name,
            breed_slug=breed.slug,
            image_url=get_image_url(dog.image_url, dog.image_key, dog.image_source),
            value=rating.value,
            rated_at=as_utc(rating.created_at),
        )
        for rating, dog, breed in rows
    ]


def get_achievements_summary(db: Session, anon_id: str) -> AchievementsSummary:
    """Milestone progress plus the status of every achievement."""
    ratings_count = db.scalar(
        select(func.count(Rating.id)).where(Rating.anon_id == anon_id)
    ) or 0
    achievements = check_achievements(db, anon_id)

    return AchievementsSummary(
        milestones=get_milestone_progress(ratings_count),
        achievements=achievements,
        unlocked_count=sum(1 for a in achievements if a.is_unlocked),
        total_achievements=len(achievements),
    )

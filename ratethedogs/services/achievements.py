"""
Achievement checking service.
Determines which achievements an anonymous user has unlocked from their
rating history.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence
from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..constants import (
    ACHIEVEMENTS,
    ALL_STAR_HIGH_RATING,
    ALL_STAR_MIN_HIGH_RATINGS,
    BREED_EXPLORER_MIN_BREEDS,
    EARLY_BIRD_RATINGS,
    EARLY_BIRD_WINDOW_MINUTES,
    RATING_MAX,
    RATING_VALUES,
    STREAK_MASTER_MIN_DAYS,
    TOUGH_CROWD_BELOW,
)
from ..db.models import Dog, Rating
from ..schemas.stats import Achievement
from ..utils.helpers import as_utc


def has_early_bird(timestamps: Sequence[datetime]) -> bool:
    """
    Check whether any 5 consecutive ratings fall within 30 minutes.

    Args:
        timestamps: Rating times sorted oldest first

    Returns:
        True if the early bird window was hit
    """
    if len(timestamps) < EARLY_BIRD_RATINGS:
        return False

    window = timedelta(minutes=EARLY_BIRD_WINDOW_MINUTES)
    for i in range(len(timestamps) - EARLY_BIRD_RATINGS + 1):
        if timestamps[i + EARLY_BIRD_RATINGS - 1] - timestamps[i] <= window:
            return True
    return False


def max_streak(timestamps: Iterable[datetime]) -> int:
    """
    Longest run of consecutive UTC calendar days with at least one rating.

    Args:
        timestamps: Rating times in any order

    Returns:
        Number of days in the longest streak (0 without ratings)
    """
    days = sorted({as_utc(ts).date() for ts in timestamps})
    if not days:
        return 0

    longest = current = 1
    for previous, day in zip(days, days[1:]):
        if (day - previous).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def has_variety_pack(values: Iterable[float]) -> bool:
    """True once every rating value from 0.5 to 5.0 has been used."""
    return set(RATING_VALUES).issubset(set(values))


def evaluate_achievements(
    values: Sequence[float],
    timestamps: Sequence[datetime],
    breeds_rated: int,
) -> List[Achievement]:
    """
    Evaluate every achievement against a rating history.

    Args:
        values: All rating values given by the user
        timestamps: Rating times sorted oldest first
        breeds_rated: Number of distinct breeds rated

    Returns:
        One Achievement per catalog entry, in catalog order
    """
    high_ratings = sum(1 for v in values if v >= ALL_STAR_HIGH_RATING)

    checks: Dict[str, bool] = {
        "perfect_score": any(v == RATING_MAX for v in values),
        "breed_explorer": breeds_rated >= BREED_EXPLORER_MIN_BREEDS,
        "variety_pack": has_variety_pack(values),
        "early_bird": has_early_bird(timestamps),
        "streak_master": max_streak(timestamps) >= STREAK_MASTER_MIN_DAYS,
        "all_star_rater": high_ratings >= ALL_STAR_MIN_HIGH_RATINGS,
        "tough_crowd": any(v < TOUGH_CROWD_BELOW for v in values),
    }

    # Unlock times are not tracked
    return [
        Achievement(
            id=achievement["id"],
            name=achievement["name"],
            icon=achievement["icon"],
            description=achievement["description"],
            criteria=achievement["criteria"],
            is_unlocked=checks.get(achievement["id"], False),
            unlocked_at=None,
        )
        for achievement in ACHIEVEMENTS
    ]


def check_achievements(db: Session, anon_id: str) -> List[Achievement]:
    """Load a user's rating history and evaluate all achievements."""
    rows = db.execute(
        select(Rating.value, Rating.created_at)
        .where(Rating.anon_id == anon_id)
        .order_by(Rating.created_at, Rating.id)
    ).all()

    breeds_rated = db.scalar(
        select(func.count(func.distinct(Dog.breed_id)))
        .select_from(Rating)
        .join(Dog, Rating.dog_id == Dog.id)
        .where(Rating.anon_id == anon_id)
    ) or 0

    values = [row.value for row in rows]
    timestamps = [as_utc(row.created_at) for row in rows]

    achievements = evaluate_achievements(values, timestamps, breeds_rated)
    logger.debug(
        f"Achievements for {anon_id}: "
        f"{sum(1 for a in achievements if a.is_unlocked)}/{len(achievements)} unlocked"
    )
    return achievements

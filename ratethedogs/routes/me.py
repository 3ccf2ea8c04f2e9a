"""
Personal statistics endpoints for the current anonymous user.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..errors import success
from ..middleware.anon import AnonContext, get_anon_context
from ..services import stats as stats_service
from ..utils.helpers import parse_int


router = APIRouter(prefix="/api/me", tags=["me"])

TOP_BREEDS_DEFAULT = 5
TOP_BREEDS_MAX = 20
RECENT_DEFAULT = 10
RECENT_MAX = 50


def _bounded(raw: Optional[str], default: int, maximum: int) -> int:
    value = parse_int(raw, default)
    if value < 1:
        return default
    return min(value, maximum)


@router.get("/stats")
def my_stats(
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    """Rating and skip counts, averages and rater personality."""
    return success(stats_service.get_user_stats(db, ctx.anon_id))


@router.get("/top-breeds")
def my_top_breeds(
    limit: Optional[str] = Query(default=None),
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    page_limit = _bounded(limit, TOP_BREEDS_DEFAULT, TOP_BREEDS_MAX)
    return success(stats_service.get_top_breeds(db, ctx.anon_id, page_limit))


@router.get("/rating-distribution")
def my_rating_distribution(
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    return success(stats_service.get_rating_distribution(db, ctx.anon_id))


@router.get("/recent")
def my_recent_ratings(
    limit: Optional[str] = Query(default=None),
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    """Latest ratings, newest first."""
    page_limit = _bounded(limit, RECENT_DEFAULT, RECENT_MAX)
    items = stats_service.get_recent_ratings(db, ctx.anon_id, page_limit)
    return success({"items": items})


@router.get("/achievements")
def my_achievements(
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    """Milestone progress and achievement badges."""
    return success(stats_service.get_achievements_summary(db, ctx.anon_id))

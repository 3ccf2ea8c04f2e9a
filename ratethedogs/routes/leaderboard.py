"""
Leaderboard endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..errors import success
from ..schemas.breed import LeaderboardPage
from ..services.leaderboard import parse_pagination, top_breeds, top_dogs


router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("/dogs")
def dog_leaderboard(
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Top rated approved dogs."""
    page_limit, page_offset = parse_pagination(limit, offset)
    items = top_dogs(db, page_limit, page_offset)
    return success(LeaderboardPage(items=items, limit=page_limit, offset=page_offset))


@router.get("/breeds")
def breed_leaderboard(
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Top rated breeds, by the ratings of their approved dogs."""
    page_limit, page_offset = parse_pagination(limit, offset)
    items = top_breeds(db, page_limit, page_offset)
    return success(LeaderboardPage(items=items, limit=page_limit, offset=page_offset))

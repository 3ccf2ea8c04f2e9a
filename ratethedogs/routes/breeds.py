"""
Breed endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db.models import Breed
from ..db.session import get_db
from ..errors import NotFoundError, success
from ..schemas.breed import BreedSummary


router = APIRouter(prefix="/api/breeds", tags=["breeds"])


@router.get("")
def list_breeds(
    search: Optional[str] = Query(default=None, description="Case-insensitive name filter"),
    db: Session = Depends(get_db),
):
    """All breeds sorted by name, optionally filtered by a name substring."""
    query = select(Breed).order_by(Breed.name)
    if search:
        query = query.where(func.lower(Breed.name).contains(search.lower(), autoescape=True))

    breeds = db.scalars(query).all()
    return success([BreedSummary(id=b.id, name=b.name, slug=b.slug) for b in breeds])


@router.get("/{slug}")
def get_breed(slug: str, db: Session = Depends(get_db)):
    breed = db.scalar(select(Breed).where(Breed.slug == slug))
    if breed is None:
        raise NotFoundError("Breed")
    return success(BreedSummary(id=breed.id, name=breed.name, slug=breed.slug))

"""
Dog queries and rating/skip/upload operations.
"""

from typing import List, Optional, Sequence
from loguru import logger
from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..constants import DOG_STATUS_APPROVED, IMAGE_SOURCE_USER_UPLOAD
from ..db.models import Breed, Dog, Rating, Skip
from ..errors import AlreadyRatedError, NotFoundError, ValidationError
from ..schemas.dog import DogDetails
from ..schemas.rating import RateResult
from ..utils.helpers import round_rating
from ..utils.images import get_image_url


def _rating_stats():
    """Per-dog average and count of ratings."""
    return (
        select(
            Rating.dog_id.label("dog_id"),
            func.avg(Rating.value).label("avg_rating"),
            func.count(Rating.id).label("rating_count"),
        )
        .group_by(Rating.dog_id)
        .subquery("rating_stats")
    )


def _dog_details_query() -> Select:
    stats = _rating_stats()
    return (
        select(
            Dog,
            Breed.name.label("breed_name"),
            Breed.slug.label("breed_slug"),
            stats.c.avg_rating,
            func.coalesce(stats.c.rating_count, 0).label("rating_count"),
        )
        .join(Breed, Dog.breed_id == Breed.id)
        .outerjoin(stats, stats.c.dog_id == Dog.id)
        .where(Dog.status == DOG_STATUS_APPROVED)
    )


def to_dog_details(row) -> DogDetails:
    """Build the client payload from a _dog_details_query row."""
    dog = row.Dog
    return DogDetails(
        id=dog.id,
        name=dog.name,
        breed_id=dog.breed_id,
        breed_name=row.breed_name,
        breed_slug=row.breed_slug,
        avg_rating=round_rating(row.avg_rating),
        rating_count=row.rating_count,
        image_url=get_image_url(dog.image_url, dog.image_key, dog.image_source),
    )


def _unseen_by(query: Select, anon_id: str) -> Select:
    rated = select(Rating.dog_id).where(Rating.anon_id == anon_id)
    skipped = select(Skip.dog_id).where(Skip.anon_id == anon_id)
    return query.where(Dog.id.not_in(rated), Dog.id.not_in(skipped))


def get_dog(db: Session, dog_id: int) -> Optional[DogDetails]:
    """Approved dog by ID, or None."""
    row = db.execute(_dog_details_query().where(Dog.id == dog_id)).first()
    return to_dog_details(row) if row else None


def get_unseen_dogs(
    db: Session,
    anon_id: str,
    count: int = 1,
    exclude: Sequence[int] = (),
) -> List[DogDetails]:
    """
    Random approved dogs the user has neither rated nor skipped.

    Args:
        db: Database session
        anon_id: Anonymous user ID
        count: Maximum number of dogs
        exclude: Additional dog IDs to leave out (already prefetched)

    Returns:
        Up to `count` dogs in random order
    """
    query = _unseen_by(_dog_details_query(), anon_id)
    if exclude:
        query = query.where(Dog.id.not_in(list(exclude)))

    rows = db.execute(query.order_by(func.random()).limit(count)).all()
    return [to_dog_details(row) for row in rows]


def get_next_dog(db: Session, anon_id: str) -> Optional[DogDetails]:
    dogs = get_unseen_dogs(db, anon_id, count=1)
    return dogs[0] if dogs else None


def _require_approved_dog(db: Session, dog_id: int) -> Dog:
    dog = db.get(Dog, dog_id)
    if dog is None or dog.status != DOG_STATUS_APPROVED:
        raise NotFoundError("Dog")
    return dog


def dog_rating_stats(db: Session, dog_id: int):
    """(average, count) of a dog's ratings."""
    row = db.execute(
        select(func.avg(Rating.value), func.count(Rating.id)).where(Rating.dog_id == dog_id)
    ).one()
    return round_rating(row[0]), row[1] or 0


def ensure_rateable(db: Session, dog_id: int, anon_id: str) -> None:
    """
    Check a dog can be rated by this user.

    Raises:
        NotFoundError: If the dog does not exist or is not approved
        AlreadyRatedError: If this user already rated the dog
    """
    _require_approved_dog(db, dog_id)

    existing = db.scalar(
        select(Rating.id).where(Rating.dog_id == dog_id, Rating.anon_id == anon_id)
    )
    if existing is not None:
        raise AlreadyRatedError()


def rate_dog(
    db: Session,
    dog_id: int,
    anon_id: str,
    value: float,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> RateResult:
    """
    Record a rating.

    Args:
        db: Database session
        dog_id: Dog being rated
        anon_id: Anonymous user ID
        value: Validated rating value
        ip_address: Client IP for analytics
        user_agent: Client user agent for analytics

    Returns:
        RateResult with the dog's updated average and count

    Raises:
        NotFoundError: If the dog does not exist or is not approved
        AlreadyRatedError: If this user already rated the dog
    """
    ensure_rateable(db, dog_id, anon_id)

    db.add(Rating(
        dog_id=dog_id,
        value=value,
        anon_id=anon_id,
        ip_address=ip_address,
        user_agent=user_agent,
    ))
    try:
        db.commit()
    except IntegrityError:
        # Concurrent duplicate caught by the unique constraint
        db.rollback()
        raise AlreadyRatedError()

    avg_rating, rating_count = dog_rating_stats(db, dog_id)
    logger.info(f"Dog {dog_id} rated {value} by {anon_id}")
    return RateResult(rated=True, avg_rating=avg_rating, rating_count=rating_count)


def skip_dog(db: Session, dog_id: int, anon_id: str) -> None:
    """Record a skip. Skipping the same dog twice is a no-op."""
    _require_approved_dog(db, dog_id)

    existing = db.scalar(
        select(Skip.id).where(Skip.dog_id == dog_id, Skip.anon_id == anon_id)
    )
    if existing is not None:
        return

    db.add(Skip(dog_id=dog_id, anon_id=anon_id))
    try:
        db.commit()
    except IntegrityError:
        # Skipped by a concurrent request
        db.rollback()
        logger.debug(f"Dog {dog_id} already skipped by {anon_id}")


def create_dog(
    db: Session,
    image_key: str,
    breed_id: int,
    anon_id: str,
    name: Optional[str] = None,
) -> Dog:
    """
    Create an uploaded dog.

    Raises:
        ValidationError: If the breed does not exist
    """
    if db.get(Breed, breed_id) is None:
        raise ValidationError(
            "Breed not found",
            details=[{"field": "breedId", "message": "Breed not found"}],
        )

    dog = Dog(
        name=name,
        image_key=image_key,
        image_source=IMAGE_SOURCE_USER_UPLOAD,
        breed_id=breed_id,
        uploader_anon_id=anon_id,
        status=DOG_STATUS_APPROVED,
    )
    db.add(dog)
    db.commit()
    logger.info(f"Dog {dog.id} uploaded by {anon_id} ({image_key})")
    return dog

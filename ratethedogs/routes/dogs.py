"""
Dog endpoints: browsing, rating, skipping and uploads.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from loguru import logger
from sqlalchemy.orm import Session

from ..config import settings
from ..constants import (
    MAX_DB_INTEGER,
    PREFETCH_DEFAULT_COUNT,
    PREFETCH_MAX_COUNT,
    UPLOAD_MAX_SIZE_BYTES,
)
from ..db.session import get_db
from ..errors import NotFoundError, RateLimitedError, ValidationError, success
from ..middleware.anon import AnonContext, get_anon_context, require_active_anon
from ..schemas.dog import IMAGE_KEY_PATTERN, CreateDogRequest, PrefetchResult, UploadUrlRequest
from ..schemas.rating import RateRequest
from ..services import dogs as dog_service
from ..utils.helpers import parse_id_list, parse_int
from ..utils.images import generate_image_key, save_upload
from ..utils.rate_limit import KeyedRateLimiter


router = APIRouter(prefix="/api/dogs", tags=["dogs"])

rating_limiter = KeyedRateLimiter(settings.rating_rate_limit, window=60)
upload_limiter = KeyedRateLimiter(settings.upload_rate_limit, window=60 * 60)


def parse_dog_id(raw_id: str) -> int:
    """Dog IDs that are not positive database integers are treated as missing dogs."""
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise NotFoundError("Dog")
    dog_id = int(raw_id)
    if dog_id < 1 or dog_id > MAX_DB_INTEGER:
        raise NotFoundError("Dog")
    return dog_id


def _check_rate_limit(limiter: KeyedRateLimiter, anon_id: str) -> None:
    if settings.rate_limit_enabled and not limiter.hit(anon_id):
        raise RateLimitedError()


@router.get("/next")
def next_dog(
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    """Random approved dog the caller has not rated or skipped (null when none left)."""
    return success(dog_service.get_next_dog(db, ctx.anon_id))


@router.get("/prefetch")
def prefetch_dogs(
    count: Optional[str] = Query(default=None),
    exclude: Optional[str] = Query(default=None),
    ctx: AnonContext = Depends(get_anon_context),
    db: Session = Depends(get_db),
):
    """
    Several unseen dogs for client-side prefetching.

    count must be between 1 and 20 (default 10). exclude is a comma
    separated list of dog IDs already held by the client.
    """
    n = parse_int(count, PREFETCH_DEFAULT_COUNT)
    if n < 1 or n > PREFETCH_MAX_COUNT:
        raise ValidationError(
            f"count must be between 1 and {PREFETCH_MAX_COUNT}",
            details=[{"field": "count", "message": "Out of range"}],
        )

    items = dog_service.get_unseen_dogs(db, ctx.anon_id, count=n, exclude=parse_id_list(exclude))
    return success(PrefetchResult(items=items))


@router.post("/upload-url")
def create_upload_url(
    body: UploadUrlRequest,
    ctx: AnonContext = Depends(require_active_anon),
):
    """Reserve a storage key for an upload and return where to PUT it."""
    key = generate_image_key(body.content_type)
    return success({"key": key, "uploadUrl": f"/api/dogs/upload/{key}"})


@router.put("/upload/{image_key:path}")
async def upload_image(
    image_key: str,
    request: Request,
    ctx: AnonContext = Depends(require_active_anon),
):
    """Store the raw request body as the image for a reserved key."""
    if not IMAGE_KEY_PATTERN.match(image_key):
        raise ValidationError("Image key must be in format: dogs/{id}.{ext}")

    _check_rate_limit(upload_limiter, ctx.anon_id)

    data = await request.body()
    if not data:
        raise ValidationError("Upload body is empty")
    if len(data) > UPLOAD_MAX_SIZE_BYTES:
        raise ValidationError(
            f"File too large (max {UPLOAD_MAX_SIZE_BYTES // (1024 * 1024)}MB)"
        )

    save_upload(image_key, data)
    return success({"key": image_key})


@router.post("")
def create_dog(
    body: CreateDogRequest,
    ctx: AnonContext = Depends(require_active_anon),
    db: Session = Depends(get_db),
):
    """Create an uploaded dog (approved immediately)."""
    dog = dog_service.create_dog(
        db,
        image_key=body.image_key,
        breed_id=body.breed_id,
        anon_id=ctx.anon_id,
        name=body.name,
    )
    return success({"id": dog.id}, status_code=201)


@router.get("/{dog_id}")
def get_dog(dog_id: str, db: Session = Depends(get_db)):
    dog = dog_service.get_dog(db, parse_dog_id(dog_id))
    if dog is None:
        raise NotFoundError("Dog")
    return success(dog)


@router.post("/{dog_id}/rate")
def rate_dog(
    dog_id: str,
    body: RateRequest,
    ctx: AnonContext = Depends(require_active_anon),
    db: Session = Depends(get_db),
):
    """
    Rate a dog from 0.5 to 5.0.

    Returns:
        {rated, avg_rating, rating_count} with the dog's updated stats
    """
    parsed_id = parse_dog_id(dog_id)
    # Only ratings that can succeed count against the limit
    dog_service.ensure_rateable(db, parsed_id, ctx.anon_id)
    _check_rate_limit(rating_limiter, ctx.anon_id)

    result = dog_service.rate_dog(
        db,
        dog_id=parsed_id,
        anon_id=ctx.anon_id,
        value=body.value,
        ip_address=ctx.client_ip,
        user_agent=ctx.user_agent,
    )
    return success(result)


@router.post("/{dog_id}/skip")
def skip_dog(
    dog_id: str,
    ctx: AnonContext = Depends(require_active_anon),
    db: Session = Depends(get_db),
):
    dog_service.skip_dog(db, parse_dog_id(dog_id), ctx.anon_id)
    logger.debug(f"Dog {dog_id} skipped by {ctx.anon_id}")
    return success({"skipped": True})

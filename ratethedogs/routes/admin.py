"""
Admin moderation endpoints, guarded by the X-Admin-Secret header.
"""

import uuid
from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..constants import DOG_STATUS_APPROVED, DOG_STATUS_PENDING, DOG_STATUS_REJECTED
from ..db.models import AnonymousUser, Dog, utcnow
from ..db.session import get_db
from ..errors import NotFoundError, ValidationError, success
from ..middleware.admin import require_admin
from ..schemas.dog import PendingDog
from ..utils.helpers import as_utc
from ..utils.images import get_image_url
from .dogs import parse_dog_id


router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _moderate(db: Session, raw_id: str, status: str, moderator: str) -> Dog:
    dog = db.get(Dog, parse_dog_id(raw_id))
    if dog is None:
        raise NotFoundError("Dog")

    dog.status = status
    dog.moderated_by = moderator
    dog.moderated_at = utcnow()
    db.commit()
    logger.info(f"Dog {dog.id} {status} by {moderator}")
    return dog


@router.get("/dogs/pending")
def pending_dogs(db: Session = Depends(get_db)):
    """Dogs awaiting moderation, oldest first."""
    dogs = db.scalars(
        select(Dog).where(Dog.status == DOG_STATUS_PENDING).order_by(Dog.created_at, Dog.id)
    ).all()

    items = [
        PendingDog(
            id=dog.id,
            name=dog.name,
            breed_id=dog.breed_id,
            image_url=get_image_url(dog.image_url, dog.image_key, dog.image_source),
            image_source=dog.image_source,
            status=dog.status,
            uploader_anon_id=dog.uploader_anon_id,
            created_at=as_utc(dog.created_at),
        )
        for dog in dogs
    ]
    return success({"items": items})


@router.post("/dogs/{dog_id}/approve")
def approve_dog(
    dog_id: str,
    moderator: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dog = _moderate(db, dog_id, DOG_STATUS_APPROVED, moderator)
    return success({"id": dog.id, "status": dog.status})


@router.post("/dogs/{dog_id}/reject")
def reject_dog(
    dog_id: str,
    moderator: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dog = _moderate(db, dog_id, DOG_STATUS_REJECTED, moderator)
    return success({"id": dog.id, "status": dog.status})


@router.post("/anon/{anon_id}/ban")
def ban_anonymous_user(anon_id: str, db: Session = Depends(get_db)):
    """Ban an anonymous ID from rating, skipping and uploading."""
    try:
        anon_id = str(uuid.UUID(anon_id))
    except ValueError:
        raise ValidationError("Invalid anonymous ID")

    anon_user = db.get(AnonymousUser, anon_id)
    if anon_user is None:
        anon_user = AnonymousUser(anon_id=anon_id)
        db.add(anon_user)
    anon_user.is_banned = True
    db.commit()

    logger.warning(f"Anonymous user {anon_id} banned")
    return success({"anon_id": anon_id, "banned": True})

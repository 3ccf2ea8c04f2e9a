"""
Shared fixtures: in-memory database, API client and data builders.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import itertools
import uuid
from datetime import datetime, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from ratethedogs.config import settings
from ratethedogs.constants import DOG_STATUS_APPROVED, IMAGE_SOURCE_DOG_CEO
from ratethedogs.db.models import Base, Breed, Dog, Rating, Skip
from ratethedogs.db.session import SessionLocal, init_db, init_engine


ADMIN_SECRET = "test-admin-secret"

_image_counter = itertools.count(1)


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database per test."""
    engine = init_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def db(db_engine):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine, tmp_path, monkeypatch):
    """TestClient with uploads in a temp dir and rate limits cleared."""
    from ratethedogs.api import app
    from ratethedogs.routes.dogs import rating_limiter, upload_limiter

    monkeypatch.setattr(settings, "upload_dir", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "admin_secret", ADMIN_SECRET)
    monkeypatch.setattr(settings, "image_public_url", None)
    rating_limiter.reset()
    upload_limiter.reset()

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def anon_id():
    return str(uuid.uuid4())


@pytest.fixture
def anon_client(client, anon_id):
    """Client that always sends the same anonymous ID cookie."""
    client.cookies.set(settings.anon_cookie_name, anon_id)
    return client


@pytest.fixture
def make_breed(db):
    def _make(name: str = "Beagle", slug: Optional[str] = None) -> Breed:
        breed = Breed(name=name, slug=slug or name.lower().replace(" ", "-"))
        db.add(breed)
        db.commit()
        return breed
    return _make


@pytest.fixture
def make_dog(db, make_breed):
    def _make(
        breed: Optional[Breed] = None,
        status: str = DOG_STATUS_APPROVED,
        name: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Dog:
        if breed is None:
            breed = db.query(Breed).filter_by(slug="beagle").first() or make_breed()
        n = next(_image_counter)
        dog = Dog(
            name=name,
            image_url=image_url or f"https://images.dog.ceo/breeds/{breed.slug}/dog_{n}.jpg",
            image_source=IMAGE_SOURCE_DOG_CEO,
            breed_id=breed.id,
            status=status,
        )
        db.add(dog)
        db.commit()
        return dog
    return _make


@pytest.fixture
def make_rating(db):
    def _make(
        dog: Dog,
        anon_id: str,
        value: float,
        created_at: Optional[datetime] = None,
    ) -> Rating:
        rating = Rating(
            dog_id=dog.id,
            anon_id=anon_id,
            value=value,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(rating)
        db.commit()
        return rating
    return _make


@pytest.fixture
def make_skip(db):
    def _make(dog: Dog, anon_id: str) -> Skip:
        skip = Skip(dog_id=dog.id, anon_id=anon_id)
        db.add(skip)
        db.commit()
        return skip
    return _make

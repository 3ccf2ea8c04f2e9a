"""
SQLAlchemy ORM models for RateTheDogs.
"""

from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ..constants import (
    DOG_STATUS_PENDING,
    IMAGE_SOURCE_USER_UPLOAD,
    RATING_MAX,
    RATING_MIN,
)


NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Breed(Base):
    """Breed catalog entry (includes Mixed Breed and Unknown)."""

    __tablename__ = "breeds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    # Dog CEO sync fields
    dog_ceo_path: Mapped[Optional[str]] = mapped_column(String(100))
    image_count: Mapped[int] = mapped_column(Integer, default=0)
    last_synced_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    dogs: Mapped[List["Dog"]] = relationship(back_populates="breed")

    def __repr__(self) -> str:
        return f"<Breed {self.slug}>"


class Dog(Base):
    """A dog photo, either imported from Dog CEO or uploaded by a user."""

    __tablename__ = "dogs"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="status",
        ),
        Index("ix_dogs_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(50))
    image_key: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    image_url: Mapped[Optional[str]] = mapped_column(String(500))
    image_source: Mapped[str] = mapped_column(
        String(20), default=IMAGE_SOURCE_USER_UPLOAD, index=True
    )
    breed_id: Mapped[int] = mapped_column(ForeignKey("breeds.id"), nullable=False, index=True)

    uploader_user_id: Mapped[Optional[int]] = mapped_column(Integer)
    uploader_anon_id: Mapped[Optional[str]] = mapped_column(String(64))

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=DOG_STATUS_PENDING, index=True)
    moderated_by: Mapped[Optional[str]] = mapped_column(String(100))
    moderated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    breed: Mapped[Breed] = relationship(back_populates="dogs")
    ratings: Mapped[List["Rating"]] = relationship(back_populates="dog")

    def __repr__(self) -> str:
        return f"<Dog {self.id} ({self.status})>"


class Rating(Base):
    """One rating of one dog by one (anonymous) user."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("dog_id", "anon_id", name="uq_ratings_dog_anon"),
        UniqueConstraint("dog_id", "user_id", name="uq_ratings_dog_user"),
        CheckConstraint(f"value >= {RATING_MIN} AND value <= {RATING_MAX}", name="value_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dog_id: Mapped[int] = mapped_column(ForeignKey("dogs.id"), nullable=False, index=True)
    value: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(Integer)
    anon_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)

    # Analytics
    ip_address: Mapped[Optional[str]] = mapped_column(String(64))
    user_agent: Mapped[Optional[str]] = mapped_column(String(500))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    dog: Mapped[Dog] = relationship(back_populates="ratings")


class Skip(Base):
    """A dog the user chose not to rate."""

    __tablename__ = "skips"
    __table_args__ = (
        UniqueConstraint("dog_id", "anon_id", name="uq_skips_dog_anon"),
        UniqueConstraint("dog_id", "user_id", name="uq_skips_dog_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dog_id: Mapped[int] = mapped_column(ForeignKey("dogs.id"), nullable=False, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(Integer)
    anon_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class User(Base):
    """Registered user (OAuth-ready; not yet used by the API)."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[Optional[str]] = mapped_column(String(100))
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500))
    google_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    provider: Mapped[Optional[str]] = mapped_column(String(20), default="google")
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    linked_anon_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class AnonymousUser(Base):
    """Anonymous visitor tracked by cookie."""

    __tablename__ = "anonymous_users"

    anon_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    first_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    is_banned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_agent: Mapped[Optional[str]] = mapped_column(String(500))

"""Database models and session management for RateTheDogs."""

from .models import Base, Breed, Dog, Rating, Skip, User, AnonymousUser
from .session import SessionLocal, get_db, get_engine, init_db, init_engine

__all__ = [
    "Base",
    "Breed",
    "Dog",
    "Rating",
    "Skip",
    "User",
    "AnonymousUser",
    "SessionLocal",
    "get_db",
    "get_engine",
    "init_db",
    "init_engine",
]

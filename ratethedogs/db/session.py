"""
Database engine and session management.
"""

from typing import Iterator, Optional
from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import settings
from .models import Base


_engine: Optional[Engine] = None
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine.

    SQLite connections get foreign key enforcement switched on. In-memory
    SQLite URLs share a single connection so every session sees the same data.

    Args:
        database_url: SQLAlchemy URL (defaults to settings.database_url)
        echo: Echo SQL statements (defaults to settings.database_echo)

    Returns:
        Configured engine
    """
    url = database_url or settings.database_url
    kwargs = {"echo": settings.database_echo if echo is None else echo}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug(f"Created database engine for {engine.url.render_as_string(hide_password=True)}")
    return engine


def init_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create the global engine and bind the session factory to it."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = create_db_engine(database_url, echo)
    SessionLocal.configure(bind=_engine)
    return _engine


def get_engine() -> Engine:
    """Get or create the global engine."""
    if _engine is None:
        return init_engine()
    return _engine


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database schema is up to date")


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency yielding a session per request.

    The session is rolled back on error and always closed.
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

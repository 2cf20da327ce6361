"""
Database session management for TennisMeet.

Provides a lazily created SQLAlchemy engine and session factory driven by
settings.database_url.

Usage:
    from tennismeet.db import get_session

    with get_session() as session:
        session.add(record)
        # Commits automatically on exit, rolls back on exception
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tennismeet.config import settings
from tennismeet.db.models import Base

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """
    Get or create the engine for settings.database_url.

    Pre-ping is enabled so stale pooled connections are replaced.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,
            echo=settings.db_echo,
        )
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory bound to the default engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )
    return _session_factory


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(engine or get_engine())


@contextmanager
def get_session(
    session_factory: Optional[sessionmaker] = None,
) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Automatically commits on successful exit, rolls back on exception.

    Args:
        session_factory: Factory to use instead of the default one

    Raises:
        Any exception from the database operation (after rollback)
    """
    session = (session_factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

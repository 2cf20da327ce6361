"""
Database module for TennisMeet.

Provides the SQLAlchemy models and session management used by the SQL
availability store.

Usage:
    from tennismeet.db import get_session, init_db

    init_db()
    with get_session() as session:
        ...
"""

from tennismeet.db.models import Base, TimeBlockRecord
from tennismeet.db.session import (
    get_engine,
    get_session,
    get_session_factory,
    init_db,
)

__all__ = [
    # Base
    "Base",
    # Models
    "TimeBlockRecord",
    # Session
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
]

"""
SQLAlchemy ORM models for TennisMeet.

Only availability is persisted through the ORM; the other entities are
plain dataclasses that an application stores however it likes.

Tables:
- time_blocks: one row per TimeBlock, recurrence stored as JSON
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TimeBlockRecord(Base):
    """
    Stored availability window.

    seq is a surrogate key that preserves insertion order; block_id is the
    domain identifier exposed on TimeBlock.id.
    """
    __tablename__ = "time_blocks"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    block_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    # "HH:MM"
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # {"frequency": ..., "days_of_week": [...], "end_date": "YYYY-MM-DD" | null}
    recurring_pattern: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_time_blocks_player_date", "player_id", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeBlockRecord(block_id={self.block_id!r}, player_id={self.player_id!r}, "
            f"date={self.date}, {self.start_time}-{self.end_time})>"
        )

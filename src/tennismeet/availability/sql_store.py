"""
SQLAlchemy-backed TimeBlockStore.

Each call runs in its own session via get_session(), so the store can be
shared by an AvailabilityManager without holding a connection open.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from tennismeet.availability.models import (
    DayOfWeek,
    RecurrenceFrequency,
    RecurringPattern,
    TimeBlock,
)
from tennismeet.db.models import TimeBlockRecord
from tennismeet.db.session import get_session

logger = logging.getLogger(__name__)


def pattern_to_dict(pattern: Optional[RecurringPattern]) -> Optional[dict]:
    if pattern is None:
        return None
    return {
        "frequency": pattern.frequency.value,
        "days_of_week": [day.value for day in pattern.days_of_week],
        "end_date": pattern.end_date.isoformat() if pattern.end_date else None,
    }


def pattern_from_dict(data: Optional[dict]) -> Optional[RecurringPattern]:
    if not data:
        return None
    end_date = data.get("end_date")
    return RecurringPattern(
        frequency=RecurrenceFrequency(data["frequency"]),
        days_of_week=tuple(DayOfWeek(day) for day in data.get("days_of_week", [])),
        end_date=date.fromisoformat(end_date) if end_date else None,
    )


def _to_block(record: TimeBlockRecord) -> TimeBlock:
    return TimeBlock(
        id=record.block_id,
        player_id=record.player_id,
        date=record.date,
        start_time=record.start_time,
        end_time=record.end_time,
        is_recurring=record.is_recurring,
        recurring_pattern=pattern_from_dict(record.recurring_pattern),
        notes=record.notes,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _copy_into(record: TimeBlockRecord, block: TimeBlock) -> None:
    record.player_id = block.player_id
    record.date = block.date
    record.start_time = block.start_time
    record.end_time = block.end_time
    record.is_recurring = block.is_recurring
    record.recurring_pattern = pattern_to_dict(block.recurring_pattern)
    record.notes = block.notes
    record.created_at = block.created_at
    record.updated_at = block.updated_at


class SqlTimeBlockStore:
    """
    TimeBlockStore persisted in the time_blocks table.

    Args:
        session_factory: sessionmaker to use; defaults to the one built
            from settings.database_url
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def _session(self):
        return get_session(self._session_factory)

    def get(self, block_id: str) -> Optional[TimeBlock]:
        with self._session() as session:
            record = session.scalar(
                select(TimeBlockRecord).where(TimeBlockRecord.block_id == block_id)
            )
            return _to_block(record) if record else None

    def put(self, block: TimeBlock) -> None:
        if block.id is None:
            raise ValueError("Cannot store a time block without an id")
        with self._session() as session:
            record = session.scalar(
                select(TimeBlockRecord).where(TimeBlockRecord.block_id == block.id)
            )
            if record is None:
                record = TimeBlockRecord(block_id=block.id)
                session.add(record)
            _copy_into(record, block)

    def delete(self, block_id: str) -> bool:
        with self._session() as session:
            result = session.execute(
                delete(TimeBlockRecord).where(TimeBlockRecord.block_id == block_id)
            )
            return result.rowcount > 0

    def query(
        self,
        player_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[TimeBlock]:
        stmt = select(TimeBlockRecord)
        if player_id is not None:
            stmt = stmt.where(TimeBlockRecord.player_id == player_id)
        if date_from is not None:
            stmt = stmt.where(TimeBlockRecord.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(TimeBlockRecord.date <= date_to)

        with self._session() as session:
            records = session.scalars(stmt.order_by(TimeBlockRecord.seq)).all()
            return [_to_block(r) for r in records]

    def all(self) -> list[TimeBlock]:
        return self.query()

    def clear(self) -> None:
        with self._session() as session:
            session.execute(delete(TimeBlockRecord))

    def seed(self, blocks: Iterable[TimeBlock]) -> None:
        """Replace the table contents with ``blocks`` in one transaction."""
        blocks = list(blocks)
        with self._session() as session:
            session.execute(delete(TimeBlockRecord))
            for block in blocks:
                if block.id is None:
                    raise ValueError("Cannot store a time block without an id")
                record = TimeBlockRecord(block_id=block.id)
                _copy_into(record, block)
                session.add(record)
        logger.info("Seeded %d time blocks", len(blocks))

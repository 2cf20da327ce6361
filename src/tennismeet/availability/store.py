"""
Time block storage.

AvailabilityManager talks to storage only through the TimeBlockStore
protocol, so the in-memory store used in tests and the SQL store used by
an application are interchangeable.
"""

import threading
from datetime import date
from typing import Iterable, Optional, Protocol

from tennismeet.availability.models import TimeBlock


class TimeBlockStore(Protocol):
    """Keyed collection of time blocks. Insertion order is preserved."""

    def get(self, block_id: str) -> Optional[TimeBlock]: ...

    def put(self, block: TimeBlock) -> None: ...

    def delete(self, block_id: str) -> bool: ...

    def query(
        self,
        player_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[TimeBlock]: ...

    def all(self) -> list[TimeBlock]: ...

    def clear(self) -> None: ...

    def seed(self, blocks: Iterable[TimeBlock]) -> None: ...


def _in_range(
    block: TimeBlock,
    player_id: Optional[str],
    date_from: Optional[date],
    date_to: Optional[date],
) -> bool:
    if player_id is not None and block.player_id != player_id:
        return False
    if date_from is not None and block.date < date_from:
        return False
    if date_to is not None and block.date > date_to:
        return False
    return True


class InMemoryTimeBlockStore:
    """Dict-backed store guarded by a re-entrant lock."""

    def __init__(self, blocks: Optional[Iterable[TimeBlock]] = None):
        self._lock = threading.RLock()
        self._blocks: dict[str, TimeBlock] = {}
        if blocks:
            self.seed(blocks)

    def get(self, block_id: str) -> Optional[TimeBlock]:
        with self._lock:
            return self._blocks.get(block_id)

    def put(self, block: TimeBlock) -> None:
        if block.id is None:
            raise ValueError("Cannot store a time block without an id")
        with self._lock:
            self._blocks[block.id] = block

    def delete(self, block_id: str) -> bool:
        with self._lock:
            return self._blocks.pop(block_id, None) is not None

    def query(
        self,
        player_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[TimeBlock]:
        with self._lock:
            return [
                b for b in self._blocks.values()
                if _in_range(b, player_id, date_from, date_to)
            ]

    def all(self) -> list[TimeBlock]:
        with self._lock:
            return list(self._blocks.values())

    def clear(self) -> None:
        with self._lock:
            self._blocks.clear()

    def seed(self, blocks: Iterable[TimeBlock]) -> None:
        """Replace the contents with ``blocks``."""
        with self._lock:
            self._blocks = {}
            for block in blocks:
                self.put(block)

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

"""
Availability management.

AvailabilityManager owns the rules for a player's time blocks: blocks
must be well-formed, not in the past, and a player's blocks on the same
date must never overlap. Every conflict check and the write that follows
it run under one lock, so the no-overlap rule holds with concurrent
callers sharing a manager.

Usage:
    manager = AvailabilityManager()
    result = manager.create_time_block(block)
    if not result:
        for conflict in result.errors:
            print(conflict.message)
"""

import logging
import threading
import uuid
from collections import Counter
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from tennismeet.availability import schedule
from tennismeet.availability.models import (
    AvailabilityFilters,
    AvailabilitySlot,
    CommonAvailability,
    ConflictType,
    MonthSchedule,
    TimeBlock,
    TimeBlockConflict,
    TimeBlockPatch,
    WeekSchedule,
    day_of_week,
    minutes_to_time,
    time_to_minutes,
    times_overlap,
)
from tennismeet.availability.store import InMemoryTimeBlockStore, TimeBlockStore
from tennismeet.availability.validation import validate_time_block
from tennismeet.config import settings
from tennismeet.results import OperationResult

logger = logging.getLogger(__name__)

TIME_BLOCK_NOT_FOUND = "Time block not found"


def _generate_block_id() -> str:
    return f"tb_{uuid.uuid4().hex[:12]}"


class AvailabilityManager:
    """
    CRUD, conflict detection and scheduling queries for time blocks.

    Args:
        store: Where blocks live (defaults to a fresh in-memory store)
        today: Callable returning the current date, used for the
            "not in the past" rule and calendar is_today flags
        clock: Callable returning the current datetime for timestamps
    """

    def __init__(
        self,
        store: Optional[TimeBlockStore] = None,
        today: Optional[Callable[[], date]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store if store is not None else InMemoryTimeBlockStore()
        self._today = today or date.today
        self._clock = clock or datetime.now
        self._write_lock = threading.RLock()

    # =========================================================================
    # Conflicts
    # =========================================================================

    def detect_conflicts(self, candidate: TimeBlock, player_id: str) -> list[TimeBlockConflict]:
        """
        Find reasons ``candidate`` cannot be stored for ``player_id``.

        An invalid block yields a single invalid_time conflict. Otherwise
        there is one overlap conflict per existing block of the player on
        the same date whose interval intersects the candidate's. A stored
        block with the candidate's own id is skipped so updates do not
        conflict with themselves.
        """
        validation = validate_time_block(candidate, self._today())
        if not validation.valid:
            return [
                TimeBlockConflict(
                    conflict_type=ConflictType.INVALID_TIME,
                    new_block=candidate,
                    message=validation.error or "Invalid time block",
                )
            ]

        conflicts = []
        for existing in self.store.query(
            player_id=player_id, date_from=candidate.date, date_to=candidate.date
        ):
            if candidate.id is not None and existing.id == candidate.id:
                continue
            if times_overlap(
                existing.start_time, existing.end_time,
                candidate.start_time, candidate.end_time,
            ):
                conflicts.append(
                    TimeBlockConflict(
                        conflict_type=ConflictType.OVERLAP,
                        new_block=candidate,
                        existing_block=existing,
                        message=(
                            f"Overlaps with existing availability from "
                            f"{existing.start_time} to {existing.end_time}"
                        ),
                    )
                )
        return conflicts

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_time_block(self, block: TimeBlock) -> OperationResult[TimeBlock]:
        """
        Validate, conflict-check and store a new block.

        The stored block gets a fresh id (unless it carried one) and
        created_at/updated_at timestamps.
        """
        with self._write_lock:
            if block.id is not None and self.store.get(block.id) is not None:
                logger.info("Rejected time block %s: id already exists", block.id)
                return OperationResult.fail(
                    errors=[
                        TimeBlockConflict(
                            conflict_type=ConflictType.DUPLICATE,
                            new_block=block,
                            existing_block=self.store.get(block.id),
                            message=f"Time block {block.id} already exists",
                        )
                    ]
                )

            conflicts = self.detect_conflicts(block, block.player_id)
            if conflicts:
                logger.info(
                    "Rejected time block for %s on %s: %s",
                    block.player_id, block.date, conflicts[0].message,
                )
                return OperationResult.fail(errors=conflicts)

            now = self._clock()
            stored = replace(
                block,
                id=block.id or _generate_block_id(),
                created_at=now,
                updated_at=now,
            )
            self.store.put(stored)

        logger.info(
            "Created time block %s for %s on %s %s",
            stored.id, stored.player_id, stored.date, stored.time_range,
        )
        return OperationResult.ok(stored)

    def update_time_block(self, block_id: str, patch: TimeBlockPatch) -> OperationResult[TimeBlock]:
        """
        Apply ``patch`` to a stored block.

        The merged block is checked against the owner's other blocks;
        updated_at is refreshed on success.
        """
        with self._write_lock:
            existing = self.store.get(block_id)
            if existing is None:
                return OperationResult.fail(error=TIME_BLOCK_NOT_FOUND)

            format_errors = patch.validate()
            if format_errors:
                return OperationResult.fail(
                    errors=[
                        TimeBlockConflict(
                            conflict_type=ConflictType.INVALID_TIME,
                            new_block=existing,
                            existing_block=existing,
                            message=message,
                        )
                        for message in format_errors
                    ]
                )

            merged = patch.apply_to(existing)
            conflicts = self.detect_conflicts(merged, existing.player_id)
            if conflicts:
                logger.info("Rejected update of time block %s: %s", block_id, conflicts[0].message)
                return OperationResult.fail(errors=conflicts)

            updated = replace(merged, updated_at=self._clock())
            self.store.put(updated)

        logger.info("Updated time block %s", block_id)
        return OperationResult.ok(updated)

    def delete_time_block(self, block_id: str) -> OperationResult[None]:
        with self._write_lock:
            if not self.store.delete(block_id):
                return OperationResult.fail(error=TIME_BLOCK_NOT_FOUND)
        logger.info("Deleted time block %s", block_id)
        return OperationResult.ok()

    def get_time_block(self, block_id: str) -> Optional[TimeBlock]:
        return self.store.get(block_id)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_player_time_blocks(self, player_id: str) -> list[TimeBlock]:
        return self.store.query(player_id=player_id)

    def get_time_blocks_in_range(
        self,
        player_id: str,
        start_date: date,
        end_date: date,
    ) -> list[TimeBlock]:
        """A player's blocks dated within [start_date, end_date]."""
        return self.store.query(player_id=player_id, date_from=start_date, date_to=end_date)

    def filter_time_blocks(self, filters: AvailabilityFilters) -> list[TimeBlock]:
        """Blocks matching every given criterion."""
        blocks = self.store.query(
            player_id=filters.player_id,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )
        if filters.day_of_week is not None:
            blocks = [b for b in blocks if day_of_week(b.date) == filters.day_of_week]
        if filters.min_duration is not None:
            blocks = [b for b in blocks if b.duration_minutes >= filters.min_duration]
        return blocks

    def find_common_availability(
        self,
        player1_id: str,
        player2_id: str,
        start_date: date,
        end_date: date,
        min_duration: Optional[int] = None,
    ) -> CommonAvailability:
        """
        Find windows when both players are available.

        Every same-day pair of blocks is intersected; intersections lasting
        at least ``min_duration`` minutes (default from settings) become
        slots, sorted by date then start time.

        Args:
            player1_id: First player
            player2_id: Second player
            start_date: First date to consider (inclusive)
            end_date: Last date to consider (inclusive)
            min_duration: Minimum slot length in minutes

        Returns:
            CommonAvailability with the matching slots
        """
        if min_duration is None:
            min_duration = settings.common_availability_min_minutes

        blocks1 = self.get_time_blocks_in_range(player1_id, start_date, end_date)
        blocks2 = self.get_time_blocks_in_range(player2_id, start_date, end_date)

        slots = []
        for block1 in blocks1:
            for block2 in blocks2:
                if block1.date != block2.date:
                    continue

                overlap_start = max(time_to_minutes(block1.start_time), time_to_minutes(block2.start_time))
                overlap_end = min(time_to_minutes(block1.end_time), time_to_minutes(block2.end_time))
                duration = overlap_end - overlap_start

                if duration > 0 and duration >= min_duration:
                    slots.append(
                        AvailabilitySlot(
                            date=block1.date,
                            start_time=minutes_to_time(overlap_start),
                            end_time=minutes_to_time(overlap_end),
                            duration=duration,
                        )
                    )

        slots.sort(key=lambda s: (s.date, time_to_minutes(s.start_time)))
        logger.debug(
            "Found %d common slots for %s and %s", len(slots), player1_id, player2_id
        )
        return CommonAvailability(
            player1_id=player1_id,
            player2_id=player2_id,
            matching_slots=slots,
        )

    # =========================================================================
    # Calendar views
    # =========================================================================

    def build_month_schedule(self, player_id: str, year: int, month: int) -> MonthSchedule:
        """
        Month grid for a player, month numbered 1-12.

        Days from the neighbouring months that fill the first and last
        weeks carry their blocks too.
        """
        grid = schedule.month_grid(year, month)
        blocks = self.get_time_blocks_in_range(player_id, grid[0][0], grid[-1][-1])
        return schedule.build_month_schedule(blocks, year, month, self._today())

    def build_week_schedule(self, player_id: str, week_start: date) -> WeekSchedule:
        week_start, week_end = schedule.week_bounds(week_start)
        blocks = self.get_time_blocks_in_range(player_id, week_start, week_end)
        return schedule.build_week_schedule(blocks, week_start, self._today())

    def get_suggested_time_slots(
        self,
        player_id: str,
        target_date: date,
        limit: Optional[int] = None,
    ) -> list[str]:
        """
        Suggest "HH:MM-HH:MM" ranges from the player's blocks on the same weekday.

        Ranges are ordered by how often they occur; ties keep the order in
        which they were first seen.
        """
        limit = settings.suggested_slot_limit if limit is None else limit
        weekday = day_of_week(target_date)

        counts = Counter(
            block.time_range
            for block in self.store.query(player_id=player_id)
            if day_of_week(block.date) == weekday
        )
        # Counter.most_common is stable for equal counts
        return [time_range for time_range, _ in counts.most_common(limit)]

    # =========================================================================
    # Bulk
    # =========================================================================

    def seed_time_blocks(self, blocks: Iterable[TimeBlock]) -> None:
        """Replace all stored blocks without validation."""
        with self._write_lock:
            self.store.seed(blocks)

    def clear_all_time_blocks(self) -> None:
        with self._write_lock:
            self.store.clear()

    def get_all_time_blocks(self) -> list[TimeBlock]:
        return self.store.all()

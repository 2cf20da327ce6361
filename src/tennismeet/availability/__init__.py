"""
Player availability.

Key components:
- TimeBlock: one window of availability on one date
- AvailabilityManager: CRUD with conflict detection, common availability,
  calendar views and slot suggestions
- InMemoryTimeBlockStore / SqlTimeBlockStore: interchangeable storage
- generate_recurring_blocks: preview the dates a recurring block covers
"""

from tennismeet.availability.manager import AvailabilityManager
from tennismeet.availability.models import (
    AvailabilityFilters,
    AvailabilitySlot,
    CalendarDate,
    CommonAvailability,
    ConflictType,
    DayOfWeek,
    MonthSchedule,
    RecurrenceFrequency,
    RecurringPattern,
    TimeBlock,
    TimeBlockConflict,
    TimeBlockPatch,
    WeekSchedule,
    day_of_week,
    is_valid_time_string,
    is_weekend,
    minutes_to_time,
    time_to_minutes,
    times_overlap,
)
from tennismeet.availability.recurrence import add_months, generate_recurring_blocks
from tennismeet.availability.schedule import month_grid
from tennismeet.availability.sql_store import SqlTimeBlockStore
from tennismeet.availability.store import InMemoryTimeBlockStore, TimeBlockStore
from tennismeet.availability.validation import BlockValidation, validate_time_block

__all__ = [
    "AvailabilityManager",
    # Models
    "AvailabilityFilters",
    "AvailabilitySlot",
    "CalendarDate",
    "CommonAvailability",
    "ConflictType",
    "DayOfWeek",
    "MonthSchedule",
    "RecurrenceFrequency",
    "RecurringPattern",
    "TimeBlock",
    "TimeBlockConflict",
    "TimeBlockPatch",
    "WeekSchedule",
    # Helpers
    "day_of_week",
    "is_valid_time_string",
    "is_weekend",
    "minutes_to_time",
    "time_to_minutes",
    "times_overlap",
    "add_months",
    "generate_recurring_blocks",
    "month_grid",
    "BlockValidation",
    "validate_time_block",
    # Stores
    "InMemoryTimeBlockStore",
    "SqlTimeBlockStore",
    "TimeBlockStore",
]

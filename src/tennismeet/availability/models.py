"""
Availability data model and time helpers.

A TimeBlock is a single window of availability for one player on one
calendar date. Times are "HH:MM" strings on a 24-hour clock; "24:00" is
accepted as an end time meaning midnight at the end of the day.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


# =============================================================================
# Enums
# =============================================================================

class DayOfWeek(str, Enum):
    """Day names, Sunday first (the first calendar column)."""
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


class RecurrenceFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class ConflictType(str, Enum):
    INVALID_TIME = "invalid_time"
    OVERLAP = "overlap"
    DUPLICATE = "duplicate"


# =============================================================================
# Time helpers
# =============================================================================

def is_valid_time_string(value: Optional[str], allow_end_of_day: bool = True) -> bool:
    """
    Check for a well-formed "HH:MM" value.

    Hours 00-23 and minutes 00-59 are accepted; "24:00" is accepted only
    when ``allow_end_of_day`` is set.
    """
    if not isinstance(value, str):
        return False
    match = _TIME_PATTERN.match(value)
    if not match:
        return False
    hours, minutes = int(match.group(1)), int(match.group(2))
    if allow_end_of_day and hours == 24 and minutes == 0:
        return True
    return hours < 24 and minutes < 60


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, _, minutes = value.partition(":")
    return int(hours or 0) * 60 + int(minutes or 0)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Strict interval overlap; touching intervals do not overlap."""
    return (
        time_to_minutes(start1) < time_to_minutes(end2)
        and time_to_minutes(end1) > time_to_minutes(start2)
    )


def day_of_week(value: date) -> DayOfWeek:
    # date.weekday() is Monday=0; shift so Sunday is first
    return list(DayOfWeek)[(value.weekday() + 1) % 7]


def is_weekend(value: date) -> bool:
    return value.weekday() >= 5


# =============================================================================
# Entities
# =============================================================================

@dataclass(frozen=True)
class RecurringPattern:
    """
    How a block repeats.

    days_of_week is stored for display; occurrences are generated from the
    block's own date and the frequency.
    """
    frequency: RecurrenceFrequency
    days_of_week: tuple[DayOfWeek, ...] = ()
    end_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "days_of_week", tuple(self.days_of_week))


@dataclass(frozen=True)
class TimeBlock:
    """A window of availability for one player on one date."""
    player_id: str
    date: date
    start_time: str
    end_time: str
    is_recurring: bool = False
    recurring_pattern: Optional[RecurringPattern] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)

    @property
    def time_range(self) -> str:
        return f"{self.start_time}-{self.end_time}"


@dataclass(frozen=True)
class TimeBlockPatch:
    """
    Partial update for a TimeBlock. Fields left as None are unchanged.

    The owner and identity of a block cannot be patched.
    """
    date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurring_pattern: Optional[RecurringPattern] = None
    notes: Optional[str] = None

    def validate(self) -> list[str]:
        """Format errors in the patched fields, empty when well-formed."""
        errors = []
        if self.start_time is not None and not is_valid_time_string(
            self.start_time, allow_end_of_day=False
        ):
            errors.append(f"Invalid start time '{self.start_time}' (expected HH:MM)")
        if self.end_time is not None and not is_valid_time_string(self.end_time):
            errors.append(f"Invalid end time '{self.end_time}' (expected HH:MM)")
        return errors

    def apply_to(self, block: TimeBlock) -> TimeBlock:
        changes = {
            name: value
            for name, value in (
                ("date", self.date),
                ("start_time", self.start_time),
                ("end_time", self.end_time),
                ("is_recurring", self.is_recurring),
                ("recurring_pattern", self.recurring_pattern),
                ("notes", self.notes),
            )
            if value is not None
        }
        return replace(block, **changes)


@dataclass(frozen=True)
class TimeBlockConflict:
    """
    Why a block could not be written.

    existing_block is None for invalid_time conflicts.
    """
    conflict_type: ConflictType
    new_block: TimeBlock
    message: str
    existing_block: Optional[TimeBlock] = None


@dataclass(frozen=True)
class AvailabilitySlot:
    date: date
    start_time: str
    end_time: str
    duration: int
    is_available: bool = True


@dataclass
class CommonAvailability:
    player1_id: str
    player2_id: str
    matching_slots: list[AvailabilitySlot] = field(default_factory=list)


@dataclass
class CalendarDate:
    date: date
    is_current_month: bool
    is_today: bool
    is_weekend: bool
    has_availability: bool
    time_blocks: list[TimeBlock] = field(default_factory=list)


@dataclass
class WeekSchedule:
    week_start: date
    week_end: date
    days: list[CalendarDate]


@dataclass
class MonthSchedule:
    year: int
    month: int
    weeks: list[list[CalendarDate]]


@dataclass
class AvailabilityFilters:
    """
    Criteria for filter_time_blocks. None means "no filter";
    min_duration is in minutes.
    """
    player_id: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    day_of_week: Optional[DayOfWeek] = None
    min_duration: Optional[int] = None

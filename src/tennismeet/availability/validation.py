"""Time block validation."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from tennismeet.availability.models import (
    MINUTES_PER_DAY,
    TimeBlock,
    is_valid_time_string,
    time_to_minutes,
)
from tennismeet.results import ValidationResult


@dataclass(frozen=True)
class BlockValidation(ValidationResult):
    """Outcome of validate_time_block()."""


def validate_time_block(block: TimeBlock, today: Optional[date] = None) -> BlockValidation:
    """
    Check a block for logical consistency.

    Rules, in order:
    1. Start and end times are present
    2. Both are "HH:MM" (end may be "24:00")
    3. Start is before end, inside the day
    4. The date is not before ``today`` (defaults to date.today())
    """
    if not block.start_time or not block.end_time:
        return BlockValidation(False, "Start time and end time are required")

    if not is_valid_time_string(block.start_time, allow_end_of_day=False) or not (
        is_valid_time_string(block.end_time)
    ):
        return BlockValidation(False, "Times must be HH:MM within 00:00 - 24:00")

    start = time_to_minutes(block.start_time)
    end = time_to_minutes(block.end_time)

    if start >= end:
        return BlockValidation(False, "End time must be after start time")

    if start < 0 or end > MINUTES_PER_DAY:
        return BlockValidation(False, "Times must be within 00:00 - 24:00")

    today = today or date.today()
    if block.date < today:
        return BlockValidation(False, "Cannot create availability in the past")

    return BlockValidation(True)

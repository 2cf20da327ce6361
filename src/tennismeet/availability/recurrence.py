"""
Recurring block expansion.

Expansion is a read-only preview: the generated blocks are neither
conflict-checked nor stored.
"""

import calendar
from dataclasses import replace
from datetime import date, timedelta

from tennismeet.availability.models import RecurrenceFrequency, TimeBlock


def add_months(base: date, months: int) -> date:
    """Shift ``base`` by whole months, clamping the day to the month length."""
    month_index = base.month - 1 + months
    year = base.year + month_index // 12
    month = month_index % 12 + 1
    day = min(base.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _occurrence(base: date, frequency: RecurrenceFrequency, n: int) -> date:
    if frequency == RecurrenceFrequency.WEEKLY:
        return base + timedelta(weeks=n)
    if frequency == RecurrenceFrequency.BIWEEKLY:
        return base + timedelta(weeks=2 * n)
    # Always offset from the base date so Jan 31 -> Feb 29 -> Mar 31
    return add_months(base, n)


def generate_recurring_blocks(base_block: TimeBlock, until_date: date) -> list[TimeBlock]:
    """
    Expand a recurring block into dated copies.

    Occurrences run from base_block.date through the earlier of the
    pattern's end_date and ``until_date``, inclusive. Each copy gets the
    id "{base_id}_{YYYY-MM-DD}".

    Returns:
        [base_block] unchanged when the block is not recurring
    """
    pattern = base_block.recurring_pattern
    if not base_block.is_recurring or pattern is None:
        return [base_block]

    last_date = until_date
    if pattern.end_date is not None and pattern.end_date < last_date:
        last_date = pattern.end_date

    frequency = RecurrenceFrequency(pattern.frequency)
    blocks = []
    n = 0
    current = base_block.date
    while current <= last_date:
        blocks.append(
            replace(base_block, id=f"{base_block.id}_{current.isoformat()}", date=current)
        )
        n += 1
        current = _occurrence(base_block.date, frequency, n)

    return blocks

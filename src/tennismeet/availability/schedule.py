"""
Calendar views over a player's time blocks.

Month grids are Sunday-first and always made of whole weeks, so leading
and trailing days from the neighbouring months are included (flagged
with is_current_month=False).
"""

import calendar
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable

from tennismeet.availability.models import (
    CalendarDate,
    MonthSchedule,
    TimeBlock,
    WeekSchedule,
    is_weekend,
)

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


def month_grid(year: int, month: int) -> list[list[date]]:
    """Whole Sunday-first weeks covering ``month`` (1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    return _SUNDAY_FIRST.monthdatescalendar(year, month)


def _blocks_by_date(blocks: Iterable[TimeBlock]) -> dict[date, list[TimeBlock]]:
    by_date = defaultdict(list)
    for block in blocks:
        by_date[block.date].append(block)
    return by_date


def _calendar_date(
    day: date,
    current_month: int,
    today: date,
    by_date: dict[date, list[TimeBlock]],
) -> CalendarDate:
    day_blocks = list(by_date.get(day, []))
    return CalendarDate(
        date=day,
        is_current_month=day.month == current_month,
        is_today=day == today,
        is_weekend=is_weekend(day),
        has_availability=bool(day_blocks),
        time_blocks=day_blocks,
    )


def build_month_schedule(
    blocks: Iterable[TimeBlock],
    year: int,
    month: int,
    today: date,
) -> MonthSchedule:
    """Build a month grid from blocks already narrowed to one player."""
    by_date = _blocks_by_date(blocks)
    weeks = [
        [_calendar_date(day, month, today, by_date) for day in week]
        for week in month_grid(year, month)
    ]
    return MonthSchedule(year=year, month=month, weeks=weeks)


def week_bounds(week_start: date) -> tuple[date, date]:
    return week_start, week_start + timedelta(days=6)


def build_week_schedule(
    blocks: Iterable[TimeBlock],
    week_start: date,
    today: date,
) -> WeekSchedule:
    """Seven consecutive days from ``week_start``."""
    by_date = _blocks_by_date(blocks)
    _, week_end = week_bounds(week_start)
    days = [
        _calendar_date(week_start + timedelta(days=i), week_start.month, today, by_date)
        for i in range(7)
    ]
    return WeekSchedule(week_start=week_start, week_end=week_end, days=days)

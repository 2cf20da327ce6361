"""Shared match and booking status definitions and helpers.

This module is the single source of truth for status groups that are reused
by match filtering and court booking conflict checks.
"""

from __future__ import annotations

from typing import Iterable

# Individual match statuses.
ALL_MATCH_STATUSES: tuple[str, ...] = (
    "scheduled",
    "in_progress",
    "completed",
    "cancelled",
)

MATCH_STATUS_GROUPS: dict[str, tuple[str, ...]] = {
    # Matches that have not finished yet.
    "active": ("scheduled", "in_progress"),
    # Matches that are no longer actionable.
    "terminal": ("completed", "cancelled"),
    "all": ALL_MATCH_STATUSES,
}

# Individual court booking statuses.
ALL_BOOKING_STATUSES: tuple[str, ...] = (
    "pending",
    "confirmed",
    "cancelled",
    "completed",
)

BOOKING_STATUS_GROUPS: dict[str, tuple[str, ...]] = {
    # Bookings that still hold their court slot.
    "blocking": ("pending", "confirmed"),
    # Bookings that no longer hold a slot.
    "closed": ("cancelled", "completed"),
    "all": ALL_BOOKING_STATUSES,
}


def get_status_group(group_name: str, *, kind: str = "match") -> tuple[str, ...]:
    """Return a named status group, raising KeyError for unknown names."""
    groups = MATCH_STATUS_GROUPS if kind == "match" else BOOKING_STATUS_GROUPS
    return groups[group_name]


def normalize_status_filter(
    raw_statuses: Iterable[str] | str | None,
    *,
    kind: str = "match",
    default_group: str = "all",
) -> list[str]:
    """Normalize requested statuses against known values.

    - A single status string is treated as a one-element filter.
    - If no statuses are provided, returns the statuses from ``default_group``.
    - Unknown statuses are ignored.
    - Order is preserved and duplicates are removed.
    """
    if raw_statuses is None:
        return list(get_status_group(default_group, kind=kind))

    if isinstance(raw_statuses, str):
        raw_statuses = [raw_statuses]

    known = ALL_MATCH_STATUSES if kind == "match" else ALL_BOOKING_STATUSES
    seen: set[str] = set()
    normalized: list[str] = []

    for raw in raw_statuses:
        # str-valued enums normalise through their value
        status = str(getattr(raw, "value", raw)).strip().lower()
        if not status or status in seen or status not in known:
            continue
        seen.add(status)
        normalized.append(status)

    if normalized:
        return normalized

    return list(get_status_group(default_group, kind=kind))

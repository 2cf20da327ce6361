"""
Unit tests for shared match and booking status groups.
"""

import pytest

from tennismeet.statuses import (
    ALL_BOOKING_STATUSES,
    ALL_MATCH_STATUSES,
    get_status_group,
    normalize_status_filter,
)
from tennismeet.courts import BookingStatus
from tennismeet.matches import MatchStatus


def test_match_status_values_cover_enum():
    assert set(ALL_MATCH_STATUSES) == {s.value for s in MatchStatus}


def test_booking_status_values_cover_enum():
    assert set(ALL_BOOKING_STATUSES) == {s.value for s in BookingStatus}


def test_get_status_group():
    assert get_status_group("active") == ("scheduled", "in_progress")
    assert get_status_group("blocking", kind="booking") == ("pending", "confirmed")


def test_unknown_group_raises():
    with pytest.raises(KeyError):
        get_status_group("upcoming")


def test_normalize_none_uses_default_group():
    assert normalize_status_filter(None) == list(ALL_MATCH_STATUSES)
    assert normalize_status_filter(None, default_group="terminal") == ["completed", "cancelled"]


def test_normalize_single_string():
    assert normalize_status_filter(" Completed ") == ["completed"]


def test_normalize_enums_dedupes_and_drops_unknown():
    raw = [MatchStatus.CANCELLED, "cancelled", "postponed", MatchStatus.SCHEDULED]
    assert normalize_status_filter(raw) == ["cancelled", "scheduled"]


def test_normalize_only_unknown_falls_back():
    assert normalize_status_filter(["walkover"], default_group="active") == [
        "scheduled",
        "in_progress",
    ]


def test_normalize_booking_kind():
    assert normalize_status_filter(["confirmed", "scheduled"], kind="booking") == ["confirmed"]

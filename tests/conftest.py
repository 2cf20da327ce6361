"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tennismeet.availability import AvailabilityManager, TimeBlock
from tennismeet.courts import (
    Court,
    CourtAmenity,
    CourtAvailability,
    CourtLocation,
    CourtManager,
    CourtPricing,
    CourtRating,
    CourtSurface,
    OperatingHours,
)
from tennismeet.availability.models import DayOfWeek
from tennismeet.db.models import Base
from tennismeet.players import (
    GeoLocation,
    Player,
    PlayerStats,
    PlayStyle,
    PreferredSurface,
    SkillLevel,
)

# A Monday
TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 9, 30)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def test_engine():
    """
    Create a test database engine.

    Uses SQLite in-memory with a single shared connection so every
    session sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


# =============================================================================
# Players (San Francisco Bay Area)
# =============================================================================

@pytest.fixture
def alice():
    """The searching player: intermediate baseliner in San Francisco."""
    return Player(
        id="alice",
        name="Alice Chen",
        email="alice@example.com",
        skill_level=SkillLevel.INTERMEDIATE,
        location=GeoLocation(37.7749, -122.4194, "San Francisco", "CA"),
        play_style=PlayStyle.BASELINE,
        preferred_surface=PreferredSurface.HARD,
        availability=["weekday-evenings", "weekend-mornings"],
        stats=PlayerStats(elo=1500, matches_played=40, matches_won=22, matches_lost=18),
    )


@pytest.fixture
def bob():
    """Near-identical profile, under a mile from Alice."""
    return Player(
        id="bob",
        name="Bob Smith",
        email="bob@example.com",
        skill_level=SkillLevel.INTERMEDIATE,
        location=GeoLocation(37.7849, -122.4094, "San Francisco", "CA"),
        play_style=PlayStyle.BASELINE,
        preferred_surface=PreferredSurface.HARD,
        availability=["weekday-evenings", "weekend-mornings"],
        stats=PlayerStats(elo=1520, matches_played=35),
    )


@pytest.fixture
def carol():
    """Stronger serve-and-volleyer in Oakland (about 8 miles away)."""
    return Player(
        id="carol",
        name="Carol Diaz",
        email="carol@example.com",
        skill_level=SkillLevel.ADVANCED,
        location=GeoLocation(37.8044, -122.2712, "Oakland", "CA"),
        play_style=PlayStyle.SERVE_AND_VOLLEY,
        preferred_surface=PreferredSurface.CLAY,
        availability=["weekend-mornings"],
        bio="Loves to serve and volley on slow courts",
        stats=PlayerStats(elo=1750, matches_played=80),
    )


@pytest.fixture
def dave():
    """New beginner in San Jose (about 42 miles away), no stats yet."""
    return Player(
        id="dave",
        name="Dave Okafor",
        email="dave@example.com",
        skill_level=SkillLevel.BEGINNER,
        location=GeoLocation(37.3382, -121.8863, "San Jose", "CA"),
        play_style=PlayStyle.DEFENSIVE,
        preferred_surface=PreferredSurface.ANY,
    )


@pytest.fixture
def players(alice, bob, carol, dave):
    return [alice, bob, carol, dave]


# =============================================================================
# Courts
# =============================================================================

def _daily_hours(open_time="07:00", close_time="21:00", closed_on=()):
    return tuple(
        OperatingHours(day, open_time, close_time, is_closed=day in closed_on)
        for day in DayOfWeek
    )


@pytest.fixture
def golden_gate_court():
    return Court(
        id="court-ggp",
        name="Golden Gate Park Tennis Center",
        location=CourtLocation(
            address="50 John F Kennedy Dr",
            city="San Francisco",
            state="CA",
            latitude=37.7694,
            longitude=-122.4862,
        ),
        surface=CourtSurface.HARD,
        number_of_courts=17,
        amenities=(CourtAmenity.LIGHTING, CourtAmenity.PARKING, CourtAmenity.RESTROOMS),
        availability=CourtAvailability.PUBLIC,
        operating_hours=_daily_hours(closed_on=(DayOfWeek.SUNDAY,)),
        pricing=CourtPricing(hourly_rate=10.0),
        rating=CourtRating(average_rating=4.5, total_reviews=212),
        description="Renovated public courts in the park",
    )


@pytest.fixture
def mission_court():
    return Court(
        id="court-mission",
        name="Mission Dolores Courts",
        location=CourtLocation(
            address="Dolores St & 19th St",
            city="San Francisco",
            state="CA",
            latitude=37.7596,
            longitude=-122.4269,
        ),
        surface=CourtSurface.HARD,
        number_of_courts=6,
        amenities=(CourtAmenity.LIGHTING,),
        availability=CourtAvailability.PUBLIC,
        operating_hours=_daily_hours(),
    )


@pytest.fixture
def bay_club_court():
    return Court(
        id="court-bayclub",
        name="Bay Club Indoor",
        location=CourtLocation(
            address="150 Greenwich St",
            city="San Francisco",
            state="CA",
            latitude=37.7880,
            longitude=-122.3990,
        ),
        surface=CourtSurface.INDOOR_HARD,
        number_of_courts=4,
        is_indoor=True,
        amenities=(CourtAmenity.LIGHTING, CourtAmenity.LOCKER_ROOMS),
        availability=CourtAvailability.RESERVATION_REQUIRED,
        operating_hours=_daily_hours("06:00", "22:00"),
        pricing=CourtPricing(hourly_rate=60.0),
        rating=CourtRating(average_rating=4.2, total_reviews=48),
        description="Indoor tennis downtown",
    )


@pytest.fixture
def berkeley_court():
    return Court(
        id="court-berkeley",
        name="Berkeley Tennis Club",
        location=CourtLocation(
            address="1 Tunnel Rd",
            city="Berkeley",
            state="CA",
            latitude=37.8557,
            longitude=-122.2450,
        ),
        surface=CourtSurface.CLAY,
        number_of_courts=11,
        amenities=(CourtAmenity.PARKING, CourtAmenity.PRO_SHOP, CourtAmenity.LOCKER_ROOMS),
        availability=CourtAvailability.MEMBERS_ONLY,
        operating_hours=_daily_hours(),
        pricing=CourtPricing(hourly_rate=40.0),
        rating=CourtRating(average_rating=4.8, total_reviews=95),
    )


@pytest.fixture
def courts(golden_gate_court, mission_court, bay_club_court, berkeley_court):
    return [golden_gate_court, mission_court, bay_club_court, berkeley_court]


@pytest.fixture
def court_manager(courts):
    return CourtManager(initial_courts=courts, clock=lambda: NOW)


# =============================================================================
# Availability
# =============================================================================

@pytest.fixture
def availability_manager():
    """Manager over an empty in-memory store with a fixed clock."""
    return AvailabilityManager(today=lambda: TODAY, clock=lambda: NOW)


@pytest.fixture
def make_block():
    """Factory for unsaved time blocks."""
    def _make(player_id="alice", on=date(2026, 10, 21), start="18:00", end="20:00", **kwargs):
        return TimeBlock(player_id=player_id, date=on, start_time=start, end_time=end, **kwargs)
    return _make

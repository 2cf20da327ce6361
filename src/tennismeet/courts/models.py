"""
Court domain model.

Courts are facilities managed independently of players. Bookings and
favorites refer to a court by id only.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional

from tennismeet.availability.models import DayOfWeek, time_to_minutes


class CourtSurface(str, Enum):
    HARD = "hard"
    CLAY = "clay"
    GRASS = "grass"
    CARPET = "carpet"
    INDOOR_HARD = "indoor-hard"
    INDOOR_CARPET = "indoor-carpet"


class CourtAmenity(str, Enum):
    LIGHTING = "lighting"
    PARKING = "parking"
    RESTROOMS = "restrooms"
    WATER_FOUNTAIN = "water-fountain"
    PRO_SHOP = "pro-shop"
    LOCKER_ROOMS = "locker-rooms"
    SEATING = "seating"
    BALL_MACHINE = "ball-machine"
    WHEELCHAIR_ACCESSIBLE = "wheelchair-accessible"
    LESSONS_AVAILABLE = "lessons-available"


class CourtAvailability(str, Enum):
    """Who may play at a court."""
    PUBLIC = "public"
    PRIVATE = "private"
    MEMBERS_ONLY = "members-only"
    RESERVATION_REQUIRED = "reservation-required"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# =============================================================================
# Court
# =============================================================================

@dataclass(frozen=True)
class CourtLocation:
    address: str
    city: str
    latitude: float
    longitude: float
    state: Optional[str] = None
    zip_code: Optional[str] = None


@dataclass(frozen=True)
class OperatingHours:
    """Opening hours for one weekday ("HH:MM", close inclusive)."""
    day_of_week: DayOfWeek
    open_time: str
    close_time: str
    is_closed: bool = False

    def is_open_at(self, time: str) -> bool:
        if self.is_closed:
            return False
        minutes = time_to_minutes(time)
        return time_to_minutes(self.open_time) <= minutes <= time_to_minutes(self.close_time)


@dataclass(frozen=True)
class CourtPricing:
    hourly_rate: Optional[float] = None
    currency: str = "USD"
    notes: Optional[str] = None


@dataclass(frozen=True)
class CourtRating:
    average_rating: float
    total_reviews: int = 0


@dataclass(frozen=True)
class CourtContact:
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class Court:
    """
    A tennis facility.

    id, created_at and updated_at are assigned by CourtManager.create_court.
    """
    name: str
    location: CourtLocation
    surface: CourtSurface
    number_of_courts: int = 1
    is_indoor: bool = False
    amenities: tuple[CourtAmenity, ...] = ()
    availability: CourtAvailability = CourtAvailability.PUBLIC
    operating_hours: tuple[OperatingHours, ...] = ()
    pricing: Optional[CourtPricing] = None
    rating: Optional[CourtRating] = None
    contact: Optional[CourtContact] = None
    description: Optional[str] = None
    images: tuple[str, ...] = ()
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "amenities", tuple(self.amenities))
        object.__setattr__(self, "operating_hours", tuple(self.operating_hours))
        object.__setattr__(self, "images", tuple(self.images))

    def hours_for(self, day: DayOfWeek) -> Optional[OperatingHours]:
        for hours in self.operating_hours:
            if hours.day_of_week == day:
                return hours
        return None

    @property
    def hourly_rate(self) -> Optional[float]:
        return self.pricing.hourly_rate if self.pricing else None


@dataclass(frozen=True)
class CourtPatch:
    """Partial update for a Court. Fields left as None are unchanged."""
    name: Optional[str] = None
    location: Optional[CourtLocation] = None
    surface: Optional[CourtSurface] = None
    number_of_courts: Optional[int] = None
    is_indoor: Optional[bool] = None
    amenities: Optional[tuple[CourtAmenity, ...]] = None
    availability: Optional[CourtAvailability] = None
    operating_hours: Optional[tuple[OperatingHours, ...]] = None
    pricing: Optional[CourtPricing] = None
    rating: Optional[CourtRating] = None
    contact: Optional[CourtContact] = None
    description: Optional[str] = None
    images: Optional[tuple[str, ...]] = None

    def apply_to(self, court: Court, now: datetime) -> Court:
        changes = {
            name: value
            for name, value in vars(self).items()
            if value is not None
        }
        return replace(court, **changes, updated_at=now)


# =============================================================================
# Favorites and bookings
# =============================================================================

@dataclass(frozen=True)
class UserCourtFavorite:
    id: str
    user_id: str
    court_id: str
    added_at: datetime
    notes: Optional[str] = None


@dataclass(frozen=True)
class CourtBooking:
    """
    A reservation of a court for a time range on one date.

    id, created_at and updated_at are assigned by CourtManager.create_booking.
    """
    court_id: str
    user_id: str
    date: date
    start_time: str
    end_time: str
    status: BookingStatus = BookingStatus.PENDING
    match_id: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)


# =============================================================================
# Search and statistics
# =============================================================================

@dataclass(frozen=True)
class PriceRange:
    """Hourly rate bounds, both inclusive. None means unbounded."""
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass
class CourtFilters:
    """
    Court search criteria. Empty collections and None mean "no filter".

    user_location is (latitude, longitude); max_distance is in kilometres
    and only applies when user_location is given. A max_distance of 0
    means "no filter".
    """
    surfaces: list[CourtSurface] = field(default_factory=list)
    amenities: list[CourtAmenity] = field(default_factory=list)
    availability: list[CourtAvailability] = field(default_factory=list)
    is_indoor: Optional[bool] = None
    min_rating: Optional[float] = None
    price_range: Optional[PriceRange] = None
    user_location: Optional[tuple[float, float]] = None
    max_distance: Optional[float] = None
    search_term: Optional[str] = None


@dataclass(frozen=True)
class CourtSearchResult:
    court: Court
    distance: Optional[float] = None
    match_score: int = 0


@dataclass(frozen=True)
class PopularTimeSlot:
    day_of_week: DayOfWeek
    time_range: str
    booking_count: int


@dataclass(frozen=True)
class PeakMonth:
    year: int
    month: int
    booking_count: int


@dataclass
class CourtStatistics:
    court_id: str
    total_bookings: int = 0
    total_matches: int = 0
    average_booking_duration: float = 0.0
    popular_time_slots: list[PopularTimeSlot] = field(default_factory=list)
    peak_months: list[PeakMonth] = field(default_factory=list)


@dataclass
class CourtManagerData:
    """Snapshot of everything a CourtManager holds."""
    courts: list[Court] = field(default_factory=list)
    favorites: list[UserCourtFavorite] = field(default_factory=list)
    bookings: list[CourtBooking] = field(default_factory=list)

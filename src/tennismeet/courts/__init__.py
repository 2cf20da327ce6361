"""
Courts, favorites and bookings.

Key components:
- Court: facility with location, surface, amenities, hours and pricing
- CourtManager: CRUD, filtered/ranked search, favorites, conflict-free
  bookings and usage statistics
- CourtRepository: lock-guarded in-memory storage behind CourtManager
"""

from tennismeet.courts.manager import CourtManager
from tennismeet.courts.models import (
    BookingStatus,
    Court,
    CourtAmenity,
    CourtAvailability,
    CourtBooking,
    CourtContact,
    CourtFilters,
    CourtLocation,
    CourtManagerData,
    CourtPatch,
    CourtPricing,
    CourtRating,
    CourtSearchResult,
    CourtStatistics,
    CourtSurface,
    OperatingHours,
    PeakMonth,
    PopularTimeSlot,
    PriceRange,
    UserCourtFavorite,
)
from tennismeet.courts.repository import CourtRepository

__all__ = [
    "CourtManager",
    "CourtRepository",
    # Models
    "BookingStatus",
    "Court",
    "CourtAmenity",
    "CourtAvailability",
    "CourtBooking",
    "CourtContact",
    "CourtFilters",
    "CourtLocation",
    "CourtManagerData",
    "CourtPatch",
    "CourtPricing",
    "CourtRating",
    "CourtSearchResult",
    "CourtStatistics",
    "CourtSurface",
    "OperatingHours",
    "PeakMonth",
    "PopularTimeSlot",
    "PriceRange",
    "UserCourtFavorite",
]

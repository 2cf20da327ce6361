"""
Court management: CRUD, search, favorites, bookings and statistics.

Booking rule: two bookings that still hold a slot (pending or confirmed)
must never overlap on the same court and date. The conflict check and
the write run under the repository lock.

Search:
    Filters are conjunctive. With a user location, results carry the
    distance in kilometres and are sorted closest first. With a search
    term, each result gets an additive relevance score:

        name contains term      +10
        city contains term       +5
        address contains term    +3
        description contains     +2
        name equals term        +20

    Relevance ordering applies only when no location was given.
"""

import logging
import uuid
from collections import Counter
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from tennismeet.availability.models import (
    day_of_week,
    is_valid_time_string,
    time_to_minutes,
    times_overlap,
)
from tennismeet.config import settings
from tennismeet.courts.models import (
    BookingStatus,
    Court,
    CourtBooking,
    CourtFilters,
    CourtManagerData,
    CourtPatch,
    CourtSearchResult,
    CourtStatistics,
    PeakMonth,
    PopularTimeSlot,
    UserCourtFavorite,
)
from tennismeet.courts.repository import CourtRepository
from tennismeet.geo import distance_km
from tennismeet.results import OperationResult
from tennismeet.statuses import BOOKING_STATUS_GROUPS

logger = logging.getLogger(__name__)

POPULAR_SLOT_LIMIT = 5
PEAK_MONTH_LIMIT = 6

COURT_NOT_FOUND = "Court not found"
BOOKING_NOT_FOUND = "Booking not found"


def _generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _relevance(court: Court, term: str) -> int:
    name = court.name.lower()
    score = 0
    if term in name:
        score += 10
    if term in court.location.city.lower():
        score += 5
    if term in court.location.address.lower():
        score += 3
    if court.description and term in court.description.lower():
        score += 2
    if name == term:
        score += 20
    return score


class CourtManager:
    """
    Owns courts and the favorites and bookings that reference them.

    Args:
        initial_courts: Courts to load (they must already have ids)
        repository: Storage to use instead of a fresh CourtRepository
        clock: Callable returning the current datetime for timestamps
    """

    def __init__(
        self,
        initial_courts: Optional[Iterable[Court]] = None,
        repository: Optional[CourtRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repository = repository if repository is not None else CourtRepository()
        self._clock = clock or datetime.now
        for court in initial_courts or ():
            self.repository.put_court(court)

    # =========================================================================
    # Court CRUD
    # =========================================================================

    def create_court(self, court: Court) -> Court:
        """
        Store a new court, assigning an id (unless given) and timestamps.

        Raises:
            ValueError: If a court with the given id already exists
        """
        now = self._clock()
        with self.repository.lock:
            if court.id is not None and self.repository.get_court(court.id) is not None:
                raise ValueError(f"Court {court.id} already exists")
            created = replace(
                court,
                id=court.id or _generate_id("court"),
                created_at=now,
                updated_at=now,
            )
            self.repository.put_court(created)

        logger.info("Created court %s (%s)", created.id, created.name)
        return created

    def get_court_by_id(self, court_id: str) -> Optional[Court]:
        return self.repository.get_court(court_id)

    def get_all_courts(self) -> list[Court]:
        return self.repository.courts()

    def update_court(self, court_id: str, patch: CourtPatch) -> Optional[Court]:
        """Apply ``patch`` to a court. Returns None when the court is unknown."""
        with self.repository.lock:
            court = self.repository.get_court(court_id)
            if court is None:
                return None
            updated = patch.apply_to(court, self._clock())
            self.repository.put_court(updated)

        logger.info("Updated court %s", court_id)
        return updated

    def delete_court(self, court_id: str) -> bool:
        """Delete a court together with its favorites and bookings."""
        removed = self.repository.remove_court(court_id)
        if removed:
            logger.info("Deleted court %s", court_id)
        return removed

    # =========================================================================
    # Search
    # =========================================================================

    def _passes_filters(self, court: Court, filters: CourtFilters) -> bool:
        if filters.surfaces and court.surface not in filters.surfaces:
            return False

        if filters.amenities and not all(a in court.amenities for a in filters.amenities):
            return False

        if filters.availability and court.availability not in filters.availability:
            return False

        if filters.is_indoor is not None and court.is_indoor != filters.is_indoor:
            return False

        if filters.min_rating is not None:
            if court.rating is None or court.rating.average_rating < filters.min_rating:
                return False

        if filters.price_range is not None:
            rate = court.hourly_rate
            low, high = filters.price_range.min, filters.price_range.max
            if not rate:
                # Free or unpriced courts pass unless a minimum is set
                return not low
            if low is not None and rate < low:
                return False
            if high is not None and rate > high:
                return False

        return True

    def search_courts(self, filters: Optional[CourtFilters] = None) -> list[CourtSearchResult]:
        """
        Filter courts and rank them by distance or relevance.

        Args:
            filters: Search criteria (None returns every court)

        Returns:
            Matching courts with distance (km, when a location was given)
            and relevance score (when a search term was given)
        """
        filters = filters or CourtFilters()

        results = [
            CourtSearchResult(court=court)
            for court in self.repository.courts()
            if self._passes_filters(court, filters)
        ]

        if filters.user_location is not None:
            latitude, longitude = filters.user_location
            results = [
                CourtSearchResult(
                    court=r.court,
                    distance=distance_km(
                        latitude,
                        longitude,
                        r.court.location.latitude,
                        r.court.location.longitude,
                    ),
                )
                for r in results
            ]
            if filters.max_distance:
                results = [r for r in results if r.distance <= filters.max_distance]
            results.sort(key=lambda r: r.distance)

        if filters.search_term:
            term = filters.search_term.lower()
            scored = []
            for r in results:
                score = _relevance(r.court, term)
                if score > 0:
                    scored.append(
                        CourtSearchResult(court=r.court, distance=r.distance, match_score=score)
                    )
            results = scored
            if filters.user_location is None:
                results.sort(key=lambda r: r.match_score, reverse=True)

        logger.debug("Court search returned %d results", len(results))
        return results

    def get_courts_near_location(
        self,
        latitude: float,
        longitude: float,
        max_distance_km: Optional[float] = None,
    ) -> list[CourtSearchResult]:
        """Courts within ``max_distance_km`` (default from settings), closest first."""
        if max_distance_km is None:
            max_distance_km = settings.nearby_court_km
        return self.search_courts(
            CourtFilters(user_location=(latitude, longitude), max_distance=max_distance_km)
        )

    # =========================================================================
    # Favorites
    # =========================================================================

    def add_favorite(
        self,
        user_id: str,
        court_id: str,
        notes: Optional[str] = None,
    ) -> Optional[UserCourtFavorite]:
        """
        Mark a court as a user's favorite.

        Returns the existing favorite if there is one, None for an unknown court.
        """
        with self.repository.lock:
            if self.repository.get_court(court_id) is None:
                return None

            for favorite in self.repository.favorites():
                if favorite.user_id == user_id and favorite.court_id == court_id:
                    return favorite

            favorite = UserCourtFavorite(
                id=_generate_id("fav"),
                user_id=user_id,
                court_id=court_id,
                notes=notes,
                added_at=self._clock(),
            )
            self.repository.add_favorite(favorite)
        return favorite

    def remove_favorite(self, user_id: str, court_id: str) -> bool:
        return self.repository.remove_favorite(user_id, court_id)

    def get_user_favorites(self, user_id: str) -> list[Court]:
        """A user's favorite courts, in court order."""
        favorite_ids = {f.court_id for f in self.repository.favorites() if f.user_id == user_id}
        return [c for c in self.repository.courts() if c.id in favorite_ids]

    def is_favorite(self, user_id: str, court_id: str) -> bool:
        return any(
            f.user_id == user_id and f.court_id == court_id
            for f in self.repository.favorites()
        )

    # =========================================================================
    # Bookings
    # =========================================================================

    def check_booking_conflict(
        self,
        court_id: str,
        booking_date: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """
        True if a slot-holding booking on the same court and date overlaps.

        Touching ranges (one ends when the other starts) do not conflict.
        """
        blocking = BOOKING_STATUS_GROUPS["blocking"]
        for booking in self.repository.bookings():
            if booking.court_id != court_id or booking.date != booking_date:
                continue
            if BookingStatus(booking.status).value not in blocking:
                continue
            if exclude_booking_id is not None and booking.id == exclude_booking_id:
                continue
            if times_overlap(start_time, end_time, booking.start_time, booking.end_time):
                return True
        return False

    def create_booking(self, booking: CourtBooking) -> OperationResult[CourtBooking]:
        """
        Book a court.

        Fails when the court is unknown, the booking id is already taken,
        the time range is malformed or empty, or the slot overlaps a pending
        or confirmed booking.
        """
        valid_range = (
            is_valid_time_string(booking.start_time, allow_end_of_day=False)
            and is_valid_time_string(booking.end_time)
            and time_to_minutes(booking.start_time) < time_to_minutes(booking.end_time)
        )

        with self.repository.lock:
            if self.repository.get_court(booking.court_id) is None:
                return OperationResult.fail(error=COURT_NOT_FOUND)

            if booking.id and self.repository.get_booking(booking.id) is not None:
                return OperationResult.fail(error=f"Booking {booking.id} already exists")

            if not valid_range:
                return OperationResult.fail(error="End time must be after start time")

            if self.check_booking_conflict(
                booking.court_id, booking.date, booking.start_time, booking.end_time
            ):
                logger.info(
                    "Rejected booking on court %s %s %s-%s: slot taken",
                    booking.court_id, booking.date, booking.start_time, booking.end_time,
                )
                return OperationResult.fail(
                    error="Court is already booked for part of that time"
                )

            now = self._clock()
            created = replace(
                booking,
                id=booking.id or _generate_id("booking"),
                created_at=now,
                updated_at=now,
            )
            self.repository.put_booking(created)

        logger.info(
            "Created booking %s on court %s for %s", created.id, created.court_id, created.user_id
        )
        return OperationResult.ok(created)

    def get_court_bookings(
        self,
        court_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[CourtBooking]:
        """A court's bookings in an inclusive date range, earliest first."""
        bookings = [
            b for b in self.repository.bookings()
            if b.court_id == court_id
            and (date_from is None or b.date >= date_from)
            and (date_to is None or b.date <= date_to)
        ]
        return sorted(bookings, key=lambda b: (b.date, time_to_minutes(b.start_time)))

    def get_user_bookings(self, user_id: str) -> list[CourtBooking]:
        bookings = [b for b in self.repository.bookings() if b.user_id == user_id]
        return sorted(bookings, key=lambda b: (b.date, time_to_minutes(b.start_time)))

    def cancel_booking(self, booking_id: str) -> OperationResult[CourtBooking]:
        with self.repository.lock:
            booking = self.repository.get_booking(booking_id)
            if booking is None:
                return OperationResult.fail(error=BOOKING_NOT_FOUND)
            cancelled = replace(
                booking,
                status=BookingStatus.CANCELLED,
                updated_at=self._clock(),
            )
            self.repository.put_booking(cancelled)

        logger.info("Cancelled booking %s", booking_id)
        return OperationResult.ok(cancelled)

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_court_statistics(self, court_id: str) -> Optional[CourtStatistics]:
        """
        Usage summary for a court, or None when the court is unknown.

        Counts every booking regardless of status. Popular slots are keyed
        by weekday and starting hour; ties keep first-seen order.
        """
        if self.repository.get_court(court_id) is None:
            return None

        bookings = [b for b in self.repository.bookings() if b.court_id == court_id]
        if not bookings:
            return CourtStatistics(court_id=court_id)

        slot_counts = Counter()
        month_counts = Counter()
        for booking in bookings:
            hour = time_to_minutes(booking.start_time) // 60
            slot_counts[(day_of_week(booking.date), f"{hour:02d}:00-{hour + 1:02d}:00")] += 1
            month_counts[(booking.date.year, booking.date.month)] += 1

        total_duration = sum(b.duration_minutes for b in bookings)

        return CourtStatistics(
            court_id=court_id,
            total_bookings=len(bookings),
            total_matches=sum(1 for b in bookings if b.match_id),
            average_booking_duration=total_duration / len(bookings),
            popular_time_slots=[
                PopularTimeSlot(day_of_week=day, time_range=time_range, booking_count=count)
                for (day, time_range), count in slot_counts.most_common(POPULAR_SLOT_LIMIT)
            ],
            peak_months=[
                PeakMonth(year=year, month=month, booking_count=count)
                for (year, month), count in month_counts.most_common(PEAK_MONTH_LIMIT)
            ],
        )

    def is_court_open(self, court_id: str, on_date: date, time: str) -> bool:
        """True if the court's hours for that weekday include ``time``."""
        court = self.repository.get_court(court_id)
        if court is None:
            return False
        hours = court.hours_for(day_of_week(on_date))
        return hours is not None and hours.is_open_at(time)

    # =========================================================================
    # Export / import
    # =========================================================================

    def export_data(self) -> CourtManagerData:
        return self.repository.snapshot()

    def import_data(self, data: CourtManagerData) -> None:
        """Replace everything held by this manager."""
        self.repository.replace_all(data)
        logger.info(
            "Imported %d courts, %d favorites, %d bookings",
            len(data.courts), len(data.favorites), len(data.bookings),
        )

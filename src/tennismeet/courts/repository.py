"""
In-memory court storage.

CourtManager reads and writes through a CourtRepository. The repository's
lock is re-entrant and exposed so the manager can hold it across a
check-then-write sequence.
"""

import threading
from typing import Iterable, Optional

from tennismeet.courts.models import (
    Court,
    CourtBooking,
    CourtManagerData,
    UserCourtFavorite,
)


class CourtRepository:
    """Courts, favorites and bookings kept in insertion order."""

    def __init__(self, courts: Optional[Iterable[Court]] = None):
        self.lock = threading.RLock()
        self._courts: dict[str, Court] = {}
        self._favorites: list[UserCourtFavorite] = []
        self._bookings: dict[str, CourtBooking] = {}
        for court in courts or ():
            self.put_court(court)

    # Courts

    def get_court(self, court_id: str) -> Optional[Court]:
        with self.lock:
            return self._courts.get(court_id)

    def put_court(self, court: Court) -> None:
        if court.id is None:
            raise ValueError("Cannot store a court without an id")
        with self.lock:
            self._courts[court.id] = court

    def remove_court(self, court_id: str) -> bool:
        """Remove a court with its favorites and bookings."""
        with self.lock:
            if self._courts.pop(court_id, None) is None:
                return False
            self._favorites = [f for f in self._favorites if f.court_id != court_id]
            self._bookings = {
                booking_id: b
                for booking_id, b in self._bookings.items()
                if b.court_id != court_id
            }
            return True

    def courts(self) -> list[Court]:
        with self.lock:
            return list(self._courts.values())

    # Favorites

    def favorites(self) -> list[UserCourtFavorite]:
        with self.lock:
            return list(self._favorites)

    def add_favorite(self, favorite: UserCourtFavorite) -> None:
        with self.lock:
            self._favorites.append(favorite)

    def remove_favorite(self, user_id: str, court_id: str) -> bool:
        with self.lock:
            before = len(self._favorites)
            self._favorites = [
                f for f in self._favorites
                if not (f.user_id == user_id and f.court_id == court_id)
            ]
            return len(self._favorites) < before

    # Bookings

    def get_booking(self, booking_id: str) -> Optional[CourtBooking]:
        with self.lock:
            return self._bookings.get(booking_id)

    def put_booking(self, booking: CourtBooking) -> None:
        if booking.id is None:
            raise ValueError("Cannot store a booking without an id")
        with self.lock:
            self._bookings[booking.id] = booking

    def bookings(self) -> list[CourtBooking]:
        with self.lock:
            return list(self._bookings.values())

    # Bulk

    def snapshot(self) -> CourtManagerData:
        with self.lock:
            return CourtManagerData(
                courts=self.courts(),
                favorites=self.favorites(),
                bookings=self.bookings(),
            )

    def replace_all(self, data: CourtManagerData) -> None:
        with self.lock:
            self._courts = {}
            self._bookings = {}
            for court in data.courts:
                self.put_court(court)
            for booking in data.bookings:
                self.put_booking(booking)
            self._favorites = list(data.favorites)

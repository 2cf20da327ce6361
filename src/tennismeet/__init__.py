"""
TennisMeet core - tennis partner matching library

The deterministic computation core behind the TennisMeet app. Any UI or
service layer can call it directly; it has no server or network surface.

Main components:
- elo: Elo rating updates, win probabilities, rating labels
- matches: Score validation and parsing, match creation, statistics
- availability: Player time blocks, conflict detection, common availability,
  calendar views
- players: Player model and ranked partner search
- courts: Court catalogue, ranked court search, favorites, bookings
- export: JSON / CSV export and import
- db: SQLAlchemy models backing the persistent time-block store
"""

__version__ = "1.0.0"

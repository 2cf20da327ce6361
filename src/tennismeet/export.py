"""
Data export and import.

Backups are JSON documents with a fixed envelope:

    {
        "version": "1.0.0",
        "exportDate": "2026-01-31T12:00:00",
        "players": [...],
        "matches": [...],
        "courts": [...],
        "availability": [...]      # optional
    }

Entity payloads are produced and validated with pydantic TypeAdapters over
the domain dataclasses, so an import yields the same typed objects an
export started from. CSV exports are flat, one row per entity, with a
fixed column mapping per entity type.
"""

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from pydantic import TypeAdapter

from tennismeet import __version__
from tennismeet.availability.models import TimeBlock
from tennismeet.courts.models import Court
from tennismeet.matches.models import Match
from tennismeet.matches.score import format_match_score
from tennismeet.players.models import Player

logger = logging.getLogger(__name__)

MERGE_STRATEGIES = ("skip-duplicates", "merge", "replace")

_PLAYERS = TypeAdapter(list[Player])
_MATCHES = TypeAdapter(list[Match])
_COURTS = TypeAdapter(list[Court])
_TIME_BLOCKS = TypeAdapter(list[TimeBlock])


class ImportFormatError(ValueError):
    """Raised when a backup document cannot be read."""
    pass


@dataclass
class ExportData:
    version: str
    export_date: datetime
    players: list[Player] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)
    courts: list[Court] = field(default_factory=list)
    availability: Optional[list[TimeBlock]] = None


def create_backup(
    players: Iterable[Player],
    matches: Iterable[Match],
    courts: Iterable[Court],
    availability: Optional[Iterable[TimeBlock]] = None,
    now: Optional[datetime] = None,
) -> ExportData:
    """Snapshot the given collections under the current package version."""
    return ExportData(
        version=__version__,
        export_date=now or datetime.now(),
        players=list(players),
        matches=list(matches),
        courts=list(courts),
        availability=list(availability) if availability is not None else None,
    )


# =============================================================================
# JSON
# =============================================================================

def export_data_to_json(data: ExportData) -> str:
    """Serialize a backup to an indented JSON document."""
    payload = {
        "version": data.version,
        "exportDate": data.export_date.isoformat(),
        "players": _PLAYERS.dump_python(data.players, mode="json"),
        "matches": _MATCHES.dump_python(data.matches, mode="json"),
        "courts": _COURTS.dump_python(data.courts, mode="json"),
    }
    if data.availability is not None:
        payload["availability"] = _TIME_BLOCKS.dump_python(data.availability, mode="json")
    return json.dumps(payload, indent=2)


def validate_import_data(data: Any) -> tuple[bool, list[str]]:
    """
    Check the envelope of a decoded backup document.

    Returns:
        (is_valid, errors) where errors lists every problem found
    """
    if not isinstance(data, Mapping):
        return False, ["Backup must be a JSON object"]

    errors = []
    if not data.get("version"):
        errors.append("Missing version information")
    if not data.get("exportDate"):
        errors.append("Missing export date")
    for key in ("players", "matches", "courts"):
        if not isinstance(data.get(key), list):
            errors.append(f"Invalid {key} data")
    if "availability" in data and not isinstance(data["availability"], list):
        errors.append("Invalid availability data")

    return not errors, errors


def import_data_from_json(text: str) -> ExportData:
    """
    Parse a backup document produced by export_data_to_json().

    Raises:
        ImportFormatError: If the text is not JSON, the envelope is
            incomplete, or an entity fails validation
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError("Failed to parse import file: not valid JSON") from exc

    is_valid, errors = validate_import_data(raw)
    if not is_valid:
        raise ImportFormatError(f"Invalid export file format: {'; '.join(errors)}")

    try:
        export_date = datetime.fromisoformat(raw["exportDate"])
        data = ExportData(
            version=raw["version"],
            export_date=export_date,
            players=_PLAYERS.validate_python(raw["players"]),
            matches=_MATCHES.validate_python(raw["matches"]),
            courts=_COURTS.validate_python(raw["courts"]),
            availability=(
                _TIME_BLOCKS.validate_python(raw["availability"])
                if "availability" in raw
                else None
            ),
        )
    # pydantic's ValidationError is a ValueError
    except (TypeError, ValueError) as exc:
        raise ImportFormatError(f"Invalid export file contents: {exc}") from exc

    logger.info(
        "Imported backup v%s: %d players, %d matches, %d courts",
        data.version, len(data.players), len(data.matches), len(data.courts),
    )
    return data


def _without_duplicates(existing: list, imported: list) -> list:
    known = {item.id for item in existing}
    return existing + [item for item in imported if item.id not in known]


def merge_import_data(
    existing: ExportData,
    imported: ExportData,
    strategy: str = "skip-duplicates",
    now: Optional[datetime] = None,
) -> ExportData:
    """
    Combine an imported backup with existing data.

    Strategies:
    - "skip-duplicates": keep existing records, add imported ones whose id
      is not already present
    - "merge": concatenate both collections
    - "replace": take the imported collections

    The result keeps the existing version and gets a fresh export date.

    Raises:
        ValueError: For an unknown strategy
    """
    if strategy not in MERGE_STRATEGIES:
        raise ValueError(f"strategy must be one of {MERGE_STRATEGIES}, got '{strategy}'")

    export_date = now or datetime.now()

    if strategy == "replace":
        return ExportData(
            version=existing.version,
            export_date=export_date,
            players=list(imported.players),
            matches=list(imported.matches),
            courts=list(imported.courts),
            availability=list(imported.availability) if imported.availability is not None else None,
        )

    combine = _without_duplicates if strategy == "skip-duplicates" else (lambda a, b: a + b)

    availability = existing.availability
    if imported.availability is not None:
        availability = combine(list(existing.availability or []), list(imported.availability))

    return ExportData(
        version=existing.version,
        export_date=export_date,
        players=combine(list(existing.players), list(imported.players)),
        matches=combine(list(existing.matches), list(imported.matches)),
        courts=combine(list(existing.courts), list(imported.courts)),
        availability=availability,
    )


# =============================================================================
# CSV
# =============================================================================

def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def export_to_csv(
    rows: Iterable[Mapping[str, Any]],
    headers: Sequence[tuple[str, str]],
) -> str:
    """
    Render rows as CSV.

    Args:
        rows: Mappings from column key to value
        headers: (key, label) pairs in column order

    Returns:
        CSV text with a header row; values containing commas, quotes or
        newlines are quoted
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([label for _, label in headers])
    for row in rows:
        writer.writerow([_cell(row.get(key)) for key, _ in headers])
    return buffer.getvalue().rstrip("\n")


def _export_entities(
    entities: Iterable[Any],
    columns: Sequence[tuple[str, str, Callable[[Any], Any]]],
) -> str:
    headers = [(key, label) for key, label, _ in columns]
    rows = [{key: getter(entity) for key, _, getter in columns} for entity in entities]
    return export_to_csv(rows, headers)


PLAYER_COLUMNS = (
    ("id", "ID", lambda p: p.id),
    ("name", "Name", lambda p: p.name),
    ("email", "Email", lambda p: p.email),
    ("city", "City", lambda p: p.location.city),
    ("state", "State", lambda p: p.location.state),
    ("skill_level", "Skill Level", lambda p: p.skill_level),
    ("play_style", "Play Style", lambda p: p.play_style),
    ("preferred_surface", "Preferred Surface", lambda p: p.preferred_surface),
    ("elo", "Elo", lambda p: p.stats.elo if p.stats else None),
)

MATCH_COLUMNS = (
    ("id", "ID", lambda m: m.id),
    ("date", "Date", lambda m: m.completed_date or m.scheduled_date),
    ("player1_id", "Player 1", lambda m: m.player1_id),
    ("player2_id", "Player 2", lambda m: m.player2_id),
    ("location", "Location", lambda m: f"{m.location.name}, {m.location.city}"),
    ("surface", "Surface", lambda m: m.surface),
    ("score", "Score", lambda m: format_match_score(m.score.sets) if m.score else None),
    ("winner_id", "Winner", lambda m: m.score.winner_id if m.score else None),
    ("status", "Status", lambda m: m.status),
)

COURT_COLUMNS = (
    ("id", "ID", lambda c: c.id),
    ("name", "Name", lambda c: c.name),
    ("location", "Location", lambda c: f"{c.location.address}, {c.location.city}"),
    ("surface", "Surface Type", lambda c: c.surface),
    ("rating", "Rating", lambda c: c.rating.average_rating if c.rating else None),
    ("hourly_rate", "Hourly Rate", lambda c: c.hourly_rate),
)


def export_players_to_csv(players: Iterable[Player]) -> str:
    return _export_entities(players, PLAYER_COLUMNS)


def export_matches_to_csv(matches: Iterable[Match]) -> str:
    return _export_entities(matches, MATCH_COLUMNS)


def export_courts_to_csv(courts: Iterable[Court]) -> str:
    return _export_entities(courts, COURT_COLUMNS)

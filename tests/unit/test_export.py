"""
Unit tests for JSON backups and CSV exports.
"""

import csv
import io
import json
from datetime import date, datetime

import pytest

from tennismeet import __version__
from tennismeet.availability import TimeBlock
from tennismeet.export import (
    ImportFormatError,
    create_backup,
    export_courts_to_csv,
    export_data_to_json,
    export_matches_to_csv,
    export_players_to_csv,
    export_to_csv,
    import_data_from_json,
    merge_import_data,
    validate_import_data,
)
from tennismeet.matches import MatchLocation, MatchSet, create_match

GGP = MatchLocation(name="Golden Gate Park", city="San Francisco")


@pytest.fixture
def match(alice, bob, now):
    return create_match(alice, bob, [MatchSet(6, 4), MatchSet(6, 3)], GGP, now=now)


@pytest.fixture
def block(now):
    return TimeBlock(
        "alice", date(2026, 10, 21), "18:00", "20:00", id="tb-1", created_at=now, updated_at=now
    )


@pytest.fixture
def backup(alice, bob, match, courts, block, now):
    return create_backup([alice, bob], [match], courts, [block], now=now)


class TestJsonBackup:
    """Tests for export_data_to_json() and import_data_from_json()."""

    def test_envelope(self, backup):
        document = json.loads(export_data_to_json(backup))

        assert document["version"] == __version__
        assert document["exportDate"] == "2026-10-19T09:30:00"
        assert [p["id"] for p in document["players"]] == ["alice", "bob"]
        assert len(document["matches"]) == 1
        assert len(document["courts"]) == 4
        assert document["availability"][0]["start_time"] == "18:00"

    def test_enums_serialized_by_value(self, backup):
        document = json.loads(export_data_to_json(backup))

        assert document["players"][0]["skill_level"] == "intermediate"
        assert document["courts"][0]["surface"] == "hard"

    def test_availability_omitted_when_absent(self, alice, courts, now):
        backup = create_backup([alice], [], courts, now=now)
        assert "availability" not in json.loads(export_data_to_json(backup))

    def test_import_restores_entities(self, backup):
        restored = import_data_from_json(export_data_to_json(backup))

        assert restored.version == backup.version
        assert restored.export_date == backup.export_date
        assert restored.players == backup.players
        assert restored.matches == backup.matches
        assert restored.courts == backup.courts
        assert restored.availability == backup.availability

    def test_import_not_json(self):
        with pytest.raises(ImportFormatError, match="not valid JSON"):
            import_data_from_json("{not json")

    def test_import_missing_envelope(self):
        with pytest.raises(ImportFormatError, match="Missing version information"):
            import_data_from_json(json.dumps({"players": [], "matches": [], "courts": []}))

    def test_import_invalid_entity(self):
        document = {
            "version": "1.0.0",
            "exportDate": "2026-10-19T09:30:00",
            "players": [{"id": "x"}],
            "matches": [],
            "courts": [],
        }
        with pytest.raises(ImportFormatError):
            import_data_from_json(json.dumps(document))

    def test_import_error_is_value_error(self):
        with pytest.raises(ValueError):
            import_data_from_json("[]")


class TestValidateImportData:
    """Tests for validate_import_data()."""

    def test_valid(self):
        document = {
            "version": "1.0.0",
            "exportDate": "2026-10-19T09:30:00",
            "players": [],
            "matches": [],
            "courts": [],
        }
        assert validate_import_data(document) == (True, [])

    def test_collects_every_error(self):
        is_valid, errors = validate_import_data({"players": {}, "availability": "x"})

        assert not is_valid
        assert errors == [
            "Missing version information",
            "Missing export date",
            "Invalid players data",
            "Invalid matches data",
            "Invalid courts data",
            "Invalid availability data",
        ]

    def test_not_an_object(self):
        assert validate_import_data([1, 2]) == (False, ["Backup must be a JSON object"])


class TestMergeImportData:
    """Tests for merge_import_data()."""

    @pytest.fixture
    def existing(self, alice, bob, now):
        return create_backup([alice, bob], [], [], now=now)

    @pytest.fixture
    def imported(self, bob, carol, now):
        return create_backup([bob, carol], [], [], now=now)

    def test_skip_duplicates(self, existing, imported):
        later = datetime(2026, 10, 20, 8, 0)
        merged = merge_import_data(existing, imported, now=later)

        assert [p.id for p in merged.players] == ["alice", "bob", "carol"]
        assert merged.export_date == later
        assert merged.version == existing.version

    def test_merge_concatenates(self, existing, imported):
        merged = merge_import_data(existing, imported, "merge")
        assert [p.id for p in merged.players] == ["alice", "bob", "bob", "carol"]

    def test_replace(self, existing, imported):
        merged = merge_import_data(existing, imported, "replace")
        assert [p.id for p in merged.players] == ["bob", "carol"]

    def test_availability_merged_when_imported(self, existing, block, now):
        imported = create_backup([], [], [], [block], now=now)

        merged = merge_import_data(existing, imported)
        assert merged.availability == [block]

    def test_availability_kept_when_not_imported(self, existing, imported):
        assert merge_import_data(existing, imported).availability is None

    def test_unknown_strategy(self, existing, imported):
        with pytest.raises(ValueError):
            merge_import_data(existing, imported, "overwrite")


def _rows(text):
    return list(csv.reader(io.StringIO(text)))


class TestCsvExport:
    """Tests for the CSV exporters."""

    def test_quoting(self):
        text = export_to_csv(
            [{"a": 'say "hi"', "b": "one, two"}, {"a": None, "b": 3}],
            [("a", "A"), ("b", "B")],
        )

        assert text == 'A,B\n"say ""hi""","one, two"\n,3'

    def test_no_trailing_newline(self):
        assert export_to_csv([], [("a", "A")]) == "A"

    def test_players(self, alice, dave):
        rows = _rows(export_players_to_csv([alice, dave]))

        assert rows[0] == [
            "ID", "Name", "Email", "City", "State",
            "Skill Level", "Play Style", "Preferred Surface", "Elo",
        ]
        assert rows[1][0] == "alice"
        assert rows[1][5:8] == ["intermediate", "baseline", "hard"]
        assert rows[1][8] in ("1500", "1500.0")
        # No stats yet
        assert rows[2][8] == ""

    def test_matches(self, match):
        rows = _rows(export_matches_to_csv([match]))

        assert rows[0][:2] == ["ID", "Date"]
        assert rows[1][1] == "2026-10-19T09:30:00"
        assert rows[1][4] == "Golden Gate Park, San Francisco"
        assert rows[1][6:] == ["6-4, 6-3", "alice", "completed"]

    def test_courts(self, golden_gate_court, mission_court):
        text = export_courts_to_csv([golden_gate_court, mission_court])
        lines = text.split("\n")

        assert lines[0] == "ID,Name,Location,Surface Type,Rating,Hourly Rate"
        assert lines[1] == (
            'court-ggp,Golden Gate Park Tennis Center,'
            '"50 John F Kennedy Dr, San Francisco",hard,4.5,10.0'
        )
        assert lines[2].endswith("hard,,")

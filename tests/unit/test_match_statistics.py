"""
Unit tests for per-player match statistics.
"""

from datetime import datetime, timedelta

from tennismeet.matches import (
    EloChanges,
    Match,
    MatchLocation,
    MatchScore,
    MatchSet,
    MatchStatus,
    StreakType,
    Surface,
    calculate_match_statistics,
)

LOCATION = MatchLocation(name="Mission Dolores", city="San Francisco")
START = datetime(2026, 9, 1, 18, 0)


def _match(n, winner, surface=Surface.HARD, change=10, opponent="bob"):
    """Alice vs opponent on day n; alice's Elo change is +change or -change."""
    when = START + timedelta(days=n)
    alice_won = winner == "alice"
    sets = (MatchSet(6, 3), MatchSet(6, 3)) if alice_won else (MatchSet(3, 6), MatchSet(3, 6))
    delta = change if alice_won else -change
    return Match(
        id=f"m{n}",
        player1_id="alice",
        player2_id=opponent,
        status=MatchStatus.COMPLETED,
        location=LOCATION,
        surface=surface,
        score=MatchScore(sets=sets, winner_id=winner),
        elo_changes=EloChanges(delta, -delta, 1500 + delta, 1500 - delta),
        completed_date=when,
        created_at=when,
        updated_at=when,
    )


class TestCalculateMatchStatistics:
    """Tests for calculate_match_statistics()."""

    def test_empty_history(self):
        stats = calculate_match_statistics([], "alice")

        assert stats.total_matches == 0
        assert stats.win_rate == 0.0
        assert stats.streak_type == StreakType.NONE
        assert stats.recent_form == []
        assert set(stats.by_surface) == set(Surface)

    def test_totals_and_win_rate(self):
        matches = [_match(1, "alice"), _match(2, "bob"), _match(3, "alice")]
        stats = calculate_match_statistics(matches, "alice")

        assert stats.total_matches == 3
        assert stats.wins == 2
        assert stats.losses == 1
        assert stats.win_rate == 66.7

    def test_average_elo_change(self):
        matches = [_match(1, "alice", change=16), _match(2, "bob", change=9)]
        stats = calculate_match_statistics(matches, "alice")

        # (16 - 9) / 2 = 3.5
        assert stats.average_elo_change == 3.5

    def test_stats_for_player2_side(self):
        matches = [_match(1, "alice", change=16), _match(2, "bob", change=9)]
        stats = calculate_match_statistics(matches, "bob")

        assert stats.wins == 1
        assert stats.average_elo_change == -3.5

    def test_by_surface(self):
        matches = [
            _match(1, "alice", Surface.CLAY),
            _match(2, "bob", Surface.CLAY),
            _match(3, "alice", Surface.HARD),
            _match(4, "alice", None),
        ]
        stats = calculate_match_statistics(matches, "alice")

        assert stats.by_surface[Surface.CLAY].wins == 1
        assert stats.by_surface[Surface.CLAY].losses == 1
        assert stats.by_surface[Surface.CLAY].win_rate == 50.0
        assert stats.by_surface[Surface.HARD].win_rate == 100.0
        assert stats.by_surface[Surface.GRASS].win_rate == 0.0
        # Unknown surface counts toward totals only
        assert stats.total_matches == 4

    def test_recent_form_newest_first_limited_to_ten(self):
        # 12 matches, in shuffled order: losses on days 1-2, wins after
        matches = [_match(n, "alice" if n > 2 else "bob") for n in (5, 1, 12, 2, 3, 4, 6, 7, 8, 9, 10, 11)]
        stats = calculate_match_statistics(matches, "alice")

        assert stats.recent_form == ["W"] * 10
        assert len(stats.recent_form) == 10

    def test_streaks(self):
        # Chronological: W W W L L W
        results = ["alice", "alice", "alice", "bob", "bob", "alice"]
        matches = [_match(n, winner) for n, winner in enumerate(results, start=1)]
        stats = calculate_match_statistics(matches, "alice")

        assert stats.longest_win_streak == 3
        assert stats.longest_loss_streak == 2
        assert stats.current_streak == 1
        assert stats.streak_type == StreakType.WIN
        assert stats.recent_form == ["W", "L", "L", "W", "W", "W"]

    def test_current_losing_streak(self):
        results = ["alice", "bob", "bob"]
        matches = [_match(n, winner) for n, winner in enumerate(results, start=1)]
        stats = calculate_match_statistics(matches, "alice")

        assert stats.current_streak == 2
        assert stats.streak_type == StreakType.LOSS

    def test_ignores_other_players_and_unfinished_matches(self, now):
        scheduled = Match(
            id="s1",
            player1_id="alice",
            player2_id="bob",
            status=MatchStatus.SCHEDULED,
            location=LOCATION,
            created_at=now,
            updated_at=now,
        )
        others = _match(1, "carol", opponent="carol")
        matches = [scheduled, _match(2, "alice"), others]

        stats = calculate_match_statistics(matches, "bob")

        assert stats.total_matches == 1
        assert stats.losses == 1

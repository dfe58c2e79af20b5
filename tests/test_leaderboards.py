import unittest

import pytest

from squad_analytics.aggregation import MatchTally, SquadPlayerStats
from squad_analytics.leaderboards import (
    SquadMetric,
    build_leaderboard,
    comparison_leaders,
    metric_value,
    rank_players,
    sort_squad_table,
    visible_entries,
)
from squad_analytics.rank_tracker import RankingKind, track_movement


def _player(name, *, mp=1, goals=0, assists=0, clean_sheets=0, keeper=False, wins=0, draws=0, losses=0):
    return SquadPlayerStats(
        name=name,
        matches_played=mp,
        goals=goals,
        assists=assists,
        minutes_played=0,
        starts=mp,
        sub_appearances=0,
        record=MatchTally(wins, draws, losses),
        clean_sheets=clean_sheets,
        is_goalkeeper=keeper,
        goals_against=0,
        win_rate=0.0,
        effectiveness=0.0,
        goals_per_match=goals / mp if mp else 0.0,
        assists_per_match=assists / mp if mp else 0.0,
        minutes_percentage=0.0,
    )


class LeaderboardTests(unittest.TestCase):
    def test_ties_broken_by_matches_played(self):
        stats = [_player("Ana", mp=3, goals=2), _player("Ben", mp=5, goals=2), _player("Cai", mp=2, goals=4)]
        ranked = rank_players(stats, SquadMetric.GOALS)
        self.assertEqual([s.name for s in ranked], ["Cai", "Ben", "Ana"])

    def test_full_ties_keep_input_order(self):
        stats = [_player("Zoe", goals=1), _player("Ana", goals=1)]
        self.assertEqual([s.name for s in rank_players(stats, "goals")], ["Zoe", "Ana"])

    def test_leaderboard_capped_at_ten(self):
        stats = [_player(f"P{i}", goals=i) for i in range(15)]
        board = build_leaderboard(stats, RankingKind.TOP_SCORERS)
        self.assertEqual(len(board), 10)
        self.assertEqual(board[0].name, "P14")

    def test_clean_sheet_board_is_goalkeepers_only(self):
        stats = [
            _player("Ana", clean_sheets=5),
            _player("Gus", clean_sheets=2, keeper=True),
            _player("Kim", clean_sheets=3, keeper=True),
        ]
        board = build_leaderboard(stats, "clean_sheets")
        self.assertEqual([s.name for s in board], ["Kim", "Gus"])

    def test_pairs_is_not_a_player_leaderboard(self):
        with self.assertRaises(ValueError):
            build_leaderboard([], RankingKind.PAIRS)

    def test_visible_entries_hide_zero_values(self):
        stats = [_player("Ana", assists=2), _player("Ben")]
        entries = track_movement(build_leaderboard(stats, RankingKind.TOP_ASSISTERS), [], lambda s: s.name)
        visible = visible_entries(entries, RankingKind.TOP_ASSISTERS)
        self.assertEqual([e.entity.name for e in visible], ["Ana"])


class SquadTableTests(unittest.TestCase):
    def test_sort_by_metric_with_matches_played_fallback(self):
        stats = [_player("Ana", mp=1, goals=1), _player("Ben", mp=4, goals=1), _player("Cai", mp=2, goals=3)]
        ordered = sort_squad_table(stats, SquadMetric.GOALS)
        self.assertEqual([s.name for s in ordered], ["Cai", "Ben", "Ana"])

        ascending = sort_squad_table(stats, SquadMetric.GOALS, descending=False)
        self.assertEqual([s.name for s in ascending], ["Ben", "Ana", "Cai"])

    def test_sort_by_name(self):
        stats = [_player("ben"), _player("Ana"), _player("cai")]
        self.assertEqual([s.name for s in sort_squad_table(stats, "name", descending=False)], ["Ana", "ben", "cai"])

    def test_record_sorts_by_points(self):
        stats = [_player("Ana", wins=1, draws=0), _player("Ben", draws=4)]
        self.assertEqual([s.name for s in sort_squad_table(stats, SquadMetric.RECORD)], ["Ben", "Ana"])


def test_comparison_leaders_prefers_fewer_losses():
    stats = [_player("Ana", goals=3, losses=2), _player("Ben", goals=1, losses=1)]
    leaders = comparison_leaders(stats, ["goals", SquadMetric.LOSSES])
    assert leaders[SquadMetric.GOALS] == 3
    assert leaders[SquadMetric.LOSSES] == 1


def test_comparison_leaders_empty_selection():
    assert comparison_leaders([], [SquadMetric.GOALS]) == {SquadMetric.GOALS: None}


def test_metric_parse_and_name_is_not_numeric():
    assert SquadMetric.parse("WIN_RATE") is SquadMetric.WIN_RATE
    assert SquadMetric.parse("goals_per_match") is SquadMetric.GOALS_PER_MATCH
    with pytest.raises(ValueError):
        SquadMetric.parse("shots")
    with pytest.raises(ValueError):
        metric_value(_player("Ana"), SquadMetric.NAME)


if __name__ == "__main__":
    unittest.main()

import unittest

import pytest

from squad_analytics.rank_tracker import (
    RankHistory,
    RankingKind,
    RankMovement,
    RankSnapshot,
    classify_movement,
    track_movement,
)


def _identity(value):
    return value


class TrackMovementTests(unittest.TestCase):
    def test_everything_new_without_previous(self):
        entries = track_movement(["a", "b"], [], _identity)
        self.assertEqual([e.movement for e in entries], [RankMovement.NEW, RankMovement.NEW])
        self.assertEqual([e.position for e in entries], [0, 1])
        self.assertTrue(all(e.previous_position is None for e in entries))

    def test_identical_ranking_is_stable(self):
        entries = track_movement(["a", "b", "c"], ["a", "b", "c"], _identity)
        self.assertTrue(all(e.movement is RankMovement.STABLE for e in entries))

    def test_swap_moves_up_and_down(self):
        entries = track_movement(["b", "a", "d"], ["a", "b", "c"], _identity)
        self.assertEqual(
            [e.movement for e in entries],
            [RankMovement.UP, RankMovement.DOWN, RankMovement.NEW],
        )
        self.assertEqual(entries[0].previous_position, 1)

    def test_dropped_entities_are_not_reported(self):
        entries = track_movement(["a"], ["b", "a"], _identity)
        self.assertEqual(len(entries), 1)
        self.assertIs(entries[0].movement, RankMovement.UP)

    def test_key_function_is_used(self):
        current = [{"id": "x", "score": 1}]
        previous = [{"id": "x", "score": 9}]
        entries = track_movement(current, previous, lambda d: d["id"])
        self.assertIs(entries[0].movement, RankMovement.STABLE)
        self.assertIs(entries[0].entity, current[0])


class RankHistoryTests(unittest.TestCase):
    def test_track_stores_new_snapshot(self):
        history = RankHistory()
        self.assertNotIn(RankingKind.TOP_SCORERS, history)

        first = history.track("top_scorers", ["a", "b"], _identity)
        self.assertTrue(all(e.movement is RankMovement.NEW for e in first))
        self.assertIn("top_scorers", history)
        self.assertEqual(history.snapshot(RankingKind.TOP_SCORERS).keys, ("a", "b"))

        second = history.track(RankingKind.TOP_SCORERS, ["b", "a"], _identity)
        self.assertEqual([e.movement for e in second], [RankMovement.UP, RankMovement.DOWN])

    def test_rerunning_same_ranking_is_stable(self):
        history = RankHistory()
        history.track(RankingKind.PAIRS, ["a-b"], _identity)
        again = history.track(RankingKind.PAIRS, ["a-b"], _identity)
        self.assertIs(again[0].movement, RankMovement.STABLE)

    def test_kinds_are_tracked_separately(self):
        history = RankHistory()
        history.track(RankingKind.TOP_SCORERS, ["a"], _identity)
        entries = history.track(RankingKind.TOP_ASSISTERS, ["a"], _identity)
        self.assertIs(entries[0].movement, RankMovement.NEW)

    def test_reset(self):
        history = RankHistory()
        history.track(RankingKind.TOP_SCORERS, ["a"], _identity)
        history.track(RankingKind.CLEAN_SHEETS, ["g"], _identity)

        history.reset(RankingKind.TOP_SCORERS)
        self.assertNotIn(RankingKind.TOP_SCORERS, history)
        self.assertIn(RankingKind.CLEAN_SHEETS, history)

        history.reset()
        self.assertNotIn(RankingKind.CLEAN_SHEETS, history)


def test_classify_movement_lower_index_is_better():
    assert classify_movement(0, 3) is RankMovement.UP
    assert classify_movement(3, 0) is RankMovement.DOWN
    assert classify_movement(2, 2) is RankMovement.STABLE
    assert classify_movement(2, None) is RankMovement.NEW


def test_snapshot_position_of():
    snap = RankSnapshot(("a", "b"))
    assert snap.position_of("b") == 1
    assert snap.position_of("z") is None


def test_ranking_kind_parse_rejects_unknown():
    assert RankingKind.parse(" Pairs ") is RankingKind.PAIRS
    with pytest.raises(ValueError):
        RankingKind.parse("top_keepers")
    assert "top_keepers" not in RankHistory()


if __name__ == "__main__":
    unittest.main()

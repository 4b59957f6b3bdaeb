import unittest

from dropfour.engine import Connect4Config, apply_move, empty_board
from dropfour.heuristic import evaluate
from dropfour.search import SearchStats
from dropfour.selector import RankedMove, choose_move, select_move
from tests.helpers import A, H, board_with, drawn_board


def most_central_of_best(cfg, decision):
    top = decision.ranked[0].score
    tied = [m.column for m in decision.ranked if m.score == top]
    return min(tied, key=lambda c: (abs(c - cfg.center_col), c))


class TestGreedyChecks(unittest.TestCase):
    def setUp(self):
        self.cfg = Connect4Config()

    def test_immediate_win_at_any_depth(self):
        board = board_with(self.cfg, {0: [A, H], 1: [A, H], 2: [A, H]})
        for depth in range(1, 6):
            with self.subTest(depth=depth):
                decision = select_move(self.cfg, board, depth)
                self.assertEqual(decision.column, 3)
                self.assertEqual(decision.reason, "win")
                self.assertEqual(decision.ranked, ())

    def test_block_opponent_threat(self):
        board = board_with(self.cfg, {0: [H, A], 1: [H, A], 2: [H]})
        for depth in (1, 2, 3):
            with self.subTest(depth=depth):
                decision = select_move(self.cfg, board, depth)
                self.assertEqual(decision.column, 3)
                self.assertEqual(decision.reason, "block")

    def test_win_preferred_over_block(self):
        board = board_with(self.cfg, {0: [H], 1: [H], 2: [H], 6: [A, A, A]})
        self.assertEqual(choose_move(self.cfg, board, 2), 6)

    def test_first_winning_column_in_ascending_order(self):
        # Both column 0 (vertical) and column 5 (horizontal) win.
        board = board_with(self.cfg, {0: [A, A, A], 2: [H, A], 3: [H, A], 4: [H, A], 5: [H]})
        self.assertEqual(choose_move(self.cfg, board, 1), 0)

    def test_greedy_checks_work_for_either_side(self):
        board = board_with(self.cfg, {4: [H, H, H], 0: [A]})
        decision = select_move(self.cfg, board, 2, player=H)
        self.assertEqual((decision.column, decision.reason), (4, "win"))
        decision = select_move(self.cfg, board, 2, player=A)
        self.assertEqual((decision.column, decision.reason), (4, "block"))


class TestSearchChoice(unittest.TestCase):
    def setUp(self):
        self.cfg = Connect4Config()

    def test_empty_board_depth_one_prefers_center(self):
        board = empty_board(self.cfg)
        decision = select_move(self.cfg, board, 1)
        self.assertEqual(decision.column, 3)
        self.assertEqual(decision.reason, "search")
        self.assertEqual(decision.ranked[0], RankedMove(3, 3.0))
        self.assertEqual(len(decision.ranked), 7)
        self.assertEqual(choose_move(self.cfg, board, 1), 3)

        center = evaluate(self.cfg, apply_move(self.cfg, board, 3, A), A)
        for col in (0, 6):
            self.assertGreaterEqual(center, evaluate(self.cfg, apply_move(self.cfg, board, col, A), A))

    def test_ranked_is_sorted_descending_and_stable(self):
        decision = select_move(self.cfg, board_with(self.cfg, {3: [H]}), 2)
        scores = [m.score for m in decision.ranked]
        self.assertEqual(scores, sorted(scores, reverse=True))
        for a, b in zip(decision.ranked, decision.ranked[1:]):
            if a.score == b.score:
                self.assertLessEqual(abs(a.column - 3), abs(b.column - 3))
        self.assertEqual(sorted(m.column for m in decision.ranked), list(range(7)))

    def test_tie_goes_to_most_central_column(self):
        # Symmetric position with the center column full: columns 2 and 4 mirror each other.
        board = board_with(self.cfg, {3: [H, A, H, A, H, A]})
        for depth in (1, 2, 3):
            with self.subTest(depth=depth):
                decision = select_move(self.cfg, board, depth)
                scores = {m.column: m.score for m in decision.ranked}
                self.assertEqual(scores[2], scores[4])
                self.assertEqual(scores[1], scores[5])
                self.assertEqual(scores[0], scores[6])
                self.assertEqual(decision.column, most_central_of_best(self.cfg, decision))
                self.assertNotIn(decision.column, (4, 5, 6))

    def test_choice_is_deterministic(self):
        board = board_with(self.cfg, {3: [A, H], 2: [H]})
        first = select_move(self.cfg, board, 3)
        second = select_move(self.cfg, board, 3)
        self.assertEqual(first, second)

    def test_chosen_column_is_best_ranked(self):
        board = board_with(self.cfg, {3: [H, A], 2: [H], 4: [A]})
        decision = select_move(self.cfg, board, 3)
        self.assertEqual(decision.column, most_central_of_best(self.cfg, decision))

    def test_stats_are_collected(self):
        stats = SearchStats()
        select_move(self.cfg, empty_board(self.cfg), 3, stats=stats)
        self.assertGreater(stats.nodes, 7)


class TestEdgeCases(unittest.TestCase):
    def setUp(self):
        self.cfg = Connect4Config()

    def test_full_board_returns_none(self):
        board = drawn_board(self.cfg)
        decision = select_move(self.cfg, board, 3)
        self.assertIsNone(decision.column)
        self.assertEqual(decision.reason, "none")
        self.assertIsNone(choose_move(self.cfg, board, 3))

    def test_depth_must_be_positive(self):
        with self.assertRaises(ValueError):
            select_move(self.cfg, empty_board(self.cfg), 0)

    def test_only_legal_columns_are_chosen(self):
        stacks = {0: [H, A, H, A, H, A], 6: [A, H, A, H, A, H], 3: [H]}
        board = board_with(self.cfg, stacks)
        decision = select_move(self.cfg, board, 2)
        self.assertNotIn(decision.column, (0, 6))
        self.assertEqual(sorted(m.column for m in decision.ranked), [1, 2, 3, 4, 5])


if __name__ == "__main__":
    unittest.main()

import unittest

from dropfour.agents import MinimaxAgent, RandomAgent
from dropfour.arena import play_game, run_match
from dropfour.engine import Connect4Config, terminal_result
from tests.helpers import A, H, ColumnAgent


class TestArena(unittest.TestCase):
    def setUp(self):
        self.cfg = Connect4Config()

    def test_play_game_to_the_end(self):
        seen = []
        final = play_game(self.cfg, ColumnAgent("x", [0]), ColumnAgent("o", [6]), on_move=seen.append)
        tr = terminal_result(self.cfg, final)
        self.assertEqual(tr.winner, H)
        self.assertEqual(final.ply, 7)
        self.assertEqual(len(seen), 7)

    def test_match_alternates_first_player(self):
        # Whoever starts stacks four first.
        a = ColumnAgent("a", [0])
        b = ColumnAgent("b", [6])
        result = run_match(self.cfg, a, b, games=4, progress=False)
        self.assertEqual((result.wins, result.draws, result.losses), (2, 0, 2))
        self.assertEqual(result.games, 4)

    def test_minimax_blocks_a_stacking_opponent(self):
        final = play_game(self.cfg, ColumnAgent("x", [0]), MinimaxAgent("ab", depth=2))
        self.assertNotEqual(terminal_result(self.cfg, final).winner, H)

    def test_match_with_real_agents(self):
        result = run_match(self.cfg, MinimaxAgent("ab", depth=1), RandomAgent("r", seed=1), games=2, progress=False)
        self.assertEqual(result.games, 2)


if __name__ == "__main__":
    unittest.main()

import unittest

from game import ScoringMechanism, create, evaluate, from_cells

M = ScoringMechanism.MULTIPLICATION
C = ScoringMechanism.CONNECTION
E = ScoringMechanism.EXTENSION


class TestEvaluate(unittest.TestCase):
    def test_given_empty_board_when_evaluating_then_neutral(self):
        board = create(6, 6)
        for mechanism in ScoringMechanism:
            self.assertEqual(evaluate(board, 0, mechanism), 0)

    def test_given_multiplication_when_evaluating_then_size_bonus_and_opponent_penalty(self):
        board = from_cells(6, 6, [(0, 0), (1, 0), (2, 0)], [(5, 5)])
        # 3 - 1 + 0.5 * 3 - 0.3 * 1
        self.assertAlmostEqual(evaluate(board, 0, M), 3.2)
        # 1 - 3 + 0.5 * 1 - 0.3 * 3
        self.assertAlmostEqual(evaluate(board, 1, M), -2.4)

    def test_given_connection_when_evaluating_then_links_are_halved(self):
        board = from_cells(6, 6, [(0, 0), (1, 0), (2, 0)], [(5, 5)])
        # 4 - 1 + 0.4 * (2 - 0)
        self.assertAlmostEqual(evaluate(board, 0, C), 3.8)

    def test_given_extension_when_evaluating_then_free_neighbors_weighed(self):
        lone = from_cells(6, 6, [(0, 0)], [])
        # 1 - 0 + 0.25 * 2
        self.assertAlmostEqual(evaluate(lone, 0, E), 1.5)
        contested = from_cells(6, 6, [(0, 0)], [(5, 5)])
        # 1 - 1 + 0.25 * (2 - 0.5 * 2)
        self.assertAlmostEqual(evaluate(contested, 0, E), 0.25)

    def test_given_late_game_when_evaluating_then_value_amplified(self):
        board = from_cells(2, 2, [(0, 0), (1, 0)], [(0, 1)])
        # progress 0.75: (2 - 1 + 0.5 * 2 - 0.3 * 1) * 1.1
        self.assertAlmostEqual(evaluate(board, 0, M), 1.7 * 1.1)

    def test_given_mid_game_when_evaluating_then_no_amplification(self):
        board = from_cells(10, 1, [(0, 0), (1, 0), (2, 0), (3, 0)], [(5, 0), (6, 0)])
        # progress 0.6: 4 - 2 + 0.5 * 4 - 0.3 * 2
        self.assertAlmostEqual(evaluate(board, 0, M), 3.4)


if __name__ == '__main__':
    unittest.main()

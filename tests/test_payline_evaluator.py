import unittest

from slot_machine.domain.entities.slot_symbols import PAYLINES, Symbol
from slot_machine.domain.exceptions import InvalidPaylineError
from slot_machine.domain.services.payline_evaluator import PaylineEvaluator

from fakes import CHERRY, GRAPES, LEMON, ORANGE, STAR


class TestPaylineEvaluator(unittest.TestCase):

    def setUp(self):
        self.evaluator = PaylineEvaluator()

    def test_row_grid_pays_three_rows(self):
        grid = [
            [CHERRY, CHERRY, CHERRY],
            [LEMON, LEMON, LEMON],
            [ORANGE, ORANGE, ORANGE],
        ]
        result = self.evaluator.evaluate(grid, PAYLINES, 1)
        self.assertEqual(result.winning_lines, [0, 1, 2])
        self.assertEqual(result.total_payout, 3 + 4 + 5)
        self.assertTrue(result.win)

    def test_partial_match_never_pays(self):
        grid = [
            [CHERRY, CHERRY, LEMON],
            [LEMON, ORANGE, GRAPES],
            [ORANGE, GRAPES, CHERRY],
        ]
        check = self.evaluator.check_line(grid, (0, 0, 0))
        self.assertFalse(check.win)
        self.assertEqual(check.matches, 2)
        self.assertIsNone(check.symbol)
        self.assertEqual(self.evaluator.evaluate(grid, PAYLINES, 10).total_payout, 0)

    def test_run_must_start_at_first_column(self):
        grid = [
            [LEMON, CHERRY, CHERRY],
            [ORANGE, GRAPES, LEMON],
            [GRAPES, LEMON, ORANGE],
        ]
        check = self.evaluator.check_line(grid, (0, 0, 0))
        self.assertEqual(check.matches, 1)
        self.assertFalse(check.win)

    def test_overlapping_lines_all_pay(self):
        grid = [[STAR] * 3 for _ in range(3)]
        result = self.evaluator.evaluate(grid, PAYLINES, 2)
        self.assertEqual(result.winning_lines, [0, 1, 2, 3, 4])
        self.assertEqual(result.total_payout, 5 * 100 * 2)

    def test_diagonals(self):
        grid = [
            [GRAPES, CHERRY, ORANGE],
            [LEMON, GRAPES, CHERRY],
            [ORANGE, LEMON, GRAPES],
        ]
        result = self.evaluator.evaluate(grid, PAYLINES, 3)
        self.assertEqual(result.winning_lines, [3])
        self.assertEqual(result.total_payout, 8 * 3)

    def test_winning_lines_follow_caller_order(self):
        grid = [
            [CHERRY, CHERRY, CHERRY],
            [LEMON, LEMON, LEMON],
            [ORANGE, GRAPES, LEMON],
        ]
        result = self.evaluator.evaluate(grid, [(1, 1, 1), (2, 2, 2), (0, 0, 0)], 1)
        self.assertEqual(result.winning_lines, [0, 2])

    def test_matches_by_emoji_not_identity(self):
        lookalike = Symbol('🍒', 'Cherry copy', 3, 20)
        grid = [
            [CHERRY, lookalike, CHERRY],
            [LEMON, ORANGE, GRAPES],
            [ORANGE, GRAPES, LEMON],
        ]
        result = self.evaluator.evaluate(grid, [(0, 0, 0)], 1)
        self.assertEqual(result.winning_lines, [0])
        self.assertEqual(result.total_payout, 3)

    def test_payline_with_wrong_width_never_wins(self):
        grid = [[STAR] * 3 for _ in range(3)]
        self.assertFalse(self.evaluator.check_line(grid, (0, 0)).win)

    def test_payline_outside_grid_raises(self):
        grid = [[STAR] * 3 for _ in range(3)]
        with self.assertRaises(InvalidPaylineError):
            self.evaluator.evaluate(grid, [(0, 3, 0)], 1)

import unittest

from slot_machine.domain.entities.slot_symbols import DEFAULT_SYMBOLS, PAYLINES, SlotSymbols, Symbol
from slot_machine.domain.exceptions import UnknownSymbolError


class TestSlotSymbols(unittest.TestCase):

    def test_catalog_has_ten_symbols_in_fixed_order(self):
        self.assertEqual(len(DEFAULT_SYMBOLS), 10)
        self.assertEqual(DEFAULT_SYMBOLS[0].name, 'Cherry')
        self.assertEqual(DEFAULT_SYMBOLS[9].name, 'Star')
        self.assertEqual(DEFAULT_SYMBOLS.total_weight, 81)

    def test_jackpot_is_highest_multiplier_regardless_of_position(self):
        self.assertEqual(DEFAULT_SYMBOLS.jackpot.name, 'Star')

        shuffled = SlotSymbols(SYMBOLS=(
            Symbol('A', 'Top', 500, 1),
            Symbol('B', 'Low', 2, 10),
        ))
        self.assertEqual(shuffled.jackpot.emoji, 'A')

    def test_get_by_emoji(self):
        self.assertEqual(DEFAULT_SYMBOLS.get('🔔').name, 'Bell')
        self.assertEqual(DEFAULT_SYMBOLS.get('7️⃣').payout_multiplier, 50)

    def test_unknown_emoji_raises(self):
        with self.assertRaises(UnknownSymbolError):
            DEFAULT_SYMBOLS.get('🍀')

    def test_resolve_accepts_strings_dicts_and_symbols(self):
        cherry = DEFAULT_SYMBOLS.get('🍒')
        self.assertIs(DEFAULT_SYMBOLS.resolve('🍒'), cherry)
        self.assertIs(DEFAULT_SYMBOLS.resolve({'emoji': '🍒', 'value': 3}), cherry)
        self.assertIs(DEFAULT_SYMBOLS.resolve(Symbol('🍒', 'Cherry', 3, 20)), cherry)
        self.assertIsNone(DEFAULT_SYMBOLS.resolve('🍀'))
        self.assertIsNone(DEFAULT_SYMBOLS.resolve(42))

    def test_contains_rejects_lookalikes(self):
        self.assertTrue(DEFAULT_SYMBOLS.contains(DEFAULT_SYMBOLS.get('🍒')))
        self.assertFalse(DEFAULT_SYMBOLS.contains(Symbol('🍒', 'Fake Cherry', 999, 1)))

    def test_five_fixed_paylines(self):
        self.assertEqual(PAYLINES, ((0, 0, 0), (1, 1, 1), (2, 2, 2), (0, 1, 2), (2, 1, 0)))

    def test_paytable_is_camel_case(self):
        entry = DEFAULT_SYMBOLS.to_paytable()[0]
        self.assertEqual(entry, {'emoji': '🍒', 'name': 'Cherry', 'payoutMultiplier': 3, 'weight': 20})

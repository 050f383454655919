"""Weighted symbol sampler"""
from slot_machine.domain.entities.slot_symbols import DEFAULT_SYMBOLS, SlotSymbols, Symbol
from slot_machine.domain.services.random_source import RandomSource


class WeightedSampler:
    """Draws catalog symbols in proportion to their weights"""

    def __init__(self, rng: RandomSource, slot_symbols: SlotSymbols = None):
        self.rng = rng
        self.slot_symbols = slot_symbols or DEFAULT_SYMBOLS

    def sample(self) -> Symbol:
        remaining = self.rng.next() * self.slot_symbols.total_weight

        for symbol in self.slot_symbols:
            remaining -= symbol.weight
            if remaining <= 0:
                return symbol

        # Only reachable through float rounding
        return self.slot_symbols[0]

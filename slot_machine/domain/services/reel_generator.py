"""Reel grid generation"""
import logging
from typing import Optional, Sequence

from slot_machine.domain.entities.slot_symbols import DEFAULT_SYMBOLS, PAYLINES, Grid, SlotSymbols, Symbol
from slot_machine.domain.services.random_source import RandomSource
from slot_machine.domain.services.weighted_sampler import WeightedSampler

logger = logging.getLogger(__name__)


class ReelGenerator:
    """Produces a reel grid, honouring cheat overrides before plain sampling"""

    def __init__(
        self,
        rng: RandomSource,
        slot_symbols: SlotSymbols = None,
        paylines: Sequence[Sequence[int]] = PAYLINES
    ):
        self.rng = rng
        self.slot_symbols = slot_symbols or DEFAULT_SYMBOLS
        self.paylines = paylines
        self.sampler = WeightedSampler(rng, self.slot_symbols)

    def generate(
        self,
        rows: int = 3,
        cols: int = 3,
        win_rate: float = 0.3,
        force_symbols: Optional[Sequence[Optional[Symbol]]] = None,
        always_jackpot: bool = False
    ) -> Grid:
        if always_jackpot:
            jackpot = self.slot_symbols.jackpot
            return [[jackpot] * cols for _ in range(rows)]

        if force_symbols:
            results = self._random_grid(rows, cols)
            middle = rows // 2
            for col, symbol in enumerate(force_symbols[:cols]):
                if symbol is not None:
                    results[middle][col] = symbol
            return results

        should_win = self.rng.next() < win_rate

        if should_win:
            results = self._random_grid(rows, cols)
            payline = self.paylines[self.rng.randrange(len(self.paylines))]
            winning_symbol = self.slot_symbols[self.rng.randrange(len(self.slot_symbols))]
            for col, row in enumerate(payline):
                results[row][col] = winning_symbol
            logger.debug(f"Forced win of {winning_symbol.name} on payline {list(payline)}")
            return results

        return self._random_grid(rows, cols)

    def _random_grid(self, rows: int, cols: int) -> Grid:
        return [[self.sampler.sample() for _ in range(cols)] for _ in range(rows)]

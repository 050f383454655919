"""Payline evaluation and payout calculation"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from slot_machine.domain.entities.slot_symbols import Grid, Symbol
from slot_machine.domain.exceptions import InvalidPaylineError


@dataclass
class LineCheck:
    """Outcome of checking one payline"""

    win: bool
    symbol: Optional[Symbol]
    matches: int


@dataclass
class EvaluationResult:
    """Winning payline indices and the summed payout"""

    winning_lines: List[int] = field(default_factory=list)
    total_payout: int = 0

    @property
    def win(self) -> bool:
        return self.total_payout > 0


class PaylineEvaluator:
    """Checks paylines left to right; only a full-width run pays"""

    def check_line(self, grid: Grid, payline: Sequence[int]) -> LineCheck:
        cols = len(grid[0])
        if len(payline) != cols:
            return LineCheck(win=False, symbol=None, matches=0)

        rows = len(grid)
        if any(row < 0 or row >= rows for row in payline):
            raise InvalidPaylineError(payline, rows)

        anchor = grid[payline[0]][0]
        matches = 1
        for col in range(1, cols):
            if grid[payline[col]][col].emoji != anchor.emoji:
                break
            matches += 1

        win = matches == cols
        return LineCheck(win=win, symbol=anchor if win else None, matches=matches)

    def evaluate(self, grid: Grid, paylines: Sequence[Sequence[int]], line_bet: int) -> EvaluationResult:
        result = EvaluationResult()
        for index, payline in enumerate(paylines):
            check = self.check_line(grid, payline)
            if check.win:
                result.winning_lines.append(index)
                result.total_payout += check.symbol.payout_multiplier * line_bet
        return result

"""Slot machine symbols configuration"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from slot_machine.domain.exceptions import UnknownSymbolError


@dataclass(frozen=True)
class Symbol:
    """A reel symbol with its payout multiplier and relative draw weight"""

    emoji: str
    name: str
    payout_multiplier: int
    weight: int

    def to_dict(self) -> dict:
        """Convert to camelCase dictionary"""
        return {
            "emoji": self.emoji,
            "name": self.name,
            "payoutMultiplier": self.payout_multiplier,
            "weight": self.weight
        }


GRID_ROWS = 3
GRID_COLS = 3

# Top row, middle row, bottom row, then the two diagonals
PAYLINES: Tuple[Tuple[int, ...], ...] = (
    (0, 0, 0),
    (1, 1, 1),
    (2, 2, 2),
    (0, 1, 2),
    (2, 1, 0),
)

Grid = List[List[Symbol]]


@dataclass
class SlotSymbols:
    """Slot machine symbol catalog with weights and multipliers"""

    SYMBOLS: Tuple[Symbol, ...] = field(default=None)

    def __post_init__(self):
        if self.SYMBOLS is None:
            # Weights are relative frequencies, the Star is the jackpot
            self.SYMBOLS = (
                Symbol('🍒', 'Cherry', 3, 20),
                Symbol('🍋', 'Lemon', 4, 15),
                Symbol('🍊', 'Orange', 5, 12),
                Symbol('🍇', 'Grapes', 8, 10),
                Symbol('🍉', 'Watermelon', 10, 8),
                Symbol('🔔', 'Bell', 15, 6),
                Symbol('💎', 'Diamond', 20, 4),
                Symbol('💰', 'Money Bag', 25, 3),
                Symbol('7️⃣', 'Seven', 50, 2),
                Symbol('🌟', 'Star', 100, 1),
            )
        self._by_emoji: Dict[str, Symbol] = {s.emoji: s for s in self.SYMBOLS}

    def __iter__(self):
        return iter(self.SYMBOLS)

    def __len__(self) -> int:
        return len(self.SYMBOLS)

    def __getitem__(self, index: int) -> Symbol:
        return self.SYMBOLS[index]

    @property
    def total_weight(self) -> int:
        return sum(s.weight for s in self.SYMBOLS)

    @property
    def jackpot(self) -> Symbol:
        """The highest-paying symbol, wherever it sits in the catalog"""
        return max(self.SYMBOLS, key=lambda s: s.payout_multiplier)

    def get(self, emoji: str) -> Symbol:
        """Look up a catalog symbol by emoji"""
        try:
            return self._by_emoji[emoji]
        except KeyError:
            raise UnknownSymbolError(emoji) from None

    def contains(self, symbol: Symbol) -> bool:
        return self._by_emoji.get(symbol.emoji) == symbol

    def resolve(self, value: Any) -> Optional[Symbol]:
        """Resolve an emoji string or symbol dict to a catalog symbol.

        Anything that does not name a catalog symbol resolves to None.
        """
        if isinstance(value, Symbol):
            return self._by_emoji.get(value.emoji)
        if isinstance(value, dict):
            value = value.get('emoji')
        if isinstance(value, str):
            return self._by_emoji.get(value)
        return None

    def to_paytable(self) -> List[dict]:
        return [s.to_dict() for s in self.SYMBOLS]


DEFAULT_SYMBOLS = SlotSymbols()

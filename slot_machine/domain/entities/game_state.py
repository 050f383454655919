"""Game state entities"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from slot_machine.domain.entities.slot_symbols import PAYLINES, Grid, Symbol

DEFAULT_CREDITS = 1000
DEFAULT_WIN_RATE = 0.3
MIN_LINE_BET = 1
MAX_LINE_BET = 100


class SpinPhase(str, Enum):
    """Spin lifecycle phase"""
    IDLE = "idle"
    SPINNING = "spinning"
    SETTLING = "settling"


@dataclass(frozen=True)
class Stats:
    """Session counters"""

    total_spins: int = 0
    total_wins: int = 0
    total_losses: int = 0
    biggest_win: int = 0
    total_won: int = 0
    total_lost: int = 0
    has_cheated: bool = False

    @property
    def win_percentage(self) -> int:
        if not self.total_spins:
            return 0
        return round(self.total_wins / self.total_spins * 100)


@dataclass(frozen=True)
class CheatConfig:
    """Demo overrides for the reel generator"""

    enabled: bool = False
    win_rate: float = DEFAULT_WIN_RATE
    # Middle row overrides by column, None leaves the column alone
    force_symbols: Optional[Tuple[Optional[Symbol], ...]] = None
    always_jackpot: bool = False


@dataclass(frozen=True)
class GameState:
    """Domain entity holding everything a slot session owns"""

    credits: int = DEFAULT_CREDITS
    line_bet: int = MIN_LINE_BET
    phase: SpinPhase = SpinPhase.IDLE
    last_win: int = 0
    reels: Optional[Grid] = None
    active_paylines: Tuple[int, ...] = ()
    auto_spin: bool = False
    win_animation_active: bool = False
    stats: Stats = field(default_factory=Stats)
    cheats: CheatConfig = field(default_factory=CheatConfig)
    settings: Dict[str, Any] = field(default_factory=dict)
    current_win_rate: float = DEFAULT_WIN_RATE
    paylines: Tuple[Tuple[int, ...], ...] = PAYLINES

    @property
    def total_bet(self) -> int:
        return self.line_bet * len(self.paylines)

    @property
    def spinning(self) -> bool:
        return self.phase != SpinPhase.IDLE

    @property
    def can_spin(self) -> bool:
        return not self.spinning and self.credits >= self.total_bet

    def generator_params(self) -> Dict[str, Any]:
        """Reel generator arguments for the next spin"""
        if self.cheats.enabled:
            return {
                "win_rate": self.cheats.win_rate,
                "force_symbols": self.cheats.force_symbols,
                "always_jackpot": self.cheats.always_jackpot
            }
        return {
            "win_rate": self.current_win_rate,
            "force_symbols": None,
            "always_jackpot": False
        }

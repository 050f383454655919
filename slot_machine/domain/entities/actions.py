"""Game actions accepted by the transition function"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from slot_machine.domain.entities.game_state import GameState
from slot_machine.domain.entities.slot_symbols import Symbol


class GameAction:
    """Base class for actions"""


@dataclass(frozen=True)
class StartSpin(GameAction):
    pass


@dataclass(frozen=True)
class BeginSettling(GameAction):
    pass


@dataclass(frozen=True)
class SettleSpin(GameAction):
    pass


@dataclass(frozen=True)
class AbandonSpin(GameAction):
    """Return a failed settle to idle; the debit stands"""


@dataclass(frozen=True)
class SetLineBet(GameAction):
    line_bet: float


@dataclass(frozen=True)
class SetCredits(GameAction):
    credits: int


@dataclass(frozen=True)
class AddCredits(GameAction):
    amount: int


@dataclass(frozen=True)
class ToggleAutoSpin(GameAction):
    pass


@dataclass(frozen=True)
class SetAutoSpin(GameAction):
    enabled: bool


@dataclass(frozen=True)
class ToggleCheats(GameAction):
    pass


@dataclass(frozen=True)
class SetWinRate(GameAction):
    win_rate: float


@dataclass(frozen=True)
class SetForceSymbols(GameAction):
    symbols: Optional[Sequence[Optional[Symbol]]]


@dataclass(frozen=True)
class SetAlwaysJackpot(GameAction):
    enabled: bool


@dataclass(frozen=True)
class ResetStats(GameAction):
    pass


@dataclass(frozen=True)
class UpdateSettings(GameAction):
    values: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RestoreSnapshot(GameAction):
    state: GameState

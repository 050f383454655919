"""Cheat settings request DTO"""
import math
from dataclasses import dataclass
from typing import Any, List, Optional

from slot_machine.domain.entities import actions
from slot_machine.domain.entities.slot_symbols import SlotSymbols


def optional_flag(data: dict, key: str) -> Optional[bool]:
    """Read a JSON boolean; anything but true, false or null is rejected"""
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"'{key}' must be a boolean")
    return value


def _optional_rate(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError("'win_rate' must be a finite number")
    return float(value)


@dataclass
class CheatsRequest:
    """Request DTO for cheat changes; only the fields sent are applied"""

    enabled: Optional[bool] = None
    win_rate: Optional[float] = None
    force_symbols: Optional[List[Optional[str]]] = None
    clear_force_symbols: bool = False
    always_jackpot: Optional[bool] = None

    @classmethod
    def from_snake_case(cls, data: dict) -> 'CheatsRequest':
        """Create from snake_case dictionary (REST API)"""
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        force_symbols = data.get('force_symbols')
        if force_symbols is not None and not isinstance(force_symbols, list):
            raise ValueError("'force_symbols' must be a list of emoji or null")
        return cls(
            enabled=optional_flag(data, 'enabled'),
            win_rate=_optional_rate(data.get('win_rate')),
            force_symbols=force_symbols,
            clear_force_symbols='force_symbols' in data and force_symbols is None,
            always_jackpot=optional_flag(data, 'always_jackpot')
        )

    def to_actions(self, current_enabled: bool, slot_symbols: SlotSymbols) -> List[actions.GameAction]:
        """Translate into tagged cheat actions"""
        result: List[actions.GameAction] = []
        if self.enabled is not None and self.enabled != current_enabled:
            result.append(actions.ToggleCheats())
        if self.win_rate is not None:
            result.append(actions.SetWinRate(self.win_rate))
        if self.force_symbols is not None:
            symbols = [slot_symbols.get(e) if e is not None else None for e in self.force_symbols]
            result.append(actions.SetForceSymbols(symbols))
        elif self.clear_force_symbols:
            result.append(actions.SetForceSymbols(None))
        if self.always_jackpot is not None:
            result.append(actions.SetAlwaysJackpot(self.always_jackpot))
        return result

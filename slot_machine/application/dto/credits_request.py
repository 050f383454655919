"""Credits request DTO"""
import math
from dataclasses import dataclass
from typing import Any, Optional

from slot_machine.domain.entities import actions

# Settings panel shortcuts; each one sets the balance outright
CREDIT_PRESETS = {
    '1k': 1000,
    '10k': 10000,
    '100k': 100000,
    'millionaire': 1000000,
}


def _optional_amount(data: dict, key: str) -> Optional[int]:
    value: Any = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"'{key}' must be a finite number")
    return int(value)


@dataclass
class CreditsRequest:
    """Request DTO for setting credits, applying a preset or topping up"""

    credits: Optional[int] = None
    add: Optional[int] = None

    @classmethod
    def from_snake_case(cls, data: dict) -> 'CreditsRequest':
        """Create from snake_case dictionary (REST API)"""
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")

        preset = data.get('preset')
        if preset is not None:
            if preset not in CREDIT_PRESETS:
                raise ValueError(f"Unknown credits preset: {preset!r}")
            return cls(credits=CREDIT_PRESETS[preset])

        credits = _optional_amount(data, 'credits')
        add = _optional_amount(data, 'add')
        if credits is None and add is None:
            raise ValueError("One of 'credits', 'preset' or 'add' is required")
        return cls(credits=credits, add=add)

    def to_action(self) -> actions.GameAction:
        if self.credits is not None:
            return actions.SetCredits(self.credits)
        return actions.AddCredits(self.add)

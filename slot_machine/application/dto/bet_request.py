"""Line bet request DTO"""
import math
from dataclasses import dataclass

from slot_machine.domain.entities import actions


@dataclass
class BetRequest:
    """Request DTO for a line bet change; out-of-range values are clamped later"""

    line_bet: float

    @classmethod
    def from_snake_case(cls, data: dict) -> 'BetRequest':
        """Create from snake_case dictionary (REST API)"""
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        if 'line_bet' not in data:
            raise ValueError("'line_bet' is required")
        line_bet = data['line_bet']
        if isinstance(line_bet, bool) or not isinstance(line_bet, (int, float)):
            raise ValueError("'line_bet' must be a number")
        if isinstance(line_bet, float) and math.isnan(line_bet):
            raise ValueError("'line_bet' must be a number")
        return cls(line_bet=line_bet)

    def to_action(self) -> actions.GameAction:
        return actions.SetLineBet(self.line_bet)

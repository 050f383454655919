"""Auto-spin request DTO"""
from dataclasses import dataclass
from typing import Optional

from slot_machine.application.dto.cheats_request import optional_flag
from slot_machine.domain.entities import actions


@dataclass
class AutoSpinRequest:
    """Request DTO for auto-spin; no flag means toggle"""

    enabled: Optional[bool] = None

    @classmethod
    def from_snake_case(cls, data: dict) -> 'AutoSpinRequest':
        """Create from snake_case dictionary (REST API)"""
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return cls(enabled=optional_flag(data, 'enabled'))

    def to_action(self) -> actions.GameAction:
        if self.enabled is None:
            return actions.ToggleAutoSpin()
        return actions.SetAutoSpin(self.enabled)

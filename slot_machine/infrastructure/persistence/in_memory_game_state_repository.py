"""In-memory game state repository implementation"""
import copy
from typing import Any, Dict, Optional

from slot_machine.application.ports.game_state_repository_port import GameStateRepositoryPort


class InMemoryGameStateRepository(GameStateRepositoryPort):
    """Keeps snapshots in a dict; used when no database is configured"""

    def __init__(self):
        self.snapshots: Dict[str, Dict[str, Any]] = {}

    def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        snapshot = self.snapshots.get(session_id)
        return copy.deepcopy(snapshot) if snapshot is not None else None

    def save(self, session_id: str, snapshot: Dict[str, Any]) -> None:
        self.snapshots[session_id] = copy.deepcopy(snapshot)

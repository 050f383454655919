"""Game state repository port (interface)"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class GameStateRepositoryPort(ABC):
    """Port for session snapshot persistence"""

    @abstractmethod
    def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Load the stored snapshot, None when the session is new"""
        pass

    @abstractmethod
    def save(self, session_id: str, snapshot: Dict[str, Any]) -> None:
        """Store a snapshot, replacing any previous one"""
        pass

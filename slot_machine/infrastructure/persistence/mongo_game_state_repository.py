"""MongoDB game state repository implementation"""
import time
import logging
from typing import Any, Dict, Optional
from pymongo.database import Database

from slot_machine.application.ports.game_state_repository_port import GameStateRepositoryPort

logger = logging.getLogger(__name__)


class MongoGameStateRepository(GameStateRepositoryPort):
    """MongoDB implementation of game state repository"""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.game_sessions

    def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Load the snapshot stored for a session"""
        document = self.collection.find_one({"session_id": session_id})
        if not document:
            return None
        return document.get("snapshot")

    def save(self, session_id: str, snapshot: Dict[str, Any]) -> None:
        """Upsert the session snapshot"""
        self.collection.replace_one(
            {"session_id": session_id},
            {
                "session_id": session_id,
                "snapshot": snapshot,
                "updated_at": time.time()
            },
            upsert=True
        )
        logger.debug(f"Saved snapshot for session {session_id}")

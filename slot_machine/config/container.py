"""Dependency Injection Container"""
import os
import logging
from pymongo import MongoClient

from slot_machine.application.use_cases.game_session_use_case import (
    AUTO_SPIN_DELAY,
    SPIN_RESOLVE_DELAY,
    GameSessionUseCase,
)
from slot_machine.application.use_cases.save_file_use_case import SaveFileUseCase
from slot_machine.domain.entities.game_state import DEFAULT_CREDITS
from slot_machine.domain.services.game_reducer import GameReducer
from slot_machine.domain.services.random_source import NumpyRandomSource
from slot_machine.infrastructure.messaging.rabbitmq_message_publisher import RabbitMQMessagePublisher
from slot_machine.infrastructure.persistence.in_memory_game_state_repository import InMemoryGameStateRepository
from slot_machine.infrastructure.persistence.mongo_game_state_repository import MongoGameStateRepository
from slot_machine.infrastructure.scheduling.tornado_scheduler import TornadoScheduler

logger = logging.getLogger(__name__)


class Container:
    """Simple DI Container for the slot machine"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize all dependencies"""
        # Persistence: in-memory unless MongoDB is requested
        persistence = os.environ.get('PERSISTENCE', 'memory').lower()
        if persistence == 'mongo':
            mongo_url = os.environ.get('MONGODB_URL', 'mongodb://localhost:27017')
            self.mongo_client = MongoClient(mongo_url)
            self.db = self.mongo_client[os.environ.get('MONGODB_DATABASE', 'slot_machine')]
            self.game_state_repository = MongoGameStateRepository(self.db)
        else:
            self.mongo_client = None
            self.game_state_repository = InMemoryGameStateRepository()
        logger.info(f"Using {persistence} persistence")

        # Spin events (optional)
        enable_events = os.environ.get('ENABLE_EVENTS', 'false').lower() == 'true'
        self.message_publisher = RabbitMQMessagePublisher() if enable_events else None

        seed = os.environ.get('RNG_SEED')
        self.random_source = NumpyRandomSource(int(seed) if seed else None)
        self.reducer = GameReducer(self.random_source)
        self.scheduler = TornadoScheduler()

        # Use cases
        self.session_use_case = GameSessionUseCase(
            repository=self.game_state_repository,
            scheduler=self.scheduler,
            reducer=self.reducer,
            session_id=os.environ.get('SESSION_ID', 'default'),
            message_publisher=self.message_publisher,
            resolve_delay=float(os.environ.get('SPIN_RESOLVE_DELAY', SPIN_RESOLVE_DELAY)),
            auto_spin_delay=float(os.environ.get('AUTO_SPIN_DELAY', AUTO_SPIN_DELAY)),
            starting_credits=int(os.environ.get('STARTING_CREDITS', DEFAULT_CREDITS))
        )
        self.save_file_use_case = SaveFileUseCase(self.session_use_case)

    @classmethod
    def get_instance(cls) -> 'Container':
        """Get singleton instance"""
        return cls()

    def get_session_use_case(self) -> GameSessionUseCase:
        """Get game session use case"""
        return self.session_use_case

    def get_save_file_use_case(self) -> SaveFileUseCase:
        """Get save file use case"""
        return self.save_file_use_case

    def shutdown(self):
        """Cancel pending spins and close connections"""
        self.session_use_case.close()
        if self.message_publisher:
            self.message_publisher.close()
        if self.mongo_client:
            self.mongo_client.close()

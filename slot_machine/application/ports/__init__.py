from .game_state_repository_port import GameStateRepositoryPort
from .message_publisher_port import MessagePublisherPort
from .scheduler_port import SchedulerPort

__all__ = [
    'GameStateRepositoryPort',
    'MessagePublisherPort',
    'SchedulerPort'
]

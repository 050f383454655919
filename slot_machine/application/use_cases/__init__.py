from .game_session_use_case import GameSessionUseCase
from .save_file_use_case import SaveFileUseCase

__all__ = [
    'GameSessionUseCase',
    'SaveFileUseCase'
]

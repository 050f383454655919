from .game_state_response import GameStateResponse
from .auto_spin_request import AutoSpinRequest
from .bet_request import BetRequest
from .cheats_request import CheatsRequest
from .credits_request import CreditsRequest

__all__ = [
    'GameStateResponse',
    'AutoSpinRequest',
    'BetRequest',
    'CheatsRequest',
    'CreditsRequest'
]

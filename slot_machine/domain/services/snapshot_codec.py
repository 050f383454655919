"""Persistence snapshot encoding

Snapshots are camelCase dicts holding only the settled fields of a session.
Decoding is lenient: missing or malformed numbers fall back to defaults and a
restored session is always idle.
"""
import math
from typing import Any, Dict, Optional, Tuple

from slot_machine.domain.entities.game_state import (
    DEFAULT_CREDITS,
    DEFAULT_WIN_RATE,
    CheatConfig,
    GameState,
    SpinPhase,
    Stats,
)
from slot_machine.domain.entities.slot_symbols import DEFAULT_SYMBOLS, GRID_COLS, SlotSymbols, Symbol
from slot_machine.domain.services.game_reducer import clamp_line_bet

STAT_FIELDS = (
    ("totalSpins", "total_spins"),
    ("totalWins", "total_wins"),
    ("totalLosses", "total_losses"),
    ("biggestWin", "biggest_win"),
    ("totalWon", "total_won"),
    ("totalLost", "total_lost"),
)


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any, default: int = 0) -> int:
    number = _to_number(value)
    return default if number is None else int(number)


def _to_rate(value: Any, default: float = DEFAULT_WIN_RATE) -> float:
    number = _to_number(value)
    if number is None or not 0.0 <= number <= 1.0:
        return default
    return number


def to_snapshot(state: GameState) -> Dict[str, Any]:
    """Encode the persistable part of a game state"""
    stats = state.stats
    cheats = state.cheats
    force_symbols = None
    if cheats.force_symbols is not None:
        force_symbols = [s.to_dict() if s is not None else None for s in cheats.force_symbols]

    return {
        "credits": state.credits,
        "lineBet": state.line_bet,
        "totalBet": state.total_bet,
        "stats": {
            "totalSpins": stats.total_spins,
            "totalWins": stats.total_wins,
            "totalLosses": stats.total_losses,
            "biggestWin": stats.biggest_win,
            "totalWon": stats.total_won,
            "totalLost": stats.total_lost,
            "hasCheated": stats.has_cheated or cheats.enabled
        },
        "cheats": {
            "enabled": cheats.enabled,
            "winRate": cheats.win_rate,
            "forceSymbols": force_symbols,
            "alwaysJackpot": cheats.always_jackpot
        },
        "settings": dict(state.settings),
        "currentWinRate": state.current_win_rate
    }


def _decode_force_symbols(value: Any, slot_symbols: SlotSymbols) -> Optional[Tuple[Optional[Symbol], ...]]:
    if not isinstance(value, list) or not value:
        return None
    symbols = tuple(slot_symbols.resolve(item) for item in value[:GRID_COLS])
    if all(s is None for s in symbols):
        return None
    return symbols


def from_snapshot(data: Dict[str, Any], slot_symbols: SlotSymbols = None) -> GameState:
    """Decode a snapshot into an idle game state"""
    slot_symbols = slot_symbols or DEFAULT_SYMBOLS

    raw_stats = data.get("stats")
    if not isinstance(raw_stats, dict):
        raw_stats = {}
    raw_cheats = data.get("cheats")
    if not isinstance(raw_cheats, dict):
        raw_cheats = {}

    cheats_enabled = raw_cheats.get("enabled") is True
    cheats = CheatConfig(
        enabled=cheats_enabled,
        win_rate=_to_rate(raw_cheats.get("winRate")),
        force_symbols=_decode_force_symbols(raw_cheats.get("forceSymbols"), slot_symbols),
        always_jackpot=raw_cheats.get("alwaysJackpot") is True
    )

    stats = Stats(
        has_cheated=raw_stats.get("hasCheated") is True or cheats_enabled,
        **{attr: max(0, _to_int(raw_stats.get(key))) for key, attr in STAT_FIELDS}
    )

    # Older saves stored the line bet under "bet"
    line_bet = data.get("lineBet", data.get("bet"))
    settings = data.get("settings")

    return GameState(
        credits=max(0, _to_int(data.get("credits"), DEFAULT_CREDITS)),
        line_bet=clamp_line_bet(_to_int(line_bet, 1)),
        phase=SpinPhase.IDLE,
        stats=stats,
        cheats=cheats,
        settings=dict(settings) if isinstance(settings, dict) else {},
        current_win_rate=_to_rate(data.get("currentWinRate"))
    )

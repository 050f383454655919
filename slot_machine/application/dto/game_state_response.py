"""Game state response DTO"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from slot_machine.domain.entities.game_state import GameState


@dataclass
class GameStateResponse:
    """Response DTO describing a session"""

    credits: int
    line_bet: int
    total_bet: int
    phase: str
    last_win: int
    reels: Optional[List[List[str]]]
    active_paylines: List[int]
    auto_spin: bool
    win_animation_active: bool
    stats: Dict[str, Any]
    cheats: Dict[str, Any]
    settings: Dict[str, Any] = field(default_factory=dict)
    current_win_rate: float = 0.0

    @classmethod
    def from_state(cls, state: GameState) -> 'GameStateResponse':
        """Create from a domain game state"""
        stats = state.stats
        cheats = state.cheats
        force_symbols = None
        if cheats.force_symbols is not None:
            force_symbols = [s.emoji if s is not None else None for s in cheats.force_symbols]

        return cls(
            credits=state.credits,
            line_bet=state.line_bet,
            total_bet=state.total_bet,
            phase=state.phase.value,
            last_win=state.last_win,
            reels=[[s.emoji for s in row] for row in state.reels] if state.reels else None,
            active_paylines=list(state.active_paylines),
            auto_spin=state.auto_spin,
            win_animation_active=state.win_animation_active,
            stats={
                "total_spins": stats.total_spins,
                "total_wins": stats.total_wins,
                "total_losses": stats.total_losses,
                "biggest_win": stats.biggest_win,
                "total_won": stats.total_won,
                "total_lost": stats.total_lost,
                "has_cheated": stats.has_cheated,
                "win_percentage": stats.win_percentage
            },
            cheats={
                "enabled": cheats.enabled,
                "win_rate": cheats.win_rate,
                "force_symbols": force_symbols,
                "always_jackpot": cheats.always_jackpot
            },
            settings=dict(state.settings),
            current_win_rate=state.current_win_rate
        )

    def to_snake_case(self) -> dict:
        """Convert to snake_case dictionary (REST API)"""
        return {
            "credits": self.credits,
            "line_bet": self.line_bet,
            "total_bet": self.total_bet,
            "phase": self.phase,
            "spinning": self.phase != "idle",
            "last_win": self.last_win,
            "reels": self.reels,
            "active_paylines": self.active_paylines,
            "auto_spin": self.auto_spin,
            "win_animation_active": self.win_animation_active,
            "stats": self.stats,
            "cheats": self.cheats,
            "settings": self.settings,
            "current_win_rate": self.current_win_rate
        }

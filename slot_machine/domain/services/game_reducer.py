"""Game state transition function

Every change to a GameState goes through GameReducer.reduce, which returns a
new state and never mutates the one it was given. Randomness comes from the
injected RandomSource, so a fixed sequence replays a session exactly.
"""
import logging
from dataclasses import replace

from slot_machine.domain.entities import actions
from slot_machine.domain.entities.game_state import (
    MAX_LINE_BET,
    MIN_LINE_BET,
    GameState,
    SpinPhase,
    Stats,
)
from slot_machine.domain.entities.slot_symbols import (
    DEFAULT_SYMBOLS,
    GRID_COLS,
    GRID_ROWS,
    Grid,
    SlotSymbols,
)
from slot_machine.domain.exceptions import UnknownSymbolError
from slot_machine.domain.services.payline_evaluator import PaylineEvaluator
from slot_machine.domain.services.random_source import RandomSource
from slot_machine.domain.services.reel_generator import ReelGenerator

logger = logging.getLogger(__name__)

WIN_RATE_DRIFT_INTERVAL = 100
WIN_RATE_DRIFT_RANGE = (0.20, 0.40)


def clamp_line_bet(line_bet) -> int:
    # Clamp before int() so an infinite bet lands on a bound
    return int(max(MIN_LINE_BET, min(MAX_LINE_BET, line_bet)))


class GameReducer:
    """Applies actions to game state"""

    def __init__(self, rng: RandomSource, slot_symbols: SlotSymbols = None):
        self.rng = rng
        self.slot_symbols = slot_symbols or DEFAULT_SYMBOLS
        self.reel_generator = ReelGenerator(rng, self.slot_symbols)
        self.payline_evaluator = PaylineEvaluator()

    def reduce(self, state: GameState, action: actions.GameAction) -> GameState:
        if isinstance(action, actions.StartSpin):
            return self._handle_start_spin(state, action)
        elif isinstance(action, actions.BeginSettling):
            return self._handle_begin_settling(state, action)
        elif isinstance(action, actions.SettleSpin):
            return self._handle_settle_spin(state, action)
        elif isinstance(action, actions.AbandonSpin):
            return self._handle_abandon_spin(state, action)
        elif isinstance(action, actions.SetLineBet):
            return self._handle_set_line_bet(state, action)
        elif isinstance(action, actions.SetCredits):
            return self._handle_set_credits(state, action)
        elif isinstance(action, actions.AddCredits):
            return self._handle_add_credits(state, action)
        elif isinstance(action, actions.ToggleAutoSpin):
            return self._handle_toggle_auto_spin(state, action)
        elif isinstance(action, actions.SetAutoSpin):
            return self._handle_set_auto_spin(state, action)
        elif isinstance(action, actions.ToggleCheats):
            return self._handle_toggle_cheats(state, action)
        elif isinstance(action, actions.SetWinRate):
            return self._handle_set_win_rate(state, action)
        elif isinstance(action, actions.SetForceSymbols):
            return self._handle_set_force_symbols(state, action)
        elif isinstance(action, actions.SetAlwaysJackpot):
            return self._handle_set_always_jackpot(state, action)
        elif isinstance(action, actions.ResetStats):
            return self._handle_reset_stats(state, action)
        elif isinstance(action, actions.UpdateSettings):
            return self._handle_update_settings(state, action)
        elif isinstance(action, actions.RestoreSnapshot):
            return self._handle_restore_snapshot(state, action)

        logger.warning(f"Ignoring unknown action {action!r}")
        return state

    # Spin lifecycle

    def _handle_start_spin(self, state: GameState, action: actions.StartSpin) -> GameState:
        if not state.can_spin:
            logger.debug(
                f"Spin rejected: phase={state.phase.value} credits={state.credits} total_bet={state.total_bet}"
            )
            return state
        return replace(
            state,
            credits=state.credits - state.total_bet,
            phase=SpinPhase.SPINNING,
            active_paylines=(),
            win_animation_active=False
        )

    def _handle_begin_settling(self, state: GameState, action: actions.BeginSettling) -> GameState:
        if state.phase != SpinPhase.SPINNING:
            return state
        return replace(state, phase=SpinPhase.SETTLING)

    def _handle_settle_spin(self, state: GameState, action: actions.SettleSpin) -> GameState:
        if state.phase != SpinPhase.SETTLING:
            return state

        reels = self.reel_generator.generate(GRID_ROWS, GRID_COLS, **state.generator_params())
        if not state.cheats.enabled:
            self._check_catalog(reels)

        result = self.payline_evaluator.evaluate(reels, state.paylines, state.line_bet)
        payout = result.total_payout
        stats = self._record_spin(state.stats, payout, state.total_bet)

        current_win_rate = state.current_win_rate
        if not state.cheats.enabled and stats.total_spins % WIN_RATE_DRIFT_INTERVAL == 0:
            current_win_rate = self.rng.uniform(*WIN_RATE_DRIFT_RANGE)
            logger.info(f"Win rate drifted to {current_win_rate:.3f} after {stats.total_spins} spins")

        return replace(
            state,
            phase=SpinPhase.IDLE,
            reels=reels,
            active_paylines=tuple(result.winning_lines),
            last_win=payout,
            credits=state.credits + payout,
            win_animation_active=payout > 0,
            stats=stats,
            current_win_rate=current_win_rate
        )

    def _handle_abandon_spin(self, state: GameState, action: actions.AbandonSpin) -> GameState:
        if not state.spinning:
            return state
        return replace(state, phase=SpinPhase.IDLE)

    def _record_spin(self, stats: Stats, payout: int, total_bet: int) -> Stats:
        if payout > 0:
            return replace(
                stats,
                total_spins=stats.total_spins + 1,
                total_wins=stats.total_wins + 1,
                total_won=stats.total_won + payout,
                biggest_win=max(stats.biggest_win, payout)
            )
        return replace(
            stats,
            total_spins=stats.total_spins + 1,
            total_losses=stats.total_losses + 1,
            total_lost=stats.total_lost + total_bet
        )

    def _check_catalog(self, reels: Grid) -> None:
        for row in reels:
            for symbol in row:
                if not self.slot_symbols.contains(symbol):
                    raise UnknownSymbolError(symbol.emoji)

    # Money and bet

    def _handle_set_line_bet(self, state: GameState, action: actions.SetLineBet) -> GameState:
        if state.spinning:
            return state
        return replace(state, line_bet=clamp_line_bet(action.line_bet))

    def _handle_set_credits(self, state: GameState, action: actions.SetCredits) -> GameState:
        if state.spinning or action.credits < 0:
            return state
        return replace(state, credits=int(action.credits))

    def _handle_add_credits(self, state: GameState, action: actions.AddCredits) -> GameState:
        if state.spinning or action.amount <= 0:
            return state
        return replace(state, credits=state.credits + int(action.amount))

    # Auto-spin

    def _handle_toggle_auto_spin(self, state: GameState, action: actions.ToggleAutoSpin) -> GameState:
        return replace(state, auto_spin=not state.auto_spin)

    def _handle_set_auto_spin(self, state: GameState, action: actions.SetAutoSpin) -> GameState:
        return replace(state, auto_spin=bool(action.enabled))

    # Cheats

    def _handle_toggle_cheats(self, state: GameState, action: actions.ToggleCheats) -> GameState:
        enabled = not state.cheats.enabled
        stats = state.stats
        if enabled and not stats.has_cheated:
            stats = replace(stats, has_cheated=True)
        return replace(state, cheats=replace(state.cheats, enabled=enabled), stats=stats)

    def _handle_set_win_rate(self, state: GameState, action: actions.SetWinRate) -> GameState:
        win_rate = max(0.0, min(1.0, float(action.win_rate)))
        return self._change_cheats(state, win_rate=win_rate)

    def _handle_set_force_symbols(self, state: GameState, action: actions.SetForceSymbols) -> GameState:
        symbols = action.symbols
        if not symbols or all(s is None for s in symbols):
            force_symbols = None
        else:
            force_symbols = tuple(symbols[:GRID_COLS])
        return self._change_cheats(state, force_symbols=force_symbols)

    def _handle_set_always_jackpot(self, state: GameState, action: actions.SetAlwaysJackpot) -> GameState:
        return self._change_cheats(state, always_jackpot=bool(action.enabled))

    def _change_cheats(self, state: GameState, **changes) -> GameState:
        stats = state.stats
        if state.cheats.enabled and not stats.has_cheated:
            stats = replace(stats, has_cheated=True)
        return replace(state, cheats=replace(state.cheats, **changes), stats=stats)

    # Stats, settings and restore

    def _handle_reset_stats(self, state: GameState, action: actions.ResetStats) -> GameState:
        if state.spinning:
            return state
        return replace(state, stats=Stats(has_cheated=state.cheats.enabled))

    def _handle_update_settings(self, state: GameState, action: actions.UpdateSettings) -> GameState:
        return replace(state, settings={**state.settings, **action.values})

    def _handle_restore_snapshot(self, state: GameState, action: actions.RestoreSnapshot) -> GameState:
        if state.spinning:
            logger.debug("Restore rejected while a spin is in flight")
            return state
        return replace(action.state, phase=SpinPhase.IDLE, reels=state.reels, paylines=state.paylines)

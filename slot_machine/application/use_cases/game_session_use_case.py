"""Game session use case: spin lifecycle, auto-spin and persistence"""
import logging
import time
from typing import Any, Optional

import sentry_sdk
from sentry_sdk import start_span

from slot_machine.application.ports.game_state_repository_port import GameStateRepositoryPort
from slot_machine.application.ports.message_publisher_port import MessagePublisherPort
from slot_machine.application.ports.scheduler_port import SchedulerPort
from slot_machine.domain.entities import actions
from slot_machine.domain.entities.game_state import DEFAULT_CREDITS, GameState
from slot_machine.domain.exceptions import SlotMachineError
from slot_machine.domain.services.game_reducer import GameReducer
from slot_machine.domain.services.snapshot_codec import from_snapshot, to_snapshot
from slot_machine.metrics import BusinessMetrics

logger = logging.getLogger(__name__)

SPIN_RESOLVE_DELAY = 1.6
AUTO_SPIN_DELAY = 1.5

PENDING_RESOLVE = "resolve"
PENDING_AUTO_SPIN = "auto_spin"


class GameSessionUseCase:
    """Owns one slot session and sequences its spins.

    A spin debits the total bet immediately, resolves after a fixed delay and
    then, if auto-spin is on and funds remain, schedules the next one. At most
    one callback is pending at a time; only the auto-spin continuation can be
    cancelled, by switching auto-spin off.
    """

    def __init__(
        self,
        repository: GameStateRepositoryPort,
        scheduler: SchedulerPort,
        reducer: GameReducer,
        session_id: str = "default",
        message_publisher: Optional[MessagePublisherPort] = None,
        resolve_delay: float = SPIN_RESOLVE_DELAY,
        auto_spin_delay: float = AUTO_SPIN_DELAY,
        starting_credits: int = DEFAULT_CREDITS
    ):
        self.repository = repository
        self.scheduler = scheduler
        self.reducer = reducer
        self.session_id = session_id
        self.message_publisher = message_publisher
        self.resolve_delay = resolve_delay
        self.auto_spin_delay = auto_spin_delay

        self._pending: Any = None
        self._pending_kind: Optional[str] = None
        self.state = self._load_state(starting_credits)

    def _load_state(self, starting_credits: int) -> GameState:
        """Restore the session snapshot, or start fresh"""
        try:
            with start_span(op="db.load", description="Load game state") as span:
                snapshot = self.repository.load(self.session_id)
                span.set_data("found", snapshot is not None)
        except Exception as e:
            logger.error(f"Failed to load session {self.session_id}: {e}")
            sentry_sdk.capture_exception(e)
            snapshot = None

        if snapshot:
            logger.info(f"Restored session {self.session_id}")
            return from_snapshot(snapshot, self.reducer.slot_symbols)
        return GameState(credits=starting_credits)

    def execute(self, action: actions.GameAction) -> GameState:
        """Apply an action, routing spin and auto-spin requests through the lifecycle"""
        if isinstance(action, actions.StartSpin):
            self.request_spin()
        elif isinstance(action, (actions.ToggleAutoSpin, actions.SetAutoSpin)):
            self._change_auto_spin(action)
        else:
            self._apply(action)
        return self.state

    def request_spin(self) -> bool:
        """Start a spin if idle and funded. Returns whether it started."""
        if not self.state.can_spin:
            logger.debug(f"Spin request ignored for session {self.session_id}")
            return False

        # A manual spin replaces a pending auto-spin continuation
        self._cancel_pending(PENDING_AUTO_SPIN)
        self._apply(actions.StartSpin())
        self._schedule(PENDING_RESOLVE, self.resolve_delay, self._settle)
        return True

    def close(self) -> None:
        """Cancel whatever callback is pending"""
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
        self._pending = None
        self._pending_kind = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def _settle(self) -> None:
        self._pending = None
        self._pending_kind = None
        total_bet = self.state.total_bet

        with start_span(op="game.settle", description="Resolve spin") as span:
            self._apply(actions.BeginSettling())
            try:
                with start_span(op="game.rng", description="Generate and evaluate reels"):
                    settled = self.reducer.reduce(self.state, actions.SettleSpin())
            except SlotMachineError as e:
                logger.error(f"Spin resolution failed for session {self.session_id}: {e}")
                sentry_sdk.capture_exception(e)
                self._apply(actions.AbandonSpin())
                return
            self.state = settled
            span.set_data("payout", settled.last_win)
            span.set_data("winning_lines", list(settled.active_paylines))

        self._persist()
        BusinessMetrics.track_spin(total_bet, self.state.last_win, self.state.credits, self.state.current_win_rate)
        self._publish(total_bet)

        if self.state.auto_spin and self.state.credits >= self.state.total_bet:
            self._schedule(PENDING_AUTO_SPIN, self.auto_spin_delay, self._auto_continue)

    def _auto_continue(self) -> None:
        self._pending = None
        self._pending_kind = None
        if self.state.auto_spin:
            self.request_spin()

    def _change_auto_spin(self, action: actions.GameAction) -> None:
        was_on = self.state.auto_spin
        self._apply(action)

        if was_on and not self.state.auto_spin:
            self._cancel_pending(PENDING_AUTO_SPIN)
        elif not was_on and self.state.auto_spin and self.state.can_spin:
            self.request_spin()

    def _apply(self, action: actions.GameAction) -> None:
        self.state = self.reducer.reduce(self.state, action)
        if not self.state.spinning:
            self._persist()

    def _schedule(self, kind: str, delay: float, callback) -> None:
        self._pending = self.scheduler.call_later(delay, callback)
        self._pending_kind = kind

    def _cancel_pending(self, kind: str) -> None:
        if self._pending is not None and self._pending_kind == kind:
            self.scheduler.cancel(self._pending)
            self._pending = None
            self._pending_kind = None

    def _persist(self) -> None:
        """Save the settled state; never while a spin is in flight"""
        if self.state.spinning:
            return
        try:
            with start_span(op="db.save", description="Store game state") as span:
                span.set_data("session_id", self.session_id)
                self.repository.save(self.session_id, to_snapshot(self.state))
        except Exception as e:
            logger.error(f"Failed to persist session {self.session_id}: {e}")
            sentry_sdk.capture_exception(e)

    def _publish(self, total_bet: int) -> None:
        if not self.message_publisher:
            return
        with start_span(op="mq.publish", description="Publish spin result") as mq_span:
            try:
                self.message_publisher.publish_spin_result({
                    "session_id": self.session_id,
                    "reels": [[s.emoji for s in row] for row in self.state.reels],
                    "winning_lines": list(self.state.active_paylines),
                    "payout": self.state.last_win,
                    "total_bet": total_bet,
                    "credits": self.state.credits,
                    "timestamp": time.time()
                })
                mq_span.set_tag("mq.published", "true")
            except Exception as mq_error:
                logger.error(f"Failed to publish spin result: {mq_error}")
                mq_span.set_tag("mq.published", "false")
                sentry_sdk.capture_exception(mq_error)

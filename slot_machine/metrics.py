"""Business metrics for the slot machine"""
import logging

import sentry_sdk
from prometheus_client import Counter, Gauge

logger = logging.getLogger(__name__)

SPINS_TOTAL = Counter('slot_spins_total', 'Settled spins')
WINS_TOTAL = Counter('slot_wins_total', 'Settled spins with a payout')
CREDITS_WAGERED_TOTAL = Counter('slot_credits_wagered_total', 'Credits debited by spins')
CREDITS_PAID_TOTAL = Counter('slot_credits_paid_total', 'Credits paid out by winning spins')
CREDITS = Gauge('slot_credits', 'Current session credits')
CURRENT_WIN_RATE = Gauge('slot_current_win_rate', 'Effective win rate used by the reel generator')


class BusinessMetrics:
    """Records spin outcomes to Prometheus and the active Sentry transaction"""

    @staticmethod
    def track_spin(total_bet: int, payout: int, credits: int, win_rate: float) -> None:
        SPINS_TOTAL.inc()
        CREDITS_WAGERED_TOTAL.inc(total_bet)
        if payout > 0:
            WINS_TOTAL.inc()
            CREDITS_PAID_TOTAL.inc(payout)
        CREDITS.set(credits)
        CURRENT_WIN_RATE.set(win_rate)

        sentry_sdk.set_measurement("game.bet_amount", total_bet)
        sentry_sdk.set_measurement("game.payout", payout)
        sentry_sdk.set_measurement("game.new_balance", credits)
        sentry_sdk.set_tag("game.win", str(payout > 0))

from .handlers import (
    HealthHandler,
    MetricsHandler,
    StateHandler,
    SpinHandler,
    BetHandler,
    AutoSpinHandler,
    CheatsHandler,
    CreditsHandler,
    StatsResetHandler,
    SettingsHandler,
    PaytableHandler,
    SaveFileHandler
)

__all__ = [
    'HealthHandler',
    'MetricsHandler',
    'StateHandler',
    'SpinHandler',
    'BetHandler',
    'AutoSpinHandler',
    'CheatsHandler',
    'CreditsHandler',
    'StatsResetHandler',
    'SettingsHandler',
    'PaytableHandler',
    'SaveFileHandler'
]

"""
Slot Machine - Clean Architecture Entry Point

Serves the slot session over HTTP REST. Configuration comes from environment
variables, see slot_machine.config.container for the game settings.
"""
import os
import logging

import sentry_sdk
from tornado import web, ioloop
from sentry_sdk.integrations.tornado import TornadoIntegration

from slot_machine.application.use_cases.save_file_use_case import SaveFileUseCase
from slot_machine.config.container import Container
from slot_machine.presentation.http.handlers import (
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

logger = logging.getLogger(__name__)


def init_sentry():
    """Initialize Sentry from the environment"""
    version = os.environ.get('APP_VERSION', '1.0.0')
    sentry_sdk.init(
        dsn=os.environ.get('SENTRY_DSN'),
        integrations=[TornadoIntegration()],
        traces_sample_rate=float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '1.0')),
        environment=os.environ.get('SENTRY_ENVIRONMENT', 'development'),
        profiles_sample_rate=float(os.environ.get('SENTRY_PROFILES_SAMPLE_RATE', '0')),
        debug=os.environ.get('SENTRY_DEBUG', 'false').lower() == 'true',
        release=f"slot-machine@{version}"
    )


def make_app(session_use_case=None, save_file_use_case=None):
    """Create Tornado application bound to a game session"""
    if session_use_case is None:
        container = Container.get_instance()
        session_use_case = container.get_session_use_case()
        save_file_use_case = container.get_save_file_use_case()
    elif save_file_use_case is None:
        save_file_use_case = SaveFileUseCase(session_use_case)

    session_args = {"session_use_case": session_use_case}

    return web.Application([
        (r"/health", HealthHandler),
        (r"/metrics", MetricsHandler),
        (r"/state", StateHandler, session_args),
        (r"/spin", SpinHandler, session_args),
        (r"/bet", BetHandler, session_args),
        (r"/auto-spin", AutoSpinHandler, session_args),
        (r"/cheats", CheatsHandler, session_args),
        (r"/credits", CreditsHandler, session_args),
        (r"/stats/reset", StatsResetHandler, session_args),
        (r"/settings", SettingsHandler, session_args),
        (r"/paytable", PaytableHandler, session_args),
        (r"/save", SaveFileHandler, {"save_file_use_case": save_file_use_case}),
    ])


def main():
    logging.basicConfig(level=logging.INFO)
    init_sentry()

    app = make_app()
    port = int(os.environ.get('PORT', 8082))
    app.listen(port)

    logger.info(f"Slot machine started on :{port}")
    try:
        ioloop.IOLoop.current().start()
    finally:
        Container.get_instance().shutdown()


if __name__ == "__main__":
    main()

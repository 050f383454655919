"""HTTP REST handlers for the slot machine"""
import json
import logging
import sentry_sdk
from tornado import web
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from slot_machine.application.dto.auto_spin_request import AutoSpinRequest
from slot_machine.application.dto.bet_request import BetRequest
from slot_machine.application.dto.cheats_request import CheatsRequest
from slot_machine.application.dto.credits_request import CreditsRequest
from slot_machine.application.dto.game_state_response import GameStateResponse
from slot_machine.application.use_cases.game_session_use_case import GameSessionUseCase
from slot_machine.application.use_cases.save_file_use_case import SAVE_FILE_NAME, SaveFileUseCase
from slot_machine.domain.entities import actions
from slot_machine.domain.exceptions import InvalidSaveFileError, SlotMachineError

logger = logging.getLogger(__name__)


class HealthHandler(web.RequestHandler):
    """Health check endpoint"""

    def get(self):
        self.write({"status": "ok"})


class MetricsHandler(web.RequestHandler):
    """Prometheus metrics endpoint"""

    def get(self):
        self.set_header('Content-Type', CONTENT_TYPE_LATEST)
        self.write(generate_latest())


class SessionHandler(web.RequestHandler):
    """Base handler bound to the game session"""

    def initialize(self, session_use_case: GameSessionUseCase):
        self.session_use_case = session_use_case

    def _body(self) -> dict:
        if not self.request.body:
            return {}
        data = json.loads(self.request.body)
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return data

    def _state_dict(self) -> dict:
        return GameStateResponse.from_state(self.session_use_case.state).to_snake_case()

    def _run(self, op: str, fn):
        """Run fn inside a transaction, mapping bad input to 400"""
        with sentry_sdk.start_transaction(op=op, name=self.request.path):
            try:
                fn()
            except (ValueError, TypeError, OverflowError, SlotMachineError) as e:
                # json.JSONDecodeError is a ValueError
                logger.info(f"Rejected {self.request.method} {self.request.path}: {e}")
                self.set_status(400)
                self.write({"error": str(e)})
            except Exception as e:
                logger.error(f"Request {self.request.path} failed: {e}")
                sentry_sdk.capture_exception(e)
                self.set_status(500)
                self.write({"error": str(e)})


class StateHandler(SessionHandler):
    """GET /state - Current session state"""

    def get(self):
        self.write(self._state_dict())


class SpinHandler(SessionHandler):
    """POST /spin - Request a spin"""

    async def post(self):
        def spin():
            accepted = self.session_use_case.request_spin()
            self.write({"accepted": accepted, "state": self._state_dict()})

        self._run("game.spin", spin)


class BetHandler(SessionHandler):
    """POST /bet - Change the line bet"""

    async def post(self):
        def change_bet():
            request = BetRequest.from_snake_case(self._body())
            self.session_use_case.execute(request.to_action())
            self.write(self._state_dict())

        self._run("game.bet", change_bet)


class AutoSpinHandler(SessionHandler):
    """POST /auto-spin - Set or toggle auto-spin"""

    async def post(self):
        def change_auto_spin():
            request = AutoSpinRequest.from_snake_case(self._body())
            self.session_use_case.execute(request.to_action())
            self.write(self._state_dict())

        self._run("game.auto_spin", change_auto_spin)


class CheatsHandler(SessionHandler):
    """POST /cheats - Change cheat settings"""

    async def post(self):
        def change_cheats():
            request = CheatsRequest.from_snake_case(self._body())
            state = self.session_use_case.state
            for action in request.to_actions(state.cheats.enabled, self.session_use_case.reducer.slot_symbols):
                self.session_use_case.execute(action)
            self.write(self._state_dict())

        self._run("game.cheats", change_cheats)


class CreditsHandler(SessionHandler):
    """POST /credits - Set, preset or top up credits"""

    async def post(self):
        def change_credits():
            request = CreditsRequest.from_snake_case(self._body())
            self.session_use_case.execute(request.to_action())
            self.write(self._state_dict())

        self._run("game.credits", change_credits)


class StatsResetHandler(SessionHandler):
    """POST /stats/reset - Reset session stats"""

    async def post(self):
        def reset():
            self.session_use_case.execute(actions.ResetStats())
            self.write(self._state_dict())

        self._run("game.stats_reset", reset)


class SettingsHandler(SessionHandler):
    """POST /settings - Merge settings"""

    async def post(self):
        def update():
            self.session_use_case.execute(actions.UpdateSettings(self._body()))
            self.write(self._state_dict())

        self._run("game.settings", update)


class PaytableHandler(SessionHandler):
    """GET /paytable - Symbol catalog and paylines"""

    def get(self):
        state = self.session_use_case.state
        self.write({
            "symbols": self.session_use_case.reducer.slot_symbols.to_paytable(),
            "paylines": [list(p) for p in state.paylines],
            "line_bet": state.line_bet,
            "total_bet": state.total_bet
        })


class SaveFileHandler(web.RequestHandler):
    """GET /save downloads the save file, POST /save imports one"""

    def initialize(self, save_file_use_case: SaveFileUseCase):
        self.save_file_use_case = save_file_use_case

    def get(self):
        self.set_header('Content-Type', 'application/json; charset=UTF-8')
        self.set_header('Content-Disposition', f'attachment; filename="{SAVE_FILE_NAME}"')
        self.write(self.save_file_use_case.export_document())

    async def post(self):
        with sentry_sdk.start_transaction(op="game.import", name="import_save_file"):
            try:
                imported = self.save_file_use_case.import_document(self.request.body)
            except InvalidSaveFileError as e:
                logger.info(f"Rejected save file: {e.status_message}")
                self.set_status(400)
                self.write({"error": e.status_message, "details": e.details})
                return
            except Exception as e:
                sentry_sdk.capture_exception(e)
                self.set_status(500)
                self.write({"error": str(e)})
                return

            session = self.save_file_use_case.session
            if not imported:
                self.set_status(409)
                self.write({"error": "A spin is in progress"})
                return
            self.write({
                "imported": True,
                "state": GameStateResponse.from_state(session.state).to_snake_case()
            })

"""Save file export and import use case"""
import json
import logging
import math
from typing import Any, Dict

from slot_machine.application.use_cases.game_session_use_case import GameSessionUseCase
from slot_machine.domain.entities import actions
from slot_machine.domain.exceptions import InvalidSaveFileError
from slot_machine.domain.services.snapshot_codec import from_snapshot, to_snapshot

logger = logging.getLogger(__name__)

SAVE_FILE_NAME = "slot-machine-save.json"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers too large for a float
        return False


class SaveFileUseCase:
    """Exports the session as a JSON document and imports one back"""

    def __init__(self, session: GameSessionUseCase):
        self.session = session

    def export_document(self) -> str:
        return json.dumps(to_snapshot(self.session.state), indent=2, ensure_ascii=False)

    def import_document(self, document) -> bool:
        """Replace the session state with the document's.

        Raises InvalidSaveFileError without touching the session when the
        document is malformed. Returns False when a spin is in flight.
        """
        if isinstance(document, bytes):
            try:
                document = document.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidSaveFileError("Save file is not UTF-8 text") from e

        try:
            data = json.loads(document)
        except (TypeError, ValueError) as e:
            raise InvalidSaveFileError(f"Save file is not valid JSON: {e}") from e

        self._validate(data)

        if self.session.state.spinning:
            logger.info("Save file import rejected while a spin is in flight")
            return False

        restored = from_snapshot(data, self.session.reducer.slot_symbols)
        self.session.execute(actions.RestoreSnapshot(restored))
        logger.info(f"Imported save file into session {self.session.session_id}")
        return True

    def _validate(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise InvalidSaveFileError("Save file must contain a JSON object")

        errors: Dict[str, str] = {}
        credits = data.get("credits")
        if not _is_number(credits) or credits < 0:
            errors["credits"] = "must be a non-negative number"

        line_bet = data.get("lineBet", data.get("bet"))
        if line_bet is not None and not _is_number(line_bet):
            errors["lineBet"] = "must be a finite number"

        for key in ("stats", "cheats", "settings"):
            if data.get(key) is not None and not isinstance(data[key], dict):
                errors[key] = "must be an object"

        win_rate = data.get("currentWinRate")
        if win_rate is not None and (not _is_number(win_rate) or not 0 <= win_rate <= 1):
            errors["currentWinRate"] = "must be a number between 0 and 1"

        if errors:
            raise InvalidSaveFileError("Save file failed validation", details=errors)

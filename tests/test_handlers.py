import json
from unittest.mock import MagicMock

from tornado.testing import AsyncHTTPTestCase

from slot_machine.application.ports.game_state_repository_port import GameStateRepositoryPort
from slot_machine.application.use_cases.game_session_use_case import GameSessionUseCase
from slot_machine.domain.services.game_reducer import GameReducer
from slot_machine.domain.services.random_source import SequenceRandomSource
from slot_machine.main import make_app

from fakes import LOSING_SPIN, ManualScheduler


class HandlerTestCase(AsyncHTTPTestCase):

    def get_app(self):
        self.repository = MagicMock(spec=GameStateRepositoryPort)
        self.repository.load.return_value = None
        self.scheduler = ManualScheduler()
        self.session = GameSessionUseCase(
            self.repository, self.scheduler, GameReducer(SequenceRandomSource(LOSING_SPIN))
        )
        return make_app(self.session)

    def post_json(self, path, data=None, body=None):
        if body is None:
            body = json.dumps(data if data is not None else {})
        response = self.fetch(path, method='POST', body=body)
        return response, json.loads(response.body)

    def get_json(self, path):
        response = self.fetch(path)
        return response, json.loads(response.body)


class TestStateAndSpin(HandlerTestCase):

    def test_health(self):
        response, body = self.get_json('/health')
        self.assertEqual(response.code, 200)
        self.assertEqual(body, {"status": "ok"})

    def test_metrics(self):
        response = self.fetch('/metrics')
        self.assertEqual(response.code, 200)
        self.assertIn(b'slot_spins_total', response.body)

    def test_initial_state(self):
        response, body = self.get_json('/state')
        self.assertEqual(response.code, 200)
        self.assertEqual(body["credits"], 1000)
        self.assertEqual(body["line_bet"], 1)
        self.assertEqual(body["total_bet"], 5)
        self.assertEqual(body["phase"], "idle")
        self.assertFalse(body["spinning"])
        self.assertIsNone(body["reels"])
        self.assertEqual(body["stats"]["win_percentage"], 0)

    def test_spin_accepted_then_settles(self):
        response, body = self.post_json('/spin')
        self.assertEqual(response.code, 200)
        self.assertTrue(body["accepted"])
        self.assertTrue(body["state"]["spinning"])
        self.assertEqual(body["state"]["credits"], 995)

        _, body = self.post_json('/spin')
        self.assertFalse(body["accepted"])

        self.scheduler.advance(1.6)
        _, body = self.get_json('/state')
        self.assertEqual(body["phase"], "idle")
        self.assertEqual(body["reels"][1], ['🍋', '🍊', '🍒'])
        self.assertEqual(body["stats"]["total_spins"], 1)

    def test_paytable(self):
        response, body = self.get_json('/paytable')
        self.assertEqual(response.code, 200)
        self.assertEqual(len(body["symbols"]), 10)
        self.assertEqual(body["symbols"][-1]["payoutMultiplier"], 100)
        self.assertEqual(body["paylines"][3], [0, 1, 2])
        self.assertEqual(body["total_bet"], 5)


class TestSettings(HandlerTestCase):

    def test_bet(self):
        response, body = self.post_json('/bet', {"line_bet": 250})
        self.assertEqual(response.code, 200)
        self.assertEqual(body["line_bet"], 100)
        self.assertEqual(body["total_bet"], 500)

    def test_bet_requires_line_bet(self):
        response, body = self.post_json('/bet', {})
        self.assertEqual(response.code, 400)
        self.assertIn("line_bet", body["error"])

    def test_malformed_json(self):
        response, body = self.post_json('/bet', body='{"line_bet": ')
        self.assertEqual(response.code, 400)
        self.assertIn("error", body)

    def test_auto_spin_toggle_and_set(self):
        _, body = self.post_json('/auto-spin', {"enabled": False})
        self.assertFalse(body["auto_spin"])

        _, body = self.post_json('/auto-spin')
        self.assertTrue(body["auto_spin"])
        self.assertTrue(body["spinning"])

    def test_cheats(self):
        response, body = self.post_json('/cheats', {
            "enabled": True,
            "win_rate": 0.9,
            "force_symbols": ['🌟', None, '🌟'],
            "always_jackpot": False
        })
        self.assertEqual(response.code, 200)
        self.assertTrue(body["cheats"]["enabled"])
        self.assertEqual(body["cheats"]["win_rate"], 0.9)
        self.assertEqual(body["cheats"]["force_symbols"], ['🌟', None, '🌟'])
        self.assertTrue(body["stats"]["has_cheated"])

        _, body = self.post_json('/cheats', {"force_symbols": None})
        self.assertIsNone(body["cheats"]["force_symbols"])
        self.assertTrue(body["cheats"]["enabled"])

    def test_cheats_reject_unknown_symbol(self):
        response, body = self.post_json('/cheats', {"force_symbols": ['🍀']})
        self.assertEqual(response.code, 400)
        self.assertIsNone(self.session.state.cheats.force_symbols)

    def test_credits(self):
        _, body = self.post_json('/credits', {"credits": 20})
        self.assertEqual(body["credits"], 20)

        _, body = self.post_json('/credits', {"add": 30})
        self.assertEqual(body["credits"], 50)

        response, _ = self.post_json('/credits', {})
        self.assertEqual(response.code, 400)

    def test_stats_reset(self):
        self.post_json('/spin')
        self.scheduler.advance(1.6)

        _, body = self.post_json('/stats/reset')
        self.assertEqual(body["stats"]["total_spins"], 0)
        self.assertEqual(body["credits"], 995)

    def test_settings_merge(self):
        self.post_json('/settings', {"sound": True})
        _, body = self.post_json('/settings', {"volume": 3})
        self.assertEqual(body["settings"], {"sound": True, "volume": 3})

    def test_settings_must_be_object(self):
        response, _ = self.post_json('/settings', body='[1]')
        self.assertEqual(response.code, 400)


class TestSaveFile(HandlerTestCase):

    def test_download(self):
        response = self.fetch('/save')
        self.assertEqual(response.code, 200)
        self.assertIn('slot-machine-save.json', response.headers['Content-Disposition'])
        self.assertEqual(json.loads(response.body)["credits"], 1000)

    def test_upload(self):
        response, body = self.post_json('/save', {"credits": 64, "lineBet": 2})
        self.assertEqual(response.code, 200)
        self.assertTrue(body["imported"])
        self.assertEqual(body["state"]["credits"], 64)
        self.assertEqual(body["state"]["line_bet"], 2)

    def test_upload_invalid(self):
        response, body = self.post_json('/save', {"credits": "many"})
        self.assertEqual(response.code, 400)
        self.assertEqual(body["error"], "Save file failed validation")
        self.assertIn("credits", body["details"])

    def test_upload_while_spinning(self):
        self.post_json('/spin')
        response, _ = self.post_json('/save', {"credits": 64})
        self.assertEqual(response.code, 409)
        self.assertEqual(self.session.state.credits, 995)


class TestInputValidation(HandlerTestCase):

    def test_auto_spin_rejects_string_flag(self):
        response, body = self.post_json('/auto-spin', {"enabled": "false"})
        self.assertEqual(response.code, 400)
        self.assertIn("enabled", body["error"])

        state = self.session.state
        self.assertFalse(state.auto_spin)
        self.assertEqual(state.phase.value, "idle")
        self.assertEqual(state.credits, 1000)

    def test_auto_spin_rejects_non_object_body(self):
        response, _ = self.post_json('/auto-spin', body='[1]')
        self.assertEqual(response.code, 400)
        self.assertFalse(self.session.state.auto_spin)

    def test_cheats_reject_string_flags(self):
        response, _ = self.post_json('/cheats', {"enabled": "false", "always_jackpot": "false"})
        self.assertEqual(response.code, 400)

        state = self.session.state
        self.assertFalse(state.cheats.enabled)
        self.assertFalse(state.cheats.always_jackpot)
        self.assertFalse(state.stats.has_cheated)

    def test_cheats_reject_string_win_rate(self):
        response, _ = self.post_json('/cheats', {"win_rate": "0.5"})
        self.assertEqual(response.code, 400)
        self.assertEqual(self.session.state.cheats.win_rate, 0.3)

    def test_infinite_bet_is_clamped(self):
        response, body = self.post_json('/bet', body='{"line_bet": 1e400}')
        self.assertEqual(response.code, 200)
        self.assertEqual(body["line_bet"], 100)

        _, body = self.post_json('/bet', body='{"line_bet": -1e400}')
        self.assertEqual(body["line_bet"], 1)

    def test_bet_rejects_non_numbers(self):
        for value in ('"5"', 'true', 'NaN', 'null'):
            response, _ = self.post_json('/bet', body='{"line_bet": %s}' % value)
            self.assertEqual(response.code, 400, value)
        self.assertEqual(self.session.state.line_bet, 1)

    def test_infinite_credits_rejected(self):
        response, _ = self.post_json('/credits', body='{"credits": 1e400}')
        self.assertEqual(response.code, 400)
        self.assertEqual(self.session.state.credits, 1000)

    def test_credit_presets_set_balance(self):
        self.post_json('/credits', {"credits": 250})
        _, body = self.post_json('/credits', {"preset": "10k"})
        self.assertEqual(body["credits"], 10000)

        _, body = self.post_json('/credits', {"preset": "millionaire"})
        self.assertEqual(body["credits"], 1000000)

        response, _ = self.post_json('/credits', {"preset": "billionaire"})
        self.assertEqual(response.code, 400)
        self.assertEqual(self.session.state.credits, 1000000)

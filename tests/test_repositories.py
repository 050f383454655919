import unittest
from unittest.mock import MagicMock

from slot_machine.infrastructure.persistence.in_memory_game_state_repository import InMemoryGameStateRepository
from slot_machine.infrastructure.persistence.mongo_game_state_repository import MongoGameStateRepository


class TestInMemoryGameStateRepository(unittest.TestCase):

    def test_unknown_session(self):
        self.assertIsNone(InMemoryGameStateRepository().load("default"))

    def test_save_and_load_are_isolated_copies(self):
        repository = InMemoryGameStateRepository()
        snapshot = {"credits": 10, "settings": {"sound": True}}
        repository.save("default", snapshot)

        snapshot["settings"]["sound"] = False
        loaded = repository.load("default")
        self.assertEqual(loaded, {"credits": 10, "settings": {"sound": True}})

        loaded["credits"] = 0
        self.assertEqual(repository.load("default")["credits"], 10)

    def test_sessions_are_separate(self):
        repository = InMemoryGameStateRepository()
        repository.save("a", {"credits": 1})
        repository.save("b", {"credits": 2})
        self.assertEqual(repository.load("a"), {"credits": 1})


class TestMongoGameStateRepository(unittest.TestCase):

    def setUp(self):
        self.db = MagicMock()
        self.collection = self.db.game_sessions
        self.repository = MongoGameStateRepository(self.db)

    def test_load_returns_snapshot(self):
        self.collection.find_one.return_value = {
            "session_id": "default",
            "snapshot": {"credits": 42},
            "updated_at": 1700000000.0
        }
        self.assertEqual(self.repository.load("default"), {"credits": 42})
        self.collection.find_one.assert_called_once_with({"session_id": "default"})

    def test_load_missing_session(self):
        self.collection.find_one.return_value = None
        self.assertIsNone(self.repository.load("default"))

    def test_save_upserts(self):
        self.repository.save("default", {"credits": 7})

        self.collection.replace_one.assert_called_once()
        args, kwargs = self.collection.replace_one.call_args
        self.assertEqual(args[0], {"session_id": "default"})
        self.assertEqual(args[1]["snapshot"], {"credits": 7})
        self.assertIn("updated_at", args[1])
        self.assertTrue(kwargs["upsert"])

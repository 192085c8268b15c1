import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock

from kalima.config.app_config import TestingConfig
from kalima.storage import (
    JsonFileStorage, MemoryStorage, MongoStorage, RecordKind, StorageKey, create_storage
)


class TestStorageKey(unittest.TestCase):
    def test_renders_legacy_and_scoped_names(self) -> None:
        self.assertEqual(str(StorageKey(RecordKind.GAME_STATE)), "gameState")
        self.assertEqual(str(StorageKey(RecordKind.GAME_STATE, "user_1")), "gameState_user_1")
        self.assertEqual(str(StorageKey(RecordKind.STATISTICS, "u")), "statistics_u")
        self.assertEqual(str(StorageKey(RecordKind.VALID_WORDS_CACHE)), "validWordsCache")

    def test_unscoped_drops_user(self) -> None:
        key = StorageKey(RecordKind.EVALUATIONS, "user_1")
        self.assertTrue(key.is_scoped)
        self.assertEqual(key.unscoped(), StorageKey(RecordKind.EVALUATIONS))
        self.assertFalse(key.unscoped().is_scoped)

    def test_empty_user_id_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            StorageKey(RecordKind.GAME_STATE, "")

    def test_keys_are_hashable(self) -> None:
        keys = {StorageKey(RecordKind.GAME_STATE, "a"), StorageKey(RecordKind.GAME_STATE, "a")}
        self.assertEqual(len(keys), 1)


class TestMemoryStorage(unittest.TestCase):
    def test_json_helpers(self) -> None:
        storage = MemoryStorage()
        key = StorageKey(RecordKind.USER_PROFILE, "u")
        self.assertIsNone(storage.get_json(key))

        storage.set_json(key, {"nickname": "سارة"})
        self.assertEqual(storage.get_json(key), {"nickname": "سارة"})
        self.assertIn("سارة", storage.get(key))

        storage.delete(key)
        storage.delete(key)
        self.assertIsNone(storage.get(key))

    def test_malformed_json_raises_value_error(self) -> None:
        storage = MemoryStorage({"statistics": "{oops"})
        with self.assertRaises(ValueError):
            storage.get_json(StorageKey(RecordKind.STATISTICS))


class TestJsonFileStorage(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "nested", "store.json")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_values_survive_reopening(self) -> None:
        key = StorageKey(RecordKind.STATISTICS, "u")
        JsonFileStorage(self.path).set_json(key, {"wins": 3})

        reopened = JsonFileStorage(self.path)
        self.assertEqual(reopened.get_json(key), {"wins": 3})

        reopened.delete(key)
        self.assertIsNone(JsonFileStorage(self.path).get(key))

    def test_corrupt_file_starts_empty(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("[1, 2")

        storage = JsonFileStorage(self.path)
        self.assertIsNone(storage.get(StorageKey(RecordKind.GAME_STATE)))

        storage.set(StorageKey(RecordKind.HAS_PLAYED_BEFORE, "u"), "true")
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"hasPlayedBefore_u": "true"})


class TestMongoStorage(unittest.TestCase):
    def test_documents_are_keyed_by_storage_key(self) -> None:
        collection = MagicMock()
        storage = MongoStorage(collection)
        key = StorageKey(RecordKind.GAME_STATE, "u")

        storage.set(key, '{"a": 1}')
        collection.replace_one.assert_called_once_with(
            {"_id": "gameState_u"},
            {"_id": "gameState_u", "kind": "gameState", "user_id": "u", "value": '{"a": 1}'},
            upsert=True
        )

        collection.find_one.return_value = {"_id": "gameState_u", "value": '{"a": 1}'}
        self.assertEqual(storage.get_json(key), {"a": 1})

        collection.find_one.return_value = None
        self.assertIsNone(storage.get(key))

        storage.delete(key)
        collection.delete_one.assert_called_once_with({"_id": "gameState_u"})


class TestCreateStorage(unittest.TestCase):
    def test_memory_backend(self) -> None:
        self.assertIsInstance(create_storage(TestingConfig), MemoryStorage)

    def test_unknown_backend(self) -> None:
        class BadConfig(TestingConfig):
            STORAGE_BACKEND = "redis"

        with self.assertRaises(ValueError):
            create_storage(BadConfig)

    def test_mongo_requires_uri(self) -> None:
        class MongoConfig(TestingConfig):
            STORAGE_BACKEND = "mongo"
            MONGO_URI = None

        with self.assertRaises(ValueError):
            create_storage(MongoConfig)

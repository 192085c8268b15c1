"""
Storage Backends

Key/value persistence for game state, statistics, profiles and the word
cache. Values are JSON text; absence of a key means "no data".
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from .keys import StorageKey
from ..utils.game_logger import game_logger


class KeyValueStorage(ABC):
    """Opaque key/value store with JSON helpers."""

    @abstractmethod
    def get(self, key: StorageKey) -> Optional[str]:
        """Return the raw value stored under key, or None."""

    @abstractmethod
    def set(self, key: StorageKey, value: str) -> None:
        """Store a raw value, replacing any previous one."""

    @abstractmethod
    def delete(self, key: StorageKey) -> None:
        """Remove a key. Removing a missing key is not an error."""

    def get_json(self, key: StorageKey) -> Any:
        """
        Load and decode a JSON record.

        Returns:
            Decoded value or None when the key is absent

        Raises:
            ValueError: If the stored text is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Malformed record under '{key}': {e}")

    def set_json(self, key: StorageKey, value: Any) -> None:
        self.set(key, json.dumps(value, ensure_ascii=False))


class MemoryStorage(KeyValueStorage):
    """In-process storage, used for tests and throwaway servers."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: StorageKey) -> Optional[str]:
        return self.data.get(str(key))

    def set(self, key: StorageKey, value: str) -> None:
        self.data[str(key)] = value

    def delete(self, key: StorageKey) -> None:
        self.data.pop(str(key), None)


class JsonFileStorage(MemoryStorage):
    """
    Storage persisted as a single JSON document on disk.

    The whole document is rewritten on every change; a corrupt file is
    logged and replaced by an empty store on first write.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self._lock = threading.Lock()

        if os.path.exists(path):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("storage file must contain an object")
                self.data = {str(k): str(v) for k, v in loaded.items()}
            except (OSError, ValueError) as e:
                game_logger.logger.warning(f"Ignoring unreadable storage file {path}: {e}")

    def set(self, key: StorageKey, value: str) -> None:
        with self._lock:
            super().set(key, value)
            self._flush()

    def delete(self, key: StorageKey) -> None:
        with self._lock:
            super().delete(key)
            self._flush()

    def _flush(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(self.data, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)


class MongoStorage(KeyValueStorage):
    """Storage backed by a MongoDB collection, one document per key."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def connect(cls, mongo_uri: str, db_name: str = 'kalima') -> "MongoStorage":
        """
        Create a client and verify the connection.

        Raises:
            Exception: If the server cannot be reached
        """
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        try:
            client.admin.command('ping')
            game_logger.logger.info("Successfully connected to MongoDB")
        except Exception as e:
            game_logger.logger.error(f"MongoDB connection error: {e}")
            raise
        return cls(client[db_name].records)

    def get(self, key: StorageKey) -> Optional[str]:
        document = self.collection.find_one({"_id": str(key)})
        if document is None:
            return None
        return document.get("value")

    def set(self, key: StorageKey, value: str) -> None:
        self.collection.replace_one(
            {"_id": str(key)},
            {"_id": str(key), "kind": key.kind.value, "user_id": key.user_id, "value": value},
            upsert=True
        )

    def delete(self, key: StorageKey) -> None:
        self.collection.delete_one({"_id": str(key)})

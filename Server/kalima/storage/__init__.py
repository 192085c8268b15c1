"""
Storage Package

Key/value persistence behind a structured key abstraction.
"""

from .backends import JsonFileStorage, KeyValueStorage, MemoryStorage, MongoStorage
from .keys import RecordKind, StorageKey


def create_storage(config_class) -> KeyValueStorage:
    """
    Build the storage backend selected by configuration.

    Raises:
        ValueError: If the backend is unknown or misconfigured
    """
    backend = (config_class.STORAGE_BACKEND or 'memory').lower()

    if backend == 'memory':
        return MemoryStorage()
    if backend == 'json':
        return JsonFileStorage(config_class.STORAGE_PATH)
    if backend == 'mongo':
        if not config_class.MONGO_URI:
            raise ValueError("MONGO_URI must be set for the mongo storage backend")
        return MongoStorage.connect(config_class.MONGO_URI, config_class.MONGO_DB)

    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    'KeyValueStorage', 'MemoryStorage', 'JsonFileStorage', 'MongoStorage',
    'RecordKind', 'StorageKey', 'create_storage'
]

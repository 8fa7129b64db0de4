"""
Storage for the client collection.

Key-value backends (file, R2, memory) plus the JSON adapter that maps
the collection onto a single key.
"""

from .client import (
    KeyValueStore,
    StorageConfig,
    StorageError,
    create_key_value_store,
)
from .clients import DEFAULT_STORAGE_KEY, JsonClientStore

__all__ = [
    "KeyValueStore",
    "StorageConfig",
    "StorageError",
    "create_key_value_store",
    "DEFAULT_STORAGE_KEY",
    "JsonClientStore",
]

"""
Storage Services Package

Provides the key-value interface and its implementations.
The JSON file store is the default backend; the in-memory store backs tests.
"""

from spendwise.services.storage.interface import (
    DuplicateError,
    KeyValueStore,
    NotFoundError,
    StorageError,
    StorageKeys,
)
from spendwise.services.storage.json_file import JSONFileStore
from spendwise.services.storage.memory import InMemoryStore

__all__ = [
    # Interfaces
    "KeyValueStore",
    "StorageKeys",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryStore",
    "JSONFileStore",
]

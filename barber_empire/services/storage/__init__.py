"""
Storage Services Package

Provides the abstract storage interface and its implementations.
The JSON file store is the default backend; the in-memory store is used
as a fallback and in tests.
"""

from barber_empire.services.storage.interface import (
    SnapshotStorageInterface,
    StorageError,
    StorageWriteError,
)
from barber_empire.services.storage.json_file import JsonFileSnapshotStorage
from barber_empire.services.storage.memory import InMemorySnapshotStorage

__all__ = [
    # Interfaces
    "SnapshotStorageInterface",
    # Exceptions
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemorySnapshotStorage",
    "JsonFileSnapshotStorage",
]

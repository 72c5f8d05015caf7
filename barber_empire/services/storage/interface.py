"""
Abstract Storage Interface

DESIGN DECISION: The whole ledger is one record. Storage loads and saves
the complete Snapshot; there are no partial updates. This allows us to:
1. Swap the JSON file for another key-value store later
2. Use in-memory storage for testing
3. Keep every write a whole-document replace

The interface is intentionally tiny: load, save, clear.
"""

from abc import ABC, abstractmethod

from barber_empire.models.ledger import Snapshot


class SnapshotStorageInterface(ABC):
    """
    Abstract interface for ledger storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Snapshot:
        """
        Load the stored Snapshot.

        Returns:
            The stored Snapshot, or an empty one when the record is
            missing or malformed. Never raises for a bad record.
        """
        pass

    @abstractmethod
    def save(self, snapshot: Snapshot) -> None:
        """
        Replace the stored record with `snapshot`.

        Raises:
            StorageWriteError: If the record could not be written
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """
        Remove the stored record. The next load returns an empty Snapshot.

        Raises:
            StorageWriteError: If the record could not be removed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """The record could not be written."""
    pass

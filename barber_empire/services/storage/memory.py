"""In-memory storage, used when no file store is available and in tests."""

from typing import Optional

from barber_empire.models.ledger import Snapshot
from barber_empire.services.storage.interface import SnapshotStorageInterface


class InMemorySnapshotStorage(SnapshotStorageInterface):
    """Keeps the last saved Snapshot in memory. Nothing survives a restart."""

    def __init__(self, snapshot: Optional[Snapshot] = None):
        self._snapshot = snapshot
        self.save_count = 0

    def load(self) -> Snapshot:
        return self._snapshot if self._snapshot is not None else Snapshot.empty()

    def save(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.save_count += 1

    def clear(self) -> None:
        self._snapshot = None

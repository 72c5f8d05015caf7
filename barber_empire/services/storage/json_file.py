"""
JSON File Storage Implementation

DESIGN DECISION: The ledger lives in a local JSON file because:
1. The app runs on the operator's own device
2. No database setup required
3. The file is human-readable and easy to back up

The file holds an object of named records; the ledger is the record
under `record_key`, in the same document shape the web dashboard
kept in browser storage.

TRADEOFFS:
- One writer at a time (LedgerService sequences writes)
- Whole-file rewrite on every save (fine for one person's ledger)

Writes go to a temporary file that is then renamed over the old one,
so a crash never leaves a half-written record.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from barber_empire.config import get_settings
from barber_empire.models.ledger import Expense, Goal, Snapshot, Transaction
from barber_empire.observability import ActivityLogger
from barber_empire.services.storage.interface import (
    SnapshotStorageInterface,
    StorageWriteError,
)


class JsonFileSnapshotStorage(SnapshotStorageInterface):
    """
    Stores the Snapshot as one named record in a JSON file.

    Malformed entries are skipped, and an unreadable file or record loads
    as an empty Snapshot. Both are logged.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        record_key: Optional[str] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        if path is None or record_key is None:
            settings = get_settings().storage
            path = path or settings.data_path
            record_key = record_key or settings.record_key
        self._path = Path(path)
        self._record_key = record_key
        self._activity_logger = activity_logger or ActivityLogger()

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict:
        """Whole file as a dict; {} when missing or unreadable."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            self._activity_logger.log_storage_recovered(str(self._path), str(e))
            return {}
        if not isinstance(document, dict):
            self._activity_logger.log_storage_recovered(
                str(self._path), "top-level JSON value is not an object"
            )
            return {}
        return document

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_document(self, document: dict) -> None:
        """Atomically replace the file with `document`."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _validate_item(self, model, data: Any, source: str):
        """One validated entity, or None (logged) if the data is malformed."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            self._activity_logger.log_storage_recovered(
                source, f"{e.error_count()} validation errors"
            )
            return None

    def _validate_rows(self, model, rows: Any, source: str) -> tuple:
        """Every row that validates; malformed rows are skipped."""
        if rows is None:
            return ()
        if not isinstance(rows, list):
            self._activity_logger.log_storage_recovered(source, "not a list")
            return ()

        valid = []
        for index, row in enumerate(rows):
            item = self._validate_item(model, row, f"{source}[{index}]")
            if item is not None:
                valid.append(item)
        return tuple(valid)

    def load(self) -> Snapshot:
        """
        Load the ledger record.

        The goal, each transaction and each expense are validated on their
        own: a malformed entry is skipped and logged, the rest is kept. An
        unreadable record loads as an empty Snapshot.
        """
        record = self._read_document().get(self._record_key)
        if record is None:
            return Snapshot.empty()

        # Records written by a browser store are a JSON string
        if isinstance(record, str):
            try:
                record = json.loads(record)
            except json.JSONDecodeError as e:
                self._activity_logger.log_storage_recovered(self._record_key, str(e))
                return Snapshot.empty()

        if not isinstance(record, dict):
            self._activity_logger.log_storage_recovered(
                self._record_key, "record is not an object"
            )
            return Snapshot.empty()

        goal_data = record.get("user")
        goal = None
        if goal_data is not None:
            goal = self._validate_item(Goal, goal_data, f"{self._record_key}.user")

        return Snapshot(
            goal=goal,
            transactions=self._validate_rows(
                Transaction, record.get("transactions"), f"{self._record_key}.transactions"
            ),
            expenses=self._validate_rows(
                Expense, record.get("expenses"), f"{self._record_key}.expenses"
            ),
        )

    def save(self, snapshot: Snapshot) -> None:
        """Replace the ledger record, keeping any other records in the file."""
        document = self._read_document()
        document[self._record_key] = snapshot.to_record()
        try:
            self._write_document(document)
        except OSError as e:
            raise StorageWriteError(f"Failed to save ledger to {self._path}: {e}")

    def clear(self) -> None:
        """Remove the ledger record."""
        document = self._read_document()
        if self._record_key not in document:
            return
        del document[self._record_key]
        try:
            self._write_document(document)
        except OSError as e:
            raise StorageWriteError(f"Failed to clear ledger in {self._path}: {e}")

"""
Main Orchestrator for Barber Empire

This module ties the engine, the transitions and storage together. It is
the only place that reads or writes the stored record.

DESIGN DECISION: The orchestrator enforces the boundaries:
- Every change is load → apply_command → save, one at a time
- The engine only ever sees a Snapshot, never the storage
- Every change is logged

Callers that render (the Streamlit app) ask for a DashboardView and
never touch engine internals.
"""

from datetime import datetime
from typing import Optional

from barber_empire.config import get_settings
from barber_empire.config.settings import AppSettings, EngineSettings
from barber_empire.engine import build_dashboard, group_by_calendar_day
from barber_empire.models.ledger import Snapshot
from barber_empire.models.views import DashboardView, DaySummary
from barber_empire.observability import ActivityLogger, configure_logging
from barber_empire.services.storage import (
    InMemorySnapshotStorage,
    JsonFileSnapshotStorage,
    SnapshotStorageInterface,
)
from barber_empire.transitions import (
    Command,
    InvalidTransitionError,
    ResetAll,
    ResetDay,
    apply_command,
)


class LedgerService:
    """
    Owns the ledger record and sequences every state change.

    Flow for a change:
    1. Load the current Snapshot
    2. Apply the command (pure)
    3. Save the new Snapshot as a whole
    4. Log what changed
    """

    def __init__(
        self,
        storage: SnapshotStorageInterface,
        activity_logger: Optional[ActivityLogger] = None,
        engine_settings: Optional[EngineSettings] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        settings = get_settings()
        self._storage = storage
        self._activity_logger = activity_logger or ActivityLogger()
        self._engine_settings = engine_settings or settings.engine
        self._app_settings = app_settings or settings.app

    @property
    def engine_settings(self) -> EngineSettings:
        return self._engine_settings

    def now(self) -> datetime:
        """Current local time in the configured timezone."""
        return self._app_settings.local_now()

    def snapshot(self) -> Snapshot:
        return self._storage.load()

    def is_onboarded(self) -> bool:
        return self.snapshot().is_onboarded

    def apply(self, command: Command) -> Snapshot:
        """
        Apply one command and persist the result.

        Raises:
            InvalidTransitionError: If the command is not valid now
            StorageWriteError: If the new Snapshot could not be saved
        """
        before = self._storage.load()
        try:
            after = apply_command(before, command)
        except InvalidTransitionError as e:
            self._activity_logger.log_command_rejected(command, str(e))
            raise

        self._storage.save(after)
        self._activity_logger.log_command(command, before, after)
        return after

    def dashboard(self, now: Optional[datetime] = None) -> DashboardView:
        """Every dashboard figure as of `now` (default: the local clock)."""
        return build_dashboard(
            self.snapshot(),
            now or self.now(),
            average_unit_price=self._engine_settings.average_unit_price,
            assumed_daily_volume=self._engine_settings.assumed_daily_volume,
            working_days_per_year=self._engine_settings.working_days_per_year,
        )

    def history(self) -> list[DaySummary]:
        """Daily takings, most recent day first."""
        return group_by_calendar_day(
            self.snapshot().transactions,
            tz=self._app_settings.tz,
        )

    def reset_day(self, now: Optional[datetime] = None) -> Snapshot:
        """Delete today's transactions."""
        return self.apply(ResetDay(now=now or self.now()))

    def reset_all(self) -> Snapshot:
        """Factory reset: drop the stored record entirely."""
        before = self._storage.load()
        self._storage.clear()
        after = Snapshot.empty()
        self._activity_logger.log_command(ResetAll(), before, after)
        return after


def create_app_components(
    use_storage: bool = True,
    data_path: Optional[str] = None,
) -> LedgerService:
    """
    Factory function to create the ledger service.

    Args:
        use_storage: Whether to use the JSON file store.
                    Set to False for an in-memory ledger.
        data_path: Override for the JSON file location.

    Returns:
        A ready LedgerService
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)
    activity_logger = ActivityLogger()

    storage: SnapshotStorageInterface
    if use_storage:
        try:
            storage = JsonFileSnapshotStorage(
                path=data_path,
                activity_logger=activity_logger,
            )
        except Exception as e:
            # File store not configured - continue in memory
            activity_logger.log_error(
                error_type="storage_unavailable",
                error_message=str(e),
            )
            storage = InMemorySnapshotStorage()
    else:
        storage = InMemorySnapshotStorage()

    return LedgerService(storage=storage, activity_logger=activity_logger)

"""
Activity Logger

DESIGN DECISION: Every state transition is logged locally as a structured
event. This gives:
1. Debugging capability when a figure on the dashboard looks wrong
2. A visible record of recovered storage problems

These are logs, not an audit trail: nothing here is persisted with the
ledger and nothing reads them back.
"""

import logging
from typing import Any, Optional

import structlog

from barber_empire.models.ledger import Snapshot


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog for JSON output."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("barber_empire").setLevel(level.upper())


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_logger(name: str = "barber_empire") -> Any:
    return structlog.get_logger(name)


class ActivityLogger:
    """
    Logs ledger activity as structured events.

    One event per applied command, named after what changed.
    """

    def __init__(self, logger: Optional[Any] = None):
        self._logger = logger or get_logger("barber_empire.activity")

    def log_command(
        self,
        command: Any,
        before: Snapshot,
        after: Snapshot,
    ) -> None:
        """Log the effect of one applied command."""
        event = _EVENT_NAMES.get(type(command).__name__, "command_applied")
        self._logger.info(
            event,
            command=type(command).__name__,
            transactions_before=len(before.transactions),
            transactions_after=len(after.transactions),
            expenses_before=len(before.expenses),
            expenses_after=len(after.expenses),
            onboarded=after.is_onboarded,
        )

    def log_command_rejected(self, command: Any, reason: str) -> None:
        self._logger.warning(
            "command_rejected",
            command=type(command).__name__,
            reason=reason,
        )

    def log_storage_recovered(self, source: str, error: str) -> None:
        """Malformed stored data was skipped or replaced by an empty Snapshot."""
        self._logger.warning(
            "storage_corruption_recovered",
            source=source,
            error=error,
        )

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        self._logger.error(
            "system_error",
            error_type=error_type,
            error_message=error_message,
            details=details or {},
        )


_EVENT_NAMES = {
    "CompleteOnboarding": "onboarding_completed",
    "UpdateGoal": "goal_updated",
    "SetSimulatorValue": "simulator_value_set",
    "AddTransaction": "transaction_added",
    "AddExpense": "expense_added",
    "RemoveExpense": "expense_removed",
    "ResetDay": "day_reset",
    "ResetAll": "ledger_reset",
}

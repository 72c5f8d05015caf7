"""
Data Models Package

This package contains all Pydantic models used in Barber Empire.
Ledger entities are persisted; view models are derived on demand.
"""

from barber_empire.models.ledger import (
    SIMULATOR_MAX,
    SIMULATOR_MIN,
    as_local,
    Expense,
    ExpenseFrequency,
    Goal,
    GoalCadence,
    PaymentChannel,
    Snapshot,
    Transaction,
    TransactionCategory,
)
from barber_empire.models.views import (
    DashboardView,
    DaySummary,
    GoalProjection,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Ledger models
    "SIMULATOR_MAX",
    "SIMULATOR_MIN",
    "as_local",
    "Expense",
    "ExpenseFrequency",
    "Goal",
    "GoalCadence",
    "PaymentChannel",
    "Snapshot",
    "Transaction",
    "TransactionCategory",
    # Derived models
    "DashboardView",
    "DaySummary",
    "GoalProjection",
    "ValidationIssue",
    "ValidationResult",
]

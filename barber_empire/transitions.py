"""
State Transitions

Every change to the ledger is a Command applied to a Snapshot, producing a
new Snapshot. Nothing here performs I/O; LedgerService persists the result.

Snapshot lifecycle:
1. Empty on first use
2. Onboarded once a goal is set (irreversible)
3. Appended to / edited by the commands below
4. Pruned by ResetDay, or emptied by ResetAll
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from barber_empire.engine.period import start_of_day
from barber_empire.models.ledger import (
    SIMULATOR_MAX,
    SIMULATOR_MIN,
    Expense,
    ExpenseFrequency,
    Goal,
    GoalCadence,
    PaymentChannel,
    Snapshot,
    Transaction,
    TransactionCategory,
    as_local,
)


class InvalidTransitionError(Exception):
    """A command is not allowed in the Snapshot's current state."""
    pass


_COMMAND_CONFIG = ConfigDict(frozen=True, str_strip_whitespace=True)


# =============================================================================
# COMMANDS
# =============================================================================

class CompleteOnboarding(BaseModel):
    model_config = _COMMAND_CONFIG

    name: str = Field(..., min_length=1, max_length=100)
    cadence: GoalCadence
    goal_amount: float = Field(..., ge=0)


class UpdateGoal(BaseModel):
    """Replace some goal fields; None leaves a field unchanged."""
    model_config = _COMMAND_CONFIG

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    cadence: Optional[GoalCadence] = None
    goal_amount: Optional[float] = Field(default=None, ge=0)


class SetSimulatorValue(BaseModel):
    model_config = _COMMAND_CONFIG

    value: int


class AddTransaction(BaseModel):
    model_config = _COMMAND_CONFIG

    amount: float = Field(..., gt=0)
    channel: PaymentChannel
    category: TransactionCategory = TransactionCategory.SERVICE
    timestamp: datetime


class AddExpense(BaseModel):
    model_config = _COMMAND_CONFIG

    name: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., gt=0)
    frequency: ExpenseFrequency


class RemoveExpense(BaseModel):
    model_config = _COMMAND_CONFIG

    expense_id: int


class ResetDay(BaseModel):
    """Delete every transaction from local midnight of `now` onwards."""
    model_config = _COMMAND_CONFIG

    now: datetime

    @field_validator('now')
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Naive times are read as local time."""
        return as_local(v)


class ResetAll(BaseModel):
    model_config = _COMMAND_CONFIG


Command = Union[
    CompleteOnboarding,
    UpdateGoal,
    SetSimulatorValue,
    AddTransaction,
    AddExpense,
    RemoveExpense,
    ResetDay,
    ResetAll,
]


# =============================================================================
# APPLICATION
# =============================================================================

def next_id(items: Iterable[Union[Transaction, Expense]]) -> int:
    """One more than the largest id in use (1 for an empty collection)."""
    return max((item.id for item in items), default=0) + 1


def _require_goal(snapshot: Snapshot, command: Command) -> Goal:
    if snapshot.goal is None:
        raise InvalidTransitionError(
            f"{type(command).__name__} requires a goal; complete onboarding first"
        )
    return snapshot.goal


def apply_command(snapshot: Snapshot, command: Command) -> Snapshot:
    """
    Return the Snapshot that results from applying `command`.

    The input Snapshot is never modified.

    Raises:
        InvalidTransitionError: if the command is not valid in this state
    """
    if isinstance(command, CompleteOnboarding):
        if snapshot.goal is not None:
            raise InvalidTransitionError("Onboarding is already complete")
        goal = Goal(
            name=command.name,
            cadence=command.cadence,
            goal_amount=command.goal_amount,
        )
        return snapshot.model_copy(update={"goal": goal})

    elif isinstance(command, UpdateGoal):
        goal = _require_goal(snapshot, command)
        updates = command.model_dump(exclude_none=True)
        return snapshot.model_copy(update={"goal": goal.model_copy(update=updates)})

    elif isinstance(command, SetSimulatorValue):
        goal = _require_goal(snapshot, command)
        value = max(SIMULATOR_MIN, min(SIMULATOR_MAX, command.value))
        return snapshot.model_copy(
            update={"goal": goal.model_copy(update={"simulator_value": value})}
        )

    elif isinstance(command, AddTransaction):
        txn = Transaction(
            id=next_id(snapshot.transactions),
            amount=command.amount,
            channel=command.channel,
            category=command.category,
            timestamp=command.timestamp,
        )
        return snapshot.model_copy(
            update={"transactions": snapshot.transactions + (txn,)}
        )

    elif isinstance(command, AddExpense):
        expense = Expense(
            id=next_id(snapshot.expenses),
            name=command.name,
            amount=command.amount,
            frequency=command.frequency,
        )
        return snapshot.model_copy(
            update={"expenses": snapshot.expenses + (expense,)}
        )

    elif isinstance(command, RemoveExpense):
        kept = tuple(e for e in snapshot.expenses if e.id != command.expense_id)
        return snapshot.model_copy(update={"expenses": kept})

    elif isinstance(command, ResetDay):
        midnight = start_of_day(command.now).astimezone(timezone.utc)
        kept = tuple(t for t in snapshot.transactions if t.timestamp < midnight)
        return snapshot.model_copy(update={"transactions": kept})

    elif isinstance(command, ResetAll):
        return Snapshot.empty()

    raise TypeError(f"Unknown command: {command!r}")

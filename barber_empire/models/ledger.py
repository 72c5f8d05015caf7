"""
Core Data Models for Barber Empire

These models define the strict schemas for the ledger that the engine
computes over. They are designed to:
1. Enforce the monetary and enum invariants at creation time
2. Be immutable, so a Snapshot can be passed around by value
3. Round-trip through the persisted JSON record

DESIGN DECISION: Field aliases keep the document shape of the web
dashboard record ("user", "goalType", "type", "date", ...), so existing
exports load unchanged. Both the alias and the attribute name are accepted
on input; output uses the aliases.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from dateutil import tz
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


SIMULATOR_MIN = 0
SIMULATOR_MAX = 20


def as_local(value: datetime) -> datetime:
    """
    Read a naive datetime as system local time.

    The attached zone is dateutil's tzlocal(), whose UTC offset follows
    DST per instant, so wall-clock arithmetic on the result stays local.
    Aware datetimes are returned unchanged.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz.tzlocal())
    return value


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentChannel(str, Enum):
    """How the client paid."""
    CASH = "cash"
    CARD = "card"


class TransactionCategory(str, Enum):
    """
    What the money was for.

    A transaction stored without a category is a service.
    """
    SERVICE = "service"
    TIP = "tip"


class ExpenseFrequency(str, Enum):
    """Billing cadence of a recurring expense."""
    DAILY = "daily"
    WEEKLY = "weekly"


class GoalCadence(str, Enum):
    """Evaluation window of the earnings goal."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"


_ENTITY_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    str_strip_whitespace=True,
)


# =============================================================================
# ENTITIES
# =============================================================================

class Transaction(BaseModel):
    """
    A single logged earning.

    Immutable once created; only removed in bulk by a day reset.
    """
    model_config = _ENTITY_CONFIG

    id: int = Field(
        ...,
        ge=1,
        description="Creation-ordered identifier"
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Amount earned"
    )
    channel: PaymentChannel = Field(
        ...,
        alias="type",
        description="Cash or card"
    )
    category: TransactionCategory = Field(
        default=TransactionCategory.SERVICE,
        description="Service or tip"
    )
    timestamp: datetime = Field(
        ...,
        alias="date",
        description="Creation instant"
    )

    @field_validator('category', mode='before')
    @classmethod
    def default_category(cls, v):
        """Absent category means service."""
        if v is None or v == "":
            return TransactionCategory.SERVICE
        return v

    @field_validator('timestamp')
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Naive timestamps are read as local time."""
        return as_local(v)


class Expense(BaseModel):
    """A recurring fixed cost such as chair rental."""
    model_config = _ENTITY_CONFIG

    id: int = Field(
        ...,
        ge=1,
        description="Creation-ordered identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Cost per billing period"
    )
    frequency: ExpenseFrequency = Field(
        ...,
        description="Daily or weekly billing"
    )


class Goal(BaseModel):
    """
    The operator's profile and earnings target.

    A goal amount of 0 or less is kept as stored; the projector treats it
    as already met.
    """
    model_config = _ENTITY_CONFIG

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name / nickname"
    )
    cadence: GoalCadence = Field(
        ...,
        alias="goalType",
        description="Weekly or monthly goal"
    )
    goal_amount: float = Field(
        ...,
        alias="goalAmount",
        description="Target earnings for one period"
    )
    simulator_value: int = Field(
        default=0,
        ge=SIMULATOR_MIN,
        le=SIMULATOR_MAX,
        alias="simulatorValue",
        description="Last price-raise slider position"
    )

    @field_validator('simulator_value', mode='before')
    @classmethod
    def default_simulator_value(cls, v):
        """Records written before the simulator existed have no slider value."""
        return 0 if v is None else v


# =============================================================================
# AGGREGATE ROOT
# =============================================================================

class Snapshot(BaseModel):
    """
    The whole ledger: goal, transaction log and expenses.

    The engine only ever reads a Snapshot. State changes produce a new one
    (see barber_empire.transitions).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    goal: Optional[Goal] = Field(
        default=None,
        alias="user",
        description="Absent until onboarding is complete"
    )
    transactions: tuple[Transaction, ...] = Field(
        default=(),
        description="Transaction log in creation order"
    )
    expenses: tuple[Expense, ...] = Field(
        default=(),
        description="Recurring expenses"
    )

    @field_validator('transactions', 'expenses', mode='before')
    @classmethod
    def default_collection(cls, v):
        return () if v is None else v

    @classmethod
    def empty(cls) -> "Snapshot":
        """Snapshot of a fresh install."""
        return cls()

    @property
    def is_onboarded(self) -> bool:
        """Has the operator set a goal yet?"""
        return self.goal is not None

    def to_record(self) -> dict:
        """JSON-compatible document in the persisted shape."""
        return self.model_dump(mode="json", by_alias=True)

"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and works only on the
transactions it is given. Windows are half-open, [start, end): a
transaction stamped exactly at midnight belongs to the new day.

Day grouping keys on the local calendar date, so the time of day never
splits one day into two entries.

Timestamps are compared as instants, whatever zone they were stored in.
"""

from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, Optional

from barber_empire.models.ledger import (
    PaymentChannel,
    Transaction,
    TransactionCategory,
    as_local,
)
from barber_empire.models.views import DaySummary


def transactions_in_window(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
    category: Optional[TransactionCategory] = None,
    channel: Optional[PaymentChannel] = None,
) -> tuple[Transaction, ...]:
    """
    Transactions with start <= timestamp < end, optionally filtered.

    Naive bounds are read as system local time.
    """
    start = as_local(start).astimezone(timezone.utc)
    end = as_local(end).astimezone(timezone.utc)
    selected = []
    for txn in transactions:
        if not (start <= txn.timestamp < end):
            continue
        if category is not None and txn.category != category:
            continue
        if channel is not None and txn.channel != channel:
            continue
        selected.append(txn)
    return tuple(selected)


def sum_in_window(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
    category: Optional[TransactionCategory] = None,
    channel: Optional[PaymentChannel] = None,
) -> float:
    """Total amount earned in [start, end)."""
    return sum(
        (txn.amount for txn in transactions_in_window(
            transactions, start, end, category=category, channel=channel
        )),
        0.0,
    )


def local_day(txn: Transaction, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of a transaction in `tz` (system local when None)."""
    return txn.timestamp.astimezone(tz).date()


def group_by_calendar_day(
    transactions: Iterable[Transaction],
    tz: Optional[tzinfo] = None,
) -> list[DaySummary]:
    """
    One summary per distinct local day, most recent day first.
    """
    groups: dict[date, list[float]] = {}

    for txn in transactions:
        key = local_day(txn, tz)
        if key not in groups:
            groups[key] = []
        groups[key].append(txn.amount)

    return [
        DaySummary(day=day, total=sum(amounts), count=len(amounts))
        for day, amounts in sorted(groups.items(), reverse=True)
    ]

"""Normalises recurring expenses to a single per-day cost."""

from typing import Iterable

from barber_empire.models.ledger import Expense, ExpenseFrequency


DAYS_PER_WEEK = 7


def daily_cost(expense: Expense) -> float:
    if expense.frequency == ExpenseFrequency.WEEKLY:
        return expense.amount / DAYS_PER_WEEK
    return expense.amount


def daily_equivalent(expenses: Iterable[Expense]) -> float:
    """
    Sum of every expense expressed per day (weekly costs over 7 days).

    Unrounded; display rounding belongs to the presentation layer.
    """
    return sum((daily_cost(expense) for expense in expenses), 0.0)

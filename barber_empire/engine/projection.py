"""
Goal Projector

Turns the period total into progress and the daily pace still required,
expressed in units of the average service price ("cuts per day").

Degenerate inputs are reachable from ordinary use and are answered, not
rejected:
- goal_amount <= 0: the goal is met, progress is 100%.
- days_remaining < 1: treated as 1.
"""

import math

from barber_empire.models.views import GoalProjection


AVERAGE_UNIT_PRICE = 35.0


def progress_percent(period_total: float, goal_amount: float) -> float:
    """Share of the goal earned, clamped to [0, 100]."""
    if goal_amount <= 0:
        return 100.0
    return max(0.0, min(100.0, period_total / goal_amount * 100))


def project_goal(
    period_total: float,
    goal_amount: float,
    days_remaining: int,
    average_unit_price: float = AVERAGE_UNIT_PRICE,
) -> GoalProjection:
    """Compute progress and the required pace for the rest of the period."""
    days = max(1, days_remaining)
    remaining = max(0.0, goal_amount - period_total)
    goal_met = remaining == 0

    units_needed_total = remaining / average_unit_price
    if goal_met:
        units_needed_per_day = 0
    else:
        units_needed_per_day = math.ceil(units_needed_total / days)

    return GoalProjection(
        progress_percent=progress_percent(period_total, goal_amount),
        remaining=remaining,
        units_needed_total=units_needed_total,
        units_needed_per_day=units_needed_per_day,
        days_remaining=days,
        goal_met=goal_met,
    )

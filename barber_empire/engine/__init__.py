"""
Earnings aggregation and goal-projection engine.

Stateless functions over an immutable Snapshot. No I/O.
"""

from barber_empire.engine.aggregation import (
    group_by_calendar_day,
    sum_in_window,
    transactions_in_window,
)
from barber_empire.engine.burn_rate import daily_equivalent
from barber_empire.engine.dashboard import build_dashboard
from barber_empire.engine.period import days_remaining, start_of_day, start_of_period
from barber_empire.engine.projection import AVERAGE_UNIT_PRICE, progress_percent, project_goal
from barber_empire.engine.simulator import (
    ASSUMED_DAILY_VOLUME,
    WORKING_DAYS_PER_YEAR,
    projected_yearly_gain,
)

__all__ = [
    "ASSUMED_DAILY_VOLUME",
    "AVERAGE_UNIT_PRICE",
    "WORKING_DAYS_PER_YEAR",
    "build_dashboard",
    "daily_equivalent",
    "days_remaining",
    "group_by_calendar_day",
    "progress_percent",
    "project_goal",
    "projected_yearly_gain",
    "start_of_day",
    "start_of_period",
    "sum_in_window",
    "transactions_in_window",
]

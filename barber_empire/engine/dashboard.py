"""
Dashboard Builder

Composes the engine into the single view-model the presentation layer
renders. Pure: the same Snapshot and `now` always give an equal
DashboardView.
"""

import math
from datetime import datetime

from barber_empire.engine.aggregation import sum_in_window, transactions_in_window
from barber_empire.engine.burn_rate import daily_equivalent
from barber_empire.engine.period import days_remaining, start_of_day, start_of_period
from barber_empire.engine.projection import AVERAGE_UNIT_PRICE, project_goal
from barber_empire.engine.simulator import (
    ASSUMED_DAILY_VOLUME,
    WORKING_DAYS_PER_YEAR,
    projected_yearly_gain,
)
from barber_empire.models.ledger import (
    PaymentChannel,
    Snapshot,
    TransactionCategory,
    as_local,
)
from barber_empire.models.views import DashboardView


def build_dashboard(
    snapshot: Snapshot,
    now: datetime,
    average_unit_price: float = AVERAGE_UNIT_PRICE,
    assumed_daily_volume: int = ASSUMED_DAILY_VOLUME,
    working_days_per_year: int = WORKING_DAYS_PER_YEAR,
) -> DashboardView:
    """
    Derive every dashboard figure from `snapshot` as of `now`.

    A naive `now` is read as system local time.
    """
    now = as_local(now)
    day_start = start_of_day(now)
    today = transactions_in_window(snapshot.transactions, day_start, now)

    gross_today = sum_in_window(today, day_start, now)
    tips_today = sum_in_window(today, day_start, now, category=TransactionCategory.TIP)
    services_today = sum_in_window(today, day_start, now, category=TransactionCategory.SERVICE)
    cash_today = sum_in_window(today, day_start, now, channel=PaymentChannel.CASH)
    card_today = sum_in_window(today, day_start, now, channel=PaymentChannel.CARD)

    daily_burn = daily_equivalent(snapshot.expenses)
    net_today = gross_today - daily_burn

    fields = dict(
        now=now,
        day_start=day_start,
        gross_today=gross_today,
        tips_today=tips_today,
        services_today=services_today,
        cash_today=cash_today,
        card_today=card_today,
        transactions_today=len(today),
        daily_burn=daily_burn,
        net_today=net_today,
        burn_display=math.ceil(daily_burn),
        net_display=math.floor(net_today),
    )

    goal = snapshot.goal
    if goal is None:
        return DashboardView(**fields)

    period_start = start_of_period(now, goal.cadence)
    period_total = sum_in_window(snapshot.transactions, period_start, now)
    days_left = days_remaining(now, goal.cadence)

    return DashboardView(
        **fields,
        period_start=period_start,
        period_total=period_total,
        days_remaining=days_left,
        projection=project_goal(
            period_total,
            goal.goal_amount,
            days_left,
            average_unit_price=average_unit_price,
        ),
        simulator_increment=goal.simulator_value,
        projected_yearly_gain=projected_yearly_gain(
            goal.simulator_value,
            assumed_daily_volume=assumed_daily_volume,
            working_days_per_year=working_days_per_year,
        ),
    )

"""
Period Calculator

Derives the boundaries of the goal period from "now". Boundaries are
never stored: they are recomputed on every evaluation, so they always
agree with the wall clock.

Boundaries are wall-clock midnights in the zone of `now`. With a DST-aware
zone (ZoneInfo, dateutil tzlocal) the offset of a boundary is the one in
force at that midnight, not the one in force at `now`. A naive `now` is
read as system local time.

Weeks start on Monday. Sunday is ISO weekday 7, the last day of the week,
so on a Sunday the period started six days earlier.
"""

import calendar
from datetime import datetime, timedelta

from barber_empire.models.ledger import GoalCadence, as_local


def start_of_day(now: datetime) -> datetime:
    """Local midnight of the day containing `now`."""
    return as_local(now).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_period(now: datetime, cadence: GoalCadence) -> datetime:
    """
    First instant of the current goal period.

    monthly: the 1st of now's month at 00:00.
    weekly: the Monday of now's ISO week at 00:00.
    """
    now = as_local(now)
    midnight = start_of_day(now)
    if cadence == GoalCadence.MONTHLY:
        return midnight.replace(day=1)
    # isoweekday(): Monday=1 ... Sunday=7
    return midnight - timedelta(days=now.isoweekday() - 1)


def days_remaining(now: datetime, cadence: GoalCadence) -> int:
    """
    Days left in the period, today included. Always at least 1.
    """
    if cadence == GoalCadence.MONTHLY:
        last_day = calendar.monthrange(now.year, now.month)[1]
        return last_day - now.day + 1
    return 7 - now.isoweekday() + 1

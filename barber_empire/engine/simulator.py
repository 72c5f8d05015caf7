"""Price-raise simulator."""

ASSUMED_DAILY_VOLUME = 5
WORKING_DAYS_PER_YEAR = 260


def projected_yearly_gain(
    increment: float,
    assumed_daily_volume: int = ASSUMED_DAILY_VOLUME,
    working_days_per_year: int = WORKING_DAYS_PER_YEAR,
) -> float:
    """
    Extra yearly profit from raising the price of every service by `increment`.

    Volume and working days are fixed assumptions, not read from the log.
    The slider range is enforced by the caller.
    """
    return increment * assumed_daily_volume * working_days_per_year

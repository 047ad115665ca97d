"""Next-occurrence arithmetic for recurring maintenance tasks.

All functions here work on calendar dates only and never look at the current
time, so results are the same wherever they are evaluated.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..models.task import Frequency
from ..exceptions import InvalidRuleError

FrequencyLike = Union[Frequency, str, None]


def _as_frequency(frequency: FrequencyLike) -> Frequency:
    if frequency is None or frequency == "":
        return Frequency.NONE
    try:
        return Frequency(frequency)
    except ValueError:
        raise InvalidRuleError(f"Unknown frequency: {frequency!r}")


def _valid_custom_days(custom_days) -> bool:
    return isinstance(custom_days, int) and not isinstance(custom_days, bool) and custom_days > 0


def validate_rule(frequency: FrequencyLike, custom_days: Optional[int]) -> Frequency:
    """Check a (frequency, custom_days) pair and return the normalized frequency.

    Raises:
        InvalidRuleError: custom without a positive day count, or a day count
            given for any other frequency
    """
    freq = _as_frequency(frequency)
    if freq == Frequency.CUSTOM:
        if not _valid_custom_days(custom_days):
            raise InvalidRuleError("custom_days must be a positive integer when frequency is custom")
    elif custom_days is not None:
        raise InvalidRuleError(f"custom_days is only allowed with a custom frequency, not {freq.value}")
    return freq


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole months, clamping to the target month's last day."""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(from_date.day, last_day))


def next_occurrence(from_date: Union[date, datetime], frequency: FrequencyLike,
                    custom_days: Optional[int] = None) -> Optional[date]:
    """Compute when a recurring task falls due next.

    Args:
        from_date: Date to advance from; a datetime contributes its date only
        frequency: Recurrence cadence (enum or its string value)
        custom_days: Interval in days, required for the custom frequency

    Returns:
        The next due date, or None for a one-off task
    """
    if isinstance(from_date, datetime):
        from_date = from_date.date()

    freq = _as_frequency(frequency)
    if freq == Frequency.NONE:
        return None
    if freq == Frequency.WEEKLY:
        return from_date + timedelta(days=7)
    if freq == Frequency.MONTHLY:
        return add_months(from_date, 1)
    if freq == Frequency.YEARLY:
        return add_months(from_date, 12)

    if not _valid_custom_days(custom_days):
        raise InvalidRuleError(f"custom frequency needs a positive custom_days, got {custom_days!r}")
    return from_date + timedelta(days=custom_days)

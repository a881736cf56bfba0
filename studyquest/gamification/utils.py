"""
Shared helpers for the gamification engine: rounding and calendar days.
"""
import math
from datetime import date, datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float) -> int:
    """Round .5 away from zero (Python's round() is banker's rounding)"""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def to_day(val: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Normalize a date, datetime or ISO string to a UTC calendar day.

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    Returns None when the value cannot be interpreted.
    """
    if val is None:
        return None

    if isinstance(val, datetime):
        if val.tzinfo is not None:
            val = val.astimezone(timezone.utc)
        return val.date()

    if isinstance(val, date):
        return val

    if isinstance(val, str):
        try:
            return to_day(datetime.fromisoformat(val))
        except ValueError:
            try:
                return datetime.strptime(val, "%Y-%m-%d").date()
            except ValueError:
                return None

    return None

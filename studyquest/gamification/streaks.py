"""
Streak Tracker

Two independent calculations:
- update_learning_streak: the cheap incremental counter stored on the user
- calculate_streaks: current/longest streak recomputed from activity history

They can disagree when history is backdated; the dashboard reports both.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Set, Union

from studyquest.schemas import User

from .utils import to_day, utcnow

logger = logging.getLogger(__name__)


@dataclass
class StreakSummary:
    """Streaks derived from a set of activity days"""
    current_streak: int = 0
    longest_streak: int = 0


def update_learning_streak(user: User, now: Optional[datetime] = None) -> int:
    """
    Advance the user's incremental learning streak for an activity at `now`.

    Same day: unchanged. Next day: +1. Anything else, including a clock
    that went backwards: restart at 1.
    """
    now = now or utcnow()

    if user.last_active_date is None:
        user.learning_streak = 1
        user.last_active_date = now
        return user.learning_streak

    days_diff = (to_day(now) - to_day(user.last_active_date)).days

    if days_diff == 0:
        return user.learning_streak

    if days_diff == 1:
        user.learning_streak += 1
    else:
        logger.info(f"Streak reset for user {user.id} after {days_diff} day gap (was {user.learning_streak})")
        user.learning_streak = 1

    user.last_active_date = now
    return user.learning_streak


def calculate_streaks(
    activity_days: Iterable[Union[date, datetime, str]],
    today: Union[date, datetime, None] = None,
) -> StreakSummary:
    """
    Longest and current streak from a sparse collection of activity days.

    The current streak walks backward starting at `today`; if today has no
    activity it is 0.

    Examples:
        >>> days = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 5)]
        >>> calculate_streaks(days, today=date(2024, 1, 5))
        StreakSummary(current_streak=1, longest_streak=2)
    """
    days: List[date] = sorted({d for d in (to_day(v) for v in activity_days) if d is not None})
    if not days:
        return StreakSummary()

    longest = run = 1
    for previous, day in zip(days, days[1:]):
        if (day - previous).days == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    present: Set[date] = set(days)
    check = to_day(today) if today is not None else utcnow().date()
    current = 0
    while check in present:
        current += 1
        check -= timedelta(days=1)

    return StreakSummary(current_streak=current, longest_streak=longest)


def collect_activity_days(user: User) -> Set[date]:
    """Every day with at least one lesson completion, across all enrollments"""
    days: Set[date] = set()
    for enrollment in user.enrollments:
        for entry in enrollment.activity_history:
            if entry.lessons_completed > 0:
                days.add(entry.date)
        for completed_at in enrollment.completion_timestamps():
            day = to_day(completed_at)
            if day is not None:
                days.add(day)
    return days

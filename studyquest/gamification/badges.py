"""
Badge evaluation

Badges are defined per course; the catalog passed in here is the union of
every course's badges. Evaluation is a pure function of the user's
counters and the catalog.
"""
import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from studyquest.core.config import settings
from studyquest.schemas import Achievement, Badge, BadgeCriteriaType, Course, User

from .utils import utcnow

logger = logging.getLogger(__name__)


# Presentational fallbacks for badges created without an icon
DEFAULT_BADGE_ICONS: Dict[str, str] = {
    "First Steps": "/static/badges/first-steps.svg",
    "Course Finisher": "/static/badges/course-finisher.svg",
    "Scholar": "/static/badges/scholar.svg",
    "Quiz Rookie": "/static/badges/quiz-rookie.svg",
    "Quiz Master": "/static/badges/quiz-master.svg",
    "Circuit Tinkerer": "/static/badges/circuit-tinkerer.svg",
    "Network Explorer": "/static/badges/network-explorer.svg",
    "Simulation Pro": "/static/badges/simulation-pro.svg",
}

COUNTERS: Dict[str, Callable[[User], int]] = {
    BadgeCriteriaType.COURSES_COMPLETED.value: lambda user: user.courses_completed,
    BadgeCriteriaType.QUIZZES_ANSWERED.value: lambda user: user.quizzes_answered,
    BadgeCriteriaType.SIMULATIONS_RUN.value: lambda user: user.simulations_run,
}


def default_badge_icon(badge_name: str) -> str:
    return DEFAULT_BADGE_ICONS.get(badge_name, settings.DEFAULT_BADGE_ICON_URL)


def badge_icon(badge_name: str, badge_catalog: Iterable[Badge] = ()) -> str:
    """Icon configured on the badge, else the default table"""
    for badge in badge_catalog:
        if badge.name == badge_name and badge.icon_url:
            return badge.icon_url
    return default_badge_icon(badge_name)


def gather_badge_catalog(courses: Iterable[Course]) -> List[Badge]:
    catalog: List[Badge] = []
    for course in courses:
        if course.gamification_settings and course.gamification_settings.badges:
            catalog.extend(course.gamification_settings.badges)
    return catalog


def badge_counters(user: User) -> Dict[str, int]:
    return {criteria_type: counter(user) for criteria_type, counter in COUNTERS.items()}


def check_and_award_badges(
    user: User,
    badge_catalog: Iterable[Badge],
    now: Optional[datetime] = None,
) -> List[Achievement]:
    """
    Grant every badge whose threshold the user has reached and does not yet hold.

    Badges without criteria, or with a criteria type we do not track, are
    never granted. A name granted earlier in the same pass is not granted
    again even if another course defines a badge with the same name.
    """
    now = now or utcnow()
    counters = badge_counters(user)
    granted = user.badge_names()
    new_badges: List[Achievement] = []

    for badge in badge_catalog:
        if badge.name in granted:
            continue

        criteria = badge.criteria
        if criteria is None or criteria.type not in counters:
            logger.debug(f"Skipping badge '{badge.name}' with unsupported criteria {criteria!r}")
            continue

        if counters[criteria.type] >= criteria.threshold:
            achievement = Achievement(badge_name=badge.name, achieved_at=now)
            user.achievements.append(achievement)
            granted.add(badge.name)
            new_badges.append(achievement)
            logger.info(f"User {user.id} earned badge '{badge.name}' ({criteria.type} >= {criteria.threshold})")

    return new_badges

"""
Gamification Engine
Point awards for quizzes and simulations, with streak and badge follow-up
"""
import logging
from datetime import datetime
from typing import Iterable, Optional

from studyquest.schemas import AwardResult, Badge, Course, GamificationSettings, User

from .badges import check_and_award_badges, gather_badge_catalog
from .streaks import update_learning_streak
from .utils import round_half_up, utcnow

logger = logging.getLogger(__name__)


class GamificationEngine:
    """
    Converts scoring events into points.

    Every award mutates the user in memory only: points, the incremental
    streak and any newly earned badges. Persisting is the caller's job so
    that one request results in one write.
    """

    @staticmethod
    def quiz_points(gamification: GamificationSettings, score: int) -> int:
        """Quiz points scale with the score rather than being flat"""
        score = max(0, min(100, score))
        return round_half_up(gamification.points_per_quiz * score / 100)

    @staticmethod
    def award_points_for_quiz(
        user: User,
        course: Course,
        score: int,
        badge_catalog: Optional[Iterable[Badge]] = None,
        now: Optional[datetime] = None,
    ) -> Optional[AwardResult]:
        """
        Award quiz points. Returns None when the course has no gamification.
        """
        gamification = course.gamification_settings
        if gamification is None:
            logger.debug(f"Course {course.id} has no gamification settings; quiz award skipped")
            return None

        points = GamificationEngine.quiz_points(gamification, score)
        return GamificationEngine._apply_award(user, course, points, badge_catalog, now)

    @staticmethod
    def award_points_for_simulation(
        user: User,
        course: Course,
        badge_catalog: Optional[Iterable[Badge]] = None,
        now: Optional[datetime] = None,
    ) -> Optional[AwardResult]:
        """
        Award the flat simulation points and count the run.
        Returns None when the course has no gamification.
        """
        gamification = course.gamification_settings
        if gamification is None:
            logger.debug(f"Course {course.id} has no gamification settings; simulation award skipped")
            return None

        user.simulations_run += 1
        return GamificationEngine._apply_award(
            user, course, gamification.points_per_simulation, badge_catalog, now
        )

    @staticmethod
    def _apply_award(
        user: User,
        course: Course,
        points: int,
        badge_catalog: Optional[Iterable[Badge]],
        now: Optional[datetime],
    ) -> AwardResult:
        now = now or utcnow()

        user.points += points
        streak = update_learning_streak(user, now)

        # Without an explicit catalog, fall back to the course's own badges
        catalog = list(badge_catalog) if badge_catalog is not None else gather_badge_catalog([course])
        new_badges = check_and_award_badges(user, catalog, now)

        logger.info(f"Awarded {points} points to user {user.id} for course {course.id} (total {user.points})")

        return AwardResult(
            points_awarded=points,
            total_points=user.points,
            learning_streak=streak,
            new_badges=new_badges,
        )

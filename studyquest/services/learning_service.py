"""
Learning Service

Store-bound entry points used by the HTTP handlers. Each operation loads
the user (and course) documents, runs the pure engine functions and writes
the user back with a single save. The engine itself never touches a store.
"""
import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from studyquest.core.config import settings
from studyquest.core.exceptions import InvalidInputError, NotFoundError
from studyquest.gamification import (
    GamificationEngine,
    LeaderboardEntry,
    badge_icon,
    calculate_course_progress,
    calculate_quiz_score,
    calculate_streaks,
    check_and_award_badges,
    collect_activity_days,
    gather_badge_catalog,
    mark_lesson_completed,
    parse_submitted_answers,
    rank_users,
    total_lessons,
    update_learning_streak,
)
from studyquest.gamification.utils import utcnow
from studyquest.schemas import (
    Achievement,
    AwardResult,
    Badge,
    Course,
    Enrollment,
    LessonCompletionResult,
    Question,
    QuizAttempt,
    QuizResult,
    QuizSubmissionResult,
    SimulationType,
    User,
    UserRole,
)
from studyquest.stores import CourseStore, UserStore

logger = logging.getLogger(__name__)


class LearningService:
    """Progress and gamification operations against the user and course stores"""

    def __init__(self, user_store: UserStore, course_store: CourseStore):
        self.user_store = user_store
        self.course_store = course_store

    # ==================== Loading ====================

    async def _load_user(self, user_id: str) -> User:
        user = await self.user_store.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def _load_course(self, course_id: str) -> Course:
        course = await self.course_store.find_by_id(course_id)
        if course is None:
            raise NotFoundError("Course", course_id)
        return course

    @staticmethod
    def _require_enrollment(user: User, course_id: str) -> Enrollment:
        enrollment = user.get_enrollment(course_id)
        if enrollment is None:
            raise NotFoundError("Enrollment", course_id)
        return enrollment

    async def load_badge_catalog(self) -> List[Badge]:
        """Badges from every course that defines at least one"""
        courses = await self.course_store.find_many(
            {"gamification_settings.badges.name": {"$exists": True}}
        )
        return gather_badge_catalog(courses)

    # ==================== Pure pass-throughs ====================

    @staticmethod
    def calculate_quiz_score(questions: List[Question], submitted_answers: Optional[Iterable[Any]]) -> QuizResult:
        return calculate_quiz_score(questions, submitted_answers)

    @staticmethod
    def calculate_course_progress(course: Course, completed_lesson_ids: Iterable[str]) -> int:
        return calculate_course_progress(course, completed_lesson_ids)

    @staticmethod
    def update_learning_streak(user: User, now: Optional[datetime] = None) -> int:
        return update_learning_streak(user, now)

    # ==================== Awards (unpersisted) ====================

    async def check_and_award_badges(self, user: User, now: Optional[datetime] = None) -> List[Achievement]:
        catalog = await self.load_badge_catalog()
        return check_and_award_badges(user, catalog, now)

    async def award_points_for_quiz(
        self, user: User, course: Course, score: int, now: Optional[datetime] = None
    ) -> Optional[AwardResult]:
        if course.gamification_settings is None:
            return None
        catalog = await self.load_badge_catalog()
        return GamificationEngine.award_points_for_quiz(user, course, score, catalog, now)

    async def award_points_for_simulation(
        self, user: User, course: Course, now: Optional[datetime] = None
    ) -> Optional[AwardResult]:
        if course.gamification_settings is None:
            return None
        catalog = await self.load_badge_catalog()
        return GamificationEngine.award_points_for_simulation(user, course, catalog, now)

    # ==================== Persisted operations ====================

    async def track_simulation_run(
        self,
        user_id: str,
        simulation_id: str,
        simulation_type: Union[SimulationType, str],
        now: Optional[datetime] = None,
    ) -> Optional[AwardResult]:
        """
        Award simulation points at most once per user and simulation.

        Silently does nothing for non-students, repeat runs, simulations no
        lesson references, and courses without gamification.
        """
        try:
            simulation_type = SimulationType(simulation_type)
        except ValueError:
            raise InvalidInputError(f"Unknown simulation type: {simulation_type}")

        user = await self.user_store.find_by_id(user_id)
        if user is None or user.role != UserRole.STUDENT:
            logger.debug(f"Simulation run by {user_id} ignored: not a student")
            return None

        if simulation_id in user.completed_simulations:
            logger.debug(f"Simulation {simulation_id} already rewarded for user {user_id}")
            return None

        field = "circuit_id" if simulation_type == SimulationType.CIRCUIT else "network_id"
        courses = await self.course_store.find_many({f"modules.lessons.{field}": simulation_id})
        course = next(
            (c for c in courses if c.find_simulation_lesson(simulation_id, simulation_type)),
            None,
        )
        if course is None:
            logger.debug(f"No lesson references {simulation_type.value} simulation {simulation_id}")
            return None
        if course.gamification_settings is None:
            return None

        user.completed_simulations.append(simulation_id)
        award = await self.award_points_for_simulation(user, course, now)
        await self.user_store.save(user)
        return award

    async def submit_quiz(
        self,
        user_id: str,
        course_id: str,
        module_id: str,
        lesson_id: str,
        raw_answers: Optional[Iterable[Any]],
        now: Optional[datetime] = None,
    ) -> QuizSubmissionResult:
        """
        Score a lesson quiz, record the attempt, complete the lesson on a
        pass and award points. Saves the user once.
        """
        now = now or utcnow()
        user = await self._load_user(user_id)
        course = await self._load_course(course_id)
        enrollment = self._require_enrollment(user, course_id)

        lesson = course.find_lesson(module_id, lesson_id)
        if lesson is None:
            raise NotFoundError("Lesson", lesson_id)
        if lesson.quiz is None:
            raise NotFoundError("Quiz", lesson_id)

        answers = parse_submitted_answers(raw_answers)
        result = calculate_quiz_score(lesson.quiz.questions, answers)

        enrollment.quiz_attempts.append(QuizAttempt(
            quiz_id=lesson_id,
            answers=answers,
            score=result.score,
            attempted_at=now,
        ))
        user.quizzes_answered += 1

        was_completed = enrollment.is_completed
        lesson_completed = False
        if result.is_passed:
            lesson_completed = mark_lesson_completed(user, course, module_id, lesson_id, now)

        # Lesson completion first so the badge check sees a finished course
        award = await self.award_points_for_quiz(user, course, result.score, now)
        if award is not None:
            new_badges = award.new_badges
        else:
            # No points, but the quiz counter moved and the course may be done
            new_badges = await self.check_and_award_badges(user, now)

        await self.user_store.save(user)

        logger.info(
            f"User {user_id} scored {result.score} on quiz {lesson_id} "
            f"({'passed' if result.is_passed else 'failed'})"
        )

        return QuizSubmissionResult(
            result=result,
            points_awarded=award.points_awarded if award else 0,
            total_points=user.points,
            new_badges=new_badges,
            lesson_completed=lesson_completed,
            progress_percentage=enrollment.progress_percentage,
            course_completed=enrollment.is_completed and not was_completed,
        )

    async def mark_lesson_completed(
        self,
        user_id: str,
        course_id: str,
        module_id: str,
        lesson_id: str,
        now: Optional[datetime] = None,
    ) -> LessonCompletionResult:
        """Idempotently complete a lesson; writes only when something changed"""
        now = now or utcnow()
        user = await self._load_user(user_id)
        course = await self._load_course(course_id)
        enrollment = self._require_enrollment(user, course_id)

        if course.find_lesson(module_id, lesson_id) is None:
            raise NotFoundError("Lesson", lesson_id)

        was_completed = enrollment.is_completed
        changed = mark_lesson_completed(user, course, module_id, lesson_id, now)

        new_badges: List[Achievement] = []
        if changed:
            if enrollment.is_completed and not was_completed:
                new_badges = await self.check_and_award_badges(user, now)
            await self.user_store.save(user)

        return LessonCompletionResult(
            changed=changed,
            progress_percentage=enrollment.progress_percentage,
            completed_at=enrollment.completed_at,
            new_badges=new_badges,
        )

    # ==================== Read side ====================

    async def get_course_progress(self, user_id: str, course_id: str) -> Dict[str, Any]:
        user = await self._load_user(user_id)
        course = await self._load_course(course_id)
        enrollment = self._require_enrollment(user, course_id)

        completed = enrollment.completed_lesson_ids().intersection(course.lesson_ids())
        return {
            "course_id": course.id,
            "progress_percentage": calculate_course_progress(course, completed),
            "completed_lessons": sorted(completed),
            "total_lessons": total_lessons(course),
            "completed_at": enrollment.completed_at,
        }

    async def get_dashboard_data(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Everything the student dashboard shows, in one read.

        Enrollments whose course has disappeared are still listed with empty
        totals rather than failing the request.
        """
        now = now or utcnow()
        user = await self._load_user(user_id)

        course_ids = [enrollment.course_id for enrollment in user.enrollments]
        courses = await self.course_store.find_many({"id": {"$in": course_ids}}) if course_ids else []
        courses_by_id = {course.id: course for course in courses}
        catalog = await self.load_badge_catalog()

        streaks = calculate_streaks(collect_activity_days(user), today=now)

        enrollments = []
        history: Dict[date, int] = defaultdict(int)
        for enrollment in user.enrollments:
            course = courses_by_id.get(enrollment.course_id)
            if course is None:
                logger.warning(f"Enrollment of user {user_id} references missing course {enrollment.course_id}")

            completed_ids = enrollment.completed_lesson_ids()
            if course is not None:
                completed_ids = completed_ids.intersection(course.lesson_ids())

            enrollments.append({
                "course_id": enrollment.course_id,
                "course_title": course.title if course else None,
                "progress_percentage": enrollment.progress_percentage,
                "completed_lessons": len(completed_ids),
                "total_lessons": total_lessons(course) if course else 0,
                "completed_at": enrollment.completed_at,
                "quiz_attempts": len(enrollment.quiz_attempts),
                "best_quiz_score": max((a.score for a in enrollment.quiz_attempts), default=None),
                "points_per_lesson": (
                    course.gamification_settings.points_per_lesson
                    if course and course.gamification_settings else None
                ),
            })

            for entry in enrollment.activity_history:
                history[entry.date] += entry.lessons_completed

        return {
            "user": {
                "id": user.id,
                "name": user.name,
                "points": user.points,
                "quizzes_answered": user.quizzes_answered,
                "simulations_run": user.simulations_run,
                "courses_completed": user.courses_completed,
            },
            "streaks": {
                "learning_streak": user.learning_streak,
                "current_streak": streaks.current_streak,
                "longest_streak": streaks.longest_streak,
                "last_active_date": user.last_active_date,
            },
            "enrollments": enrollments,
            "achievements": [
                {
                    "badge_name": achievement.badge_name,
                    "achieved_at": achievement.achieved_at,
                    "icon_url": badge_icon(achievement.badge_name, catalog),
                }
                for achievement in user.achievements
            ],
            "activity_history": [
                {"date": day, "lessons_completed": count}
                for day, count in sorted(history.items())
            ],
        }

    async def get_leaderboard(self, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        limit = settings.LEADERBOARD_DEFAULT_LIMIT if limit is None else limit
        limit = max(0, min(limit, settings.LEADERBOARD_MAX_LIMIT))
        users = await self.user_store.find_many(
            {"role": UserRole.STUDENT.value},
            sort=[("points", -1)],
            limit=limit,
        )
        return rank_users(users, limit)

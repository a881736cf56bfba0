"""
Progress Calculator
Course completion percentage, the completion latch and lesson completion
"""
import logging
from datetime import date, datetime
from typing import Iterable, Optional

from studyquest.schemas import ActivityEntry, Course, Enrollment, LessonCompletion, ModuleCompletion, User

from .utils import round_half_up, to_day, utcnow

logger = logging.getLogger(__name__)


def total_lessons(course: Course) -> int:
    """Distinct lesson ids; a lesson listed under two modules counts once"""
    return len(set(course.lesson_ids()))


def calculate_course_progress(course: Course, completed_lesson_ids: Iterable[str]) -> int:
    """
    Percentage of the course's lessons found in the completed set.

    Ids that do not belong to the course are ignored. A course without
    lessons is always at 0.
    """
    course_lessons = set(course.lesson_ids())
    total = len(course_lessons)
    if total == 0:
        return 0

    completed = len(course_lessons.intersection(completed_lesson_ids))

    percentage = round_half_up(100 * completed / total)
    return max(0, min(100, percentage))


def apply_completion_latch(enrollment: Enrollment, now: Optional[datetime] = None) -> bool:
    """Set completed_at the first time progress reaches 100. Never unsets it."""
    if enrollment.progress_percentage >= 100 and enrollment.completed_at is None:
        enrollment.completed_at = now or utcnow()
        logger.info(f"Course {enrollment.course_id} completed at {enrollment.completed_at.isoformat()}")
        return True
    return False


def refresh_progress(enrollment: Enrollment, course: Course, now: Optional[datetime] = None) -> bool:
    """Recompute progress for an enrollment and apply the latch. Returns True on first completion."""
    enrollment.progress_percentage = calculate_course_progress(
        course, enrollment.completed_lesson_ids()
    )
    return apply_completion_latch(enrollment, now)


def record_activity(enrollment: Enrollment, day: date) -> ActivityEntry:
    """Count one more completed lesson against the given day"""
    for entry in enrollment.activity_history:
        if entry.date == day:
            entry.lessons_completed += 1
            return entry

    entry = ActivityEntry(date=day, lessons_completed=1)
    enrollment.activity_history.append(entry)
    return entry


def mark_lesson_completed(
    user: User,
    course: Course,
    module_id: str,
    lesson_id: str,
    now: Optional[datetime] = None,
) -> bool:
    """
    Mark a lesson complete for the user's enrollment in the course.

    Idempotent: a lesson that is already complete leaves the enrollment
    untouched. Returns True only when the completion set changed.
    """
    enrollment = user.get_enrollment(course.id)
    if enrollment is None:
        logger.debug(f"User {user.id} is not enrolled in course {course.id}")
        return False

    if course.find_lesson(module_id, lesson_id) is None:
        logger.debug(f"Lesson {module_id}/{lesson_id} not found in course {course.id}")
        return False

    if lesson_id in enrollment.completed_lesson_ids():
        return False

    now = now or utcnow()

    module = enrollment.module_completion(module_id)
    if module is None:
        module = ModuleCompletion(module_id=module_id)
        enrollment.completions.append(module)
    module.lesson_ids.append(LessonCompletion(lesson_id=lesson_id, completed_at=now))

    record_activity(enrollment, to_day(now))
    refresh_progress(enrollment, course, now)

    logger.info(
        f"User {user.id} completed lesson {lesson_id} in course {course.id} "
        f"({enrollment.progress_percentage}%)"
    )
    return True

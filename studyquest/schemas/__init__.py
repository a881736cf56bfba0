"""
Document schemas for users, courses and quiz payloads
"""
from .course import (
    Badge,
    BadgeCriteria,
    BadgeCriteriaType,
    Course,
    GamificationSettings,
    Lesson,
    Module,
    Question,
    Quiz,
    SimulationType,
)
from .user import (
    Achievement,
    ActivityEntry,
    Enrollment,
    LessonCompletion,
    ModuleCompletion,
    QuizAttempt,
    User,
    UserRole,
)
from .quiz import CorrectAnswer, QuizResult, SubmittedAnswer
from .results import AwardResult, LessonCompletionResult, QuizSubmissionResult

__all__ = [
    "Achievement",
    "ActivityEntry",
    "AwardResult",
    "Badge",
    "BadgeCriteria",
    "BadgeCriteriaType",
    "CorrectAnswer",
    "Course",
    "Enrollment",
    "GamificationSettings",
    "Lesson",
    "LessonCompletionResult",
    "LessonCompletion",
    "Module",
    "ModuleCompletion",
    "Question",
    "Quiz",
    "QuizAttempt",
    "QuizResult",
    "QuizSubmissionResult",
    "SimulationType",
    "SubmittedAnswer",
    "User",
    "UserRole",
]

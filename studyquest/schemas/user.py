from pydantic import BaseModel, Field
from typing import Optional, List, Set
import datetime as dt
from datetime import datetime
from enum import Enum

from .quiz import SubmittedAnswer


class UserRole(str, Enum):
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class LessonCompletion(BaseModel):
    lesson_id: str
    completed_at: datetime


class ModuleCompletion(BaseModel):
    module_id: str
    lesson_ids: List[LessonCompletion] = []


class QuizAttempt(BaseModel):
    quiz_id: str
    answers: List[SubmittedAnswer] = []
    score: int = 0
    attempted_at: datetime


class ActivityEntry(BaseModel):
    date: dt.date
    lessons_completed: int = Field(0, ge=0)


class Enrollment(BaseModel):
    """A student's relationship to one course"""
    course_id: str
    enrolled_at: Optional[datetime] = None
    progress_percentage: int = Field(0, ge=0, le=100)
    completed_at: Optional[datetime] = None

    completions: List[ModuleCompletion] = []
    # Legacy flat representation, still honoured when reading progress
    completed_lessons: List[str] = []

    quiz_attempts: List[QuizAttempt] = []
    activity_history: List[ActivityEntry] = []

    def completed_lesson_ids(self) -> Set[str]:
        """Flat view over both completion representations"""
        ids = set(self.completed_lessons)
        for module in self.completions:
            ids.update(entry.lesson_id for entry in module.lesson_ids)
        return ids

    def completion_timestamps(self) -> List[datetime]:
        return [
            entry.completed_at
            for module in self.completions
            for entry in module.lesson_ids
        ]

    def module_completion(self, module_id: str) -> Optional[ModuleCompletion]:
        for module in self.completions:
            if module.module_id == module_id:
                return module
        return None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class Achievement(BaseModel):
    badge_name: str
    achieved_at: datetime


class User(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    role: UserRole = UserRole.STUDENT

    points: int = Field(0, ge=0)
    learning_streak: int = Field(0, ge=0)
    last_active_date: Optional[datetime] = None

    quizzes_answered: int = Field(0, ge=0)
    simulations_run: int = Field(0, ge=0)
    completed_simulations: List[str] = []

    achievements: List[Achievement] = []
    enrollments: List[Enrollment] = []

    def get_enrollment(self, course_id: str) -> Optional[Enrollment]:
        for enrollment in self.enrollments:
            if enrollment.course_id == course_id:
                return enrollment
        return None

    def badge_names(self) -> Set[str]:
        return {achievement.badge_name for achievement in self.achievements}

    @property
    def courses_completed(self) -> int:
        return sum(1 for enrollment in self.enrollments if enrollment.is_completed)

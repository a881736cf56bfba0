from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from .quiz import QuizResult
from .user import Achievement


class AwardResult(BaseModel):
    """Outcome of a point award; absent when the course has no gamification"""
    points_awarded: int
    total_points: int
    learning_streak: int
    new_badges: List[Achievement] = []


class QuizSubmissionResult(BaseModel):
    result: QuizResult
    points_awarded: int = 0
    total_points: int = 0
    new_badges: List[Achievement] = []
    lesson_completed: bool = False
    progress_percentage: int = 0
    course_completed: bool = False


class LessonCompletionResult(BaseModel):
    changed: bool
    progress_percentage: int
    completed_at: Optional[datetime] = None
    new_badges: List[Achievement] = []

from pydantic import BaseModel
from typing import List


class SubmittedAnswer(BaseModel):
    question_id: str
    answers: List[str] = []


class CorrectAnswer(BaseModel):
    question_id: str
    correct_answers: List[str]


class QuizResult(BaseModel):
    score: int
    is_passed: bool
    correct_count: int
    total_questions: int
    correct_answers: List[CorrectAnswer] = []

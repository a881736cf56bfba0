"""
Quiz Scorer
Exact-match scoring of submitted answers against each question's answer key
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from pydantic import ValidationError

from studyquest.core.config import settings
from studyquest.schemas import CorrectAnswer, Question, QuizResult, SubmittedAnswer

from .utils import round_half_up

logger = logging.getLogger(__name__)


def parse_submitted_answers(raw_answers: Optional[Iterable[Any]]) -> List[SubmittedAnswer]:
    """
    Validate a submission payload entry by entry.

    Malformed entries are dropped with a warning so they simply earn no
    credit instead of failing the whole submission.
    """
    if not raw_answers:
        return []

    parsed = []
    for item in raw_answers:
        if isinstance(item, SubmittedAnswer):
            parsed.append(item)
            continue
        try:
            parsed.append(SubmittedAnswer.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Ignoring malformed answer entry {item!r}: {e.error_count()} error(s)")
    return parsed


def calculate_quiz_score(
    questions: List[Question],
    submitted_answers: Optional[Iterable[Any]],
    pass_threshold: Optional[int] = None,
) -> QuizResult:
    """
    Score a submission.

    A question counts only when the submitted set equals the answer key
    exactly; there is no partial credit on multi-select questions.
    """
    threshold = settings.QUIZ_PASS_THRESHOLD if pass_threshold is None else pass_threshold

    # Last entry wins when a question id is repeated
    by_question: Dict[str, Set[str]] = {
        answer.question_id: set(answer.answers)
        for answer in parse_submitted_answers(submitted_answers)
    }

    correct_count = 0
    answer_key = []
    for question in questions:
        expected = set(question.answers)
        if by_question.get(question.id, set()) == expected:
            correct_count += 1
        answer_key.append(CorrectAnswer(question_id=question.id, correct_answers=list(question.answers)))

    total = len(questions)
    score = round_half_up(100 * correct_count / total) if total else 0

    return QuizResult(
        score=score,
        is_passed=score >= threshold,
        correct_count=correct_count,
        total_questions=total,
        correct_answers=answer_key,
    )

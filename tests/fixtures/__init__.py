"""
Shared test fixtures and factories for StudyQuest tests.

Builders return fully valid documents with small, predictable ids so tests
can state expected values directly.
"""

from .learning import (
    make_badge,
    make_course,
    make_quiz_course,
    make_student,
    make_user,
)

__all__ = [
    "make_badge",
    "make_course",
    "make_quiz_course",
    "make_student",
    "make_user",
]

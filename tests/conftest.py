"""
Root pytest configuration and shared fixtures.

Environment variables are set before any studyquest import so the settings
object and the database engine pick up the test configuration.
"""

import os

os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ALLOWED_ORIGINS"] = '["http://localhost:3000"]'
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest
from datetime import datetime, timezone

from tests.fixtures import make_quiz_course, make_student, make_course


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: unit tests for isolated components"
    )
    config.addinivalue_line(
        "markers", "requires_db: mark test as requiring database"
    )


@pytest.fixture
def now():
    """Fixed reference time for deterministic streak and badge tests."""
    return datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def quiz_course():
    """Single-lesson course whose lesson carries a two-question quiz."""
    return make_quiz_course()


@pytest.fixture
def three_lesson_course():
    return make_course(lessons_per_module=[2, 1])


@pytest.fixture
def student(quiz_course):
    """Student enrolled in the quiz course."""
    return make_student("student-1", enrolled_in=[quiz_course.id])


@pytest.fixture
def memory_stores(quiz_course, student):
    from studyquest.stores import MemoryCourseStore, MemoryUserStore

    return MemoryUserStore([student]), MemoryCourseStore([quiz_course])


@pytest.fixture
def learning_service(memory_stores):
    from studyquest.services import LearningService

    user_store, course_store = memory_stores
    return LearningService(user_store, course_store)

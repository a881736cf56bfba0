"""
Pytest fixtures for router tests
"""
import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

from studyquest.main import app
from studyquest.routers.learning import get_learning_service


@pytest.fixture
async def client(learning_service) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with the learning service bound to in-memory stores"""
    app.dependency_overrides[get_learning_service] = lambda: learning_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def passing_submission():
    return {
        "course_id": "course-1",
        "module_id": "m1",
        "lesson_id": "l1",
        "answers": [
            {"question_id": "q1", "answers": ["0"]},
            {"question_id": "q2", "answers": ["NAND", "NOR"]},
        ],
    }

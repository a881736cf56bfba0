"""
In-memory document stores.

Documents are kept as JSON-mode dicts, so every read hands back a fresh
model and nothing the caller mutates is visible until save().
"""
from typing import Any, Dict, List, Optional

from studyquest.schemas import Course, User

from .base import CourseStore, DocumentFilter, SortSpec, UserStore, matches_filter, sort_documents


class MemoryUserStore(UserStore):
    def __init__(self, users: Optional[List[User]] = None):
        self._documents: Dict[str, Dict[str, Any]] = {}
        for user in users or []:
            self._documents[user.id] = user.model_dump(mode="json")

    async def find_by_id(self, user_id: str) -> Optional[User]:
        document = self._documents.get(user_id)
        return User.model_validate(document) if document is not None else None

    async def find_many(
        self,
        filter: Optional[DocumentFilter] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> List[User]:
        documents = [doc for doc in self._documents.values() if matches_filter(doc, filter)]
        documents = sort_documents(documents, sort)
        if limit is not None:
            documents = documents[:limit]
        return [User.model_validate(doc) for doc in documents]

    async def save(self, user: User) -> None:
        self._documents[user.id] = user.model_dump(mode="json")


class MemoryCourseStore(CourseStore):
    def __init__(self, courses: Optional[List[Course]] = None):
        self._documents: Dict[str, Dict[str, Any]] = {}
        for course in courses or []:
            self._documents[course.id] = course.model_dump(mode="json")

    async def find_by_id(self, course_id: str) -> Optional[Course]:
        document = self._documents.get(course_id)
        return Course.model_validate(document) if document is not None else None

    async def find_many(self, filter: Optional[DocumentFilter] = None) -> List[Course]:
        return [
            Course.model_validate(doc)
            for doc in self._documents.values()
            if matches_filter(doc, filter)
        ]

    async def save(self, course: Course) -> None:
        self._documents[course.id] = course.model_dump(mode="json")

"""
SQLAlchemy-backed document stores
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyquest.models.documents import CourseDocument, UserDocument
from studyquest.schemas import Course, User

from .base import CourseStore, DocumentFilter, SortSpec, UserStore, matches_filter, sort_documents


class SqlUserStore(UserStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: str) -> Optional[User]:
        row = await self.db.get(UserDocument, user_id)
        return User.model_validate(row.document) if row is not None else None

    async def find_many(
        self,
        filter: Optional[DocumentFilter] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> List[User]:
        stmt = select(UserDocument)
        remaining = dict(filter or {})

        # Plain role equality maps onto the mirrored column
        if isinstance(remaining.get("role"), str):
            stmt = stmt.where(UserDocument.role == remaining.pop("role"))

        sort = list(sort or [])
        sorted_in_sql = len(sort) == 1 and sort[0][0] == "points"
        if sorted_in_sql:
            column = UserDocument.points.desc() if sort[0][1] < 0 else UserDocument.points.asc()
            stmt = stmt.order_by(column, UserDocument.id)
        else:
            stmt = stmt.order_by(UserDocument.id)

        if not remaining and (sorted_in_sql or not sort) and limit is not None:
            stmt = stmt.limit(limit)

        result = await self.db.execute(stmt)
        documents = [row.document for row in result.scalars().all()]

        documents = [doc for doc in documents if matches_filter(doc, remaining)]
        if not sorted_in_sql:
            documents = sort_documents(documents, sort)
        if limit is not None:
            documents = documents[:limit]

        return [User.model_validate(doc) for doc in documents]

    async def save(self, user: User) -> None:
        document = user.model_dump(mode="json")
        row = await self.db.get(UserDocument, user.id)
        if row is None:
            self.db.add(UserDocument(
                id=user.id,
                role=document["role"],
                points=user.points,
                document=document,
            ))
        else:
            row.role = document["role"]
            row.points = user.points
            row.document = document
        await self.db.commit()


class SqlCourseStore(CourseStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, course_id: str) -> Optional[Course]:
        row = await self.db.get(CourseDocument, course_id)
        return Course.model_validate(row.document) if row is not None else None

    async def find_many(self, filter: Optional[DocumentFilter] = None) -> List[Course]:
        result = await self.db.execute(select(CourseDocument).order_by(CourseDocument.id))
        return [
            Course.model_validate(row.document)
            for row in result.scalars().all()
            if matches_filter(row.document, filter)
        ]

    async def save(self, course: Course) -> None:
        document = course.model_dump(mode="json")
        row = await self.db.get(CourseDocument, course.id)
        if row is None:
            self.db.add(CourseDocument(id=course.id, title=course.title, document=document))
        else:
            row.title = course.title
            row.document = document
        await self.db.commit()

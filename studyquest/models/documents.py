"""
Document tables
Each user and course is stored whole as JSON; a few fields are mirrored
into columns so the leaderboard can filter and sort in SQL.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from studyquest.core.database import Base


class UserDocument(Base):
    __tablename__ = "user_documents"

    id = Column(String, primary_key=True, index=True)
    role = Column(String, nullable=False, index=True)
    points = Column(Integer, default=0, index=True)
    document = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class CourseDocument(Base):
    __tablename__ = "course_documents"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    document = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

"""
User and course document stores
"""
from .base import CourseStore, UserStore, matches_filter, resolve_path, sort_documents
from .memory import MemoryCourseStore, MemoryUserStore
from .sql import SqlCourseStore, SqlUserStore

__all__ = [
    "CourseStore",
    "MemoryCourseStore",
    "MemoryUserStore",
    "SqlCourseStore",
    "SqlUserStore",
    "UserStore",
    "matches_filter",
    "resolve_path",
    "sort_documents",
]

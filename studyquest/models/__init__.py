from .documents import CourseDocument, UserDocument

__all__ = ["CourseDocument", "UserDocument"]

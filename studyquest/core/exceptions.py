"""
Domain exceptions raised by the learning service.

Routers translate these into HTTP errors; the pure engine never raises them
and prefers to no-op on missing optional data.
"""
from typing import Any, Optional


class StudyQuestError(Exception):
    """Base class for all StudyQuest errors"""


class NotFoundError(StudyQuestError):
    """A directly requested user, course, enrollment or lesson is absent"""

    def __init__(self, resource: str, identifier: Optional[Any] = None):
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} '{identifier}' not found"
        super().__init__(message)


class InvalidInputError(StudyQuestError):
    """Request payload cannot be interpreted at the boundary"""

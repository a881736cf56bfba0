"""
Store contracts consumed by the learning service, plus the document
filter/sort semantics every implementation shares.

Filters are dicts of dotted field paths. A path that crosses a list
matches when any element matches, so {"modules.lessons.circuit_id": "c1"}
finds the course owning that circuit. Supported operators: $exists, $in, $ne.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from studyquest.schemas import Course, User

DocumentFilter = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]

_MISSING = object()


def resolve_path(document: Any, path: str) -> List[Any]:
    """All values reachable at a dotted path, flattening lists on the way"""
    return _resolve(document, path.split("."))


def _resolve(value: Any, parts: List[str]) -> List[Any]:
    if not parts:
        return [value]
    if isinstance(value, list):
        found = []
        for item in value:
            found.extend(_resolve(item, parts))
        return found
    if isinstance(value, dict):
        child = value.get(parts[0], _MISSING)
        if child is _MISSING or child is None:
            return []
        return _resolve(child, parts[1:])
    return []


def _flatten(values: List[Any]) -> List[Any]:
    flat = []
    for value in values:
        if isinstance(value, list):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


def _matches_condition(values: List[Any], condition: Any) -> bool:
    flat = _flatten(values)

    if isinstance(condition, dict) and condition and all(key.startswith("$") for key in condition):
        for operator, operand in condition.items():
            if operator == "$exists":
                ok = bool(flat) == bool(operand)
            elif operator == "$in":
                ok = any(value in operand for value in flat)
            elif operator == "$ne":
                ok = all(value != operand for value in flat)
            else:
                raise ValueError(f"Unsupported filter operator: {operator}")
            if not ok:
                return False
        return True

    return condition in flat


def matches_filter(document: Dict[str, Any], filter: Optional[DocumentFilter]) -> bool:
    if not filter:
        return True
    return all(
        _matches_condition(resolve_path(document, path), condition)
        for path, condition in filter.items()
    )


def sort_documents(documents: List[Dict[str, Any]], sort: Optional[SortSpec]) -> List[Dict[str, Any]]:
    """Stable multi-key sort; documents missing a key sort as lowest"""
    ordered = list(documents)
    for path, direction in reversed(list(sort or [])):
        def key(document, path=path):
            values = resolve_path(document, path)
            if not values or values[0] is None:
                return (0, 0)
            return (1, values[0])
        ordered.sort(key=key, reverse=direction < 0)
    return ordered


class UserStore(ABC):
    """Persistence for user documents"""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def find_many(
        self,
        filter: Optional[DocumentFilter] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> List[User]:
        ...

    @abstractmethod
    async def save(self, user: User) -> None:
        """Persist the whole document, replacing what was stored"""


class CourseStore(ABC):
    """Persistence for course documents"""

    @abstractmethod
    async def find_by_id(self, course_id: str) -> Optional[Course]:
        ...

    @abstractmethod
    async def find_many(self, filter: Optional[DocumentFilter] = None) -> List[Course]:
        ...

    @abstractmethod
    async def save(self, course: Course) -> None:
        ...

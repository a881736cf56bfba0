"""
Leaderboard
Read-side ranking of students by points
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from studyquest.core.config import settings
from studyquest.schemas import User, UserRole


@dataclass
class LeaderboardEntry:
    """Single entry in the leaderboard"""
    rank: int
    user_id: str
    name: str
    points: int


def rank_users(users: Iterable[User], limit: Optional[int] = None) -> List[LeaderboardEntry]:
    """
    Top students by points.

    Ranks run 1..N with no shared positions; ties keep the order the users
    came in (sorting is stable).
    """
    limit = settings.LEADERBOARD_DEFAULT_LIMIT if limit is None else limit
    if limit <= 0:
        return []

    students = [user for user in users if user.role == UserRole.STUDENT]
    ordered = sorted(students, key=lambda user: user.points, reverse=True)

    return [
        LeaderboardEntry(rank=rank, user_id=user.id, name=user.name, points=user.points)
        for rank, user in enumerate(ordered[:limit], 1)
    ]

"""
Gamification and progress engine
"""
from .engine import GamificationEngine
from .badges import (
    badge_counters,
    badge_icon,
    check_and_award_badges,
    default_badge_icon,
    gather_badge_catalog,
)
from .leaderboards import LeaderboardEntry, rank_users
from .progress import (
    apply_completion_latch,
    calculate_course_progress,
    mark_lesson_completed,
    total_lessons,
)
from .quiz_scorer import calculate_quiz_score, parse_submitted_answers
from .streaks import StreakSummary, calculate_streaks, collect_activity_days, update_learning_streak

__all__ = [
    "GamificationEngine",
    "LeaderboardEntry",
    "StreakSummary",
    "apply_completion_latch",
    "badge_counters",
    "badge_icon",
    "calculate_course_progress",
    "calculate_quiz_score",
    "calculate_streaks",
    "check_and_award_badges",
    "collect_activity_days",
    "default_badge_icon",
    "gather_badge_catalog",
    "mark_lesson_completed",
    "parse_submitted_answers",
    "rank_users",
    "total_lessons",
    "update_learning_streak",
]

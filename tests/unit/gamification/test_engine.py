"""
Unit tests for the Gamification Engine

Tests cover:
- Score-scaled quiz points
- Flat simulation points and the run counter
- Streak and badge follow-up on every award
"""

import pytest
from datetime import timedelta

from studyquest.gamification.engine import GamificationEngine
from studyquest.schemas import BadgeCriteriaType, GamificationSettings
from tests.fixtures import make_badge, make_quiz_course, make_student


class TestQuizPoints:
    """Tests for quiz point scaling"""

    @pytest.mark.parametrize(
        "score,expected",
        [(100, 20), (50, 10), (0, 0), (60, 12), (33, 7), (150, 20), (-10, 0)],
    )
    def test_points_scale_with_score(self, score, expected):
        assert GamificationEngine.quiz_points(GamificationSettings(points_per_quiz=20), score) == expected

    def test_rounds_half_up(self):
        # 15 * 50 / 100 = 7.5
        assert GamificationEngine.quiz_points(GamificationSettings(points_per_quiz=15), 50) == 8


class TestAwardPointsForQuiz:
    """Tests for quiz awards"""

    def test_adds_points_and_starts_streak(self, student, quiz_course, now):
        result = GamificationEngine.award_points_for_quiz(student, quiz_course, 50, now=now)

        assert result.points_awarded == 10
        assert result.total_points == 10
        assert result.learning_streak == 1
        assert student.points == 10
        assert student.last_active_date == now

    def test_points_accumulate(self, student, quiz_course, now):
        GamificationEngine.award_points_for_quiz(student, quiz_course, 100, now=now)
        result = GamificationEngine.award_points_for_quiz(
            student, quiz_course, 100, now=now + timedelta(days=1)
        )

        assert result.total_points == 40
        assert result.learning_streak == 2

    def test_no_gamification_is_a_no_op(self, student, now):
        course = make_quiz_course(gamified=False)

        assert GamificationEngine.award_points_for_quiz(student, course, 100, now=now) is None
        assert student.points == 0
        assert student.last_active_date is None

    def test_does_not_touch_quiz_counter(self, student, quiz_course, now):
        GamificationEngine.award_points_for_quiz(student, quiz_course, 100, now=now)
        assert student.quizzes_answered == 0

    def test_uses_course_badges_without_catalog(self, student, now):
        course = make_quiz_course(
            badges=[make_badge("Quiz Rookie", BadgeCriteriaType.QUIZZES_ANSWERED.value, threshold=1)]
        )
        student.quizzes_answered = 1

        result = GamificationEngine.award_points_for_quiz(student, course, 100, now=now)

        assert [b.badge_name for b in result.new_badges] == ["Quiz Rookie"]

    def test_explicit_catalog_replaces_course_badges(self, student, quiz_course, now):
        catalog = [make_badge("Other Course Badge", BadgeCriteriaType.QUIZZES_ANSWERED.value, threshold=0)]

        result = GamificationEngine.award_points_for_quiz(
            student, quiz_course, 100, badge_catalog=catalog, now=now
        )

        assert [b.badge_name for b in result.new_badges] == ["Other Course Badge"]


class TestAwardPointsForSimulation:
    """Tests for simulation awards"""

    def test_flat_points_and_counter(self, student, quiz_course, now):
        result = GamificationEngine.award_points_for_simulation(student, quiz_course, now=now)

        assert result.points_awarded == 15
        assert student.points == 15
        assert student.simulations_run == 1

    def test_simulation_badge(self, student, now):
        course = make_quiz_course(
            badges=[make_badge("Circuit Tinkerer", BadgeCriteriaType.SIMULATIONS_RUN.value, threshold=1)]
        )

        result = GamificationEngine.award_points_for_simulation(student, course, now=now)

        assert [b.badge_name for b in result.new_badges] == ["Circuit Tinkerer"]

    def test_no_gamification_counts_nothing(self, student, now):
        course = make_quiz_course(gamified=False)

        assert GamificationEngine.award_points_for_simulation(student, course, now=now) is None
        assert student.simulations_run == 0
        assert student.points == 0

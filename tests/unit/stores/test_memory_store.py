"""
Unit tests for document filter semantics and the in-memory stores
"""

import pytest

from studyquest.stores import MemoryCourseStore, MemoryUserStore
from studyquest.stores.base import matches_filter, resolve_path, sort_documents
from studyquest.schemas import UserRole
from tests.fixtures import make_badge, make_course, make_quiz_course, make_student, make_user


COURSE_DOC = {
    "id": "c1",
    "modules": [
        {"id": "m1", "lessons": [{"id": "l1", "circuit_id": "circuit-1"}, {"id": "l2", "circuit_id": None}]},
        {"id": "m2", "lessons": [{"id": "l3", "network_id": "net-9"}]},
    ],
    "gamification_settings": None,
    "tags": ["logic", "intro"],
}


class TestResolvePath:
    """Tests for dotted path resolution"""

    def test_scalar(self):
        assert resolve_path(COURSE_DOC, "id") == ["c1"]

    def test_through_lists(self):
        assert resolve_path(COURSE_DOC, "modules.lessons.id") == ["l1", "l2", "l3"]

    def test_none_and_missing_are_skipped(self):
        assert resolve_path(COURSE_DOC, "modules.lessons.circuit_id") == ["circuit-1"]
        assert resolve_path(COURSE_DOC, "gamification_settings.badges.name") == []
        assert resolve_path(COURSE_DOC, "nope.deeper") == []


class TestMatchesFilter:
    """Tests for filter matching"""

    def test_empty_filter_matches(self):
        assert matches_filter(COURSE_DOC, {})
        assert matches_filter(COURSE_DOC, None)

    def test_equality_any_element(self):
        assert matches_filter(COURSE_DOC, {"modules.lessons.network_id": "net-9"})
        assert not matches_filter(COURSE_DOC, {"modules.lessons.network_id": "net-1"})

    def test_equality_against_array_field(self):
        assert matches_filter(COURSE_DOC, {"tags": "intro"})

    def test_exists(self):
        assert matches_filter(COURSE_DOC, {"modules.lessons.circuit_id": {"$exists": True}})
        assert matches_filter(COURSE_DOC, {"gamification_settings.badges.name": {"$exists": False}})
        assert not matches_filter(COURSE_DOC, {"gamification_settings.badges.name": {"$exists": True}})

    def test_in(self):
        assert matches_filter(COURSE_DOC, {"id": {"$in": ["c0", "c1"]}})
        assert not matches_filter(COURSE_DOC, {"id": {"$in": []}})

    def test_ne(self):
        assert matches_filter(COURSE_DOC, {"id": {"$ne": "c2"}})
        assert not matches_filter(COURSE_DOC, {"id": {"$ne": "c1"}})

    def test_all_conditions_must_hold(self):
        assert not matches_filter(COURSE_DOC, {"id": "c1", "modules.id": "m9"})

    def test_unsupported_operator(self):
        with pytest.raises(ValueError):
            matches_filter(COURSE_DOC, {"id": {"$regex": "c.*"}})


class TestSortDocuments:
    """Tests for stable multi-key sorting"""

    def test_descending_is_stable(self):
        docs = [{"id": "a", "points": 10}, {"id": "b", "points": 30}, {"id": "c", "points": 10}]
        assert [d["id"] for d in sort_documents(docs, [("points", -1)])] == ["b", "a", "c"]

    def test_secondary_key(self):
        docs = [{"id": "b", "points": 10}, {"id": "a", "points": 10}]
        assert [d["id"] for d in sort_documents(docs, [("points", -1), ("id", 1)])] == ["a", "b"]

    def test_missing_key_sorts_lowest(self):
        docs = [{"id": "a"}, {"id": "b", "points": 1}]
        assert [d["id"] for d in sort_documents(docs, [("points", 1)])] == ["a", "b"]

    def test_no_sort(self):
        docs = [{"id": "b"}, {"id": "a"}]
        assert sort_documents(docs, None) == docs


class TestMemoryUserStore:
    """Tests for MemoryUserStore"""

    async def test_find_by_id_returns_copy(self):
        store = MemoryUserStore([make_student("u1", points=5)])

        user = await store.find_by_id("u1")
        user.points = 99

        assert (await store.find_by_id("u1")).points == 5

    async def test_save_persists(self):
        store = MemoryUserStore([make_student("u1")])
        user = await store.find_by_id("u1")
        user.points = 42

        await store.save(user)

        assert (await store.find_by_id("u1")).points == 42

    async def test_missing_user(self):
        assert await MemoryUserStore().find_by_id("ghost") is None

    async def test_find_many_filter_sort_limit(self):
        store = MemoryUserStore([
            make_student("a", 30),
            make_user("t", role=UserRole.INSTRUCTOR, points=500),
            make_student("b", 10),
            make_student("c", 50),
        ])

        users = await store.find_many({"role": "student"}, sort=[("points", -1)], limit=2)

        assert [u.id for u in users] == ["c", "a"]


class TestMemoryCourseStore:
    """Tests for MemoryCourseStore"""

    async def test_find_by_simulation_id(self):
        store = MemoryCourseStore([make_course("plain"), make_quiz_course("sim")])

        courses = await store.find_many({"modules.lessons.circuit_id": "circuit-1"})

        assert [c.id for c in courses] == ["sim"]

    async def test_find_courses_with_badges(self):
        with_badges = make_quiz_course("b", badges=[make_badge("Quiz Rookie", "quizzes-answered")])
        store = MemoryCourseStore([make_quiz_course("a"), with_badges, make_course("c")])

        courses = await store.find_many({"gamification_settings.badges.name": {"$exists": True}})

        assert [c.id for c in courses] == ["b"]

    async def test_save_and_find(self):
        store = MemoryCourseStore()
        await store.save(make_course("new"))

        assert (await store.find_by_id("new")).title == "Digital Logic 101"

"""Tests for conflict detection against the lesson store."""

from datetime import datetime

import pytest

from lessonbook.models import CreatorRole, Lesson, LessonStatus
from lessonbook.repositories.lesson_store import LessonStore
from lessonbook.services.availability import find_conflict, has_conflict


def at(hour, minute=0):
    return datetime(2025, 11, 10, hour, minute)


@pytest.fixture
def lessons(db):
    return LessonStore(db)


@pytest.fixture
def booked(db, lessons, pair):
    """A confirmed 10:00-11:00 lesson for the assigned pair."""
    teacher_id, student_id = pair
    lesson = Lesson(
        teacher_id=teacher_id,
        student_id=student_id,
        start_time=at(10),
        end_time=at(11),
        status=LessonStatus.CONFIRMED,
        created_by=CreatorRole.TEACHER,
    )
    lessons.create(lesson)
    lessons.commit()
    return lesson


class TestOverlapPredicate:
    """Lesson.overlaps evaluated on an instance (plain Python)."""

    def test_partial_overlap(self):
        lesson = Lesson(start_time=at(10), end_time=at(11))
        assert lesson.overlaps(at(10, 30), at(11, 30))
        assert lesson.overlaps(at(9, 30), at(10, 15))

    def test_containment_both_ways(self):
        lesson = Lesson(start_time=at(10), end_time=at(11))
        assert lesson.overlaps(at(10, 15), at(10, 45))
        assert lesson.overlaps(at(9), at(12))

    def test_touching_windows_do_not_overlap(self):
        lesson = Lesson(start_time=at(10), end_time=at(11))
        assert not lesson.overlaps(at(11), at(12))
        assert not lesson.overlaps(at(9), at(10))


class TestHasConflict:
    @pytest.mark.parametrize(
        "start,end",
        [
            (at(10), at(11)),
            (at(10, 30), at(11, 30)),
            (at(9, 30), at(10, 15)),
            (at(10, 15), at(10, 45)),
            (at(9), at(12)),
        ],
    )
    def test_overlapping_windows_conflict_for_both_roles(self, lessons, booked, start, end):
        assert has_conflict(lessons, CreatorRole.TEACHER, booked.teacher_id, start, end)
        assert has_conflict(lessons, CreatorRole.STUDENT, booked.student_id, start, end)

    @pytest.mark.parametrize("start,end", [(at(11), at(12)), (at(9), at(10))])
    def test_touching_windows_do_not_conflict(self, lessons, booked, start, end):
        assert not has_conflict(lessons, CreatorRole.TEACHER, booked.teacher_id, start, end)
        assert not has_conflict(lessons, CreatorRole.STUDENT, booked.student_id, start, end)

    def test_other_participants_are_free(self, lessons, booked):
        assert not has_conflict(lessons, CreatorRole.TEACHER, "someone-else", at(10), at(11))

    def test_roles_are_not_interchangeable(self, lessons, booked):
        """The teacher id is never matched against student_id and vice versa."""
        assert not has_conflict(lessons, CreatorRole.STUDENT, booked.teacher_id, at(10), at(11))

    @pytest.mark.parametrize("status", [LessonStatus.CANCELLED, LessonStatus.COMPLETED])
    def test_inactive_lessons_never_conflict(self, db, lessons, booked, status):
        booked.status = status
        lessons.save(booked)
        lessons.commit()
        assert not has_conflict(lessons, CreatorRole.TEACHER, booked.teacher_id, at(10), at(11))

    def test_pending_lessons_conflict(self, lessons, booked):
        booked.status = LessonStatus.PENDING
        lessons.save(booked)
        lessons.commit()
        assert has_conflict(lessons, CreatorRole.TEACHER, booked.teacher_id, at(10), at(11))

    def test_excluded_lesson_is_ignored(self, lessons, booked):
        assert not has_conflict(
            lessons, CreatorRole.TEACHER, booked.teacher_id, at(10), at(11),
            exclude_lesson_id=booked.id,
        )

    def test_find_conflict_returns_the_lesson(self, lessons, booked):
        conflict = find_conflict(lessons, CreatorRole.TEACHER, booked.teacher_id, at(10, 30), at(11))
        assert conflict is not None
        assert conflict.id == booked.id

    def test_unknown_field_is_rejected(self, lessons):
        with pytest.raises(ValueError):
            lessons.find_overlapping("room_id", "x", at(10), at(11))

"""Availability checks: does a participant already have an active lesson in a window?

Only pending and confirmed lessons count. Windows are half-open, so a lesson
ending at 11:00 never conflicts with one starting at 11:00.
"""

from datetime import datetime
from typing import Optional

from lessonbook.models.enums import CreatorRole
from lessonbook.models.lesson import Lesson
from lessonbook.repositories.lesson_store import LessonStore

_FIELD_BY_ROLE = {
    CreatorRole.TEACHER: "teacher_id",
    CreatorRole.STUDENT: "student_id",
}


def find_conflict(
    lessons: LessonStore,
    role: CreatorRole,
    participant_id: str,
    start: datetime,
    end: datetime,
    exclude_lesson_id: Optional[str] = None,
) -> Optional[Lesson]:
    """Return the first active lesson of the participant overlapping [start, end)."""
    field = _FIELD_BY_ROLE[CreatorRole(role)]
    return lessons.find_overlapping(field, participant_id, start, end, exclude_id=exclude_lesson_id)


def has_conflict(
    lessons: LessonStore,
    role: CreatorRole,
    participant_id: str,
    start: datetime,
    end: datetime,
    exclude_lesson_id: Optional[str] = None,
) -> bool:
    return find_conflict(lessons, role, participant_id, start, end, exclude_lesson_id) is not None

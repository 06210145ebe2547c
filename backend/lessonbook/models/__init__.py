"""SQLAlchemy ORM models."""

from lessonbook.models.enums import CreatorRole, Instrument, LessonStatus
from lessonbook.models.participant import Student, Teacher, teacher_students
from lessonbook.models.lesson import Lesson

__all__ = [
    "CreatorRole",
    "Instrument",
    "LessonStatus",
    "Student",
    "Teacher",
    "teacher_students",
    "Lesson",
]

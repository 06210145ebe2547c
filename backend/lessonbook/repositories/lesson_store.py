"""Lesson store: persistence and conflict queries for lessons.

Writes are flushed but never committed here; the scheduling service owns
the transaction boundary through ``commit`` / ``rollback``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from lessonbook.lifecycle import ACTIVE_STATUSES
from lessonbook.models.enums import LessonStatus
from lessonbook.models.lesson import Lesson

PARTICIPANT_FIELDS = {
    "teacher_id": Lesson.teacher_id,
    "student_id": Lesson.student_id,
}


@dataclass
class LessonFilter:
    status: Optional[LessonStatus] = None
    teacher_id: Optional[str] = None
    student_id: Optional[str] = None


class LessonStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, lesson: Lesson) -> Lesson:
        self.db.add(lesson)
        self.db.flush()
        return lesson

    def find_by_id(self, lesson_id: str, for_update: bool = False) -> Optional[Lesson]:
        query = self.db.query(Lesson).filter(Lesson.id == lesson_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find_many(self, filters: Optional[LessonFilter] = None, newest_first: bool = True) -> list[Lesson]:
        filters = filters or LessonFilter()
        query = self.db.query(Lesson)
        if filters.status:
            query = query.filter(Lesson.status == LessonStatus(filters.status))
        if filters.teacher_id:
            query = query.filter(Lesson.teacher_id == filters.teacher_id)
        if filters.student_id:
            query = query.filter(Lesson.student_id == filters.student_id)

        order = Lesson.start_time.desc() if newest_first else Lesson.start_time.asc()
        return query.order_by(order, Lesson.id).all()

    def save(self, lesson: Lesson) -> Lesson:
        self.db.add(lesson)
        self.db.flush()
        return lesson

    def delete(self, lesson: Lesson) -> None:
        self.db.delete(lesson)
        self.db.flush()

    def find_overlapping(
        self,
        participant_field: str,
        participant_id: str,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> Optional[Lesson]:
        """First active lesson of the participant whose window overlaps [start, end)."""
        try:
            column = PARTICIPANT_FIELDS[participant_field]
        except KeyError:
            raise ValueError(f"Unknown participant field: {participant_field}")

        query = self.db.query(Lesson).filter(
            column == participant_id,
            Lesson.status.in_(ACTIVE_STATUSES),
            Lesson.overlaps(start, end),
        )
        if exclude_id:
            query = query.filter(Lesson.id != exclude_id)
        return query.order_by(Lesson.start_time).first()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, lesson: Lesson) -> Lesson:
        self.db.refresh(lesson)
        return lesson

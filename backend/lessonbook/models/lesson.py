"""Lesson model: one booked window between a teacher and a student."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, String, event
from sqlalchemy.ext.hybrid import hybrid_method

from lessonbook.database import Base
from lessonbook.models.enums import CreatorRole, LessonStatus
from lessonbook.time_slots import duration_minutes, utcnow, validate_slot


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Lesson(Base):
    __tablename__ = "lessons"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_lessons_end_after_start"),
        Index("ix_lessons_teacher_start", "teacher_id", "start_time"),
        Index("ix_lessons_student_start", "student_id", "start_time"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id = Column(String(36), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(
        Enum(LessonStatus, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
        default=LessonStatus.PENDING,
        index=True,
    )
    created_by = Column(
        Enum(CreatorRole, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @hybrid_method
    def overlaps(self, start, end):
        """Half-open overlap with [start, end); touching windows do not overlap."""
        return (self.start_time < end) & (start < self.end_time)

    @property
    def duration_minutes(self) -> int:
        return duration_minutes(self.start_time, self.end_time)

    def __repr__(self) -> str:
        return f"<Lesson {self.id} {self.status} {self.start_time}-{self.end_time}>"


@event.listens_for(Lesson, "before_insert")
@event.listens_for(Lesson, "before_update")
def _enforce_slot_policy(mapper, connection, target):
    # Re-checked at flush time so no code path can persist a bad window.
    validate_slot(target.start_time, target.end_time)

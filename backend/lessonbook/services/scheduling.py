"""Scheduling service: creates lessons and moves them through their lifecycle.

Every mutating operation runs its read-validate-write sequence inside one
transaction on the injected stores' session:

    create:  lock teacher + student rows -> validate -> check both calendars
             -> insert -> re-check both calendars -> commit
    status:  lock lesson row -> check transition -> update -> commit

Any rule violation rolls the transaction back and surfaces as a typed
SchedulingError. Store failures are rolled back and surfaced as
BadRequestError("Failed to <verb> lesson"). Nothing is retried here.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lessonbook import lifecycle
from lessonbook.database import get_db
from lessonbook.errors import (
    AssignmentError,
    BadRequestError,
    NotFoundError,
    SchedulingConflictError,
    SchedulingError,
)
from lessonbook.models.enums import CreatorRole, LessonStatus
from lessonbook.models.lesson import Lesson
from lessonbook.repositories.lesson_store import LessonFilter, LessonStore
from lessonbook.repositories.participant_store import ParticipantStore
from lessonbook.services.availability import find_conflict
from lessonbook.time_slots import to_storage, validate_slot

logger = logging.getLogger(__name__)


class SchedulingService:
    """Lesson scheduling engine."""

    def __init__(self, participants: ParticipantStore, lessons: LessonStore) -> None:
        self.participants = participants
        self.lessons = lessons

    # ── Creation ────────────────────────────────────────────────────────────

    def create_lesson(
        self,
        teacher_id: str,
        student_id: str,
        start_time: datetime,
        end_time: datetime,
        creator_role: CreatorRole,
    ) -> Lesson:
        """Book a lesson between an assigned teacher/student pair.

        Teacher-created lessons start confirmed; student requests start
        pending and wait for the teacher to confirm or reject them.

        Raises:
            NotFoundError: teacher or student does not exist.
            AssignmentError: the student is not assigned to the teacher.
            SlotValidationError: the window breaks the time-slot policy.
            SchedulingConflictError: either participant is already booked.
            BadRequestError: the store refused the insert.
        """
        creator_role = CreatorRole(creator_role)
        start_time = to_storage(start_time)
        end_time = to_storage(end_time)

        try:
            teacher = self.participants.find_teacher_by_id(
                teacher_id, with_assigned_students=True, for_update=True
            )
            if not teacher:
                raise NotFoundError(f"Teacher with id {teacher_id} not found")

            student = self.participants.find_student_by_id(student_id, for_update=True)
            if not student:
                raise NotFoundError(f"Student with id {student_id} not found")

            if not any(s.id == student.id for s in teacher.students):
                raise AssignmentError("Student must be assigned to teacher before creating a lesson")

            validate_slot(start_time, end_time)
            self._ensure_available(teacher_id, student_id, start_time, end_time)

            lesson = Lesson(
                teacher_id=teacher_id,
                student_id=student_id,
                start_time=start_time,
                end_time=end_time,
                status=lifecycle.initial_status(creator_role),
                created_by=creator_role,
            )
            self.lessons.create(lesson)

            # A concurrent writer may have slipped in between check and insert.
            self._ensure_available(
                teacher_id, student_id, start_time, end_time, exclude_lesson_id=lesson.id
            )
            self.lessons.commit()
        except SchedulingError as exc:
            self.lessons.rollback()
            logger.info("Lesson creation rejected for teacher %s / student %s: %s",
                        teacher_id, student_id, exc.message)
            raise
        except SQLAlchemyError as exc:
            self.lessons.rollback()
            logger.warning("Lesson insert failed for teacher %s / student %s: %s",
                           teacher_id, student_id, exc)
            raise BadRequestError("Failed to create lesson") from exc

        logger.info("Created lesson %s (%s, by %s) %s-%s",
                    lesson.id, lesson.status.value, creator_role.value, start_time, end_time)
        return lesson

    def _ensure_available(
        self,
        teacher_id: str,
        student_id: str,
        start: datetime,
        end: datetime,
        exclude_lesson_id: Optional[str] = None,
    ) -> None:
        conflict = find_conflict(
            self.lessons, CreatorRole.TEACHER, teacher_id, start, end, exclude_lesson_id
        )
        if conflict:
            raise SchedulingConflictError(
                "Teacher has a conflicting lesson at this time", conflicting_lesson_id=conflict.id
            )

        conflict = find_conflict(
            self.lessons, CreatorRole.STUDENT, student_id, start, end, exclude_lesson_id
        )
        if conflict:
            raise SchedulingConflictError(
                "Student has a conflicting lesson at this time", conflicting_lesson_id=conflict.id
            )

    # ── Reads ───────────────────────────────────────────────────────────────

    def list_lessons(
        self,
        status: Optional[LessonStatus] = None,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> list[Lesson]:
        """All lessons matching the filters, latest start first."""
        return self.lessons.find_many(
            LessonFilter(status=status, teacher_id=teacher_id, student_id=student_id)
        )

    def get_lesson(self, lesson_id: str) -> Lesson:
        lesson = self.lessons.find_by_id(lesson_id)
        if not lesson:
            raise NotFoundError(f"Lesson with id {lesson_id} not found")
        return lesson

    def list_by_teacher(self, teacher_id: str) -> list[Lesson]:
        return self.lessons.find_many(LessonFilter(teacher_id=teacher_id))

    def list_by_student(self, student_id: str) -> list[Lesson]:
        return self.lessons.find_many(LessonFilter(student_id=student_id))

    # ── Transitions ─────────────────────────────────────────────────────────

    def confirm(self, lesson_id: str) -> Lesson:
        """pending -> confirmed (teacher accepts a student request)."""
        return self._transition(lesson_id, lifecycle.check_confirm, "Failed to confirm lesson")

    def reject(self, lesson_id: str) -> Lesson:
        """pending -> cancelled (teacher declines a student request)."""
        return self._transition(lesson_id, lifecycle.check_reject, "Failed to reject lesson")

    def complete(self, lesson_id: str) -> Lesson:
        return self._transition(lesson_id, lifecycle.check_complete, "Failed to complete lesson")

    def cancel(self, lesson_id: str) -> Lesson:
        return self._transition(lesson_id, lifecycle.check_cancel, "Failed to cancel lesson")

    def set_status(self, lesson_id: str, status: LessonStatus) -> Lesson:
        new_status = LessonStatus(status)

        def guard(current: LessonStatus) -> LessonStatus:
            lifecycle.check_transition(current, new_status)
            return new_status

        return self._transition(lesson_id, guard, "Failed to update lesson status")

    def _transition(
        self,
        lesson_id: str,
        guard: Callable[[LessonStatus], LessonStatus],
        failure_message: str,
    ) -> Lesson:
        try:
            lesson = self.lessons.find_by_id(lesson_id, for_update=True)
            if not lesson:
                raise NotFoundError(f"Lesson with id {lesson_id} not found")

            previous = lesson.status
            lesson.status = guard(previous)
            self.lessons.save(lesson)
            self.lessons.commit()
        except SchedulingError:
            self.lessons.rollback()
            raise
        except SQLAlchemyError as exc:
            self.lessons.rollback()
            logger.warning("%s %s: %s", failure_message, lesson_id, exc)
            raise BadRequestError(failure_message) from exc

        logger.info("Lesson %s: %s -> %s", lesson_id, previous.value, lesson.status.value)
        return lesson

    # ── Deletion ────────────────────────────────────────────────────────────

    def delete_lesson(self, lesson_id: str) -> None:
        """Hard-delete a lesson regardless of its status."""
        try:
            lesson = self.lessons.find_by_id(lesson_id, for_update=True)
            if not lesson:
                raise NotFoundError(f"Lesson with id {lesson_id} not found")
            self.lessons.delete(lesson)
            self.lessons.commit()
        except SchedulingError:
            self.lessons.rollback()
            raise
        except SQLAlchemyError as exc:
            self.lessons.rollback()
            logger.warning("Failed to delete lesson %s: %s", lesson_id, exc)
            raise BadRequestError("Failed to delete lesson") from exc

        logger.info("Deleted lesson %s", lesson_id)


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    """Dependency provider for the scheduling service."""
    return SchedulingService(ParticipantStore(db), LessonStore(db))

"""Roster service: teachers, students and who is assigned to whom."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lessonbook.errors import AssignmentError, BadRequestError, NotFoundError
from lessonbook.models.participant import Student, Teacher, teacher_students
from lessonbook.repositories.participant_store import ParticipantStore
from lessonbook.schemas.participant import StudentCreate, StudentUpdate, TeacherCreate, TeacherUpdate
from lessonbook.time_slots import utcnow

logger = logging.getLogger(__name__)


def _commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("%s: %s", failure_message, exc)
        raise BadRequestError(failure_message) from exc


# ── Teachers ────────────────────────────────────────────────────────────────


def create_teacher(db: Session, data: TeacherCreate) -> Teacher:
    teacher = Teacher(**data.model_dump(mode="json"))
    db.add(teacher)
    _commit(db, "Failed to create teacher")
    db.refresh(teacher)
    logger.info("Created teacher %s", teacher.id)
    return teacher


def list_teachers(db: Session) -> list[Teacher]:
    """All active teachers ordered by last name, then first name."""
    return (
        db.query(Teacher)
        .filter(Teacher.deleted_at.is_(None))
        .order_by(Teacher.last_name, Teacher.first_name)
        .all()
    )


def get_teacher(db: Session, teacher_id: str) -> Teacher:
    teacher = ParticipantStore(db).find_teacher_by_id(teacher_id)
    if not teacher:
        raise NotFoundError(f"Teacher with id {teacher_id} not found")
    return teacher


def update_teacher(db: Session, teacher_id: str, data: TeacherUpdate) -> Teacher:
    teacher = get_teacher(db, teacher_id)
    for field, value in data.model_dump(mode="json", exclude_unset=True, exclude_none=True).items():
        setattr(teacher, field, value)
    _commit(db, "Failed to update teacher")
    db.refresh(teacher)
    return teacher


def delete_teacher(db: Session, teacher_id: str) -> None:
    """Soft delete: the row stays, every lookup stops seeing it."""
    teacher = get_teacher(db, teacher_id)
    teacher.deleted_at = utcnow()
    _commit(db, "Failed to delete teacher")
    logger.info("Soft-deleted teacher %s", teacher_id)


def list_students_for_teacher(db: Session, teacher_id: str) -> list[Student]:
    get_teacher(db, teacher_id)
    return ParticipantStore(db).find_teacher_students(teacher_id)


# ── Students ────────────────────────────────────────────────────────────────


def create_student(db: Session, data: StudentCreate) -> Student:
    student = Student(**data.model_dump(mode="json"))
    db.add(student)
    _commit(db, "Failed to create student")
    db.refresh(student)
    logger.info("Created student %s", student.id)
    return student


def list_students(db: Session) -> list[Student]:
    """All active students ordered by last name, then first name."""
    return (
        db.query(Student)
        .filter(Student.deleted_at.is_(None))
        .order_by(Student.last_name, Student.first_name)
        .all()
    )


def get_student(db: Session, student_id: str) -> Student:
    student = ParticipantStore(db).find_student_by_id(student_id)
    if not student:
        raise NotFoundError(f"Student with id {student_id} not found")
    return student


def update_student(db: Session, student_id: str, data: StudentUpdate) -> Student:
    student = get_student(db, student_id)
    for field, value in data.model_dump(mode="json", exclude_unset=True, exclude_none=True).items():
        setattr(student, field, value)
    _commit(db, "Failed to update student")
    db.refresh(student)
    return student


def delete_student(db: Session, student_id: str) -> None:
    student = get_student(db, student_id)
    student.deleted_at = utcnow()
    _commit(db, "Failed to delete student")
    logger.info("Soft-deleted student %s", student_id)


def list_teachers_for_student(db: Session, student_id: str) -> list[Teacher]:
    get_student(db, student_id)
    return ParticipantStore(db).find_student_teachers(student_id)


# ── Assignments ─────────────────────────────────────────────────────────────


def assign_teacher(db: Session, student_id: str, teacher_id: str) -> list[Teacher]:
    """Assign a teacher to a student. Returns the student's teachers afterwards."""
    get_student(db, student_id)
    get_teacher(db, teacher_id)

    store = ParticipantStore(db)
    if store.is_assigned(teacher_id, student_id):
        raise AssignmentError("Teacher is already assigned to this student")

    db.execute(teacher_students.insert().values(teacher_id=teacher_id, student_id=student_id))
    _commit(db, "Failed to assign teacher")
    logger.info("Assigned teacher %s to student %s", teacher_id, student_id)
    return store.find_student_teachers(student_id)


def unassign_teacher(db: Session, student_id: str, teacher_id: str) -> list[Teacher]:
    """Remove a teacher from a student. Existing lessons are left untouched."""
    get_student(db, student_id)
    get_teacher(db, teacher_id)

    store = ParticipantStore(db)
    if not store.find_student_teachers(student_id):
        raise AssignmentError("Student has no assigned teachers")
    if not store.is_assigned(teacher_id, student_id):
        raise AssignmentError("Teacher is not assigned to this student")

    db.execute(
        teacher_students.delete().where(
            teacher_students.c.teacher_id == teacher_id,
            teacher_students.c.student_id == student_id,
        )
    )
    _commit(db, "Failed to unassign teacher")
    logger.info("Unassigned teacher %s from student %s", teacher_id, student_id)
    return store.find_student_teachers(student_id)

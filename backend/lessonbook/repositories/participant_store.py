"""Participant store: read access to teachers, students and their assignments.

Soft-deleted teachers and students are invisible to every lookup here.
"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from lessonbook.models.participant import Student, Teacher, teacher_students


class ParticipantStore:
    def __init__(self, db: Session):
        self.db = db

    def find_teacher_by_id(
        self,
        teacher_id: str,
        with_assigned_students: bool = False,
        for_update: bool = False,
    ) -> Optional[Teacher]:
        query = self.db.query(Teacher).filter(Teacher.id == teacher_id, Teacher.deleted_at.is_(None))
        if with_assigned_students:
            query = query.options(selectinload(Teacher.students))
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find_student_by_id(self, student_id: str, for_update: bool = False) -> Optional[Student]:
        query = self.db.query(Student).filter(Student.id == student_id, Student.deleted_at.is_(None))
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find_teacher_students(self, teacher_id: str) -> list[Student]:
        """Active students assigned to a teacher, by last then first name."""
        return (
            self.db.query(Student)
            .join(teacher_students, teacher_students.c.student_id == Student.id)
            .filter(teacher_students.c.teacher_id == teacher_id, Student.deleted_at.is_(None))
            .order_by(Student.last_name, Student.first_name)
            .all()
        )

    def find_student_teachers(self, student_id: str) -> list[Teacher]:
        """Active teachers assigned to a student, by last then first name."""
        return (
            self.db.query(Teacher)
            .join(teacher_students, teacher_students.c.teacher_id == Teacher.id)
            .filter(teacher_students.c.student_id == student_id, Teacher.deleted_at.is_(None))
            .order_by(Teacher.last_name, Teacher.first_name)
            .all()
        )

    def is_assigned(self, teacher_id: str, student_id: str) -> bool:
        row = (
            self.db.query(teacher_students.c.teacher_id)
            .filter(
                teacher_students.c.teacher_id == teacher_id,
                teacher_students.c.student_id == student_id,
            )
            .first()
        )
        return row is not None

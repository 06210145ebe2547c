"""Teacher and Student models plus the assignment table linking them."""

import uuid

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from lessonbook.database import Base
from lessonbook.time_slots import utcnow

# Many-to-many: a student can only book lessons with teachers listed here.
teacher_students = Table(
    "teacher_students",
    Base.metadata,
    Column("teacher_id", String(36), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    instrument = Column(String(100), nullable=False)
    experience = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True, index=True)

    # lazy="raise": assigned students must be loaded explicitly by the store
    students = relationship(
        "Student",
        secondary=teacher_students,
        back_populates="teachers",
        lazy="raise",
    )


class Student(Base):
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    instrument = Column(String(100), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True, index=True)

    teachers = relationship(
        "Teacher",
        secondary=teacher_students,
        back_populates="students",
        lazy="raise",
    )

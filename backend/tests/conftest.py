"""Shared fixtures: an in-memory SQLite database per test and a seeded roster."""

import os
import sys

# Must be set before lessonbook.config is imported anywhere.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lessonbook.database import Base
from lessonbook.models import Instrument
from lessonbook.repositories.lesson_store import LessonStore
from lessonbook.repositories.participant_store import ParticipantStore
from lessonbook.schemas.participant import StudentCreate, TeacherCreate
from lessonbook.services import roster_service
from lessonbook.services.scheduling import SchedulingService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service(db):
    return SchedulingService(ParticipantStore(db), LessonStore(db))


@pytest.fixture
def make_teacher(db):
    def _make(first_name="John", last_name="Doe", instrument=Instrument.PIANO, experience=5):
        return roster_service.create_teacher(
            db,
            TeacherCreate(
                first_name=first_name,
                last_name=last_name,
                instrument=instrument,
                experience=experience,
            ),
        )

    return _make


@pytest.fixture
def make_student(db):
    def _make(first_name="Jane", last_name="Smith", instrument=Instrument.PIANO):
        return roster_service.create_student(
            db,
            StudentCreate(first_name=first_name, last_name=last_name, instrument=instrument),
        )

    return _make


@pytest.fixture
def pair(db, make_teacher, make_student):
    """An assigned (teacher_id, student_id) pair."""
    teacher = make_teacher()
    student = make_student()
    roster_service.assign_teacher(db, student.id, teacher.id)
    return teacher.id, student.id

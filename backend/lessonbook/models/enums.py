"""Enumerations shared by the models, schemas and services."""

from enum import Enum


class LessonStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class CreatorRole(str, Enum):
    """Who asked for the lesson; decides its initial status."""

    TEACHER = "teacher"
    STUDENT = "student"


class Instrument(str, Enum):
    PIANO = "Piano"
    GUITAR = "Guitar"
    BASS = "Bass"
    DRUMS = "Drums"
    VOICE = "Voice"
    UKULELE = "Ukulele"

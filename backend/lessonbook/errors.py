"""Domain exceptions for the lesson scheduling engine.

Services raise these; the API layer maps them onto HTTP responses
(NotFoundError -> 404, BadRequestError and subclasses -> 400).
"""

from typing import Optional


class SchedulingError(Exception):
    """Base exception for all scheduling-domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(SchedulingError):
    """A referenced teacher, student or lesson does not exist (or is soft-deleted)."""


class BadRequestError(SchedulingError):
    """A business rule rejected the operation, or the store refused the write."""


class SlotValidationError(BadRequestError):
    """A lesson window violates the time-slot policy.

    ``rule`` names the violated rule: ``alignment``, ``end-before-start``,
    ``duration-too-short`` or ``duration-too-long``.
    """

    def __init__(self, rule: str, message: str) -> None:
        self.rule = rule
        super().__init__(message)


class SchedulingConflictError(BadRequestError):
    """The teacher or the student already has an active lesson in the window."""

    def __init__(self, message: str, conflicting_lesson_id: Optional[str] = None) -> None:
        self.conflicting_lesson_id = conflicting_lesson_id
        super().__init__(message)


class InvalidTransitionError(BadRequestError):
    """The requested status change is not allowed from the current status."""


class AssignmentError(BadRequestError):
    """The teacher/student assignment does not permit the operation."""

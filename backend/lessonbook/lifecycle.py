"""Lesson status state machine.

    pending   -> confirmed | cancelled
    confirmed -> completed | cancelled
    cancelled -> (terminal)
    completed -> (terminal)

The named guards (confirm/reject/complete/cancel) carry their own messages;
``check_transition`` implements the generic set-status rules.
"""

from lessonbook.errors import InvalidTransitionError
from lessonbook.models.enums import CreatorRole, LessonStatus

ACTIVE_STATUSES = (LessonStatus.PENDING, LessonStatus.CONFIRMED)
TERMINAL_STATUSES = (LessonStatus.CANCELLED, LessonStatus.COMPLETED)

TRANSITIONS: dict[LessonStatus, frozenset[LessonStatus]] = {
    LessonStatus.PENDING: frozenset({LessonStatus.CONFIRMED, LessonStatus.CANCELLED}),
    LessonStatus.CONFIRMED: frozenset({LessonStatus.COMPLETED, LessonStatus.CANCELLED}),
    LessonStatus.CANCELLED: frozenset(),
    LessonStatus.COMPLETED: frozenset(),
}


def is_active(status) -> bool:
    return LessonStatus(status) in ACTIVE_STATUSES


def is_terminal(status) -> bool:
    return LessonStatus(status) in TERMINAL_STATUSES


def initial_status(creator_role) -> LessonStatus:
    """Teacher-created lessons start confirmed, student requests start pending."""
    if CreatorRole(creator_role) == CreatorRole.TEACHER:
        return LessonStatus.CONFIRMED
    return LessonStatus.PENDING


def allowed_next(status) -> frozenset[LessonStatus]:
    return TRANSITIONS[LessonStatus(status)]


def check_transition(current, new) -> None:
    """Validate a generic status change; raise InvalidTransitionError otherwise."""
    current = LessonStatus(current)
    new = LessonStatus(new)

    if current == new:
        raise InvalidTransitionError(f"Lesson is already {new.value}")

    if current == LessonStatus.COMPLETED:
        raise InvalidTransitionError("Cannot modify a completed lesson")

    if new not in allowed_next(current):
        raise InvalidTransitionError(
            f"Cannot transition from {current.value} to {new.value}"
        )


def check_confirm(current) -> LessonStatus:
    if LessonStatus(current) != LessonStatus.PENDING:
        raise InvalidTransitionError("Only pending lessons can be confirmed")
    return LessonStatus.CONFIRMED


def check_reject(current) -> LessonStatus:
    if LessonStatus(current) != LessonStatus.PENDING:
        raise InvalidTransitionError("Only pending lessons can be rejected")
    return LessonStatus.CANCELLED


def check_complete(current) -> LessonStatus:
    if LessonStatus(current) != LessonStatus.CONFIRMED:
        raise InvalidTransitionError("Only confirmed lessons can be completed")
    return LessonStatus.COMPLETED


def check_cancel(current) -> LessonStatus:
    current = LessonStatus(current)
    if current == LessonStatus.CANCELLED:
        raise InvalidTransitionError("Lesson is already cancelled")
    if current == LessonStatus.COMPLETED:
        raise InvalidTransitionError("Cannot cancel a completed lesson")
    return LessonStatus.CANCELLED

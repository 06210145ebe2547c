"""Tests for the lesson status state machine (logic-level, no DB)."""

import pytest

from lessonbook import lifecycle
from lessonbook.errors import InvalidTransitionError
from lessonbook.models.enums import CreatorRole, LessonStatus

ALL = list(LessonStatus)


class TestInitialStatus:
    def test_teacher_created_lessons_are_confirmed(self):
        assert lifecycle.initial_status(CreatorRole.TEACHER) == LessonStatus.CONFIRMED

    def test_student_requests_are_pending(self):
        assert lifecycle.initial_status(CreatorRole.STUDENT) == LessonStatus.PENDING

    def test_accepts_raw_values(self):
        assert lifecycle.initial_status("teacher") == LessonStatus.CONFIRMED


class TestTransitionTable:
    def test_valid_transitions(self):
        assert lifecycle.allowed_next(LessonStatus.PENDING) == {
            LessonStatus.CONFIRMED,
            LessonStatus.CANCELLED,
        }
        assert lifecycle.allowed_next(LessonStatus.CONFIRMED) == {
            LessonStatus.COMPLETED,
            LessonStatus.CANCELLED,
        }

    @pytest.mark.parametrize("status", [LessonStatus.CANCELLED, LessonStatus.COMPLETED])
    def test_terminal_states_have_no_exits(self, status):
        assert lifecycle.is_terminal(status)
        assert not lifecycle.allowed_next(status)

    def test_active_statuses(self):
        assert lifecycle.is_active("pending")
        assert lifecycle.is_active(LessonStatus.CONFIRMED)
        assert not lifecycle.is_active(LessonStatus.CANCELLED)


class TestCheckTransition:
    @pytest.mark.parametrize("status", ALL)
    def test_same_status_always_fails(self, status):
        with pytest.raises(InvalidTransitionError, match=f"Lesson is already {status.value}"):
            lifecycle.check_transition(status, status)

    @pytest.mark.parametrize("target", [LessonStatus.PENDING, LessonStatus.CONFIRMED, LessonStatus.CANCELLED])
    def test_completed_cannot_be_modified(self, target):
        with pytest.raises(InvalidTransitionError, match="Cannot modify a completed lesson"):
            lifecycle.check_transition(LessonStatus.COMPLETED, target)

    @pytest.mark.parametrize("target", [LessonStatus.PENDING, LessonStatus.CONFIRMED, LessonStatus.COMPLETED])
    def test_cancelled_cannot_transition(self, target):
        with pytest.raises(InvalidTransitionError, match="Cannot transition from cancelled to"):
            lifecycle.check_transition(LessonStatus.CANCELLED, target)

    def test_pending_cannot_jump_to_completed(self):
        with pytest.raises(InvalidTransitionError, match="Cannot transition from pending to completed"):
            lifecycle.check_transition(LessonStatus.PENDING, LessonStatus.COMPLETED)

    def test_confirmed_cannot_go_back_to_pending(self):
        with pytest.raises(InvalidTransitionError, match="Cannot transition from confirmed to pending"):
            lifecycle.check_transition(LessonStatus.CONFIRMED, LessonStatus.PENDING)

    def test_allowed_transitions_pass(self):
        for current in ALL:
            for target in lifecycle.allowed_next(current):
                lifecycle.check_transition(current, target)


class TestNamedGuards:
    def test_confirm_requires_pending(self):
        assert lifecycle.check_confirm(LessonStatus.PENDING) == LessonStatus.CONFIRMED
        with pytest.raises(InvalidTransitionError, match="Only pending lessons can be confirmed"):
            lifecycle.check_confirm(LessonStatus.CONFIRMED)

    def test_reject_requires_pending(self):
        assert lifecycle.check_reject(LessonStatus.PENDING) == LessonStatus.CANCELLED
        with pytest.raises(InvalidTransitionError, match="Only pending lessons can be rejected"):
            lifecycle.check_reject(LessonStatus.CANCELLED)

    def test_complete_requires_confirmed(self):
        assert lifecycle.check_complete(LessonStatus.CONFIRMED) == LessonStatus.COMPLETED
        with pytest.raises(InvalidTransitionError, match="Only confirmed lessons can be completed"):
            lifecycle.check_complete(LessonStatus.PENDING)

    def test_cancel_messages(self):
        assert lifecycle.check_cancel(LessonStatus.PENDING) == LessonStatus.CANCELLED
        assert lifecycle.check_cancel(LessonStatus.CONFIRMED) == LessonStatus.CANCELLED
        with pytest.raises(InvalidTransitionError, match="Lesson is already cancelled"):
            lifecycle.check_cancel(LessonStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="Cannot cancel a completed lesson"):
            lifecycle.check_cancel(LessonStatus.COMPLETED)

"""Lessons router: booking, listing, lifecycle transitions and deletion.

Domain errors raised by the scheduling service are turned into HTTP
responses by the handlers in ``lessonbook.middleware.error_handlers``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from lessonbook.config import settings
from lessonbook.middleware.rate_limit import limiter
from lessonbook.models.enums import LessonStatus
from lessonbook.schemas.lesson import LessonCreate, LessonResponse, LessonStatusUpdate
from lessonbook.services.scheduling import SchedulingService, get_scheduling_service

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


@router.post("", response_model=LessonResponse, status_code=201)
@limiter.limit(settings.LESSON_WRITE_RATE_LIMIT)
def create_lesson(
    request: Request,
    req: LessonCreate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Book a lesson. Teacher-created lessons are confirmed, student requests pending."""
    return service.create_lesson(
        req.teacher_id, req.student_id, req.start_time, req.end_time, req.creator_role
    )


@router.get("", response_model=list[LessonResponse])
def list_lessons(
    status: Optional[LessonStatus] = None,
    teacher_id: Optional[str] = None,
    student_id: Optional[str] = None,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.list_lessons(status=status, teacher_id=teacher_id, student_id=student_id)


# Literal paths must be declared before /{lesson_id}.
@router.get("/teacher/{teacher_id}", response_model=list[LessonResponse])
def list_teacher_lessons(
    teacher_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.list_by_teacher(teacher_id)


@router.get("/student/{student_id}", response_model=list[LessonResponse])
def list_student_lessons(
    student_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.list_by_student(student_id)


@router.get("/{lesson_id}", response_model=LessonResponse)
def get_lesson(
    lesson_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.get_lesson(lesson_id)


@router.put("/{lesson_id}/confirm", response_model=LessonResponse)
def confirm_lesson(
    lesson_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Teacher accepts a pending request."""
    return service.confirm(lesson_id)


@router.put("/{lesson_id}/reject", response_model=LessonResponse)
def reject_lesson(
    lesson_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Teacher declines a pending request."""
    return service.reject(lesson_id)


@router.put("/{lesson_id}/complete", response_model=LessonResponse)
def complete_lesson(
    lesson_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.complete(lesson_id)


@router.put("/{lesson_id}/cancel", response_model=LessonResponse)
def cancel_lesson(
    lesson_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.cancel(lesson_id)


@router.put("/{lesson_id}/status", response_model=LessonResponse)
def update_lesson_status(
    lesson_id: str,
    req: LessonStatusUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.set_status(lesson_id, req.status)


@router.delete("/{lesson_id}", status_code=204)
def delete_lesson(
    lesson_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Hard delete, allowed in any status. Use /cancel to keep the record."""
    service.delete_lesson(lesson_id)
    return Response(status_code=204)

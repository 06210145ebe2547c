"""Lesson request/response schemas.

Only the request shape is checked here; slot alignment, duration and
availability are business rules enforced by the scheduling service.
"""

from datetime import datetime

from pydantic import BaseModel

from lessonbook.models.enums import CreatorRole, LessonStatus


class LessonCreate(BaseModel):
    teacher_id: str
    student_id: str
    start_time: datetime
    end_time: datetime
    creator_role: CreatorRole  # teacher -> confirmed, student -> pending


class LessonStatusUpdate(BaseModel):
    status: LessonStatus


class LessonResponse(BaseModel):
    id: str
    teacher_id: str
    student_id: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    status: LessonStatus
    created_by: CreatorRole
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

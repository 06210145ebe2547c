"""Teachers router: roster management for teachers."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from lessonbook.database import get_db
from lessonbook.schemas.participant import StudentResponse, TeacherCreate, TeacherResponse, TeacherUpdate
from lessonbook.services import roster_service

router = APIRouter(prefix="/api/teachers", tags=["teachers"])


@router.post("", response_model=TeacherResponse, status_code=201)
def create_teacher(req: TeacherCreate, db: Session = Depends(get_db)):
    return roster_service.create_teacher(db, req)


@router.get("", response_model=list[TeacherResponse])
def list_teachers(db: Session = Depends(get_db)):
    return roster_service.list_teachers(db)


@router.get("/{teacher_id}", response_model=TeacherResponse)
def get_teacher(teacher_id: str, db: Session = Depends(get_db)):
    return roster_service.get_teacher(db, teacher_id)


@router.put("/{teacher_id}", response_model=TeacherResponse)
def update_teacher(teacher_id: str, req: TeacherUpdate, db: Session = Depends(get_db)):
    return roster_service.update_teacher(db, teacher_id, req)


@router.delete("/{teacher_id}", status_code=204)
def delete_teacher(teacher_id: str, db: Session = Depends(get_db)):
    roster_service.delete_teacher(db, teacher_id)
    return Response(status_code=204)


@router.get("/{teacher_id}/students", response_model=list[StudentResponse])
def list_teacher_students(teacher_id: str, db: Session = Depends(get_db)):
    """Students assigned to this teacher."""
    return roster_service.list_students_for_teacher(db, teacher_id)

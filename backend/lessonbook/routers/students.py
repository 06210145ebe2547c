"""Students router: roster management and teacher assignment."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from lessonbook.database import get_db
from lessonbook.schemas.participant import StudentCreate, StudentResponse, StudentUpdate, TeacherResponse
from lessonbook.services import roster_service

router = APIRouter(prefix="/api/students", tags=["students"])


@router.post("", response_model=StudentResponse, status_code=201)
def create_student(req: StudentCreate, db: Session = Depends(get_db)):
    return roster_service.create_student(db, req)


@router.get("", response_model=list[StudentResponse])
def list_students(db: Session = Depends(get_db)):
    return roster_service.list_students(db)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: str, db: Session = Depends(get_db)):
    return roster_service.get_student(db, student_id)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(student_id: str, req: StudentUpdate, db: Session = Depends(get_db)):
    return roster_service.update_student(db, student_id, req)


@router.delete("/{student_id}", status_code=204)
def delete_student(student_id: str, db: Session = Depends(get_db)):
    roster_service.delete_student(db, student_id)
    return Response(status_code=204)


@router.get("/{student_id}/teachers", response_model=list[TeacherResponse])
def list_student_teachers(student_id: str, db: Session = Depends(get_db)):
    return roster_service.list_teachers_for_student(db, student_id)


@router.post("/{student_id}/teachers/{teacher_id}", response_model=list[TeacherResponse])
def assign_teacher(student_id: str, teacher_id: str, db: Session = Depends(get_db)):
    """Assign a teacher; lessons can only be booked between assigned pairs."""
    return roster_service.assign_teacher(db, student_id, teacher_id)


@router.delete("/{student_id}/teachers/{teacher_id}", response_model=list[TeacherResponse])
def unassign_teacher(student_id: str, teacher_id: str, db: Session = Depends(get_db)):
    return roster_service.unassign_teacher(db, student_id, teacher_id)

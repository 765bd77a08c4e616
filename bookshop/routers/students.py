# bookshop/routers/students.py

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.core.auth import get_current_user
from bookshop.core.constants import MAX_DB_INT, ClassLevel
from bookshop.services import reporting, students
from bookshop.schemas.student import (
    StudentCreate,
    StudentResponse,
    StudentSummaryResponse,
    StudentUpdate,
)

router = APIRouter(
    prefix="/students",
    tags=["Students"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[StudentResponse])
def list_students(db: Session = Depends(get_db)):
    return students.list_students(db)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    student_data: StudentCreate,
    db: Session = Depends(get_db),
):
    return students.create_student(db, student_data.name, student_data.class_level)


@router.get("/summaries", response_model=list[StudentSummaryResponse])
def student_summaries(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None),
    class_level: Optional[ClassLevel] = Query(None),
):
    return reporting.get_student_summaries(db, search=search, class_level=class_level)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(
    student_data: StudentUpdate,
    student_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
):
    return students.update_student(
        db,
        student_id,
        name=student_data.name,
        class_level=student_data.class_level,
    )

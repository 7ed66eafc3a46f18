"""Students 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import require_roles
from app.models.user import User
from app.schemas.common import MessageOut
from app.schemas.student import StudentCreate, StudentOut, StudentUpdate
from app.services import student_service

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=List[StudentOut])
def list_students(db: Session = Depends(get_db)):
    return student_service.list_students(db)


@router.get("/{student_pk}", response_model=StudentOut)
def get_student(student_pk: int, db: Session = Depends(get_db)):
    return student_service.get_student(db, student_pk)


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(
    data: StudentCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return student_service.create_student(db, data)


@router.put("/{student_pk}", response_model=StudentOut)
def update_student(
    student_pk: int,
    data: StudentUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return student_service.update_student(db, student_pk, data)


@router.delete("/{student_pk}", response_model=MessageOut)
def delete_student(
    student_pk: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    student_service.delete_student(db, student_pk)
    return MessageOut(message="Student deleted successfully")

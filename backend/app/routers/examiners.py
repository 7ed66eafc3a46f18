"""Examiners 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import require_roles
from app.models.user import User
from app.schemas.common import MessageOut
from app.schemas.examiner import ExaminerCreate, ExaminerOut, ExaminerUpdate
from app.services import examiner_service

router = APIRouter(prefix="/api/examiners", tags=["examiners"])


@router.get("", response_model=List[ExaminerOut])
def list_examiners(db: Session = Depends(get_db)):
    return examiner_service.list_examiners(db)


@router.get("/{examiner_id}", response_model=ExaminerOut)
def get_examiner(examiner_id: int, db: Session = Depends(get_db)):
    return examiner_service.get_examiner(db, examiner_id)


@router.post("", response_model=ExaminerOut, status_code=status.HTTP_201_CREATED)
def create_examiner(
    data: ExaminerCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return examiner_service.create_examiner(db, data)


@router.put("/{examiner_id}", response_model=ExaminerOut)
def update_examiner(
    examiner_id: int,
    data: ExaminerUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return examiner_service.update_examiner(db, examiner_id, data)


@router.delete("/{examiner_id}", response_model=MessageOut)
def delete_examiner(
    examiner_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    examiner_service.delete_examiner(db, examiner_id)
    return MessageOut(message="Examiner deleted successfully")

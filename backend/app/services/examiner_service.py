"""Examiner Service 도메인 서비스 레이어입니다."""

from typing import List

from sqlalchemy.orm import Session

from app.models.examiner import DEFAULT_PROFILE_PHOTO, Examiner
from app.schemas.examiner import ExaminerCreate, ExaminerUpdate
from app.utils.errors import FieldValidationError, not_found


def _ensure_unique(db: Session, code: str | None, email: str | None, exclude_id: int | None = None):
    errors = {}
    if code:
        q = db.query(Examiner.examiner_id).filter(Examiner.code == code)
        if exclude_id is not None:
            q = q.filter(Examiner.examiner_id != exclude_id)
        if q.first():
            errors["code"] = "Examiner ID already exists"
    if email:
        q = db.query(Examiner.examiner_id).filter(Examiner.email == email)
        if exclude_id is not None:
            q = q.filter(Examiner.examiner_id != exclude_id)
        if q.first():
            errors["email"] = "Email already registered"
    if errors:
        raise FieldValidationError(errors)


def list_examiners(db: Session) -> List[Examiner]:
    return db.query(Examiner).order_by(Examiner.examiner_id).all()


def get_examiner(db: Session, examiner_id: int) -> Examiner:
    examiner = db.query(Examiner).filter(Examiner.examiner_id == examiner_id).first()
    if not examiner:
        raise not_found("Examiner")
    return examiner


def create_examiner(db: Session, data: ExaminerCreate) -> Examiner:
    payload = data.model_dump()
    _ensure_unique(db, payload["code"], payload["email"])
    payload["profile_photos"] = payload.get("profile_photos") or [DEFAULT_PROFILE_PHOTO]
    examiner = Examiner(**payload)
    db.add(examiner)
    db.commit()
    db.refresh(examiner)
    return examiner


def update_examiner(db: Session, examiner_id: int, data: ExaminerUpdate) -> Examiner:
    examiner = get_examiner(db, examiner_id)
    payload = data.model_dump(exclude_none=True)
    _ensure_unique(db, None, payload.get("email"), exclude_id=examiner_id)
    for key, value in payload.items():
        setattr(examiner, key, value)
    db.commit()
    db.refresh(examiner)
    return examiner


def delete_examiner(db: Session, examiner_id: int) -> None:
    examiner = get_examiner(db, examiner_id)
    db.delete(examiner)
    db.commit()

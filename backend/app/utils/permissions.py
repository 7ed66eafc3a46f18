"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.examiner import Examiner
from app.models.user import User


ADMIN = "admin"
EXAMINER = "examiner"


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def is_examiner(user: User) -> bool:
    return user.role == EXAMINER


def examiner_code_for(db: Session, user: User) -> str | None:
    # 시험관 계정은 이메일로 Examiner 프로필과 연결된다.
    cached = getattr(user, "_examiner_code_cache", None)
    if cached is not None:
        return cached or None
    row = db.query(Examiner.code).filter(func.lower(Examiner.email) == (user.email or "").lower()).first()
    code = str(row[0]) if row else ""
    setattr(user, "_examiner_code_cache", code)
    return code or None


def can_manage_slot(db: Session, user: User, examiner_id: str) -> bool:
    if is_admin(user):
        return True
    if is_examiner(user):
        return examiner_code_for(db, user) == examiner_id
    return False

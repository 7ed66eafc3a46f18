"""Notice Service 도메인 서비스 레이어입니다. 공지 CRUD와 수신 확인 흐름을 캡슐화합니다."""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.notice import Notice, NoticeAcknowledgment
from app.schemas.notice import NoticeCreate, NoticeUpdate
from app.utils.errors import FieldValidationError, not_found

logger = logging.getLogger(__name__)


def _ensure_window(effective_date: datetime, expiration_date: Optional[datetime]):
    if expiration_date is not None and expiration_date <= effective_date:
        raise FieldValidationError({"expirationDate": "Expiration date must be after effective date"})


def get_notice(db: Session, notice_id: int) -> Notice:
    notice = db.query(Notice).filter(Notice.notice_id == notice_id).first()
    if not notice:
        raise not_found("Notice")
    return notice


def list_notices(db: Session) -> List[Notice]:
    return db.query(Notice).order_by(Notice.effective_date.desc(), Notice.notice_id.desc()).all()


def list_notices_for_audience(db: Session, audience: str) -> List[Notice]:
    q = db.query(Notice)
    if audience == "students":
        q = q.filter(Notice.publish_to_students == True)  # noqa: E712
    elif audience == "examiners":
        q = q.filter(Notice.publish_to_examiners == True)  # noqa: E712
    else:
        q = q.filter(Notice.publish_to_students == True, Notice.publish_to_examiners == True)  # noqa: E712
    return q.order_by(Notice.effective_date.desc(), Notice.notice_id.desc()).all()


def create_notice(db: Session, data: NoticeCreate) -> Notice:
    payload = data.model_dump()
    _ensure_window(payload["effective_date"], payload.get("expiration_date"))

    existing = db.query(Notice.notice_id).filter(Notice.notice_code == payload["notice_code"]).first()
    if existing:
        raise FieldValidationError({"noticeId": "Notice ID already exists"})

    notice = Notice(**payload)
    db.add(notice)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise FieldValidationError({"noticeId": "Notice ID already exists"})
    db.refresh(notice)
    logger.info("[notices] created id=%s code=%s", notice.notice_id, notice.notice_code)
    return notice


def update_notice(db: Session, notice_id: int, data: NoticeUpdate) -> Notice:
    notice = get_notice(db, notice_id)
    payload = data.model_dump(exclude_none=True)
    _ensure_window(
        payload.get("effective_date", notice.effective_date),
        payload.get("expiration_date", notice.expiration_date),
    )
    for key, value in payload.items():
        setattr(notice, key, value)
    notice.version = (notice.version or 1) + 1
    db.commit()
    db.refresh(notice)
    logger.info("[notices] updated id=%s version=%s", notice.notice_id, notice.version)
    return notice


def delete_notice(db: Session, notice_id: int) -> None:
    notice = get_notice(db, notice_id)
    db.delete(notice)
    db.commit()
    logger.info("[notices] deleted id=%s", notice_id)


def acknowledge_notice(db: Session, notice_id: int, user_ref: str) -> Notice:
    notice = get_notice(db, notice_id)
    already = (
        db.query(NoticeAcknowledgment.ack_id)
        .filter(NoticeAcknowledgment.notice_id == notice_id, NoticeAcknowledgment.user_ref == user_ref)
        .first()
    )
    if already:
        raise HTTPException(status_code=400, detail="Notice already acknowledged")
    notice.acknowledgments.append(NoticeAcknowledgment(user_ref=user_ref))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Notice already acknowledged")
    db.refresh(notice)
    return notice

"""Notification Service 도메인 서비스 레이어입니다. 알림 수명주기(작성/게시/보관)와 대상 필터링 규칙을 캡슐화합니다."""

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.config import settings
from app.models.examiner import Examiner
from app.models.notification import Notification, NotificationAudience
from app.models.student import Student
from app.models.user import User
from app.schemas.notification import NotificationCreate, NotificationUpdate
from app.services.email_service import render_notification_email
from app.utils.errors import FieldValidationError, not_found
from app.utils.helpers import utcnow

logger = logging.getLogger(__name__)

PUBLISHED = "Published"


def _priority_rank_expr():
    return case(
        (Notification.priority == "High", 0),
        (Notification.priority == "Medium", 1),
        (Notification.priority == "Low", 2),
        else_=99,
    )


def _ensure_invariants(effective_date: datetime, expiration_date: Optional[datetime], audiences: Iterable[str]):
    errors: Dict[str, str] = {}
    if expiration_date is None:
        errors["expirationDate"] = "Expiration date is required"
    elif expiration_date <= effective_date:
        errors["expirationDate"] = "Expiration date must be after effective date"
    if not list(audiences or []):
        errors["targetAudience"] = "At least one target audience must be selected"
    if errors:
        raise FieldValidationError(errors)


def _sync_audiences(noti: Notification, audiences: List[str]):
    # 유지되는 대상은 그대로 두고 빠진 것만 제거한다(unique 제약 충돌 방지).
    wanted = list(dict.fromkeys(audiences))
    for row in list(noti.audiences):
        if row.audience not in wanted:
            noti.audiences.remove(row)
    existing = {row.audience for row in noti.audiences}
    for audience in wanted:
        if audience not in existing:
            noti.audiences.append(NotificationAudience(audience=audience))


def _get_or_404(db: Session, notification_id: int) -> Notification:
    noti = db.query(Notification).filter(Notification.notification_id == notification_id).first()
    if not noti:
        raise not_found("Notification")
    return noti


def list_notifications(db: Session) -> List[Notification]:
    return (
        db.query(Notification)
        .order_by(Notification.created_at.desc(), Notification.notification_id.desc())
        .all()
    )


def get_active_notifications(
    db: Session,
    audience: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[Notification]:
    now = now or utcnow()
    q = db.query(Notification).filter(
        Notification.status == PUBLISHED,
        Notification.effective_date <= now,
        Notification.expiration_date > now,
    )
    if audience:
        q = q.filter(Notification.audiences.any(NotificationAudience.audience == audience))
    return q.order_by(
        _priority_rank_expr(),
        Notification.effective_date.desc(),
        Notification.notification_id.desc(),
    ).all()


def view_notification(db: Session, notification_id: int) -> Notification:
    updated = (
        db.query(Notification)
        .filter(Notification.notification_id == notification_id)
        .update({"view_count": Notification.view_count + 1}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise not_found("Notification")
    db.commit()
    noti = _get_or_404(db, notification_id)
    db.refresh(noti)
    return noti


def create_notification(db: Session, data: NotificationCreate, current_user: Optional[User]) -> Notification:
    payload = data.model_dump()
    audiences = payload.pop("target_audience") or []
    payload["effective_date"] = payload.get("effective_date") or utcnow()
    _ensure_invariants(payload["effective_date"], payload.get("expiration_date"), audiences)

    noti = Notification(**payload, created_by=current_user.user_id if current_user else None)
    _sync_audiences(noti, audiences)
    db.add(noti)
    db.commit()
    db.refresh(noti)
    logger.info(
        "[notifications] created id=%s status=%s audience=%s",
        noti.notification_id,
        noti.status,
        ",".join(noti.target_audience),
    )
    return noti


def update_notification(
    db: Session,
    notification_id: int,
    data: NotificationUpdate,
    current_user: Optional[User],
) -> Tuple[Notification, bool]:
    """변경 후 알림과 메일 발송 필요 여부를 반환한다."""
    noti = _get_or_404(db, notification_id)
    was_published = noti.status == PUBLISHED
    had_email = bool(noti.notify_via_email)

    payload = data.model_dump(exclude_none=True)
    audiences = payload.pop("target_audience", None)
    next_effective = payload.get("effective_date", noti.effective_date)
    next_expiration = payload.get("expiration_date", noti.expiration_date)
    next_audiences = audiences if audiences is not None else noti.target_audience
    _ensure_invariants(next_effective, next_expiration, next_audiences)

    for key, value in payload.items():
        setattr(noti, key, value)
    if audiences is not None:
        _sync_audiences(noti, audiences)
    noti.last_modified_by = current_user.user_id if current_user else None
    db.commit()
    db.refresh(noti)

    should_email = (
        noti.status == PUBLISHED
        and bool(noti.notify_via_email)
        and (not was_published or not had_email)
    )
    logger.info("[notifications] updated id=%s status=%s", noti.notification_id, noti.status)
    return noti, should_email


def delete_notification(db: Session, notification_id: int) -> None:
    noti = _get_or_404(db, notification_id)
    db.delete(noti)
    db.commit()
    logger.info("[notifications] deleted id=%s", notification_id)


def bulk_delete_notifications(db: Session, ids: List[int]) -> List[int]:
    """실제로 삭제된 id 목록을 반환한다. 존재하지 않는 id는 무시한다."""
    if not ids:
        return []
    found = [
        row[0]
        for row in db.query(Notification.notification_id)
        .filter(Notification.notification_id.in_(ids))
        .order_by(Notification.notification_id)
        .all()
    ]
    if not found:
        return []
    db.query(NotificationAudience).filter(NotificationAudience.notification_id.in_(found)).delete(
        synchronize_session=False
    )
    db.query(Notification).filter(Notification.notification_id.in_(found)).delete(synchronize_session=False)
    db.commit()
    logger.info("[notifications] bulk deleted %s of %s requested", len(found), len(ids))
    return found


def get_notification_stats(db: Session, now: Optional[datetime] = None) -> dict:
    now = now or utcnow()
    horizon = now + timedelta(days=settings.EXPIRING_SOON_DAYS)

    total = db.query(func.count(Notification.notification_id)).scalar() or 0
    active = (
        db.query(func.count(Notification.notification_id))
        .filter(
            Notification.status == PUBLISHED,
            Notification.effective_date <= now,
            Notification.expiration_date > now,
        )
        .scalar()
        or 0
    )
    expiring = (
        db.query(func.count(Notification.notification_id))
        .filter(
            Notification.status == PUBLISHED,
            Notification.expiration_date >= now,
            Notification.expiration_date <= horizon,
        )
        .scalar()
        or 0
    )
    rows = (
        db.query(
            Notification.type,
            func.count(Notification.notification_id),
            func.coalesce(func.sum(Notification.view_count), 0),
        )
        .group_by(Notification.type)
        .all()
    )
    return {
        "total_notifications": int(total),
        "active_notifications": int(active),
        "expiring_this_week": int(expiring),
        "by_type": {str(t): {"count": int(c), "views": int(v)} for t, c, v in rows},
    }


def collect_email_recipients(db: Session, audiences: Iterable[str]) -> List[str]:
    targets = set(audiences or [])
    include_students = bool(targets & {"students", "common"})
    include_examiners = bool(targets & {"examiners", "common"})

    emails: List[str] = []
    if include_students:
        emails.extend(row[0] for row in db.query(Student.email).all())
    if include_examiners:
        emails.extend(row[0] for row in db.query(Examiner.email).all())

    recipients: List[str] = []
    for email in emails:
        text = str(email or "").strip()
        if text and text not in recipients:
            recipients.append(text)
    return recipients


def build_notification_email(noti: Notification) -> Tuple[str, str]:
    subject = f"Notification: {noti.title}"
    content = render_notification_email(
        title=noti.title,
        body=noti.body,
        priority=noti.priority,
        notification_type=noti.type,
        effective_label=noti.effective_date.strftime("%Y-%m-%d"),
        expiration_label=noti.expiration_date.strftime("%Y-%m-%d") if noti.expiration_date else None,
    )
    return subject, content


def prepare_notification_email(db: Session, notification_id: int) -> Tuple[List[str], str, str]:
    """즉시 발송용 수신자 목록과 메일 제목/본문을 만든다."""
    noti = _get_or_404(db, notification_id)
    recipients = collect_email_recipients(db, noti.target_audience)
    if not recipients:
        raise HTTPException(status_code=400, detail="No recipients found for the selected audience")
    subject, content = build_notification_email(noti)
    return recipients, subject, content

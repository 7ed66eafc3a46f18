"""Notifications 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import require_roles
from app.models.notification import Notification
from app.models.user import User
from app.schemas.common import BulkDeleteRequest, MessageOut
from app.schemas.notification import (
    Audience,
    NotificationBulkDeleteOut,
    NotificationCreate,
    NotificationEmailOut,
    NotificationOut,
    NotificationStatsOut,
    NotificationUpdate,
)
from app.services import notification_service
from app.services.email_service import EmailService, get_email_service
from app.services.realtime_service import DELETED_NOTICE, NEW_NOTICE, UPDATED_NOTICE, EventSink, get_event_sink

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _schedule_email(
    db: Session,
    noti: Notification,
    background_tasks: BackgroundTasks,
    email_service: EmailService,
):
    recipients = notification_service.collect_email_recipients(db, noti.target_audience)
    if not recipients:
        logger.info("[notifications] no e-mail recipients for id=%s", noti.notification_id)
        return
    subject, content = notification_service.build_notification_email(noti)
    background_tasks.add_task(email_service.send_bulk, recipients, subject, content)


@router.get("", response_model=List[NotificationOut])
def list_notifications(db: Session = Depends(get_db)):
    return notification_service.list_notifications(db)


@router.get("/stats/overview", response_model=NotificationStatsOut)
def get_notification_stats(db: Session = Depends(get_db)):
    return notification_service.get_notification_stats(db)


@router.get("/active/common", response_model=List[NotificationOut])
def list_active_common(db: Session = Depends(get_db)):
    return notification_service.get_active_notifications(db, "common")


@router.get("/audience/{audience}", response_model=List[NotificationOut])
def list_active_for_audience(audience: Audience, db: Session = Depends(get_db)):
    return notification_service.get_active_notifications(db, audience)


@router.post("/bulk-delete", response_model=NotificationBulkDeleteOut)
def bulk_delete_notifications(
    data: BulkDeleteRequest,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    _current_user: User = Depends(require_roles("admin")),
):
    deleted_ids = notification_service.bulk_delete_notifications(db, data.ids)
    if deleted_ids:
        event_sink.publish(DELETED_NOTICE, {"ids": deleted_ids})
    return NotificationBulkDeleteOut(message="Notifications deleted successfully", deleted=len(deleted_ids))


@router.get("/{notification_id}", response_model=NotificationOut)
def get_notification(notification_id: int, db: Session = Depends(get_db)):
    return notification_service.view_notification(db, notification_id)


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def create_notification(
    data: NotificationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_roles("admin")),
):
    noti = notification_service.create_notification(db, data, current_user)
    out = NotificationOut.model_validate(noti)
    event_sink.publish(NEW_NOTICE, out)
    if noti.status == "Published" and noti.notify_via_email:
        _schedule_email(db, noti, background_tasks, email_service)
    return out


@router.put("/{notification_id}", response_model=NotificationOut)
def update_notification(
    notification_id: int,
    data: NotificationUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_roles("admin")),
):
    noti, should_email = notification_service.update_notification(db, notification_id, data, current_user)
    out = NotificationOut.model_validate(noti)
    event_sink.publish(UPDATED_NOTICE, out)
    if should_email:
        _schedule_email(db, noti, background_tasks, email_service)
    return out


@router.delete("/{notification_id}", response_model=MessageOut)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    _current_user: User = Depends(require_roles("admin")),
):
    notification_service.delete_notification(db, notification_id)
    event_sink.publish(DELETED_NOTICE, {"id": notification_id})
    return MessageOut(message="Notification deleted successfully")


@router.post("/{notification_id}/send-email", response_model=NotificationEmailOut)
async def send_notification_email(
    notification_id: int,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
    _current_user: User = Depends(require_roles("admin")),
):
    # 동기 DB 조회는 이벤트 루프를 막지 않도록 스레드풀에서 실행한다.
    recipients, subject, content = await run_in_threadpool(
        notification_service.prepare_notification_email, db, notification_id
    )
    if not await email_service.send_bulk(recipients, subject, content):
        raise HTTPException(status_code=500, detail="Failed to send emails")
    return NotificationEmailOut(message="Emails sent successfully", recipient_count=len(recipients))

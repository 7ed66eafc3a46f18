"""Notices 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import require_roles
from app.models.user import User
from app.schemas.common import MessageOut
from app.schemas.notice import NoticeAcknowledgeRequest, NoticeCreate, NoticeMutationOut, NoticeOut, NoticeUpdate
from app.schemas.notification import Audience
from app.services import notice_service
from app.services.realtime_service import (
    ACKNOWLEDGED_NOTICE,
    DELETED_NOTICE,
    NEW_NOTICE,
    UPDATED_NOTICE,
    EventSink,
    get_event_sink,
)

router = APIRouter(prefix="/api/notices", tags=["notices"])


@router.get("", response_model=List[NoticeOut])
def list_notices(db: Session = Depends(get_db)):
    return notice_service.list_notices(db)


@router.get("/audience/{audience}", response_model=List[NoticeOut])
def list_notices_for_audience(audience: Audience, db: Session = Depends(get_db)):
    return notice_service.list_notices_for_audience(db, audience)


@router.get("/{notice_id}", response_model=NoticeOut)
def get_notice(notice_id: int, db: Session = Depends(get_db)):
    return notice_service.get_notice(db, notice_id)


@router.post("", response_model=NoticeMutationOut, status_code=status.HTTP_201_CREATED)
def create_notice(
    data: NoticeCreate,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    _current_user: User = Depends(require_roles("admin")),
):
    notice = NoticeOut.model_validate(notice_service.create_notice(db, data))
    event_sink.publish(NEW_NOTICE, notice)
    return NoticeMutationOut(message="Notice created successfully", notice=notice)


@router.put("/{notice_id}", response_model=NoticeMutationOut)
def update_notice(
    notice_id: int,
    data: NoticeUpdate,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    _current_user: User = Depends(require_roles("admin")),
):
    notice = NoticeOut.model_validate(notice_service.update_notice(db, notice_id, data))
    event_sink.publish(UPDATED_NOTICE, notice)
    return NoticeMutationOut(message="Notice updated successfully", notice=notice)


@router.delete("/{notice_id}", response_model=MessageOut)
def delete_notice(
    notice_id: int,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    _current_user: User = Depends(require_roles("admin")),
):
    notice_service.delete_notice(db, notice_id)
    event_sink.publish(DELETED_NOTICE, {"id": notice_id})
    return MessageOut(message="Notice deleted successfully")


@router.post("/{notice_id}/acknowledge", response_model=NoticeMutationOut)
def acknowledge_notice(
    notice_id: int,
    data: NoticeAcknowledgeRequest,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
):
    notice = NoticeOut.model_validate(notice_service.acknowledge_notice(db, notice_id, data.user_ref))
    event_sink.publish(ACKNOWLEDGED_NOTICE, {"id": notice_id, "userId": data.user_ref})
    return NoticeMutationOut(message="Notice acknowledged successfully", notice=notice)

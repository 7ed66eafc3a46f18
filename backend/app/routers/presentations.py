"""Presentations 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.schemas.booking import PresentationCreate, PresentationMutationOut, PresentationOut, PresentationReschedule
from app.services import booking_service
from app.services.realtime_service import SCHEDULE_UPDATE, EventSink, get_event_sink

router = APIRouter(prefix="/api/presentations", tags=["presentations"])


@router.get("", response_model=List[PresentationOut])
def list_presentations(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return booking_service.list_presentations(db)


@router.post("", response_model=PresentationMutationOut, status_code=status.HTTP_201_CREATED)
def create_presentation(
    data: PresentationCreate,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    current_user: User = Depends(get_current_user),
):
    presentation = booking_service.create_presentation(db, data, current_user)
    event_sink.publish(SCHEDULE_UPDATE, {"message": "Presentation booked"})
    return PresentationMutationOut(
        message="Presentation booked successfully",
        presentation=PresentationOut.model_validate(presentation),
    )


@router.put("/{presentation_id}/reschedule", response_model=PresentationMutationOut)
def reschedule_presentation(
    presentation_id: int,
    data: PresentationReschedule,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    current_user: User = Depends(get_current_user),
):
    presentation = booking_service.reschedule_presentation(db, presentation_id, data, current_user)
    event_sink.publish(SCHEDULE_UPDATE, {"message": "Presentation rescheduled"})
    return PresentationMutationOut(
        message="Presentation rescheduled successfully",
        presentation=PresentationOut.model_validate(presentation),
    )

"""Bookings 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingOut, BookingUpdate
from app.schemas.common import MessageOut
from app.services import booking_service
from app.services.realtime_service import SCHEDULE_UPDATE, EventSink, get_event_sink

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("", response_model=List[BookingOut])
def list_bookings(
    examiner_id: Optional[str] = Query(None, alias="examinerId"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return booking_service.list_bookings(db, examiner_id)


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return booking_service.get_booking(db, booking_id)


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.create_booking(db, data, current_user)
    event_sink.publish(SCHEDULE_UPDATE, {"message": "Booking created"})
    return booking


@router.put("/{booking_id}", response_model=BookingOut)
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.update_booking(db, booking_id, data, current_user)
    event_sink.publish(SCHEDULE_UPDATE, {"message": "Booking updated"})
    return booking


@router.delete("/{booking_id}", response_model=MessageOut)
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    event_sink: EventSink = Depends(get_event_sink),
    current_user: User = Depends(get_current_user),
):
    booking_service.delete_booking(db, booking_id, current_user)
    event_sink.publish(SCHEDULE_UPDATE, {"message": "Booking deleted"})
    return MessageOut(message="Booking deleted successfully")

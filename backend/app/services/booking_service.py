"""Booking Service 도메인 서비스 레이어입니다. 시험관 슬롯 예약/발표 일정의 충돌 검사를 캡슐화합니다."""

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.booking import Booking, Presentation
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingUpdate, PresentationCreate, PresentationReschedule
from app.utils.errors import conflict, not_found
from app.utils.permissions import can_manage_slot

logger = logging.getLogger(__name__)


def _conflict_message(examiner_id: str, date: str, time: str) -> str:
    return f"Examiner {examiner_id} is already booked on {date} at {time}"


def _ensure_can_manage(db: Session, current_user: User, examiner_id: str):
    if not can_manage_slot(db, current_user, examiner_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only manage bookings for your own examiner profile",
        )


def _assert_slot_free(db: Session, model, pk_column, examiner_id: str, date: str, time: str, exclude_id: Optional[int] = None):
    q = db.query(pk_column).filter(
        model.examiner_id == examiner_id,
        model.date == date,
        model.time == time,
    )
    if exclude_id is not None:
        q = q.filter(pk_column != exclude_id)
    if q.first():
        logger.warning("[bookings] slot conflict examiner=%s date=%s time=%s", examiner_id, date, time)
        raise conflict(_conflict_message(examiner_id, date, time))


def _commit_slot(db: Session, examiner_id: str, date: str, time: str):
    # 동시 요청이 사전 검사를 모두 통과해도 unique 제약에서 걸린다.
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("[bookings] slot conflict on commit examiner=%s date=%s time=%s", examiner_id, date, time)
        raise conflict(_conflict_message(examiner_id, date, time))


def list_bookings(db: Session, examiner_id: Optional[str] = None) -> List[Booking]:
    q = db.query(Booking)
    if examiner_id:
        q = q.filter(Booking.examiner_id == examiner_id)
    return q.order_by(Booking.date, Booking.time, Booking.booking_id).all()


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.query(Booking).filter(Booking.booking_id == booking_id).first()
    if not booking:
        raise not_found("Booking")
    return booking


def create_booking(db: Session, data: BookingCreate, current_user: User) -> Booking:
    _ensure_can_manage(db, current_user, data.examiner_id)
    _assert_slot_free(db, Booking, Booking.booking_id, data.examiner_id, data.date, data.time)

    booking = Booking(examiner_id=data.examiner_id, date=data.date, time=data.time, is_booked=True)
    db.add(booking)
    _commit_slot(db, data.examiner_id, data.date, data.time)
    db.refresh(booking)
    logger.info("[bookings] booked id=%s examiner=%s %s %s", booking.booking_id, booking.examiner_id, booking.date, booking.time)
    return booking


def update_booking(db: Session, booking_id: int, data: BookingUpdate, current_user: User) -> Booking:
    booking = get_booking(db, booking_id)
    _ensure_can_manage(db, current_user, booking.examiner_id)

    payload = data.model_dump(exclude_none=True)
    next_examiner = payload.get("examiner_id", booking.examiner_id)
    next_date = payload.get("date", booking.date)
    next_time = payload.get("time", booking.time)
    if next_examiner != booking.examiner_id:
        _ensure_can_manage(db, current_user, next_examiner)
    if (next_examiner, next_date, next_time) != (booking.examiner_id, booking.date, booking.time):
        _assert_slot_free(db, Booking, Booking.booking_id, next_examiner, next_date, next_time, exclude_id=booking.booking_id)

    for key, value in payload.items():
        setattr(booking, key, value)
    _commit_slot(db, next_examiner, next_date, next_time)
    db.refresh(booking)
    return booking


def delete_booking(db: Session, booking_id: int, current_user: User) -> None:
    booking = get_booking(db, booking_id)
    _ensure_can_manage(db, current_user, booking.examiner_id)
    db.delete(booking)
    db.commit()
    logger.info("[bookings] deleted id=%s", booking_id)


def list_presentations(db: Session) -> List[Presentation]:
    return db.query(Presentation).order_by(Presentation.date, Presentation.time, Presentation.presentation_id).all()


def create_presentation(db: Session, data: PresentationCreate, current_user: User) -> Presentation:
    _ensure_can_manage(db, current_user, data.examiner_id)
    _assert_slot_free(db, Presentation, Presentation.presentation_id, data.examiner_id, data.date, data.time)

    presentation = Presentation(examiner_id=data.examiner_id, date=data.date, time=data.time)
    db.add(presentation)
    _commit_slot(db, data.examiner_id, data.date, data.time)
    db.refresh(presentation)
    logger.info(
        "[bookings] presentation scheduled id=%s examiner=%s %s %s",
        presentation.presentation_id,
        presentation.examiner_id,
        presentation.date,
        presentation.time,
    )
    return presentation


def reschedule_presentation(
    db: Session,
    presentation_id: int,
    data: PresentationReschedule,
    current_user: User,
) -> Presentation:
    presentation = db.query(Presentation).filter(Presentation.presentation_id == presentation_id).first()
    if not presentation:
        raise not_found("Presentation")
    _ensure_can_manage(db, current_user, presentation.examiner_id)
    _assert_slot_free(
        db,
        Presentation,
        Presentation.presentation_id,
        presentation.examiner_id,
        data.date,
        data.time,
        exclude_id=presentation.presentation_id,
    )
    presentation.date = data.date
    presentation.time = data.time
    _commit_slot(db, presentation.examiner_id, data.date, data.time)
    db.refresh(presentation)
    return presentation

"""Booking/Presentation 슬롯 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Boolean, Index, UniqueConstraint
from app.database import Base


class Booking(Base):
    __tablename__ = "booking"

    booking_id = Column(Integer, primary_key=True, autoincrement=True)
    examiner_id = Column(String(30), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    time = Column(String(20), nullable=False)
    is_booked = Column(Boolean, default=False)

    __table_args__ = (
        UniqueConstraint("examiner_id", "date", "time", name="uq_booking_examiner_slot"),
        Index("idx_booking_date", "date", "time"),
    )


class Presentation(Base):
    __tablename__ = "presentation"

    presentation_id = Column(Integer, primary_key=True, autoincrement=True)
    examiner_id = Column(String(30), nullable=False)
    date = Column(String(10), nullable=False)
    time = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled/completed

    __table_args__ = (
        UniqueConstraint("examiner_id", "date", "time", name="uq_presentation_examiner_slot"),
    )

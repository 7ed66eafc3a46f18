"""Booking/Presentation 요청/응답 계약을 위한 Pydantic 스키마입니다."""

import re
from typing import Literal, Optional

from pydantic import Field, field_validator

from app.schemas.common import ApiModel

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not _DATE_RE.match(value):
        raise ValueError("date must be in YYYY-MM-DD format")
    return value


class SlotBase(ApiModel):
    examiner_id: str = Field(..., min_length=1, max_length=30)
    date: str
    time: str = Field(..., min_length=1, max_length=20)

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value):
        return _check_date(value)


class BookingCreate(SlotBase):
    pass


class BookingUpdate(ApiModel):
    examiner_id: Optional[str] = Field(None, min_length=1, max_length=30)
    date: Optional[str] = None
    time: Optional[str] = Field(None, min_length=1, max_length=20)
    is_booked: Optional[bool] = None

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value):
        return _check_date(value)


class BookingOut(SlotBase):
    booking_id: int
    is_booked: bool


class PresentationCreate(SlotBase):
    pass


class PresentationReschedule(ApiModel):
    date: str
    time: str = Field(..., min_length=1, max_length=20)

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value):
        return _check_date(value)


class PresentationOut(SlotBase):
    presentation_id: int
    status: Literal["scheduled", "completed"]


class PresentationMutationOut(ApiModel):
    message: str
    presentation: PresentationOut

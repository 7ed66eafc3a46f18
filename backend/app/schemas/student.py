"""Student 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import ApiModel


class StudentBase(ApiModel):
    student_id: str = Field(..., min_length=1, max_length=30)
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    address: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, max_length=100)
    contact_no: str = Field(..., min_length=1)
    faculty: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)
    year: int = Field(..., ge=1)


class StudentCreate(StudentBase):
    pass


class StudentUpdate(ApiModel):
    name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    address: Optional[str] = None
    email: Optional[str] = Field(None, min_length=3, max_length=100)
    contact_no: Optional[str] = None
    faculty: Optional[str] = None
    specialization: Optional[str] = None
    year: Optional[int] = Field(None, ge=1)


class StudentOut(StudentBase):
    student_pk: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

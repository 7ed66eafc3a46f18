"""Examiner 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from typing import List, Optional

from pydantic import Field

from app.schemas.common import ApiModel


class ExaminerBase(ApiModel):
    code: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., min_length=3, max_length=100)
    fname: str = Field(..., min_length=1)
    lname: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    courses: List[str] = Field(..., min_length=1)
    modules: List[str] = Field(..., min_length=1)
    availability: str = "true"
    salary: float = Field(..., ge=0)
    profile_photos: Optional[List[str]] = None


class ExaminerCreate(ExaminerBase):
    pass


class ExaminerUpdate(ApiModel):
    email: Optional[str] = Field(None, min_length=3, max_length=100)
    fname: Optional[str] = None
    lname: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    courses: Optional[List[str]] = None
    modules: Optional[List[str]] = None
    availability: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    profile_photos: Optional[List[str]] = None


class ExaminerOut(ExaminerBase):
    examiner_id: int
    profile_photos: List[str] = []

"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.schemas.common import ApiModel

Role = Literal["admin", "examiner", "student"]


class UserBase(ApiModel):
    email: str = Field(..., min_length=3, max_length=100)
    role: Role
    first_name: str = Field(..., min_length=1, max_length=50)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserOut(UserBase):
    user_id: int
    is_active: bool
    created_at: Optional[datetime] = None


class LoginRequest(ApiModel):
    email: str
    password: str


class TokenResponse(ApiModel):
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: UserOut

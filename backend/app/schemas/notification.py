"""Notification 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import ClassVar, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from app.schemas.common import ApiModel, Attachment, coerce_attachments, normalize_datetime
from app.utils.helpers import dedupe_texts, utcnow

NotificationType = Literal["Academic", "Administrative", "Event"]
Priority = Literal["High", "Medium", "Low"]
NotificationStatus = Literal["Draft", "Published", "Archived"]
Audience = Literal["students", "examiners", "common"]


class _NotificationFields(ApiModel):
    model_config = ConfigDict(str_strip_whitespace=True)
    effective_defaults_to_now: ClassVar[bool] = False

    @field_validator("attachments", mode="before", check_fields=False)
    @classmethod
    def _coerce_attachments(cls, value):
        return coerce_attachments(value)

    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def _clean_tags(cls, value):
        if value is None:
            return value
        return dedupe_texts(value)

    @field_validator("target_audience", mode="after", check_fields=False)
    @classmethod
    def _dedupe_audience(cls, value):
        if value is None:
            return value
        return list(dict.fromkeys(value))

    @field_validator("effective_date", "expiration_date", mode="after", check_fields=False)
    @classmethod
    def _to_utc(cls, value):
        return normalize_datetime(value)

    @field_validator("expiration_date", mode="after", check_fields=False)
    @classmethod
    def _check_window(cls, value, info: ValidationInfo):
        # 다른 필드 오류와 함께 보고되도록 날짜 순서를 같은 검증 단계에서 확인한다.
        if value is None or "effective_date" not in info.data:
            return value
        effective = info.data["effective_date"]
        if effective is None and cls.effective_defaults_to_now:
            effective = utcnow()
        if effective is not None and normalize_datetime(value) <= effective:
            raise PydanticCustomError("date_order", "Expiration date must be after effective date")
        return value


class NotificationCreate(_NotificationFields):
    effective_defaults_to_now: ClassVar[bool] = True

    title: str = Field(..., min_length=5, max_length=100)
    body: str = Field(..., min_length=10)
    type: NotificationType
    priority: Priority = "Medium"
    status: NotificationStatus = "Draft"
    target_audience: List[Audience] = Field(..., min_length=1)
    author: str = "Admin"
    effective_date: Optional[datetime] = None
    expiration_date: datetime
    tags: List[str] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    highlight_notice: bool = False
    notify_via_email: bool = False


class NotificationUpdate(_NotificationFields):
    title: Optional[str] = Field(None, min_length=5, max_length=100)
    body: Optional[str] = Field(None, min_length=10)
    type: Optional[NotificationType] = None
    priority: Optional[Priority] = None
    status: Optional[NotificationStatus] = None
    target_audience: Optional[List[Audience]] = Field(None, min_length=1)
    author: Optional[str] = None
    effective_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    tags: Optional[List[str]] = None
    attachments: Optional[List[Attachment]] = None
    highlight_notice: Optional[bool] = None
    notify_via_email: Optional[bool] = None


class NotificationOut(ApiModel):
    notification_id: int
    title: str
    body: str
    type: str
    priority: str
    status: str
    target_audience: List[str]
    author: Optional[str] = None
    effective_date: datetime
    expiration_date: datetime
    tags: List[str] = []
    attachments: List[Attachment] = []
    highlight_notice: bool = False
    notify_via_email: bool = False
    view_count: int
    created_by: Optional[int] = None
    last_modified_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", "attachments", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class NotificationTypeStats(ApiModel):
    count: int
    views: int


class NotificationStatsOut(ApiModel):
    total_notifications: int
    active_notifications: int
    expiring_this_week: int
    by_type: Dict[str, NotificationTypeStats]


class NotificationBulkDeleteOut(ApiModel):
    message: str
    deleted: int


class NotificationEmailOut(ApiModel):
    message: str
    recipient_count: int
